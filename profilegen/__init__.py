# ==============================================
# profilegen
# ==============================================
#
# Profile-driven schema and facet classification for code
# generators: field statistics in, column types, primary key,
# search-index settings and result-card fields out.
#
# Package Structure (3 Topics + Orchestrator):
#
# profilegen/
# ├── profiling/    # Topic 1: Obtain per-field statistics
# ├── analysis/     # Topic 2: Classify fields
# ├── emitters/     # Topic 3: Columns, index settings, card config
# ├── config.py     # Configuration management
# ├── exceptions.py # Error hierarchy
# ├── logger.py     # Package logger
# ├── generator.py  # Orchestrator class
# └── cli.py        # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
