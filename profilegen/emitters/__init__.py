# ==============================================
# TOPIC 3: EMITTERS
# ==============================================
#
# Turn a ClassificationReport into what code generators need.
# Nothing here writes files; callers decide what to do with
# the definitions.
#
# Modules:
# --------
# - naming.py        → snake_case / camelCase / label conversions
# - doctrine.py      → ORM column definitions and attribute lines
# - meilisearch.py   → filterable / sortable / searchable settings
# - card_config.py   → which fields a result card displays
#
# ==============================================

from .naming import FieldNameFormatter
from .doctrine import ColumnDefinition, build_columns, render_properties
from .meilisearch import IndexSettings, build_index_settings
from .card_config import CardConfig, build_card_config

__all__ = [
    "FieldNameFormatter",
    "ColumnDefinition",
    "build_columns",
    "render_properties",
    "IndexSettings",
    "build_index_settings",
    "CardConfig",
    "build_card_config",
]
