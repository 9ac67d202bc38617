# ==============================================
# TOPIC 2: CLASSIFICATION
# ==============================================
#
# This package turns per-field statistics into decisions:
# column type, primary key, and search-index facet roles.
#
# Modules:
# --------
# - field_stats.py   → FieldStatistics, the classifier's input
# - decision.py      → ResolvedType, FacetRole, results and thresholds
# - primary_key.py   → PrimaryKeyResolver (override > hints > heuristic)
# - classifier.py    → FieldClassifier, the heuristic rule engine
#
# ==============================================

from .field_stats import FieldStatistics
from .decision import (
    ClassificationReport,
    ClassificationResult,
    ClassificationThresholds,
    FacetRole,
    ResolvedType,
)
from .primary_key import PrimaryKeyResolver
from .classifier import FieldClassifier

__all__ = [
    "FieldStatistics",
    "ClassificationReport",
    "ClassificationResult",
    "ClassificationThresholds",
    "FacetRole",
    "ResolvedType",
    "PrimaryKeyResolver",
    "FieldClassifier",
]
