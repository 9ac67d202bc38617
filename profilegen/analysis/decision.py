# ==============================================
# Decision (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of classification,
#   and the thresholds that control how decisions are made.
#
# ENUMS:
# ------
# - ResolvedType(Enum): STRING, TEXT, INTEGER, FLOAT, BOOLEAN, ARRAY
#     Logical storage type of a field.
#
# - FacetRole(Enum): FILTERABLE, SORTABLE, SEARCHABLE
#     How a field may be used in search-index queries.
#
# CLASSES:
# --------
# - ClassificationResult (dataclass)
#     The decision for a single field.
#
#     Attributes:
#     -----------
#     - field_name: str
#     - resolved_type: ResolvedType
#     - length: int | None             → Declared max length for STRING
#     - nullable: bool                 → False only for the primary key
#     - is_primary_key: bool
#     - facet_roles: frozenset[FacetRole]
#     - reason: str                    → Human-readable explanation
#
# - ClassificationReport (dataclass)
#     All decisions for one dataset plus its primary key.
#
# - ClassificationThresholds (dataclass)
#     Configurable limits that the classifier uses.
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional


class ResolvedType(Enum):
    """
    Logical storage type of a classified field.

    ARRAY is an array of scalars (tags, genres, ...).
    """
    STRING = "string"
    TEXT = "text"
    INTEGER = "int"
    FLOAT = "float"
    BOOLEAN = "bool"
    ARRAY = "array"

    @property
    def is_textual(self) -> bool:
        return self in (ResolvedType.STRING, ResolvedType.TEXT)


class FacetRole(Enum):
    FILTERABLE = "filterable"
    SORTABLE = "sortable"
    SEARCHABLE = "searchable"


@dataclass(frozen=True)
class ClassificationThresholds:
    """
    Tunable limits used by the classifier and the sample profiler.
    """

    high_cardinality_ratio: float = 0.5
    """distinct / total at or above this ratio is too many values to facet on."""

    high_cardinality_count: int = 500
    """Absolute distinct count at or above which a field is never filterable."""

    max_string_length: int = 255
    """Longest value that still fits a short string column."""

    distinct_cap: int = 1000
    """Distinct values tracked per field before counting stops."""

    facet_max_distinct: int = 50
    """Most distinct values a string or int field may have to be a facet candidate."""

    facet_max_ratio: float = 0.2
    """Highest distinct / non-null ratio for a facet candidate."""

    natural_language_min_words: int = 3
    """Average word count for a string field to be treated as prose."""


@dataclass(frozen=True)
class ClassificationResult:
    """
    Represents the classification decision for a single field.

    This is what the Classifier produces and what the emitters
    turn into columns and index settings.
    """

    # --- Core decision ---
    field_name: str
    resolved_type: ResolvedType

    # --- Column metadata ---
    length: Optional[int] = None
    nullable: bool = True
    is_primary_key: bool = False

    # --- Search index ---
    facet_roles: FrozenSet[FacetRole] = field(default_factory=frozenset)

    # --- Reasoning ---
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the decision to a dictionary.

        Returns:
            A JSON-serializable dictionary representation
        """
        return {
            "field_name": self.field_name,
            "resolved_type": self.resolved_type.value,
            "length": self.length,
            "nullable": self.nullable,
            "is_primary_key": self.is_primary_key,
            # Stable order for output
            "facet_roles": [r.value for r in FacetRole if r in self.facet_roles],
            "reason": self.reason,
        }


@dataclass(frozen=True)
class ClassificationReport:
    """
    Decisions for every field of one dataset.

    `results` keeps the field order of the input statistics.
    """

    primary_key: str
    results: Dict[str, ClassificationResult]

    def fields_with_role(self, role: FacetRole) -> List[str]:
        return [name for name, r in self.results.items() if role in r.facet_roles]

    @property
    def filterable(self) -> List[str]:
        return self.fields_with_role(FacetRole.FILTERABLE)

    @property
    def sortable(self) -> List[str]:
        return self.fields_with_role(FacetRole.SORTABLE)

    @property
    def searchable(self) -> List[str]:
        return self.fields_with_role(FacetRole.SEARCHABLE)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primary_key": self.primary_key,
            "fields": {name: r.to_dict() for name, r in self.results.items()},
        }
