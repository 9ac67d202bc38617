# ==============================================
# FieldClassifier
# ==============================================
#
# PURPOSE:
#   Takes FieldStatistics from a profile and applies heuristic
#   rules to produce a ClassificationResult for each field.
#   This is the "brain": it decides the column type, the primary
#   key, and how the search index may use every field.
#
# CLASS: FieldClassifier
# ----------------------
#   Stateless: statistics in, results out. Holds only thresholds.
#
#   Methods:
#   --------
#   - classify_all(statistics, primary_key=None, unique_fields=None,
#                  heuristic=False) -> ClassificationReport
#       Resolve the primary key, then classify every field.
#
#   - classify_field(stats, is_primary_key=False) -> ClassificationResult
#       Classify a single field.
#
#   TYPE RULES (first match wins):
#     1. json hint, array in observed types,
#        or a list-like string (plural name + "a,b,c" example) → ARRAY
#     2. bool hint                                           → BOOLEAN
#     3. int hint                                            → INTEGER
#     4. float hint                                          → FLOAT
#     5. text hint or longest string > 255                   → TEXT
#     6. otherwise                                           → STRING(min(max, 255))
#
#   FACET RULES (the primary key and payload-ish fields get none):
#     - filterable: not high-cardinality, and boolean-like,
#       facet candidate, array, or non-boolean integer
#     - sortable:   non-boolean integer, or float
#     - searchable: natural-language string/text that is not
#       boolean-like, not a facet candidate, and whose name has
#       no "id" or "code" in it
#
# ==============================================

from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from profilegen.analysis.decision import (
    ClassificationReport,
    ClassificationResult,
    ClassificationThresholds,
    FacetRole,
    ResolvedType,
)
from profilegen.analysis.field_stats import FieldStatistics
from profilegen.analysis.primary_key import LIST_TYPE_MARKERS, PrimaryKeyResolver
from profilegen.exceptions import MalformedInputError
from profilegen.logger import get_logger

logger = get_logger(__name__)


class FieldClassifier:
    """
    Applies heuristic rules to FieldStatistics to produce ClassificationResults.
    """

    # Substrings that mark a field as a URL / media payload
    PAYLOAD_NAME_PATTERNS = ("url", "image", "media", "thumbnail", "link", "href")

    # Substrings that keep a field out of full-text search
    NON_SEARCHABLE_NAME_PATTERNS = ("id", "code")

    # Names that hold lists even when they are not plural
    TAG_NAME_HINTS = frozenset({
        "genres", "genre",
        "tags", "tag",
        "categories", "category",
        "keywords", "labels",
        "authors", "powers", "teams", "species", "partners",
    })

    LIST_DELIMITERS = (",", "|")
    MAX_LIST_ITEM_WORDS = 4
    MAX_LIST_ITEM_LENGTH = 50

    def __init__(self, thresholds: Optional[ClassificationThresholds] = None):
        """
        Args:
            thresholds: Optional ClassificationThresholds. Defaults are
                        0.5 / 500 for cardinality and 255 for strings.
        """
        self.thresholds = thresholds or ClassificationThresholds()
        self.primary_key_resolver = PrimaryKeyResolver(self.thresholds)

    # ======================================
    # Dataset level
    # ======================================
    def classify_all(
        self,
        statistics: Mapping[str, FieldStatistics],
        primary_key: Optional[str] = None,
        unique_fields: Optional[Iterable[str]] = None,
        heuristic: bool = False,
    ) -> ClassificationReport:
        """
        Classify every field of a dataset.

        Args:
            statistics: field name → FieldStatistics, in input order
            primary_key: Explicit primary key override
            unique_fields: Ordered unique-field hints from the profile
            heuristic: Allow inferring the key from uniqueness

        Returns:
            ClassificationReport with exactly one primary key

        Raises:
            MalformedInputError: empty input or invalid statistics
            ConfigurationError: override or hints don't match the fields
            AmbiguousPrimaryKeyError: no key could be determined
        """
        if not statistics:
            raise MalformedInputError("No field statistics to classify")

        for name, stats in statistics.items():
            self._check_stats(stats, name)
            if stats.name != name:
                raise MalformedInputError(
                    f"Statistics keyed '{name}' describe field '{stats.name}'",
                    field_name=name,
                )

        pk = self.primary_key_resolver.resolve(
            statistics,
            override=primary_key,
            unique_fields=unique_fields,
            heuristic=heuristic,
        )

        results: Dict[str, ClassificationResult] = {}
        for name, stats in statistics.items():
            results[name] = self.classify_field(stats, is_primary_key=(name == pk))

        return ClassificationReport(primary_key=pk, results=results)

    # ======================================
    # Field level
    # ======================================
    def classify_field(
        self,
        stats: FieldStatistics,
        is_primary_key: bool = False,
    ) -> ClassificationResult:
        """
        Classify a single field.

        Args:
            stats: The field statistics
            is_primary_key: The dataset resolved this field as its key

        Returns:
            A ClassificationResult with type, nullability and facet roles
        """
        self._check_stats(stats, stats.name)

        resolved_type, length, type_reason = self.resolve_type(stats)
        reasons = [type_reason]

        roles: Set[FacetRole] = set()
        if is_primary_key:
            reasons.append("primary key, excluded from facets")
        elif self.is_payloadish(stats):
            reasons.append("payload-ish (url/image/json), excluded from facets")
        else:
            roles = self._facet_roles(stats, resolved_type, reasons)

        result = ClassificationResult(
            field_name=stats.name,
            resolved_type=resolved_type,
            length=length,
            nullable=not is_primary_key,
            is_primary_key=is_primary_key,
            facet_roles=frozenset(roles),
            reason="; ".join(reasons),
        )
        logger.debug("Classified %s: %s", stats.name, result.reason)
        return result

    def resolve_type(self, stats: FieldStatistics) -> Tuple[ResolvedType, Optional[int], str]:
        """
        Map statistics to a logical type.

        Returns:
            (ResolvedType, declared length or None, reason)
        """
        hint = stats.storage_hint
        max_string = self.thresholds.max_string_length

        # RULE 1: arrays
        if hint == "json":
            return ResolvedType.ARRAY, None, "json storage hint → array"
        if stats.observed_types & LIST_TYPE_MARKERS:
            return ResolvedType.ARRAY, None, "array values observed → array"
        if hint in ("string", "text") and self.is_list_like(stats):
            return ResolvedType.ARRAY, None, (
                f"delimited list values like {stats.top_or_example_value!r} → array"
            )

        # RULES 2-4: scalars
        if hint == "bool":
            return ResolvedType.BOOLEAN, None, "bool storage hint"
        if hint == "int":
            return ResolvedType.INTEGER, None, "int storage hint"
        if hint == "float":
            return ResolvedType.FLOAT, None, "float storage hint"

        # RULE 5: long text
        max_length = stats.max_length
        if hint == "text":
            return ResolvedType.TEXT, None, "text storage hint"
        if max_length is not None and max_length > max_string:
            return ResolvedType.TEXT, None, f"longest value {max_length} > {max_string} → text"

        # RULE 6: short string
        if max_length is None or max_length <= 0:
            return ResolvedType.STRING, max_string, f"string, no length data → length {max_string}"
        length = min(max_length, max_string)
        return ResolvedType.STRING, length, f"string, longest value {max_length} → length {length}"

    # ======================================
    # Predicates
    # ======================================
    def is_payloadish(self, stats: FieldStatistics) -> bool:
        """URL, image or JSON payloads are never faceted."""
        if stats.url_like or stats.image_like or stats.json_like:
            return True
        lower = stats.name.lower()
        return any(p in lower for p in self.PAYLOAD_NAME_PATTERNS)

    def is_high_cardinality(self, stats: FieldStatistics) -> bool:
        if stats.distinct_count >= self.thresholds.high_cardinality_count:
            return True
        return stats.total > 0 and stats.distinct_ratio >= self.thresholds.high_cardinality_ratio

    def is_list_like(self, stats: FieldStatistics) -> bool:
        """
        A string field holding delimited lists: "Action,Drama", "a|b".

        The name must be plural or a known tag name, and the example
        value must split into several short, non-empty items.
        """
        example = stats.top_or_example_value
        if not example or stats.url_like or stats.json_like:
            return False

        lower = stats.name.lower()
        plural = lower.endswith("s") and not lower.endswith("ss")
        if not (plural or lower in self.TAG_NAME_HINTS):
            return False

        for delimiter in self.LIST_DELIMITERS:
            if delimiter not in example:
                continue
            items = [item.strip() for item in example.split(delimiter)]
            if len(items) < 2 or not all(items):
                continue
            if all(
                len(item) <= self.MAX_LIST_ITEM_LENGTH
                and len(item.split()) <= self.MAX_LIST_ITEM_WORDS
                for item in items
            ):
                return True
        return False

    # ======================================
    # Internal helpers
    # ======================================
    def _facet_roles(
        self,
        stats: FieldStatistics,
        resolved_type: ResolvedType,
        reasons: List[str],
    ) -> Set[FacetRole]:
        roles: Set[FacetRole] = set()
        numeric_int = resolved_type == ResolvedType.INTEGER and not stats.boolean_like

        # filterable
        if self.is_high_cardinality(stats):
            reasons.append(
                f"high cardinality ({stats.distinct_count}/{stats.total}), not filterable"
            )
        elif (
            stats.boolean_like
            or stats.facet_candidate
            or resolved_type == ResolvedType.ARRAY
            or numeric_int
        ):
            roles.add(FacetRole.FILTERABLE)

        # sortable
        if numeric_int or resolved_type == ResolvedType.FLOAT:
            roles.add(FacetRole.SORTABLE)

        # searchable
        if self._is_searchable(stats, resolved_type):
            roles.add(FacetRole.SEARCHABLE)

        if roles:
            reasons.append(", ".join(r.value for r in FacetRole if r in roles))
        return roles

    def _is_searchable(self, stats: FieldStatistics, resolved_type: ResolvedType) -> bool:
        if not resolved_type.is_textual or not stats.natural_language_like:
            return False
        if stats.boolean_like or stats.facet_candidate:
            return False
        lower = stats.name.lower()
        return not any(p in lower for p in self.NON_SEARCHABLE_NAME_PATTERNS)

    @staticmethod
    def _check_stats(stats: FieldStatistics, name: Optional[str]) -> None:
        if not isinstance(stats, FieldStatistics):
            raise MalformedInputError(
                f"Statistics for field '{name}' are not FieldStatistics: {type(stats).__name__}",
                field_name=name,
            )
        stats.validate()
