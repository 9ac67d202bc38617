# ==============================================
# PrimaryKeyResolver
# ==============================================
#
# PURPOSE:
#   Decide which single field of a dataset is its primary key.
#
# RULES (first that applies wins):
# --------------------------------
#   1. EXPLICIT OVERRIDE
#        The caller named a field. It must exist, otherwise
#        FieldNotFoundError.
#
#   2. UNIQUE-FIELD HINTS
#        The profile declared unique fields. The first hint present
#        in the statistics is used. If none is present the profile
#        and the data disagree: InconsistentHintError. There is no
#        fallback to heuristics here.
#
#   3. HEURISTIC (only when the caller opts in)
#        Pick a "probably unique" field, preferring id-like names,
#        then input order.
#
#   4. NOTHING FOUND
#        AmbiguousPrimaryKeyError; the caller must pass a key.
#
# "Probably unique":
#   - zero nulls, not boolean-like, not json/array
#   - distinct not capped and distinct == total, or
#     distinct capped and distinct >= cap (every sampled value so
#     far was unique)
#
# ==============================================

import re
from typing import Dict, Iterable, List, Mapping, Optional

from profilegen.analysis.decision import ClassificationThresholds
from profilegen.analysis.field_stats import FieldStatistics
from profilegen.exceptions import (
    AmbiguousPrimaryKeyError,
    FieldNotFoundError,
    InconsistentHintError,
)
from profilegen.logger import get_logger

logger = get_logger(__name__)

LIST_TYPE_MARKERS = frozenset({"array", "list"})


class PrimaryKeyResolver:
    """
    Picks exactly one primary key from a dataset's statistics.
    """

    def __init__(self, thresholds: Optional[ClassificationThresholds] = None):
        self.thresholds = thresholds or ClassificationThresholds()

    def resolve(
        self,
        statistics: Mapping[str, FieldStatistics],
        override: Optional[str] = None,
        unique_fields: Optional[Iterable[str]] = None,
        heuristic: bool = False,
    ) -> str:
        """
        Resolve the primary key field name.

        Args:
            statistics: field name → FieldStatistics, in input order
            override: Field name the caller insists on
            unique_fields: Ordered unique-field hints declared by the profile
            heuristic: Allow falling back to uniqueness detection

        Returns:
            The primary key field name

        Raises:
            FieldNotFoundError: override is not a known field
            InconsistentHintError: no declared hint is a known field
            AmbiguousPrimaryKeyError: nothing determined a key
        """
        # RULE 1: explicit override
        if override:
            if override not in statistics:
                raise FieldNotFoundError(
                    f"Primary key '{override}' not found among fields: "
                    f"{', '.join(statistics) or '(none)'}",
                    field_name=override,
                )
            logger.info("Primary key '%s' (explicit override)", override)
            return override

        # RULE 2: declared unique-field hints
        hints = [h for h in (unique_fields or []) if h]
        if hints:
            for hint in hints:
                if hint in statistics:
                    logger.info("Primary key '%s' (declared unique field)", hint)
                    return hint
            raise InconsistentHintError(
                f"Declared unique field(s) {', '.join(repr(h) for h in hints)} "
                f"not present in statistics",
                field_name=hints[0],
            )

        # RULE 3: opt-in uniqueness heuristic
        if heuristic:
            candidate = self._pick_heuristic(statistics)
            if candidate is not None:
                logger.warning(
                    "Primary key '%s' inferred from uniqueness; pass it explicitly to be sure",
                    candidate,
                )
                return candidate

        # RULE 4: give up
        raise AmbiguousPrimaryKeyError(
            "No primary key could be determined; supply one explicitly"
            + ("" if heuristic else " or enable heuristic mode")
        )

    def is_probably_unique(self, stats: FieldStatistics) -> bool:
        """
        Advisory uniqueness check on observed statistics.

        Args:
            stats: The field statistics

        Returns:
            True when every observed value was distinct
        """
        if stats.nulls != 0 or stats.boolean_like:
            return False
        if stats.storage_hint == "json" or stats.observed_types & LIST_TYPE_MARKERS:
            return False

        if not stats.distinct_cap_reached:
            return stats.total > 0 and stats.distinct_count == stats.total

        cap = stats.distinct_cap or self.thresholds.distinct_cap
        return stats.distinct_count >= cap

    def unique_candidates(self, statistics: Mapping[str, FieldStatistics]) -> List[str]:
        return [name for name, stats in statistics.items() if self.is_probably_unique(stats)]

    def _pick_heuristic(self, statistics: Mapping[str, FieldStatistics]) -> Optional[str]:
        candidates = self.unique_candidates(statistics)
        if not candidates:
            return None

        # "id" itself, then *_id / *Id names, then input order
        ranks: Dict[str, int] = {}
        for name in candidates:
            lower = name.lower()
            if lower == "id":
                ranks[name] = 0
            elif re.search(r'(^|_)id$', lower) or name.endswith("Id"):
                ranks[name] = 1
            else:
                ranks[name] = 2
        return min(candidates, key=lambda n: ranks[n])
