# ==============================================
# FieldStatistics
# ==============================================
#
# PURPOSE:
#   Immutable record of everything the profiler observed about one
#   field. This is the "evidence" that the classifier uses to make
#   decisions.
#
# CLASS: FieldStatistics (frozen dataclass)
# -----------------------------------------
#   Attributes:
#   -----------
#   - name: str                         → Field name as in the source data
#   - storage_hint: str                 → string | text | int | float | bool | json
#   - total: int                        → Records the field was counted in
#   - nulls: int                        → How many of those were null
#   - distinct_count: int               → Distinct non-null values seen
#   - distinct_cap_reached: bool        → distinct_count stopped at the cap
#   - distinct_cap: int | None          → The cap itself, when the profile says
#   - string_length_range: (min, max)   → Only for string-like fields
#   - boolean_like, facet_candidate,
#     url_like, image_like, json_like,
#     natural_language_like: bool       → Profiler flags
#   - top_or_example_value: str | None  → Representative value
#   - observed_types: frozenset[str]    → {"string", "array", ...}
#
#   Computed Properties:
#   --------------------
#   - max_length -> int | None
#   - distinct_ratio -> float
#
#   Methods:
#   --------
#   - validate() -> None
#       Raise MalformedInputError naming the field if anything is off.
#   - to_dict() / from_dict(name, data)
#       Profile JSON (camelCase keys) round trip.
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

from profilegen.exceptions import MalformedInputError


STORAGE_HINTS = ("string", "text", "int", "float", "bool", "json")

# Spellings other profilers use for the same hint
STORAGE_HINT_ALIASES = {
    "str": "string",
    "integer": "int",
    "number": "float",
    "double": "float",
    "boolean": "bool",
    "array": "json",
    "object": "json",
}


@dataclass(frozen=True)
class FieldStatistics:
    """
    Observed statistics for a single field of a dataset.
    """

    # --- Core identity ---
    name: str
    storage_hint: str

    # --- Counters ---
    total: int = 0
    nulls: int = 0
    distinct_count: int = 0
    distinct_cap_reached: bool = False
    distinct_cap: Optional[int] = None

    # --- Strings ---
    string_length_range: Optional[Tuple[int, int]] = None

    # --- Profiler flags ---
    boolean_like: bool = False
    facet_candidate: bool = False
    url_like: bool = False
    image_like: bool = False
    json_like: bool = False
    natural_language_like: bool = False

    top_or_example_value: Optional[str] = None
    observed_types: FrozenSet[str] = field(default_factory=frozenset)

    # ======================================
    # Computed properties
    # ======================================
    @property
    def max_length(self) -> Optional[int]:
        if self.string_length_range is None:
            return None
        return self.string_length_range[1]

    @property
    def distinct_ratio(self) -> float:
        """
        Distinct values per counted record.

        Returns:
            0.0 when nothing was counted.
        """
        if self.total <= 0:
            return 0.0
        return self.distinct_count / self.total

    # ======================================
    # Validation
    # ======================================
    def validate(self) -> None:
        """
        Check that the statistics describe a possible field.

        Raises:
            MalformedInputError: naming this field and what is wrong.
        """
        if not isinstance(self.name, str) or not self.name:
            raise MalformedInputError("Field statistics have no name", field_name=self.name)

        if self.storage_hint not in STORAGE_HINTS:
            raise MalformedInputError(
                f"Field '{self.name}' has unknown storage hint {self.storage_hint!r}",
                field_name=self.name,
            )

        for attr in ("total", "nulls", "distinct_count"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise MalformedInputError(
                    f"Field '{self.name}' has invalid {attr}: {value!r}",
                    field_name=self.name,
                )

        if self.nulls > self.total:
            raise MalformedInputError(
                f"Field '{self.name}' has more nulls ({self.nulls}) than values ({self.total})",
                field_name=self.name,
            )

        if self.distinct_count > self.total:
            raise MalformedInputError(
                f"Field '{self.name}' has more distinct values ({self.distinct_count}) "
                f"than values ({self.total})",
                field_name=self.name,
            )

        if self.string_length_range is not None:
            try:
                low, high = self.string_length_range
            except (TypeError, ValueError):
                raise MalformedInputError(
                    f"Field '{self.name}' has an unreadable string length range",
                    field_name=self.name,
                ) from None
            if not (isinstance(low, int) and isinstance(high, int)) or low < 0 or high < low:
                raise MalformedInputError(
                    f"Field '{self.name}' has invalid string length range ({low!r}, {high!r})",
                    field_name=self.name,
                )

    # ======================================
    # Serialization
    # ======================================
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the camelCase layout of a profile's "fields" entry.
        """
        data: Dict[str, Any] = {
            "storageHint": self.storage_hint,
            "total": self.total,
            "nulls": self.nulls,
            "distinct": self.distinct_count,
            "distinctCapped": self.distinct_cap_reached,
            "booleanLike": self.boolean_like,
            "facetCandidate": self.facet_candidate,
            "urlLike": self.url_like,
            "imageLike": self.image_like,
            "jsonLike": self.json_like,
            "naturalLanguageLike": self.natural_language_like,
            "types": sorted(self.observed_types),
        }
        if self.distinct_cap is not None:
            data["distinctCap"] = self.distinct_cap
        if self.string_length_range is not None:
            data["stringLengths"] = {
                "min": self.string_length_range[0],
                "max": self.string_length_range[1],
            }
        if self.top_or_example_value is not None:
            data["topOrExampleValue"] = self.top_or_example_value
        return data

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "FieldStatistics":
        """
        Build statistics from one entry of a profile's "fields" map.

        Args:
            name: The field name (the key in the "fields" map)
            data: The profiler's statistics for that field

        Returns:
            Validated FieldStatistics

        Raises:
            MalformedInputError: if required keys are missing or invalid
        """
        if not isinstance(data, dict):
            raise MalformedInputError(
                f"Statistics for field '{name}' must be an object", field_name=name
            )

        for required in ("storageHint", "total"):
            if data.get(required) is None:
                raise MalformedInputError(
                    f"Statistics for field '{name}' are missing '{required}'",
                    field_name=name,
                )

        hint = str(data["storageHint"]).lower()
        hint = STORAGE_HINT_ALIASES.get(hint, hint)

        types = data.get("types") or []
        if isinstance(types, dict):
            types = list(types.keys())

        try:
            lengths = data.get("stringLengths")
            length_range = None
            if isinstance(lengths, dict) and lengths.get("max") is not None:
                length_range = (int(lengths.get("min") or 0), int(lengths["max"]))

            stats = cls(
                name=name,
                storage_hint=hint,
                total=int(data["total"]),
                nulls=int(data.get("nulls", 0) or 0),
                distinct_count=int(data.get("distinct", data.get("distinctCount", 0)) or 0),
                distinct_cap_reached=bool(
                    data.get("distinctCapped", data.get("distinctCapReached", False))
                ),
                distinct_cap=int(data["distinctCap"]) if data.get("distinctCap") is not None else None,
                string_length_range=length_range,
                boolean_like=bool(data.get("booleanLike", False)),
                facet_candidate=bool(data.get("facetCandidate", False)),
                url_like=bool(data.get("urlLike", False)),
                image_like=bool(data.get("imageLike", False)),
                json_like=bool(data.get("jsonLike", False)),
                natural_language_like=bool(data.get("naturalLanguageLike", False)),
                top_or_example_value=_example_value(data),
                observed_types=frozenset(str(t).lower() for t in types),
            )
        except (TypeError, ValueError) as e:
            raise MalformedInputError(
                f"Statistics for field '{name}' are not numeric where expected: {e}",
                field_name=name,
            ) from e

        stats.validate()
        return stats


def _example_value(data: Dict[str, Any]) -> Optional[str]:
    """Pick the representative value a profile carries, in order of preference."""
    for key in ("topOrExampleValue", "example"):
        if data.get(key) is not None:
            return _as_text(data[key])

    top_values = data.get("topValues")
    if isinstance(top_values, dict) and top_values:
        return str(next(iter(top_values)))
    if isinstance(top_values, list) and top_values:
        first = top_values[0]
        if isinstance(first, dict):
            first = first.get("value")
        return _as_text(first) if first is not None else None

    distribution = data.get("distribution")
    if isinstance(distribution, dict):
        values = distribution.get("values")
        if isinstance(values, dict) and values:
            return str(next(iter(values)))

    return None


def _as_text(value: Any) -> str:
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return str(value)
