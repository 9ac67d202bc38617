# ==============================================
# SampleProfiler
# ==============================================
#
# PURPOSE:
#   Build FieldStatistics from raw sample records when no
#   precomputed profile exists. This is the "observation engine":
#   it watches values and builds evidence for the classifier.
#
# CLASSES:
# --------
# - FieldObserver
#     Mutable accumulator for one field. update() is called once per
#     record that carries the field; to_statistics() freezes the
#     evidence into a FieldStatistics.
#
# - SampleProfiler
#     profile(records) -> dict[str, FieldStatistics]
#       Fields keep the order in which they were first seen. A field
#       missing from a record counts as a null for that record.
#
# Distinct values are tracked up to thresholds.distinct_cap. Once the
# set is full, an unseen value flips distinct_cap_reached and the
# count stops growing.
#
# ==============================================

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from profilegen.analysis.decision import ClassificationThresholds
from profilegen.analysis.field_stats import FieldStatistics
from profilegen.exceptions import MalformedInputError
from profilegen.logger import get_logger
from profilegen.profiling.type_detector import TypeDetector

logger = get_logger(__name__)


@dataclass
class FieldObserver:
    """
    Accumulates observations for a single field across many records.
    """

    name: str
    max_unique_tracked: int = 1000

    # --- Counters ---
    presence_count: int = 0
    null_count: int = 0
    type_counts: Dict[str, int] = field(default_factory=dict)

    # --- Uniqueness tracking ---
    unique_values: Set[str] = field(default_factory=set)
    value_counts: Counter = field(default_factory=Counter)
    cap_reached: bool = False

    # --- String evidence ---
    string_lengths: List[int] = field(default_factory=list)
    string_values: int = 0
    url_values: int = 0
    image_values: int = 0
    json_values: int = 0
    word_total: int = 0

    # --- Structure ---
    object_values: int = 0
    boolean_like_values: int = 0
    examples: Dict[str, str] = field(default_factory=dict)

    def update(self, value: Any, detected_type: str) -> None:
        """
        Update statistics based on a newly observed value.

        Args:
            value: The raw field value
            detected_type: TypeDetector.detect(value)
        """
        self.presence_count += 1

        if detected_type == "null":
            self.null_count += 1
            return

        self.type_counts[detected_type] = self.type_counts.get(detected_type, 0) + 1

        if TypeDetector.is_boolean_like(value):
            self.boolean_like_values += 1

        if detected_type == "object" or (
            detected_type == "array" and any(isinstance(v, (dict, list)) for v in value)
        ):
            self.object_values += 1

        if detected_type == "string":
            text = value.strip()
            self.string_values += 1
            self.string_lengths.append(len(text))
            self.word_total += TypeDetector.word_count(text)
            if TypeDetector.is_url(text):
                self.url_values += 1
                if TypeDetector.is_image_url(text):
                    self.image_values += 1
            elif TypeDetector.is_image_url(text):
                self.image_values += 1
            if TypeDetector.is_json_string(text):
                self.json_values += 1

        self._track_distinct(value)

    def _track_distinct(self, value: Any) -> None:
        key = _distinct_key(value)

        if key in self.unique_values:
            self.value_counts[key] += 1
            return

        if len(self.unique_values) >= self.max_unique_tracked:
            self.cap_reached = True
            return

        self.unique_values.add(key)
        self.value_counts[key] += 1
        self.examples[key] = _example_text(value)

    # ======================================
    # Derived evidence
    # ======================================
    @property
    def non_null_count(self) -> int:
        return self.presence_count - self.null_count

    def storage_hint(self, thresholds: ClassificationThresholds) -> str:
        types = set(self.type_counts)
        if not types:
            return "string"

        dominant = max(self.type_counts, key=self.type_counts.get)
        if dominant in ("array", "object"):
            return "json"
        if types == {"bool"}:
            return "bool"
        if types == {"int"}:
            return "int"
        if types <= {"int", "float"}:
            return "float"

        if self.string_lengths and max(self.string_lengths) > thresholds.max_string_length:
            return "text"
        return "string"

    def to_statistics(
        self,
        total: int,
        thresholds: ClassificationThresholds,
    ) -> FieldStatistics:
        """
        Freeze the observations into FieldStatistics.

        Args:
            total: Number of records profiled (absent counts as null)
            thresholds: Limits for facet and prose detection
        """
        hint = self.storage_hint(thresholds)
        non_null = self.non_null_count
        distinct = len(self.unique_values)

        boolean_like = hint == "bool" or (
            non_null > 0 and self.boolean_like_values == non_null and distinct <= 2
        )

        facet_candidate = (
            hint in ("string", "int")
            and not boolean_like
            and not self.cap_reached
            and non_null > 0
            and distinct <= thresholds.facet_max_distinct
            and distinct / non_null <= thresholds.facet_max_ratio
        )

        strings = self.string_values
        url_like = strings > 0 and self.url_values == strings
        image_like = strings > 0 and self.image_values == strings
        json_like = self.object_values > 0 or (strings > 0 and self.json_values == strings)

        natural_language_like = (
            hint in ("string", "text")
            and strings > 0
            and not url_like
            and not json_like
            and self.word_total / strings >= thresholds.natural_language_min_words
        )

        length_range = None
        if self.string_lengths:
            length_range = (min(self.string_lengths), max(self.string_lengths))

        example: Optional[str] = None
        if self.value_counts:
            top_key, _ = self.value_counts.most_common(1)[0]
            example = self.examples.get(top_key)

        return FieldStatistics(
            name=self.name,
            storage_hint=hint,
            total=total,
            nulls=self.null_count + (total - self.presence_count),
            distinct_count=distinct,
            distinct_cap_reached=self.cap_reached,
            distinct_cap=self.max_unique_tracked,
            string_length_range=length_range,
            boolean_like=boolean_like,
            facet_candidate=facet_candidate,
            url_like=url_like,
            image_like=image_like,
            json_like=json_like,
            natural_language_like=natural_language_like,
            top_or_example_value=example,
            observed_types=frozenset(self.type_counts),
        )


class SampleProfiler:
    """
    Observes raw records and produces FieldStatistics per field.
    """

    def __init__(
        self,
        thresholds: Optional[ClassificationThresholds] = None,
        type_detector: Optional[TypeDetector] = None,
    ):
        self.thresholds = thresholds or ClassificationThresholds()
        self.type_detector = type_detector or TypeDetector()

    def profile(self, records: Iterable[Dict[str, Any]]) -> Dict[str, FieldStatistics]:
        """
        Profile a batch of records.

        Args:
            records: Raw records (dicts), e.g. parsed JSONL lines

        Returns:
            field name → FieldStatistics, in first-seen order

        Raises:
            MalformedInputError: a record is not an object, or there are none
        """
        observers: Dict[str, FieldObserver] = {}
        total = 0

        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise MalformedInputError(
                    f"Record #{index} is a {type(record).__name__}, expected an object"
                )
            total += 1
            for name, value in record.items():
                observer = observers.get(name)
                if observer is None:
                    observer = FieldObserver(name=name, max_unique_tracked=self.thresholds.distinct_cap)
                    observers[name] = observer
                observer.update(value, self.type_detector.detect(value))

        if total == 0:
            raise MalformedInputError("No records to profile")

        logger.info("Profiled %d records, %d fields", total, len(observers))
        return {
            name: observer.to_statistics(total, self.thresholds)
            for name, observer in observers.items()
        }


def _distinct_key(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True, default=str)
    if isinstance(value, str):
        return value.strip()
    return repr(value) if isinstance(value, bool) else str(value)


def _example_text(value: Any) -> str:
    if isinstance(value, list) and all(not isinstance(v, (dict, list)) for v in value):
        return ",".join(str(v) for v in value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value).strip()
