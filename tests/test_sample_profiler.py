# ==============================================
# Tests for SampleProfiler
# ==============================================

import pytest

from profilegen.analysis.decision import ClassificationThresholds
from profilegen.exceptions import MalformedInputError
from profilegen.profiling.sample_profiler import SampleProfiler


@pytest.fixture
def profiler():
    return SampleProfiler()


class TestProfile:
    def test_fields_in_first_seen_order(self, profiler, sample_records):
        stats = profiler.profile(sample_records)
        assert list(stats) == ["id", "title", "genres", "year", "adult", "poster", "overview"]
        assert all(s.total == 3 for s in stats.values())

    def test_storage_hints(self, profiler, sample_records):
        stats = profiler.profile(sample_records)
        assert stats["id"].storage_hint == "int"
        assert stats["title"].storage_hint == "string"
        assert stats["genres"].storage_hint == "json"
        assert stats["year"].storage_hint == "int"
        assert stats["adult"].storage_hint == "bool"

    def test_unique_id(self, profiler, sample_records):
        stats = profiler.profile(sample_records)["id"]
        assert stats.distinct_count == 3
        assert stats.nulls == 0
        assert not stats.distinct_cap_reached

    def test_booleans(self, profiler, sample_records):
        adult = profiler.profile(sample_records)["adult"]
        assert adult.boolean_like
        assert adult.distinct_count == 2

    def test_image_urls_and_nulls(self, profiler, sample_records):
        poster = profiler.profile(sample_records)["poster"]
        assert poster.url_like
        assert poster.image_like
        assert poster.nulls == 1
        assert not poster.natural_language_like

    def test_prose(self, profiler, sample_records):
        stats = profiler.profile(sample_records)
        assert stats["overview"].natural_language_like
        assert stats["overview"].string_length_range[1] <= 255

    def test_list_example_is_joined(self, profiler, sample_records):
        genres = profiler.profile(sample_records)["genres"]
        assert genres.top_or_example_value == "Drama,Family"
        assert "array" in genres.observed_types

    def test_absent_field_counts_as_null(self, profiler):
        stats = profiler.profile([{"a": 1, "b": "x"}, {"a": 2}])
        assert stats["b"].total == 2
        assert stats["b"].nulls == 1

    def test_most_common_value_is_example(self, profiler):
        records = [{"status": s} for s in ("open", "closed", "open", "open")]
        assert profiler.profile(records)["status"].top_or_example_value == "open"

    def test_facet_candidate(self, profiler):
        records = [{"status": "open" if i % 2 else "closed"} for i in range(20)]
        status = profiler.profile(records)["status"]
        assert status.facet_candidate
        assert not status.natural_language_like

    @pytest.mark.parametrize("thresholds", [
        ClassificationThresholds(facet_max_distinct=2),
        ClassificationThresholds(facet_max_ratio=0.1),
    ])
    def test_facet_limits(self, thresholds):
        records = [{"status": ("open", "closed", "held")[i % 3]} for i in range(20)]
        assert SampleProfiler().profile(records)["status"].facet_candidate
        assert not SampleProfiler(thresholds).profile(records)["status"].facet_candidate

    def test_long_strings_are_text(self, profiler):
        stats = profiler.profile([{"body": "x" * 300}, {"body": "short"}])
        assert stats["body"].storage_hint == "text"
        assert stats["body"].string_length_range == (5, 300)

    def test_mixed_numbers_are_float(self, profiler):
        stats = profiler.profile([{"price": 1}, {"price": 2.5}, {"price": "3.25"}])
        assert stats["price"].storage_hint == "float"

    def test_nested_objects_are_json(self, profiler):
        stats = profiler.profile([{"meta": {"a": 1}}, {"meta": {"a": 2}}])
        assert stats["meta"].storage_hint == "json"
        assert stats["meta"].json_like

    def test_distinct_cap(self):
        profiler = SampleProfiler(ClassificationThresholds(distinct_cap=5))
        stats = profiler.profile([{"n": i} for i in range(8)])["n"]
        assert stats.distinct_cap_reached
        assert stats.distinct_count == 5
        assert stats.distinct_cap == 5

    def test_statistics_are_valid(self, profiler, sample_records):
        for stats in profiler.profile(sample_records).values():
            stats.validate()

    def test_no_records(self, profiler):
        with pytest.raises(MalformedInputError):
            profiler.profile([])

    def test_non_object_record(self, profiler):
        with pytest.raises(MalformedInputError):
            profiler.profile([{"a": 1}, ["a", 1]])
