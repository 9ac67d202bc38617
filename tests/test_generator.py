# ==============================================
# Tests for CodeGenerator
# ==============================================
#
# End-to-end: profile / records in, classification,
# columns, index settings and card config out.
# ==============================================

import pytest

from profilegen import generator as generator_module
from profilegen.analysis.decision import ClassificationThresholds, ResolvedType
from profilegen.config import AppConfig, SampleConfig
from profilegen.exceptions import (
    AmbiguousPrimaryKeyError,
    FieldNotFoundError,
    InconsistentHintError,
    NameCollisionError,
    SampleFetchError,
)
from profilegen.generator import CodeGenerator


# ==============================================
# Test Fixtures
# ==============================================

@pytest.fixture
def generator():
    """Generator with default configuration."""
    return CodeGenerator(AppConfig())


# ==============================================
# Profile input
# ==============================================

class TestGenerateFromProfile:
    def test_declared_unique_field_is_primary_key(self, generator, profile_file):
        result = generator.generate(profile_file)
        assert result.primary_key == "id"
        assert result.columns[0].is_id
        assert result.index_settings.primary_key == "id"
        assert result.card_config.title_field == "title"

    def test_summary(self, generator, profile_file):
        summary = generator.generate(profile_file).summary()
        assert summary["fields"] == 9
        assert summary["primary_key"] == "id"
        assert summary["types"] == {
            "int": 2, "string": 3, "text": 1, "array": 1, "float": 1, "bool": 1,
        }
        assert summary["filterable"] == 4
        assert summary["sortable"] == 2
        assert summary["searchable"] == 2

    def test_explicit_primary_key_wins(self, generator, profile_file):
        result = generator.generate(profile_file, primary_key="poster_url")
        assert result.primary_key == "poster_url"
        assert result.columns[0].field_name == "poster_url"
        assert result.report.results["poster_url"].nullable is False
        assert result.report.results["id"].nullable is True

    def test_caller_hints_replace_profile_hints(self, generator, profile_file):
        result = generator.generate(profile_file, unique_fields=["poster_url", "id"])
        assert result.primary_key == "poster_url"

    def test_missing_primary_key(self, generator, profile_file):
        with pytest.raises(FieldNotFoundError):
            generator.generate(profile_file, primary_key="sku")

    def test_inconsistent_hints(self, generator, profile_file):
        with pytest.raises(InconsistentHintError):
            generator.generate(profile_file, unique_fields=["sku"])

    def test_thresholds_come_from_config(self, profile_file):
        config = AppConfig(thresholds=ClassificationThresholds(max_string_length=50))
        result = CodeGenerator(config).generate(profile_file)
        assert result.report.results["title"].resolved_type == ResolvedType.TEXT

    def test_to_dict(self, generator, profile_file):
        data = generator.generate(profile_file).to_dict()
        assert set(data) == {"summary", "classification", "columns", "indexSettings", "cardConfig"}
        assert data["classification"]["primary_key"] == "id"
        assert data["columns"][0]["field"] == "id"


# ==============================================
# Sample records
# ==============================================

class TestGenerateFromRecords:
    def test_requires_a_key_by_default(self, generator, sample_records):
        with pytest.raises(AmbiguousPrimaryKeyError):
            generator.generate_from_records(sample_records)

    def test_heuristic_argument(self, generator, sample_records):
        result = generator.generate_from_records(sample_records, heuristic=True)
        assert result.primary_key == "id"
        assert result.report.results["genres"].resolved_type == ResolvedType.ARRAY
        assert result.report.results["year"].resolved_type == ResolvedType.INTEGER
        assert result.report.results["poster"].facet_roles == frozenset()

    def test_heuristic_from_config(self, sample_records):
        result = CodeGenerator(AppConfig(heuristic_primary_key=True)).generate_from_records(sample_records)
        assert result.primary_key == "id"

    def test_heuristic_argument_overrides_config(self, sample_records):
        generator = CodeGenerator(AppConfig(heuristic_primary_key=True))
        with pytest.raises(AmbiguousPrimaryKeyError):
            generator.generate_from_records(sample_records, heuristic=False)

    def test_jsonl_file(self, generator, tmp_path, sample_records):
        import json
        path = tmp_path / "movies.jsonl"
        path.write_text("\n".join(json.dumps(r) for r in sample_records), encoding="utf-8")
        result = generator.generate(path, primary_key="id")
        assert result.profile.record_count == 3
        assert result.card_config.image_field == "poster"

    def test_colliding_field_names(self, generator):
        records = [
            {"id": 1, "movie_id": 10, "movieId": "a"},
            {"id": 2, "movie_id": 11, "movieId": "b"},
        ]
        with pytest.raises(NameCollisionError) as exc:
            generator.generate_from_records(records, primary_key="id")
        assert "movie_id" in exc.value.message


# ==============================================
# HTTP sample
# ==============================================

class TestGenerateFromUrl:
    def test_fetches_and_classifies(self, monkeypatch, sample_records):
        calls = []

        def fake_fetch(url, count, timeout):
            calls.append((url, count, timeout))
            return sample_records

        monkeypatch.setattr(generator_module, "fetch_sample_records", fake_fetch)
        config = AppConfig(sample=SampleConfig(sample_url="http://api/record", sample_count=7))
        result = CodeGenerator(config).generate_from_url(primary_key="id")

        assert calls == [("http://api/record", 7, 10.0)]
        assert result.profile.input == "http://api/record"
        assert result.primary_key == "id"

    def test_explicit_url_and_count(self, monkeypatch, sample_records):
        calls = []
        monkeypatch.setattr(
            generator_module, "fetch_sample_records",
            lambda url, count, timeout: calls.append((url, count)) or sample_records,
        )
        CodeGenerator(AppConfig()).generate_from_url("http://other/x", count=3, primary_key="id")
        assert calls == [("http://other/x", 3)]

    def test_no_url(self, generator):
        with pytest.raises(SampleFetchError):
            generator.generate_from_url()
