# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests:
#   - make_stats        → FieldStatistics factory with sane defaults
#   - movie_statistics  → a small dataset's statistics, in field order
#   - sample_records    → raw records for the sample profiler
#   - profile_file      → a *.profile.json written to tmp_path
#   - clean_config      → (autouse) fresh config singleton per test
# ==============================================

import json

import pytest

from profilegen.analysis.field_stats import FieldStatistics
from profilegen.config import reset_config


@pytest.fixture(autouse=True)
def clean_config(monkeypatch, tmp_path):
    """Each test reads configuration from a clean environment."""
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_stats():
    """Build FieldStatistics; only the name and hint are required."""
    def _make(name, storage_hint="string", **overrides):
        values = dict(total=100, nulls=0, distinct_count=10)
        values.update(overrides)
        return FieldStatistics(name=name, storage_hint=storage_hint, **values)
    return _make


@pytest.fixture
def movie_statistics(make_stats):
    return {
        "id": make_stats("id", "int", total=200, distinct_count=200),
        "title": make_stats(
            "title", total=200, distinct_count=195,
            string_length_range=(2, 80), natural_language_like=True,
        ),
        "overview": make_stats(
            "overview", "text", total=200, nulls=4, distinct_count=196,
            string_length_range=(20, 900), natural_language_like=True,
        ),
        "genres": make_stats(
            "genres", total=200, distinct_count=40,
            string_length_range=(5, 40), top_or_example_value="Action,Drama",
        ),
        "year": make_stats("year", "int", total=200, distinct_count=60),
        "rating": make_stats("rating", "float", total=200, distinct_count=90),
        "adult": make_stats("adult", "bool", total=200, distinct_count=2, boolean_like=True),
        "poster_url": make_stats(
            "poster_url", total=200, distinct_count=200,
            string_length_range=(30, 120), url_like=True, image_like=True,
        ),
        "language": make_stats(
            "language", total=200, distinct_count=12,
            string_length_range=(2, 2), facet_candidate=True,
        ),
    }


@pytest.fixture
def sample_records():
    return [
        {
            "id": 1,
            "title": "The Long Road Home",
            "genres": ["Drama", "Family"],
            "year": "1999",
            "adult": False,
            "poster": "https://img.example.com/posters/1.jpg",
            "overview": "A family travels across the country to bury their grandfather.",
        },
        {
            "id": 2,
            "title": "Night Shift",
            "genres": ["Comedy"],
            "year": "2004",
            "adult": False,
            "poster": "https://img.example.com/posters/2.jpg",
            "overview": "Two night guards discover the museum comes alive after dark.",
        },
        {
            "id": 3,
            "title": "Cold Harbor",
            "genres": ["Thriller", "Drama"],
            "year": "2011",
            "adult": True,
            "poster": None,
            "overview": "A dock worker stumbles onto a smuggling ring in a frozen port.",
        },
    ]


@pytest.fixture
def profile_file(tmp_path, movie_statistics):
    """Write the movie statistics as a precomputed profile."""
    data = {
        "input": "data/movies.jsonl",
        "recordCount": 200,
        "tags": ["movies"],
        "uniqueFields": ["id"],
        "fields": {name: stats.to_dict() for name, stats in movie_statistics.items()},
    }
    path = tmp_path / "movies.profile.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
