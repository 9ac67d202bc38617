# ==============================================
# Tests for configuration loading
# ==============================================

import pytest

from profilegen.config import get_config, reset_config
from profilegen.exceptions import ConfigurationError, InvalidSettingError
from profilegen.logger import configure_logging

ENV_KEYS = (
    "PROFILEGEN_HIGH_CARDINALITY_RATIO",
    "PROFILEGEN_MAX_STRING_LENGTH",
    "PROFILEGEN_SAMPLE_URL",
    "PROFILEGEN_SAMPLE_COUNT",
    "PROFILEGEN_HEURISTIC_PK",
    "PROFILEGEN_LOG_LEVEL",
)


class TestGetConfig:
    def test_defaults(self, monkeypatch):
        for key in ENV_KEYS:
            monkeypatch.delenv(key, raising=False)
        config = get_config()
        assert config.thresholds.high_cardinality_ratio == 0.5
        assert config.thresholds.high_cardinality_count == 500
        assert config.thresholds.max_string_length == 255
        assert config.thresholds.distinct_cap == 1000
        assert config.sample.sample_url is None
        assert config.sample.sample_count == 10
        assert config.heuristic_primary_key is False
        assert config.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PROFILEGEN_HIGH_CARDINALITY_RATIO", "0.3")
        monkeypatch.setenv("PROFILEGEN_MAX_STRING_LENGTH", "120")
        monkeypatch.setenv("PROFILEGEN_SAMPLE_URL", "http://127.0.0.1:8000/record")
        monkeypatch.setenv("PROFILEGEN_SAMPLE_COUNT", "25")
        monkeypatch.setenv("PROFILEGEN_HEURISTIC_PK", "yes")
        monkeypatch.setenv("PROFILEGEN_LOG_LEVEL", "debug")

        config = get_config()
        assert config.thresholds.high_cardinality_ratio == 0.3
        assert config.thresholds.max_string_length == 120
        assert config.sample.sample_url == "http://127.0.0.1:8000/record"
        assert config.sample.sample_count == 25
        assert config.heuristic_primary_key is True
        assert config.log_level == "DEBUG"

    def test_singleton(self):
        assert get_config() is get_config()

    def test_reset_rereads_environment(self, monkeypatch):
        monkeypatch.setenv("PROFILEGEN_HEURISTIC_PK", "0")
        assert get_config().heuristic_primary_key is False
        monkeypatch.setenv("PROFILEGEN_HEURISTIC_PK", "1")
        assert get_config().heuristic_primary_key is False
        reset_config()
        assert get_config().heuristic_primary_key is True

    def test_dotenv_file(self, monkeypatch, tmp_path):
        # Record the variable so load_dotenv's write is undone afterwards
        monkeypatch.setenv("PROFILEGEN_DISTINCT_CAP", "1")
        monkeypatch.delenv("PROFILEGEN_DISTINCT_CAP")
        (tmp_path / ".env").write_text("PROFILEGEN_DISTINCT_CAP=250\n", encoding="utf-8")

        assert get_config().thresholds.distinct_cap == 250


class TestInvalidSettings:
    @pytest.mark.parametrize("key,value", [
        ("PROFILEGEN_DISTINCT_CAP", "lots"),
        ("PROFILEGEN_MAX_STRING_LENGTH", "12.5"),
        ("PROFILEGEN_HIGH_CARDINALITY_RATIO", "half"),
    ])
    def test_non_numeric_value(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)
        with pytest.raises(InvalidSettingError) as exc:
            get_config()
        assert exc.value.field_name == key
        assert key in exc.value.message
        assert isinstance(exc.value, ConfigurationError)

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("PROFILEGEN_LOG_LEVEL", "loud")
        with pytest.raises(InvalidSettingError) as exc:
            get_config()
        assert exc.value.field_name == "PROFILEGEN_LOG_LEVEL"
        assert "loud" in exc.value.message

    def test_configure_logging_rejects_unknown_level(self):
        with pytest.raises(InvalidSettingError):
            configure_logging("bogus")
