import pytest
from pydantic import ValidationError

from app.config.settings import Settings


@pytest.fixture(autouse=True)
def _clear_summary_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SUMMARY_API_KEY", "GEMINI_API_KEY", "SUMMARY_PROVIDER", "DB_PORT"):
        monkeypatch.delenv(name, raising=False)


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings(_env_file=None)
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings(_env_file=None)
        assert s.db_port == 5432

    def test_default_upload_ceiling(self) -> None:
        s = Settings(_env_file=None)
        assert s.max_upload_bytes == 10 * 1024 * 1024

    def test_default_summary_provider(self) -> None:
        s = Settings(_env_file=None)
        assert s.summary_provider == "gemini"
        assert s.summary_model_name == "gemini-2.5-flash"
        assert s.summary_api_key == ""

    def test_default_summary_timeout(self) -> None:
        s = Settings(_env_file=None)
        assert s.summary_timeout_seconds == 30


class TestSettingsFromEnv:
    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings(_env_file=None)
        assert s.db_host == "db.example.com"

    def test_loads_summary_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUMMARY_API_KEY", "abc")
        s = Settings(_env_file=None)
        assert s.summary_api_key == "abc"

    def test_gemini_api_key_alias(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "from-gemini")
        s = Settings(_env_file=None)
        assert s.summary_api_key == "from-gemini"

    def test_loads_max_upload_bytes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "2048")
        s = Settings(_env_file=None)
        assert s.max_upload_bytes == 2048


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_temperature_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUMMARY_TEMPERATURE", "warm")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
