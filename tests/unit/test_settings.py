"""
Tests for environment-driven configuration.
"""

from coach_admin.client.api import CoachApiClient
from coach_admin.config.settings import Settings


class TestSettings:
    """Tests for Settings defaults and overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "DATA_FILE", "COACH_API_URL", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.port == 3001
        assert settings.coach_api_url == "http://localhost:3001"
        assert settings.data_file == "data/coaches.json"
        assert settings.cors_origins_list == ["*"]

    def test_port_and_api_url_come_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "4100")
        monkeypatch.setenv("COACH_API_URL", "http://coaches.internal:4100")

        settings = Settings(_env_file=None)

        assert settings.port == 4100
        assert settings.coach_api_url == "http://coaches.internal:4100"

    def test_cors_origins_are_split(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_valid_configuration_has_no_problems(self, tmp_path):
        settings = Settings(_env_file=None, data_file=str(tmp_path / "coaches.json"))
        assert settings.validate_configuration() == []

    def test_directory_as_data_file_is_a_problem(self, tmp_path):
        settings = Settings(_env_file=None, data_file=str(tmp_path))
        assert "DATA_FILE points at a directory" in settings.validate_configuration()

    def test_bad_port_and_log_level_are_problems(self, tmp_path):
        settings = Settings(
            _env_file=None,
            data_file=str(tmp_path / "coaches.json"),
            port=0,
            log_level="LOUD",
        )

        problems = settings.validate_configuration()

        assert len(problems) == 2

    def test_client_uses_configured_base_url(self):
        settings = Settings(_env_file=None, coach_api_url="http://coaches.internal:4100")

        with CoachApiClient(settings=settings) as api:
            assert api._client.base_url.host == "coaches.internal"
            assert api._client.base_url.port == 4100
