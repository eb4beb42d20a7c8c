"""Unit tests for environment settings."""

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from resilient_cms.settings import AppSettings, ImageNaming, RuntimeMode


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self) -> None:
        """Without environment variables the backend is unset."""
        settings = AppSettings(_env_file=None)

        assert settings.base_url is None
        assert settings.api_token is None
        assert settings.mode is RuntimeMode.DEVELOPMENT
        assert settings.debug is None
        assert settings.request_timeout_seconds == 10.0
        assert settings.image_timeout_seconds is None
        assert settings.uploads_dir == Path("public") / "uploads"
        assert settings.uploads_url_prefix == "/uploads"
        assert settings.image_naming is ImageNaming.BASENAME

    def test_reads_primary_names(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """CMS_* variables are read."""
        monkeypatch.setenv("CMS_BASE_URL", "https://cms.example.com")
        monkeypatch.setenv("CMS_API_TOKEN", "secret-token")
        monkeypatch.setenv("CMS_MODE", "production")
        monkeypatch.setenv("CMS_DEBUG", "true")

        settings = AppSettings(_env_file=None)

        assert settings.base_url == "https://cms.example.com"
        assert settings.api_token == "secret-token"
        assert settings.mode is RuntimeMode.PRODUCTION
        assert settings.debug is True

    def test_reads_strapi_aliases(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Strapi-style variable names are accepted."""
        monkeypatch.setenv("PUBLIC_STRAPI_URL", "https://strapi.example.com")
        monkeypatch.setenv("STRAPI_API_TOKEN", "strapi-token")

        settings = AppSettings(_env_file=None)

        assert settings.base_url == "https://strapi.example.com"
        assert settings.api_token == "strapi-token"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("production", RuntimeMode.PRODUCTION),
            ("PROD", RuntimeMode.PRODUCTION),
            (" Development ", RuntimeMode.DEVELOPMENT),
            ("dev", RuntimeMode.DEVELOPMENT),
        ],
    )
    def test_mode_normalization(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: RuntimeMode
    ) -> None:
        """Mode accepts shorthands in any case."""
        monkeypatch.setenv("MODE", raw)

        assert AppSettings(_env_file=None).mode is expected

    @pytest.mark.parametrize(
        ("name", "raw", "field", "default"),
        [
            ("MODE", "test", "mode", RuntimeMode.DEVELOPMENT),
            ("CMS_MODE", "staging", "mode", RuntimeMode.DEVELOPMENT),
            ("DEBUG", "express:*", "debug", None),
            ("CMS_REQUEST_TIMEOUT_SECONDS", "ten", "request_timeout_seconds", 10.0),
            ("CMS_REQUEST_TIMEOUT_SECONDS", "0", "request_timeout_seconds", 10.0),
            ("CMS_IMAGE_NAMING", "random", "image_naming", ImageNaming.BASENAME),
        ],
    )
    def test_invalid_value_uses_default(
        self,
        monkeypatch: pytest.MonkeyPatch,
        name: str,
        raw: str,
        field: str,
        default: object,
    ) -> None:
        """Invalid values are ignored with a warning instead of failing."""
        monkeypatch.setenv(name, raw)

        with capture_logs() as logs:
            settings = AppSettings(_env_file=None)

        assert getattr(settings, field) == default
        warnings = [e for e in logs if e["event"] == "cms_invalid_settings"]
        assert [w["field"] for w in warnings] == [field]
        assert warnings[0]["log_level"] == "warning"

    def test_invalid_value_keeps_valid_ones(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Other settings still load when one value is invalid."""
        monkeypatch.setenv("PUBLIC_STRAPI_URL", "https://cms.example.com")
        monkeypatch.setenv("MODE", "production")
        monkeypatch.setenv("DEBUG", "express:*")

        settings = AppSettings(_env_file=None)

        assert settings.base_url == "https://cms.example.com"
        assert settings.mode is RuntimeMode.PRODUCTION
        assert settings.debug is None

    def test_reads_dotenv_file(self, tmp_path: Path) -> None:
        """A .env file is honored."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "CMS_BASE_URL=https://dotenv.example.com\nCMS_IMAGE_NAMING=hashed\n",
            encoding="utf-8",
        )

        settings = AppSettings(_env_file=env_file)

        assert settings.base_url == "https://dotenv.example.com"
        assert settings.image_naming is ImageNaming.HASHED
