"""Test Settings loading."""

from email_address.core.config import Settings, load_settings
from email_address.core.enums import Grammar, LogFormat


class TestSettingsDefaults:
    def test_default_settings(self):
        settings = Settings()
        assert settings.observability.log_level == "WARNING"
        assert settings.observability.log_format == LogFormat.CONSOLE
        assert settings.cli.ascii_only is False
        assert settings.cli.default_grammar == Grammar.TRANSPORT

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("EMAIL_ADDRESS_OBSERVABILITY__LOG_LEVEL", "DEBUG")
        assert Settings().observability.log_level == "DEBUG"


class TestLoadSettings:
    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(config_path=tmp_path / "missing.toml")
        assert settings.cli.ascii_only is False

    def test_load_toml(self, tmp_path):
        path = tmp_path / "email.toml"
        path.write_text(
            '[cli]\nascii_only = true\ndefault_grammar = "rfc5322"\n'
            '[observability]\nlog_format = "json"\n'
        )
        settings = load_settings(config_path=path)
        assert settings.cli.ascii_only is True
        assert settings.cli.default_grammar == Grammar.HEADER
        assert settings.observability.log_format == LogFormat.JSON

    def test_overrides_merge_with_file(self, tmp_path):
        path = tmp_path / "email.toml"
        path.write_text('[observability]\nlog_format = "json"\n')
        settings = load_settings(
            config_path=path,
            overrides={"observability": {"log_level": "DEBUG"}},
        )
        assert settings.observability.log_format == LogFormat.JSON
        assert settings.observability.log_level == "DEBUG"
