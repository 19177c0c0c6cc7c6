"""Tests for DATASTAR_CONFIG handling and the djust_datastar system checks."""

from djust_datastar.checks import check_configuration
from djust_datastar.config import DatastarSettings, config, get_config


def check_ids(errors):
    return [e.id for e in errors]


class TestDatastarSettings:
    def test_defaults(self):
        settings = DatastarSettings()
        assert settings.get("template_suffix") == ".html"
        assert settings.get("default_locale") is None
        assert settings.get("missing", "fallback") == "fallback"

    def test_default_locale_falls_back_to_language_code(self):
        assert DatastarSettings().get_default_locale() == "en"

    def test_loaded_from_django_settings(self, settings):
        settings.DATASTAR_CONFIG = {"template_suffix": ".htm", "default_locale": "fr"}
        fresh = DatastarSettings()
        assert fresh.get("template_suffix") == ".htm"
        assert fresh.get_default_locale() == "fr"

    def test_set_and_dot_notation(self):
        settings = DatastarSettings()
        settings.set("extra.depth", 2)
        assert settings.get("extra.depth") == 2

    def test_reset_discards_programmatic_changes(self):
        config.set("template_suffix", ".jinja")
        assert config.get("template_suffix") == ".jinja"
        config.reset()
        assert config.get("template_suffix") == ".html"

    def test_update_and_as_dict(self):
        settings = DatastarSettings()
        settings.update({"default_locale": "de"})
        data = settings.as_dict()
        assert data["default_locale"] == "de"
        data["default_locale"] = "xx"
        assert settings.get("default_locale") == "de"

    def test_get_config_returns_global(self):
        assert get_config() is config

    def test_language_code_change_reloads(self, settings):
        settings.LANGUAGE_CODE = "fr"
        assert get_config().get_default_locale() == "fr"


class TestCheckConfiguration:
    def test_valid_configuration(self):
        assert check_configuration(None) == []

    def test_c001_suffix_not_a_string(self, settings):
        settings.DATASTAR_CONFIG = {"template_suffix": 5}
        errors = check_configuration(None)
        assert check_ids(errors) == ["djust_datastar.C001"]
        assert "must be a string" in errors[0].msg

    def test_c002_unimportable_collaborator(self, settings):
        settings.DATASTAR_CONFIG = {"template_renderer": "nowhere.render"}
        errors = check_configuration(None)
        assert check_ids(errors) == ["djust_datastar.C002"]
        assert "template_renderer" in errors[0].msg

    def test_c002_ignores_objects(self, settings):
        settings.DATASTAR_CONFIG = {"json_encoder": lambda value: "{}"}
        assert check_configuration(None) == []

    def test_c003_unknown_keys(self, settings):
        settings.DATASTAR_CONFIG = {"template_sufix": ".html"}
        errors = check_configuration(None)
        assert check_ids(errors) == ["djust_datastar.C003"]
        assert "template_sufix" in errors[0].msg
