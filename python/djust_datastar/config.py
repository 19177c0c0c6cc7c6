"""
Configuration system for djust-datastar

Provides centralized configuration for:
- Template suffix appended to PatchElements template names
- Default locale for localized templates
- Collaborators (template renderer, message source, JSON encoder)
"""

from typing import Any, Dict

from django.core.signals import setting_changed
from django.dispatch import receiver


class DatastarSettings:
    """
    Central configuration for djust-datastar.

    Usage:
        # In settings.py
        DATASTAR_CONFIG = {
            'template_suffix': '.html',
            'default_locale': 'en',
        }

        # Or programmatically
        from djust_datastar.config import config
        config.set('template_suffix', '.jinja')
    """

    # Default configuration
    _defaults = {
        # Appended to every template name given to PatchElements.template()
        "template_suffix": ".html",
        # Locale used by Datastar.patch_elements() when none is given (None = LANGUAGE_CODE)
        "default_locale": None,
        # Collaborators, as dotted import paths
        "template_renderer": "djust_datastar.rendering.render_template",
        "message_source": "djust_datastar.localization.DjangoMessageSource",
        "json_encoder": "djust_datastar.serialization.DatastarJSONEncoder",
    }

    def __init__(self):
        self._loaded = None

    @property
    def _config(self) -> Dict[str, Any]:
        # Loaded on first use so settings configured after import are seen
        if self._loaded is None:
            self._loaded = self._defaults.copy()
            self._load_from_settings()
        return self._loaded

    def _load_from_settings(self):
        """Load configuration from Django settings if available"""
        from django.conf import settings

        if settings.configured:
            self._loaded.update(getattr(settings, "DATASTAR_CONFIG", None) or {})

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (supports dot notation for nested values)
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            config.get('template_suffix')  # '.html'
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value if value is not None else default

    def set(self, key: str, value: Any):
        """
        Set a configuration value.

        Args:
            key: Configuration key (supports dot notation for nested values)
            value: Value to set
        """
        keys = key.split(".")

        target = self._config
        for k in keys[:-1]:
            if k not in target:
                target[k] = {}
            target = target[k]

        target[keys[-1]] = value

    def get_default_locale(self) -> str:
        """Return the configured default locale, falling back to LANGUAGE_CODE."""
        from django.conf import settings

        return self.get("default_locale") or getattr(settings, "LANGUAGE_CODE", "en-us")

    def unknown_keys(self):
        """Keys in DATASTAR_CONFIG that djust-datastar does not use."""
        return sorted(set(self._config) - set(self._defaults))

    def reset(self):
        """Reset configuration to defaults"""
        self._loaded = None

    def update(self, config_dict: Dict[str, Any]):
        """Update multiple configuration values at once."""
        self._config.update(config_dict)

    def as_dict(self) -> Dict[str, Any]:
        """Get the entire configuration as a dictionary"""
        return self._config.copy()


# Global configuration instance
config = DatastarSettings()


def get_config() -> DatastarSettings:
    """Get the global configuration instance"""
    return config


@receiver(setting_changed)
def _reload_config(sender, setting, **kwargs):
    if setting not in ("DATASTAR_CONFIG", "LANGUAGE_CODE"):
        return
    config.reset()

    from .factory import reset_datastar

    reset_datastar()
