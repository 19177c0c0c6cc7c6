"""
Django system checks for djust-datastar.

Registered with Django's check framework, so they also run via
``python manage.py check``:

- C001 -- ``template_suffix`` is not a string
- C002 -- a collaborator dotted path cannot be imported
- C003 -- unknown keys in ``DATASTAR_CONFIG``
"""

import logging

from django.core.checks import Error, Warning, register
from django.utils.module_loading import import_string

from .config import get_config

logger = logging.getLogger(__name__)

_COLLABORATOR_KEYS = ("template_renderer", "message_source", "json_encoder")


@register("djust_datastar")
def check_configuration(app_configs, **kwargs):
    """Validate DATASTAR_CONFIG."""
    config = get_config()
    errors = []

    # C001 -- template suffix must be a string
    suffix = config.get("template_suffix", "")
    if not isinstance(suffix, str):
        errors.append(
            Error(
                f"DATASTAR_CONFIG['template_suffix'] must be a string, got {type(suffix).__name__}.",
                hint="Use a file extension such as '.html'.",
                id="djust_datastar.C001",
            )
        )

    # C002 -- collaborators must be importable
    for key in _COLLABORATOR_KEYS:
        path = config.get(key)
        if not isinstance(path, str):
            # Objects set programmatically are used as-is
            continue
        try:
            import_string(path)
        except ImportError as exc:
            logger.debug("Cannot import %s=%s: %s", key, path, exc)
            errors.append(
                Error(
                    f"DATASTAR_CONFIG['{key}'] cannot be imported: {path!r}.",
                    hint=str(exc),
                    id="djust_datastar.C002",
                )
            )

    # C003 -- unknown keys are ignored, most likely a typo
    unknown = config.unknown_keys()
    if unknown:
        errors.append(
            Warning(
                f"Unknown DATASTAR_CONFIG keys: {', '.join(unknown)}.",
                hint="Valid keys: " + ", ".join(sorted(config._defaults)) + ".",
                id="djust_datastar.C003",
            )
        )

    return errors
