"""
Factory for Datastar event builders.

``Datastar`` holds the collaborators every builder needs (template renderer,
message source, JSON encoder, template suffix) and hands out builders bound
to a set of connections. Most code uses the process-wide instance built from
``DATASTAR_CONFIG``::

    from djust_datastar import get_datastar

    get_datastar().patch_signals(connection).signal("count", 1).emit()
"""

import inspect
import logging
import threading
from typing import Any, Callable, Dict, Optional

from django.utils.module_loading import import_string

from .builders import ExecuteScript, PatchElements, PatchSignals
from .config import get_config
from .events import PatchMode
from .localization import MessageSource
from .serialization import make_json_encoder

logger = logging.getLogger(__name__)


def _resolve(value: Any) -> Any:
    """Import a collaborator given as a dotted path."""
    if isinstance(value, str):
        value = import_string(value)
    return value


class Datastar:
    """
    Constructs Datastar event builders.

    Args:
        template_renderer: ``(template_name, context) -> str`` used by PatchElements
        message_source: Object with ``get_message(key, locale)`` or a callable
            ``(key, locale) -> str`` used by localized templates
        template_suffix: Appended to every template name
        json_encoder: ``value -> str`` callable, or a ``json.JSONEncoder``
            subclass, used by PatchSignals
        default_locale: Locale for ``patch_elements(..., locale=...)`` calls that
            pass ``locale=True``

    Any argument left as None is taken from ``DATASTAR_CONFIG``.
    """

    def __init__(
        self,
        template_renderer: Optional[Callable[[str, Dict[str, Any]], str]] = None,
        message_source: Optional[MessageSource] = None,
        template_suffix: Optional[str] = None,
        json_encoder: Any = None,
        default_locale: Optional[str] = None,
    ):
        config = get_config()

        self.template_renderer = template_renderer or _resolve(config.get("template_renderer"))

        message_source = message_source or _resolve(config.get("message_source"))
        if inspect.isclass(message_source):
            message_source = message_source()
        self.message_source = message_source

        self.template_suffix = (
            template_suffix if template_suffix is not None else config.get("template_suffix", "")
        )

        json_encoder = json_encoder or _resolve(config.get("json_encoder"))
        if inspect.isclass(json_encoder):
            json_encoder = make_json_encoder(json_encoder)
        self.json_encoder = json_encoder

        self.default_locale = default_locale or config.get_default_locale()

    def __repr__(self) -> str:
        return f"<Datastar suffix={self.template_suffix!r} locale={self.default_locale!r}>"

    def patch_elements(self, connections: Any, locale: Any = None) -> PatchElements:
        """
        Create a PatchElements builder.

        Args:
            connections: A connection or an iterable of connections
            locale: Locale for localized templates. ``True`` uses the default
                locale; None leaves templates unlocalized unless
                ``template(name, locale)`` is called with one.
        """
        if locale is True:
            locale = self.default_locale
        return PatchElements(
            connections,
            render=self.template_renderer,
            message_source=self.message_source,
            template_suffix=self.template_suffix,
            locale=locale or None,
        )

    def remove_elements(self, connections: Any, selector: str) -> PatchElements:
        """Create a PatchElements builder that removes elements matching ``selector``."""
        if selector is None or not selector.strip():
            raise ValueError("selector cannot be None or empty")
        return self.patch_elements(connections).patch_mode(PatchMode.REMOVE).selector(selector)

    def patch_signals(self, connections: Any) -> PatchSignals:
        """Create a PatchSignals builder."""
        return PatchSignals(connections, to_json=self.json_encoder)

    def execute_script(self, connections: Any) -> ExecuteScript:
        """Create an ExecuteScript builder."""
        return ExecuteScript(connections)


_datastar: Optional[Datastar] = None
_datastar_lock = threading.Lock()


def get_datastar() -> Datastar:
    """Return the process-wide Datastar factory, building it on first use."""
    global _datastar
    if _datastar is None:
        with _datastar_lock:
            if _datastar is None:
                _datastar = Datastar()
                logger.debug("Initialized %r", _datastar)
    return _datastar


def reset_datastar() -> None:
    """Drop the process-wide factory so the next call rebuilds it from settings."""
    global _datastar
    with _datastar_lock:
        _datastar = None
