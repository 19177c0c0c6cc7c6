"""
Fluent, single-use builders for Datastar events.

Builders are obtained from the ``Datastar`` factory, bound to the connections
the event targets::

    datastar = get_datastar()

    datastar.patch_elements(connection) \\
        .template("todos/item") \\
        .attribute("todo", todo) \\
        .selector("#todo-list") \\
        .patch_mode(PatchMode.APPEND) \\
        .emit()

    datastar.patch_signals(connections).signal("count", 42).emit()

    datastar.execute_script(connection).script("console.log('hi')").emit()

Setters may be called in any order and overwrite earlier values. ``emit()``
validates the configuration, builds the envelope, sends it to every
connection and returns a ``DispatchResult``. A builder can only be emitted
once.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from asgiref.sync import sync_to_async

from .connections import ConnectionSet
from .dispatch import DispatchResult, emit_events
from .envelope import EventEnvelope
from .events import (
    ExecuteScriptConfig,
    PatchElementsConfig,
    PatchMode,
    PatchSignalsConfig,
    build_execute_script,
    build_patch_elements,
    build_patch_signals,
)
from .exceptions import BuilderConsumedError
from .localization import LOCALIZER_KEY, Localizer, MessageSource

logger = logging.getLogger(__name__)


class _DatastarEmitter:
    """Shared connection binding and emit flow for every event builder."""

    event_kind = "Datastar"

    def __init__(self, connections: Any):
        # Copied here so later changes to the caller's collection are not seen
        self.connections = ConnectionSet(connections)
        self._emitted = False

    def build(self) -> EventEnvelope:
        """Validate the configuration and return the finished envelope."""
        raise NotImplementedError

    def emit(self) -> DispatchResult:
        """
        Send the event to every bound connection.

        Returns:
            DispatchResult with the delivered and failed connections. Delivery
            failures are never raised here; call ``raise_for_failures()`` on
            the result to turn them into an ``EmitError``.

        Raises:
            MissingFieldError: A required field was not set.
            SignalEncodingError: Signal values could not be encoded.
            BuilderConsumedError: The builder was already emitted.
        """
        if self._emitted:
            raise BuilderConsumedError(self.event_kind)
        self._emitted = True

        envelope = self.build()
        logger.debug(
            "Emitting %s as %s (%d data lines) to %d connection(s)",
            self.event_kind,
            envelope.id,
            len(envelope.data_lines),
            len(self.connections),
        )
        return emit_events(envelope, self.connections)

    async def aemit(self) -> DispatchResult:
        """Async version of :meth:`emit`."""
        return await sync_to_async(self.emit)()


class PatchElements(_DatastarEmitter):
    """
    Patch, replace or remove DOM elements.

    Elements are rendered from a template. By default Datastar morphs them
    into the DOM by matching top level element ids; ``selector`` and
    ``patch_mode`` change the target and the strategy. With patch mode
    ``remove`` no template is needed.
    """

    event_kind = "PatchElements"

    def __init__(
        self,
        connections: Any,
        render: Callable[[str, Dict[str, Any]], str],
        message_source: MessageSource,
        template_suffix: str = "",
        locale: Optional[str] = None,
    ):
        super().__init__(connections)
        self.config = PatchElementsConfig()
        self._render = render
        self._message_source = message_source
        self._template_suffix = template_suffix
        self._locale = locale

    def template(self, template_name: str, locale: Optional[str] = None) -> "PatchElements":
        """
        Set the template the elements are rendered from.

        The configured template suffix is appended to ``template_name``. With
        a locale (or a locale given to the factory), a ``Localizer`` for it is
        available to the template as ``localizer``.
        """
        self.config.template = f"{template_name}{self._template_suffix}"
        locale = locale or self._locale
        if locale:
            self.config.context[LOCALIZER_KEY] = Localizer(self._message_source, locale)
        return self

    def attribute(self, key: str, value: Any) -> "PatchElements":
        """Add a template context value."""
        self.config.context[key] = value
        return self

    def attributes(self, values: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "PatchElements":
        """Add several template context values at once."""
        if values:
            self.config.context.update(values)
        self.config.context.update(kwargs)
        return self

    def selector(self, selector: str) -> "PatchElements":
        """
        Target elements matching a CSS selector.

        Several selectors can be given as a comma separated list.
        """
        self.config.selector = selector.strip() if selector is not None else None
        return self

    def patch_mode(self, mode: Union[PatchMode, str]) -> "PatchElements":
        """Set the patch mode. Datastar defaults to ``outer``."""
        self.config.mode = PatchMode.coerce(mode)
        return self

    def use_view_transition(self, use_view_transition: bool = True) -> "PatchElements":
        """Whether to use view transitions when patching the DOM."""
        self.config.use_view_transition = bool(use_view_transition)
        return self

    def build(self) -> EventEnvelope:
        return build_patch_elements(self.config, self._render)


class PatchSignals(_DatastarEmitter):
    """Patch signal values in the browser."""

    event_kind = "PatchSignals"

    def __init__(self, connections: Any, to_json: Callable[[Any], str]):
        super().__init__(connections)
        self.config = PatchSignalsConfig()
        self._to_json = to_json

    def signal(self, name: str, value: Any) -> "PatchSignals":
        """Set one signal. Setting the same name again replaces the value."""
        self.config.signals[name] = value
        return self

    def signals(self, values: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "PatchSignals":
        """Set several signals at once."""
        if values:
            self.config.signals.update(values)
        self.config.signals.update(kwargs)
        return self

    def remove(self, path: str) -> "PatchSignals":
        """
        Remove the signal at a dotted ``path`` on the client.

        Datastar deletes signals that are patched to ``null``, so
        ``remove("user.name")`` sends ``{"user": {"name": null}}``.
        """
        if path is None or not path.strip():
            raise ValueError("path cannot be None or empty")

        *parents, leaf = [part.strip() for part in path.strip().split(".")]
        target = self.config.signals
        for part in parents:
            child = target.get(part)
            # Copy so a dict passed to signal() is not modified
            child = dict(child) if isinstance(child, dict) else {}
            target[part] = child
            target = child
        target[leaf] = None
        return self

    def only_if_missing(self, only_if_missing: bool = True) -> "PatchSignals":
        """Only set signals that do not exist on the client yet."""
        self.config.only_if_missing = bool(only_if_missing)
        return self

    def build(self) -> EventEnvelope:
        return build_patch_signals(self.config, self._to_json)


class ExecuteScript(_DatastarEmitter):
    """
    Run JavaScript in the browser.

    Sent as a ``datastar-patch-elements`` event that appends a ``<script>``
    element to the document body.
    """

    event_kind = "ExecuteScript"

    def __init__(self, connections: Any):
        super().__init__(connections)
        self.config = ExecuteScriptConfig()

    def script(self, script: str) -> "ExecuteScript":
        """
        Add a JavaScript statement. At least one is required.

        Each statement is split on line breaks and every line is stripped of
        surrounding whitespace; blank lines are dropped.
        """
        if script is None or not script.strip():
            raise ValueError("script cannot be None or empty")
        self.config.scripts.append(script)
        return self

    def attribute(self, name: str, value: Optional[str] = None) -> "ExecuteScript":
        """
        Add an attribute to the script element.

        A value of None renders the attribute without a value (``defer``).
        """
        if name is None or not name.strip():
            raise ValueError("name cannot be None or empty")
        name = name.strip()
        value = None if value is None else str(value)
        attributes = [(n, v) for n, v in self.config.attributes if n != name]
        attributes.append((name, value))
        self.config.attributes = attributes
        return self

    def auto_remove(self, auto_remove: bool = True) -> "ExecuteScript":
        """Remove the script element once it has run."""
        self.config.auto_remove = bool(auto_remove)
        return self

    def build(self) -> EventEnvelope:
        return build_execute_script(self.config)
