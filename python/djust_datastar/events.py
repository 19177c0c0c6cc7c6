"""
Datastar event payloads.

Each event kind has a plain configuration dataclass and a pure function that
turns a configuration into a named ``EventEnvelope``:

- ``PatchElementsConfig`` → ``build_patch_elements``
- ``PatchSignalsConfig`` → ``build_patch_signals``
- ``ExecuteScriptConfig`` → ``build_execute_script``

The functions validate required fields and raise ``MissingFieldError`` before
producing anything, so a bad configuration never reaches a connection.

Data-line grammar (the ``data: `` prefix is added by the envelope)::

    datastar-patch-elements
        mode <outer|inner|replace|prepend|append|before|after|remove>
        selector <css-selector>
        useViewTransition <true|false>
        elements <html-line>            (one per non-blank rendered line)

    datastar-patch-signals
        onlyIfMissing <true|false>
        signals <json-object>
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from django.utils.html import escape

from .envelope import PATCH_ELEMENTS, PATCH_SIGNALS, EventEnvelope
from .exceptions import MissingFieldError, SignalEncodingError

MODE = "mode"
SELECTOR = "selector"
USE_VIEW_TRANSITION = "useViewTransition"
ELEMENTS = "elements"
ONLY_IF_MISSING = "onlyIfMissing"
SIGNALS = "signals"

# ExecuteScript targets the document body
SCRIPT_SELECTOR = "body"
AUTO_REMOVE_ATTRIBUTE = ("data-effect", "el.remove()")


class PatchMode(str, enum.Enum):
    """How Datastar applies patched elements to the DOM."""

    OUTER = "outer"  # Morph the target's outerHTML (default)
    INNER = "inner"  # Morph the target's innerHTML
    REPLACE = "replace"  # Replace the target's outerHTML without morphing
    PREPEND = "prepend"  # Prepend to the target's children
    APPEND = "append"  # Append to the target's children
    BEFORE = "before"  # Insert before the target as a sibling
    AFTER = "after"  # Insert after the target as a sibling
    REMOVE = "remove"  # Remove the target

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: Union["PatchMode", str]) -> "PatchMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Invalid patch mode {value!r}. Expected one of: {valid}") from None


def format_bool(value: bool) -> str:
    return "true" if value else "false"


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


@dataclass
class PatchElementsConfig:
    template: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    selector: Optional[str] = None
    mode: Optional[PatchMode] = None
    use_view_transition: Optional[bool] = None


@dataclass
class PatchSignalsConfig:
    signals: Dict[str, Any] = field(default_factory=dict)
    only_if_missing: Optional[bool] = None


@dataclass
class ExecuteScriptConfig:
    scripts: List[str] = field(default_factory=list)
    # (name, value) pairs; a None value renders a bare attribute
    attributes: List[Tuple[str, Optional[str]]] = field(default_factory=list)
    auto_remove: Optional[bool] = None


EventConfig = Union[PatchElementsConfig, PatchSignalsConfig, ExecuteScriptConfig]


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------


def build_patch_elements(
    config: PatchElementsConfig,
    render: Callable[[str, Dict[str, Any]], str],
) -> EventEnvelope:
    """
    Build a ``datastar-patch-elements`` envelope.

    A template is required for every mode except ``remove``. When a template
    is set, ``render`` is called exactly once with the template name and the
    context, and its output becomes the ``elements`` lines.

    Raises:
        MissingFieldError: If no template is set and the mode is not ``remove``.
    """
    if config.mode is not PatchMode.REMOVE and config.template is None:
        raise MissingFieldError(
            "PatchElements",
            "a template",
            hint="Call .template('name') or use patch mode 'remove'.",
        )

    envelope = EventEnvelope(PATCH_ELEMENTS)
    if config.mode is not None:
        envelope.append_data_line(f"{MODE} {config.mode.value}")
    if config.selector:
        envelope.append_data_line(f"{SELECTOR} {config.selector}")
    if config.use_view_transition is not None:
        envelope.append_data_line(
            f"{USE_VIEW_TRANSITION} {format_bool(config.use_view_transition)}"
        )
    if config.template is not None:
        html = render(config.template, config.context)
        envelope.append_multiline_field(ELEMENTS, str(html))
    return envelope


def build_patch_signals(
    config: PatchSignalsConfig,
    to_json: Callable[[Any], str],
) -> EventEnvelope:
    """
    Build a ``datastar-patch-signals`` envelope.

    Raises:
        MissingFieldError: If no signal was added.
        SignalEncodingError: If ``to_json`` cannot encode the signals.
    """
    if not config.signals:
        raise MissingFieldError(
            "PatchSignals",
            "at least one signal",
            hint="Call .signal('name', value) before emitting.",
        )

    try:
        signals_json = to_json(config.signals)
    except Exception as exc:
        raise SignalEncodingError(f"Cannot convert signals to JSON: {exc}") from exc

    envelope = EventEnvelope(PATCH_SIGNALS)
    if config.only_if_missing is not None:
        envelope.append_data_line(f"{ONLY_IF_MISSING} {format_bool(config.only_if_missing)}")
    envelope.append_data_line(f"{SIGNALS} {signals_json}")
    return envelope


def script_open_tag(config: ExecuteScriptConfig) -> str:
    attributes = list(config.attributes)
    if config.auto_remove:
        attributes.insert(0, AUTO_REMOVE_ATTRIBUTE)

    parts = ["<script"]
    for name, value in attributes:
        if value is None:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{escape(value)}"')
    parts.append(">")
    return "".join(parts)


def build_execute_script(config: ExecuteScriptConfig) -> EventEnvelope:
    """
    Build a ``datastar-patch-elements`` envelope that appends a script to body.

    The script tag has no template, so the element lines are assembled here
    rather than rendered.

    Raises:
        MissingFieldError: If no script line was added.
    """
    if not config.scripts:
        raise MissingFieldError(
            "ExecuteScript",
            "at least one script line",
            hint="Call .script('console.log(1)') before emitting.",
        )

    envelope = EventEnvelope(PATCH_ELEMENTS)
    envelope.append_data_line(f"{MODE} {PatchMode.APPEND.value}")
    envelope.append_data_line(f"{SELECTOR} {SCRIPT_SELECTOR}")
    envelope.append_data_line(f"{ELEMENTS} {script_open_tag(config)}")
    for script in config.scripts:
        # A multi-line statement still needs one data line per line
        envelope.append_multiline_field(ELEMENTS, script)
    envelope.append_data_line(f"{ELEMENTS} </script>")
    return envelope
