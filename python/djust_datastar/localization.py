"""
Localized text lookup for rendered element templates.

When a template is bound with a locale, a ``Localizer`` is added to the
template context under the ``localizer`` key. Templates look messages up
through it::

    <h1>{{ localizer.welcome_title }}</h1>

Attribute-style access works because Django's template engine tries a
dictionary lookup first, which ``Localizer.__getitem__`` answers.
"""

from typing import Callable, Union

from django.utils import translation

# Template context key the localizer is bound to
LOCALIZER_KEY = "localizer"


class DjangoMessageSource:
    """
    Message source backed by Django's translation catalogs.

    ``get_message(key, locale)`` activates ``locale`` for the duration of the
    lookup and returns ``gettext(key)``. Keys without a translation come back
    unchanged, matching Django's own behavior.
    """

    def get_message(self, key: str, locale: str) -> str:
        with translation.override(locale):
            return translation.gettext(key)

    __call__ = get_message


MessageSource = Union[DjangoMessageSource, Callable[[str, str], str]]


class Localizer:
    """Looks up message keys for one fixed locale."""

    __slots__ = ("message_source", "locale")

    def __init__(self, message_source: MessageSource, locale: str):
        self.message_source = message_source
        self.locale = locale

    def __repr__(self) -> str:
        return f"<Localizer locale={self.locale!r}>"

    def lookup(self, key: str) -> str:
        getter = getattr(self.message_source, "get_message", self.message_source)
        return getter(key, self.locale)

    def __getitem__(self, key: str) -> str:
        if not isinstance(key, str):
            raise KeyError(key)
        return self.lookup(key)
