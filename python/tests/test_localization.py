"""Tests for Localizer and the Django-backed message source."""

from unittest.mock import MagicMock, patch

import pytest
from django.utils import translation

from djust_datastar import DjangoMessageSource, Localizer


class TestLocalizer:
    def test_lookup_with_callable_source(self):
        source = MagicMock(spec=[], return_value="Bonjour")
        localizer = Localizer(source, "fr")

        assert localizer.lookup("greeting") == "Bonjour"
        source.assert_called_once_with("greeting", "fr")

    def test_lookup_with_get_message_source(self):
        source = MagicMock()
        source.get_message.return_value = "Hallo"

        assert Localizer(source, "de").lookup("greeting") == "Hallo"
        source.get_message.assert_called_once_with("greeting", "de")

    def test_item_access_is_lookup(self):
        localizer = Localizer(lambda key, locale: key.upper(), "en")
        assert localizer["title"] == "TITLE"

    def test_non_string_item_raises_key_error(self):
        localizer = Localizer(lambda key, locale: key, "en")
        with pytest.raises(KeyError):
            localizer[0]

    def test_repr(self):
        assert repr(Localizer(lambda k, l: k, "fr")) == "<Localizer locale='fr'>"


class TestDjangoMessageSource:
    def test_untranslated_key_is_returned_as_is(self):
        assert DjangoMessageSource().get_message("Save changes", "fr") == "Save changes"

    def test_locale_is_active_during_lookup(self):
        with patch(
            "djust_datastar.localization.translation.gettext",
            side_effect=lambda key: f"{key}@{translation.get_language()}",
        ):
            assert DjangoMessageSource().get_message("title", "fr") == "title@fr"

    def test_previous_language_is_restored(self):
        with translation.override("en"):
            DjangoMessageSource().get_message("title", "fr")
            assert translation.get_language() == "en"

    def test_is_callable(self):
        source = DjangoMessageSource()
        assert source("title", "en") == "title"
