"""
CMS API — Message Translation
===============================
The manager supplies a message template and positional arguments;
the translator localizes the template and the manager fills it.

Templates use %-style placeholders:

    'The API does not support the "%s" resource.'
"""

from __future__ import annotations

from typing import Protocol

from django.utils.translation import gettext


class Translator(Protocol):
    def translate(self, message: str) -> str:
        ...


class GettextTranslator:
    """Translator backed by Django's active-language gettext catalog."""

    def translate(self, message: str) -> str:
        return gettext(message)


def format_message(translator: Translator, template: str, *args: object) -> str:
    """
    Translate a template, then fill its positional placeholders.

    A translation whose placeholders do not fit the arguments is
    ignored in favour of the untranslated template.
    """
    translated = translator.translate(template)
    if not args:
        return translated
    try:
        return translated % args
    except (TypeError, ValueError):
        return template % args
