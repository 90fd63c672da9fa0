import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from phrasebook.classes import (
    Plain,
    ResolutionRequest,
    TranslationTable,
    Value,
    as_table,
)
from phrasebook.plural import Number, candidate_forms

logger = logging.getLogger(__name__)


def missing_marker(key: str) -> str:
    return f"[{key}]"


def select_variant(forms: Mapping[str, str], tags: Iterable[str]) -> str | None:
    """Return the first of ``tags`` present in ``forms``."""
    for tag in tags:
        if tag in forms:
            return forms[tag]
    return None


def interpolate(template: str, args: Mapping[str, str] | None) -> str:
    # Single pass over the template: inserted values are never scanned again,
    # unknown placeholders stay as they are.
    if not args:
        return template
    replacements = {"{" + name + "}": str(value) for name, value in args.items()}
    # longest names first
    pattern = re.compile(
        "|".join(map(re.escape, sorted(replacements, key=len, reverse=True)))
    )
    return pattern.sub(lambda match: replacements[match.group(0)], template)


def format_count(count: Number) -> str:
    if isinstance(count, float) and count.is_integer():
        return str(int(count))
    return str(count)


class Resolver:
    """Answers translation queries against a read-only TranslationTable.

    Pass one instance to whatever needs translations; there is no global
    accessor.
    """

    def __init__(
        self,
        table: Mapping[str, Mapping[str, Any]],
        fallback_locale: str | None = None,
    ) -> None:
        self.table: TranslationTable = as_table(table)
        self.fallback_locale = fallback_locale

    def lookup(
        self, key: str, locale: str, fallback_locale: str | None = None
    ) -> Value | None:
        value = self.table.get(locale, {}).get(key)
        if value is not None:
            return value

        fallback = fallback_locale or self.fallback_locale
        if fallback is not None:
            value = self.table.get(fallback, {}).get(key)
            if value is not None:
                logger.debug(f'"{key}" missing in {locale}, using {fallback}')
                return value

        logger.debug(f'No translation for "{key}" in {locale}')
        return None

    def translate(
        self,
        key: str,
        locale: str,
        fallback_locale: str | None = None,
        args: Mapping[str, str] | None = None,
        gender: str | None = None,
    ) -> str:
        value = self.lookup(key, locale, fallback_locale)
        if value is None:
            return missing_marker(key)

        if isinstance(value, Plain):
            text = value.text
        else:
            tags = [gender.lower(), "other"] if gender else ["other"]
            text = select_variant(value.forms, tags)
            if text is None:
                return missing_marker(key)

        return interpolate(text, args)

    def pluralize(
        self,
        key: str,
        count: Number,
        locale: str,
        fallback_locale: str | None = None,
        args: Mapping[str, str] | None = None,
    ) -> str:
        value = self.lookup(key, locale, fallback_locale)
        if value is None:
            return missing_marker(key)
        if isinstance(value, Plain):
            return value.text

        text = select_variant(value.forms, candidate_forms(count, locale))
        if text is None:
            text = missing_marker(key)

        text = text.replace("{}", format_count(count))
        return interpolate(text, args)

    def resolve(self, request: ResolutionRequest) -> str:
        if request.count is not None:
            return self.pluralize(
                request.key,
                request.count,
                request.locale,
                fallback_locale=request.fallback_locale,
                args=request.args,
            )
        return self.translate(
            request.key,
            request.locale,
            fallback_locale=request.fallback_locale,
            args=request.args,
            gender=request.gender,
        )
