"""Plural-form selection.

Maps a count and a locale code to the variant tags worth trying, most
specific first. Every list ends in "other".
"""
import logging
import re
from typing import Callable

logger = logging.getLogger(__name__)

Number = int | float
PluralRule = Callable[[Number], list[str]]


def default_rule(n: Number) -> list[str]:
    # 0, 1 and 2 are handled before dispatch; only singular/plural remain
    return ["many", "other"]


def slavic_rule(n: Number) -> list[str]:
    mod10 = n % 10
    mod100 = n % 100
    if mod10 == 1 and mod100 != 11:
        return ["one", "other"]
    if 2 <= mod10 <= 4 and not 10 <= mod100 < 20:
        return ["few", "other"]
    return ["many", "other"]


def arabic_rule(n: Number) -> list[str]:
    if n == 0:
        return ["zero", "other"]
    if n == 1:
        return ["one", "other"]
    if n == 2:
        return ["two", "other"]
    mod100 = n % 100
    if 3 <= mod100 <= 10:
        return ["few", "other"]
    if mod100 >= 11:
        return ["many", "other"]
    return ["other"]


def polish_rule(n: Number) -> list[str]:
    mod10 = n % 10
    mod100 = n % 100
    if n == 1:
        return ["one", "other"]
    if 2 <= mod10 <= 4 and not 12 <= mod100 <= 14:
        return ["few", "other"]
    return ["many", "other"]


_rules: dict[str, PluralRule] = {}


def register_family(rule: PluralRule, *locales: str) -> None:
    """Use ``rule`` for every count outside 0, 1 and 2 in ``locales``."""
    for locale in locales:
        _rules[language_code(locale)] = rule


def language_code(locale: str) -> str:
    """Reduce ``pt_BR`` / ``pt-BR`` / ``PT`` to ``pt``."""
    return re.split(r"[-_]", locale, maxsplit=1)[0].lower()


register_family(slavic_rule, "ru", "uk")
register_family(arabic_rule, "ar")
register_family(polish_rule, "pl")


def candidate_forms(count: Number, locale: str) -> list[str]:
    n = abs(count)
    if n == 0:
        return ["zero", "other"]
    if n == 1:
        return ["one", "other"]
    if n == 2:
        return ["two", "other"]

    rule = _rules.get(language_code(locale), default_rule)
    forms = rule(n)
    logger.debug(f"Plural forms for {count} in {locale}: {forms}")
    return forms
