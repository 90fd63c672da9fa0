"""Cross-locale checks over translation tables.

Nothing in here raises on incomplete data: missing, extra and empty keys,
duplicates and near-duplicate keys are all reported as data.
"""
import logging
from collections.abc import Mapping
from typing import Any

from phrasebook.classes import (
    KeyDifference,
    LocaleComparison,
    Plain,
    SimilarKeyGroup,
    VerificationReport,
    as_locale_table,
)

logger = logging.getLogger(__name__)


def empty_keys(entries: Mapping[str, Any]) -> set[str]:
    # Variant maps are not checked here
    return {
        key
        for key, value in as_locale_table(entries).items()
        if isinstance(value, Plain) and not value.text.strip()
    }


def verify(
    tables: Mapping[str, Mapping[str, Any]], reference_locale: str | None = None
) -> VerificationReport:
    if not tables:
        return VerificationReport(reference_locale=None, locales=[], total_keys=0)

    if reference_locale is None:
        # the last of equally large locales wins
        for locale, entries in tables.items():
            largest = None if reference_locale is None else tables[reference_locale]
            if largest is None or len(entries) >= len(largest):
                reference_locale = locale

    reference_keys = set(tables.get(reference_locale, {}))
    report = VerificationReport(
        reference_locale=reference_locale,
        locales=list(tables),
        total_keys=len(reference_keys),
    )

    for locale, entries in tables.items():
        if locale == reference_locale:
            continue
        keys = set(entries)

        missing = reference_keys - keys
        if missing:
            report.missing_keys[locale] = missing

        extra = keys - reference_keys
        if extra:
            report.extra_keys[locale] = extra

        empty = empty_keys(entries)
        if empty:
            report.empty_values[locale] = empty

    reference_empty = empty_keys(tables.get(reference_locale, {}))
    if reference_empty:
        report.empty_values[reference_locale] = reference_empty

    if report.has_issues:
        logger.warning(
            f"Verified {len(report.locales)} locales against {reference_locale}: "
            f"{sum(map(len, report.missing_keys.values()))} missing, "
            f"{sum(map(len, report.extra_keys.values()))} extra, "
            f"{sum(map(len, report.empty_values.values()))} empty"
        )
    else:
        logger.info(
            f"Verified {len(report.locales)} locales against {reference_locale}: "
            "no issues"
        )
    return report


def compare_locales(
    locale1: str,
    locale2: str,
    table1: Mapping[str, Any],
    table2: Mapping[str, Any],
) -> LocaleComparison:
    entries1 = as_locale_table(table1)
    entries2 = as_locale_table(table2)
    keys1 = set(entries1)
    keys2 = set(entries2)
    common = keys1 & keys2

    differences = {
        key: KeyDifference(key, entries1[key], entries2[key])
        for key in common
        if entries1[key] != entries2[key]
    }

    return LocaleComparison(
        locale1=locale1,
        locale2=locale2,
        common_keys=common,
        only_in_locale1=keys1 - keys2,
        only_in_locale2=keys2 - keys1,
        value_differences=differences,
    )


def find_duplicate_values(table: Mapping[str, Any]) -> dict[str, list[str]]:
    """Group keys that share the same (trimmed, non-empty) plain value."""
    value_to_keys: dict[str, list[str]] = {}
    for key, value in as_locale_table(table).items():
        if not isinstance(value, Plain):
            continue
        text = value.text.strip()
        if not text:
            continue
        value_to_keys.setdefault(text, []).append(key)

    return {text: keys for text, keys in value_to_keys.items() if len(keys) > 1}


def levenshtein(s1: str, s2: str) -> int:
    """Edit distance; insertion, deletion and substitution each cost 1."""
    matrix = [[0] * (len(s2) + 1) for _ in range(len(s1) + 1)]
    for i in range(len(s1) + 1):
        matrix[i][0] = i
    for j in range(len(s2) + 1):
        matrix[0][j] = j

    for i in range(1, len(s1) + 1):
        for j in range(1, len(s2) + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )

    return matrix[len(s1)][len(s2)]


def similarity(s1: str, s2: str) -> float:
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0
    # 1 - distance / longest
    longest = max(len(s1), len(s2))
    return (longest - levenshtein(s1, s2)) / longest


def find_similar_keys(
    table: Mapping[str, Any], threshold: float = 0.8
) -> list[SimilarKeyGroup]:
    """Find keys that look like typos of an earlier key.

    Every key is compared with the keys after it; a key becomes the base of a
    group when at least one later key reaches ``threshold``.
    """
    keys = list(table)
    groups = []
    for i, base in enumerate(keys):
        similar = [
            other for other in keys[i + 1 :] if similarity(base, other) >= threshold
        ]
        if similar:
            groups.append(SimilarKeyGroup(base, similar))

    logger.debug(f"{len(groups)} similar key groups at threshold {threshold}")
    return groups
