"""Structured and human-readable renderings of verifier results."""
import json
from collections.abc import Mapping
from typing import Any

from phrasebook.classes import (
    LocaleComparison,
    Plain,
    SimilarKeyGroup,
    Value,
    VerificationReport,
)

RULE = "=" * 50


def value_to_primitive(value: Value) -> str | dict[str, str]:
    if isinstance(value, Plain):
        return value.text
    return dict(value.forms)


def report_to_dict(report: VerificationReport) -> dict[str, Any]:
    return {
        "locales": list(report.locales),
        "referenceLocale": report.reference_locale,
        "totalKeys": report.total_keys,
        "hasIssues": report.has_issues,
        "missingKeys": {k: sorted(v) for k, v in report.missing_keys.items()},
        "extraKeys": {k: sorted(v) for k, v in report.extra_keys.items()},
        "emptyValues": {k: sorted(v) for k, v in report.empty_values.items()},
        "coverage": {locale: report.coverage(locale) for locale in report.locales},
    }


def comparison_to_dict(comparison: LocaleComparison) -> dict[str, Any]:
    return {
        "locale1": comparison.locale1,
        "locale2": comparison.locale2,
        "commonKeys": sorted(comparison.common_keys),
        "onlyInLocale1": sorted(comparison.only_in_locale1),
        "onlyInLocale2": sorted(comparison.only_in_locale2),
        "valueDifferences": {
            key: [
                value_to_primitive(diff.value1),
                value_to_primitive(diff.value2),
            ]
            for key, diff in sorted(comparison.value_differences.items())
        },
    }


def duplicates_to_dict(duplicates: Mapping[str, list[str]]) -> dict[str, Any]:
    return {"duplicates": {value: list(keys) for value, keys in duplicates.items()}}


def similar_to_dict(groups: list[SimilarKeyGroup]) -> dict[str, Any]:
    return {
        "groups": [
            {"baseKey": group.base_key, "similarKeys": list(group.similar_keys)}
            for group in groups
        ]
    }


def to_dict(result: Any) -> dict[str, Any]:
    if isinstance(result, VerificationReport):
        return report_to_dict(result)
    if isinstance(result, LocaleComparison):
        return comparison_to_dict(result)
    if isinstance(result, Mapping):
        return duplicates_to_dict(result)
    if isinstance(result, list):
        return similar_to_dict(result)
    raise TypeError(f"Cannot render {type(result).__name__}")


def to_json(result: Any) -> str:
    return json.dumps(to_dict(result), ensure_ascii=False, indent=2)


def _key_section(
    title: str, unit: str, keys_by_locale: Mapping[str, set[str]]
) -> list[str]:
    lines = [f"{title}:"]
    for locale, keys in keys_by_locale.items():
        lines.append(f"  {locale}: {len(keys)} {unit}")
        lines.extend(f"    - {key}" for key in sorted(keys))
        lines.append("")
    return lines


def render_report(report: VerificationReport) -> str:
    if not report.has_issues:
        return (
            "All translations are in sync! No issues found.\n"
            f"Verified {len(report.locales)} locales "
            f"with {report.total_keys} keys each."
        )

    lines = [
        "Translation Verification Report",
        RULE,
        f"Reference Locale: {report.reference_locale}",
        f"Total Keys: {report.total_keys}",
        f"Locales: {', '.join(report.locales)}",
        RULE,
        "",
    ]
    if report.missing_keys:
        lines += _key_section("Missing Keys", "missing", report.missing_keys)
    if report.extra_keys:
        lines += _key_section(
            "Extra Keys (not in reference)", "extra", report.extra_keys
        )
    if report.empty_values:
        lines += _key_section("Empty Values", "empty", report.empty_values)

    lines += [
        RULE,
        "Coverage:",
        *(
            f"  {locale}: {report.coverage(locale):.1f}%"
            for locale in report.locales
        ),
        "Summary:",
        f"  Missing: {sum(map(len, report.missing_keys.values()))} keys",
        f"  Extra: {sum(map(len, report.extra_keys.values()))} keys",
        f"  Empty: {sum(map(len, report.empty_values.values()))} keys",
    ]
    return "\n".join(lines)


def render_comparison(comparison: LocaleComparison) -> str:
    locale1, locale2 = comparison.locale1, comparison.locale2
    lines = [
        f"Locale Comparison: {locale1} vs {locale2}",
        RULE,
        f"Common Keys: {len(comparison.common_keys)}",
        f"Only in {locale1}: {len(comparison.only_in_locale1)}",
        f"Only in {locale2}: {len(comparison.only_in_locale2)}",
        f"Value Differences: {len(comparison.value_differences)}",
        RULE,
        "",
    ]
    for locale, keys in (
        (locale1, comparison.only_in_locale1),
        (locale2, comparison.only_in_locale2),
    ):
        if keys:
            lines.append(f"Keys only in {locale}:")
            lines.extend(f"  - {key}" for key in sorted(keys))
            lines.append("")

    if comparison.value_differences:
        lines.append("Different values:")
        for key, diff in sorted(comparison.value_differences.items()):
            lines.append(f"  {key}:")
            lines.append(f"    [{value_to_primitive(diff.value1)}]")
            lines.append(f"    [{value_to_primitive(diff.value2)}]")
    return "\n".join(lines)


def render_duplicates(duplicates: Mapping[str, list[str]]) -> str:
    if not duplicates:
        return "No duplicate values found!"

    lines = [f"Found {len(duplicates)} duplicate values:", ""]
    for value, keys in duplicates.items():
        lines.append(f'Value: "{value}"')
        lines.append("Keys:")
        lines.extend(f"  - {key}" for key in keys)
        lines.append("")
    return "\n".join(lines)


def render_similar(groups: list[SimilarKeyGroup]) -> str:
    if not groups:
        return "No similar keys found!"

    lines = [f"Found {len(groups)} groups of similar keys:", ""]
    for group in groups:
        lines.append(f"Base: {group.base_key}")
        lines.append("Similar:")
        lines.extend(f"  - {key}" for key in group.similar_keys)
        lines.append("")
    return "\n".join(lines)


def render_text(result: Any) -> str:
    if isinstance(result, VerificationReport):
        return render_report(result)
    if isinstance(result, LocaleComparison):
        return render_comparison(result)
    if isinstance(result, Mapping):
        return render_duplicates(result)
    if isinstance(result, list):
        return render_similar(result)
    raise TypeError(f"Cannot render {type(result).__name__}")


def render_markdown(report: VerificationReport) -> str:
    """One section per locale with a table of its issues."""
    if not report.has_issues:
        return "No issues found"

    markdown = ""
    for locale in report.locales:
        missing = sorted(report.missing_keys.get(locale, ()))
        extra = sorted(report.extra_keys.get(locale, ()))
        empty = sorted(report.empty_values.get(locale, ()))
        problems = (
            [(key, "Key missing") for key in missing]
            + [(key, f"Not in {report.reference_locale}") for key in extra]
            + [(key, "Empty value") for key in empty]
        )
        if not problems:
            continue
        markdown += f"## {locale} ({report.coverage(locale):.1f}% coverage)\n"
        markdown += "| Key | Issue |\n| ------- | --------- |\n"
        for key, issue in problems:
            markdown += f"| `{key}` | {issue} |\n"
        markdown += "\n"
    return markdown
