from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Plain:
    text: str


@dataclass(frozen=True)
class Variants:
    forms: dict[str, str]


Value = Plain | Variants

# locale -> key -> value
TranslationTable = dict[str, dict[str, Value]]


def as_value(raw: Any) -> Value:
    """Turn a loader-produced entry into a Value.

    Mappings become variant maps, None an empty string and anything else is
    stringified.
    """
    if isinstance(raw, (Plain, Variants)):
        return raw
    if raw is None:
        return Plain("")
    if isinstance(raw, Mapping):
        return Variants({str(tag): str(text) for tag, text in raw.items()})
    return Plain(str(raw))


def as_locale_table(raw: Mapping[str, Any]) -> dict[str, Value]:
    return {str(key): as_value(value) for key, value in raw.items()}


def as_table(raw: Mapping[str, Mapping[str, Any]]) -> TranslationTable:
    return {str(locale): as_locale_table(entries) for locale, entries in raw.items()}


@dataclass(frozen=True)
class ResolutionRequest:
    key: str
    locale: str
    fallback_locale: str | None = None
    args: Mapping[str, str] | None = None
    gender: str | None = None
    count: int | float | None = None


@dataclass
class VerificationReport:
    reference_locale: str | None
    locales: list[str]
    total_keys: int
    missing_keys: dict[str, set[str]] = field(default_factory=dict)
    extra_keys: dict[str, set[str]] = field(default_factory=dict)
    empty_values: dict[str, set[str]] = field(default_factory=dict)

    @property
    def has_issues(self) -> bool:
        return bool(self.missing_keys or self.extra_keys or self.empty_values)

    def coverage(self, locale: str) -> float:
        if self.total_keys == 0:
            return 0.0
        missing = len(self.missing_keys.get(locale, ()))
        empty = len(self.empty_values.get(locale, ()))
        valid = self.total_keys - missing - empty
        return min(100.0, max(0.0, valid / self.total_keys * 100))


@dataclass(frozen=True)
class KeyDifference:
    key: str
    value1: Value
    value2: Value


@dataclass
class LocaleComparison:
    locale1: str
    locale2: str
    common_keys: set[str]
    only_in_locale1: set[str]
    only_in_locale2: set[str]
    value_differences: dict[str, KeyDifference]

    @property
    def has_issues(self) -> bool:
        return bool(
            self.only_in_locale1 or self.only_in_locale2 or self.value_differences
        )


@dataclass
class SimilarKeyGroup:
    base_key: str
    similar_keys: list[str]


@dataclass
class LoadResult:
    tables: TranslationTable = field(default_factory=dict)
    # file path -> parse error
    errors: dict[str, str] = field(default_factory=dict)
