from phrasebook.classes import Plain, Variants
from phrasebook.verifier import (
    compare_locales,
    find_duplicate_values,
    find_similar_keys,
    levenshtein,
    similarity,
    verify,
)


def test_verify_empty_tables():
    report = verify({})
    assert report.has_issues is False
    assert report.total_keys == 0
    assert report.locales == []
    assert report.reference_locale is None


def test_verify_in_sync():
    tables = {
        "en": {"a": "A", "b": "B"},
        "ku": {"a": "ئا", "b": "ب"},
        "ar": {"a": "أ", "b": "ب"},
    }
    report = verify(tables)
    assert report.has_issues is False
    for locale in tables:
        assert report.coverage(locale) == 100.0


def test_verify_picks_largest_locale():
    report = verify({"ku": {"a": "x"}, "en": {"a": "A", "b": "B"}})
    assert report.reference_locale == "en"
    assert report.missing_keys == {"ku": {"b"}}


def test_verify_tie_keeps_last_locale():
    report = verify({"ku": {"a": "x"}, "en": {"b": "B"}, "ar": {}})
    assert report.reference_locale == "en"


def test_verify_missing_extra_empty():
    tables = {
        "en": {"a": "A", "b": "B", "c": "C", "blank": "  "},
        "ar": {"a": "أ", "b": "", "x": "extra"},
    }
    report = verify(tables, reference_locale="en")
    assert report.has_issues
    assert report.total_keys == 4
    assert report.missing_keys == {"ar": {"c", "blank"}}
    assert report.extra_keys == {"ar": {"x"}}
    assert report.empty_values == {"ar": {"b"}, "en": {"blank"}}
    assert report.coverage("ar") == 25.0
    assert report.coverage("en") == 75.0


def test_verify_variant_maps_are_not_empty_checked():
    tables = {"en": {"d": {"one": "", "other": ""}}, "ru": {"d": {"other": ""}}}
    report = verify(tables)
    assert report.has_issues is False


def test_verify_unknown_reference_locale():
    report = verify({"en": {"a": "A"}}, reference_locale="fr")
    assert report.total_keys == 0
    assert report.extra_keys == {"en": {"a"}}
    assert report.coverage("en") == 0.0


def test_verify_is_idempotent():
    tables = {"en": {"a": "A", "b": ""}, "ru": {"a": "x", "c": "y"}}
    assert verify(tables) == verify(tables)


def test_coverage_is_clamped():
    report = verify({"en": {"a": "A"}, "ru": {"b": ""}}, reference_locale="en")
    assert report.missing_keys == {"ru": {"a"}}
    assert report.empty_values == {"ru": {"b"}}
    assert report.coverage("ru") == 0.0


def test_compare_locales():
    comparison = compare_locales(
        "en",
        "ar",
        {"a": "A", "b": "B", "c": "C"},
        {"a": "A", "b": "ب", "d": "D"},
    )
    assert comparison.common_keys == {"a", "b"}
    assert comparison.only_in_locale1 == {"c"}
    assert comparison.only_in_locale2 == {"d"}
    assert set(comparison.value_differences) == {"b"}
    diff = comparison.value_differences["b"]
    assert (diff.value1, diff.value2) == (Plain("B"), Plain("ب"))
    assert comparison.has_issues


def test_compare_locales_no_value_normalization():
    comparison = compare_locales("en", "en_GB", {"a": "A "}, {"a": "A"})
    assert set(comparison.value_differences) == {"a"}


def test_compare_identical_locales():
    comparison = compare_locales("en", "en", {"a": "A"}, {"a": "A"})
    assert comparison.has_issues is False


def test_compare_variant_values():
    comparison = compare_locales(
        "en", "ru", {"d": {"other": "days"}}, {"d": Variants({"other": "days"})}
    )
    assert comparison.value_differences == {}


def test_find_duplicate_values():
    assert find_duplicate_values({"a": "Hi", "b": "Hi", "c": "Bye"}) == {
        "Hi": ["a", "b"]
    }


def test_find_duplicate_values_trims_and_skips_empty():
    table = {"a": " Hi", "b": "Hi ", "c": "", "d": "  ", "e": {"other": "Hi"}}
    assert find_duplicate_values(table) == {"Hi": ["a", "b"]}


def test_find_duplicate_values_keeps_insertion_order():
    table = {"z": "Ok", "a": "Ok", "m": "Ok"}
    assert find_duplicate_values(table) == {"Ok": ["z", "a", "m"]}


def test_levenshtein():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("abc", "abc") == 0
    assert levenshtein("hello", "helo") == 1


def test_similarity():
    assert similarity("hello", "hello") == 1.0
    assert similarity("", "") == 0.0
    assert similarity("a", "") == 0.0
    assert similarity("hello", "helo") == 0.8


def test_find_similar_keys():
    groups = find_similar_keys({"hello": "x", "helo": "y"}, threshold=0.8)
    assert len(groups) == 1
    assert groups[0].base_key == "hello"
    assert groups[0].similar_keys == ["helo"]


def test_find_similar_keys_below_threshold():
    assert find_similar_keys({"hello": "x", "helo": "y"}, threshold=0.81) == []
    assert find_similar_keys({"save": "x", "cancel": "y"}) == []


def test_find_similar_keys_greedy_order():
    table = {"user.name": "1", "user.nam": "2", "user.nme": "3"}
    groups = find_similar_keys(table)
    assert [(g.base_key, g.similar_keys) for g in groups] == [
        ("user.name", ["user.nam", "user.nme"]),
    ]
