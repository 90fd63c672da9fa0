import json
import logging
import pathlib
import re

import vdf

from phrasebook.classes import (
    LoadResult,
    TranslationTable,
    Value,
    as_locale_table,
    as_value,
)

logger = logging.getLogger(__name__)

LOCALE_SUFFIX_REGEX = re.compile(r"(\.phrases)?\.(json|ya?ml|csv|xml|txt)$")


def locale_from_path(path: str | pathlib.Path) -> str:
    """``assets/languages/en.json`` -> ``en``."""
    return LOCALE_SUFFIX_REGEX.sub("", pathlib.Path(path).name)


def load_json_file(path: str | pathlib.Path) -> dict[str, Value]:
    """Load one locale's ``key -> value`` object; nested objects are variant maps."""
    raw = json.loads(pathlib.Path(path).read_text("utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return as_locale_table(raw)


def load_phrases_file(path: str | pathlib.Path) -> TranslationTable:
    """Load a SourceMod "Phrases" file into ``locale -> key -> value``.

    Every language entry of every phrase ends up under its own locale;
    ``#format`` entries are skipped.
    """
    phrases = vdf.loads(pathlib.Path(path).read_text("utf-8"))
    if "Phrases" not in phrases:
        raise ValueError(
            f'{pathlib.Path(path).name} does not start with a "Phrases" section'
        )

    name = pathlib.Path(path).name
    if not isinstance(phrases["Phrases"], dict):
        raise ValueError(f'"Phrases" in {name} is not a section')

    tables: TranslationTable = {}
    for phrase_ident, raw_translations in phrases["Phrases"].items():
        if not isinstance(raw_translations, dict):
            raise ValueError(f'Phrase "{phrase_ident}" in {name} is not a section')
        for langid, translation in raw_translations.items():
            if langid == "#format":
                continue
            tables.setdefault(langid, {})[phrase_ident] = as_value(translation)
    return tables


def load_file(path: str | pathlib.Path) -> dict[str, Value]:
    """Load the entries of a single-locale file (JSON or SourceMod phrases)."""
    path = pathlib.Path(path)
    if path.suffix == ".json":
        return load_json_file(path)

    tables = load_phrases_file(path)
    locale = locale_from_path(path)
    if locale in tables:
        return tables[locale]
    # phrase files are named after their content, not their language
    merged: dict[str, Value] = {}
    for entries in tables.values():
        merged.update(entries)
    return merged


def _merge(tables: TranslationTable, locale: str, entries: dict[str, Value]) -> None:
    tables.setdefault(locale, {}).update(entries)


def load_folder(path: str | pathlib.Path) -> LoadResult:
    """Collect every translation table found in ``path``.

    ``<locale>.json`` files give one locale each. SourceMod phrase files
    (``*.txt``) are read from the folder and from its per-language
    subfolders. Files that cannot be parsed are logged and skipped.
    """
    folder = pathlib.Path(path)
    if not folder.is_dir():
        raise FileNotFoundError(f"Directory not found: {folder}")

    result = LoadResult()
    for file in sorted(folder.glob("*.json")):
        logger.debug(f"Parsing {file}")
        try:
            _merge(result.tables, locale_from_path(file), load_json_file(file))
        except (OSError, ValueError) as ex:
            logger.error(f"Error parsing {file}: {ex}")
            result.errors[str(file)] = str(ex)

    phrase_files = sorted(folder.glob("*.txt")) + sorted(folder.glob("*/*.txt"))
    for file in phrase_files:
        logger.debug(f"Parsing {file}")
        if not file.is_file():
            continue
        try:
            tables = load_phrases_file(file)
        except (OSError, ValueError, SyntaxError) as ex:
            logger.error(f"Error parsing {file}: {ex}")
            result.errors[str(file)] = str(ex)
            continue
        for locale, entries in tables.items():
            _merge(result.tables, locale, entries)

    logger.info(f"Loaded {len(result.tables)} locales from {folder}")
    return result
