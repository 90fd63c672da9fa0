import logging
import os
import sys
from typing import Any

import yaml

import click
from phrasebook import formatter, loader, verifier
from phrasebook.classes import ResolutionRequest
from phrasebook.resolver import Resolver

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "verify": {
        "reference_locale": None,
        "similarity_threshold": 0.8,
    },
}


def load_config(config_folder: str) -> dict[str, Any]:
    config_file_path = os.path.abspath(f"{config_folder}/config.yml")

    config: dict[str, Any] = {
        section: dict(values) for section, values in DEFAULT_CONFIG.items()
    }
    try:
        with open(config_file_path, "r") as file:
            loaded = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.warning(f"{config_file_path} not found, using defaults.")
        return config

    if not isinstance(loaded, dict):
        raise yaml.YAMLError(f"{config_file_path} is not a mapping")

    for section, values in loaded.items():
        if section not in config:
            config[section] = values
        elif values is None:
            continue
        elif isinstance(values, dict):
            config[section].update(values)
        else:
            raise yaml.YAMLError(
                f'Section "{section}" in {config_file_path} is not a mapping'
            )
    return config


def parse_args(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    args = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f'"{item}" is not in name=value form')
        args[name] = value
    return args


def load_tables(path: str) -> dict:
    try:
        result = loader.load_folder(path)
    except FileNotFoundError as exc:
        logger.error(str(exc))
        sys.exit(1)
    if not result.tables:
        logger.error(f"No translation files found in {path}")
        sys.exit(1)
    return result.tables


def load_single(path: str) -> dict:
    try:
        return loader.load_file(path)
    except FileNotFoundError:
        logger.error(f"File not found: {path}")
    except (ValueError, SyntaxError) as exc:
        logger.error(f"Error parsing {path}: {exc}")
    sys.exit(1)


@click.group()
@click.option("--config-folder", default="config", help="Configuration folder path.")
@click.version_option()
@click.pass_context
def cli(ctx: click.Context, config_folder: str) -> None:
    try:
        config = load_config(config_folder)
    except yaml.YAMLError as exc:
        logger.error(f"Error parsing config: {exc}")
        sys.exit(1)

    logging.basicConfig(
        level=logging.getLevelName(config["logging"]["level"]),
        format=config["logging"]["format"],
        datefmt=config["logging"]["datefmt"],
    )
    ctx.obj = config


@cli.command("check")
@click.argument("path", type=click.Path())
@click.option("--reference", default=None, help="Reference locale.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "markdown"]),
    default="text",
    help="Report format.",
)
@click.pass_obj
def check(
    config: dict[str, Any], path: str, reference: str | None, output_format: str
) -> None:
    """Verify every translation table found in PATH."""
    tables = load_tables(path)
    logger.info(f"Loaded {len(tables)} locales")

    report = verifier.verify(
        tables, reference_locale=reference or config["verify"]["reference_locale"]
    )
    if output_format == "json":
        click.echo(formatter.to_json(report))
    elif output_format == "markdown":
        click.echo(formatter.render_markdown(report))
    else:
        click.echo(formatter.render_text(report))

    sys.exit(1 if report.has_issues else 0)


@cli.command("compare")
@click.argument("file1", type=click.Path())
@click.argument("file2", type=click.Path())
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def compare(file1: str, file2: str, as_json: bool) -> None:
    """Compare the keys and values of two translation files."""
    comparison = verifier.compare_locales(
        loader.locale_from_path(file1),
        loader.locale_from_path(file2),
        load_single(file1),
        load_single(file2),
    )
    if as_json:
        click.echo(formatter.to_json(comparison))
    else:
        click.echo(formatter.render_text(comparison))
    sys.exit(1 if comparison.has_issues else 0)


@cli.command("duplicates")
@click.argument("file", type=click.Path())
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def duplicates(file: str, as_json: bool) -> None:
    """Find keys sharing the same value in FILE."""
    found = verifier.find_duplicate_values(load_single(file))
    click.echo(formatter.to_json(found) if as_json else formatter.render_text(found))
    sys.exit(1 if found else 0)


@cli.command("similar")
@click.argument("file", type=click.Path())
@click.option(
    "--threshold",
    type=click.FloatRange(0, 1),
    default=None,
    help="Similarity threshold.",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def similar(
    config: dict[str, Any], file: str, threshold: float | None, as_json: bool
) -> None:
    """Find keys in FILE that look like typos of each other."""
    if threshold is None:
        threshold = config["verify"]["similarity_threshold"]
    groups = verifier.find_similar_keys(load_single(file), threshold=threshold)
    click.echo(formatter.to_json(groups) if as_json else formatter.render_text(groups))
    sys.exit(1 if groups else 0)


@cli.command("translate")
@click.argument("path", type=click.Path())
@click.argument("key")
@click.option("--locale", required=True, help="Target locale.")
@click.option("--fallback", default=None, help="Fallback locale.")
@click.option(
    "--arg",
    "args",
    multiple=True,
    callback=parse_args,
    help="Placeholder value as name=value.",
)
@click.option("--gender", default=None, help="Gender variant to select.")
@click.option("--count", type=float, default=None, help="Count for plural selection.")
def translate(
    path: str,
    key: str,
    locale: str,
    fallback: str | None,
    args: dict[str, str],
    gender: str | None,
    count: float | None,
) -> None:
    """Print the translation of KEY from the tables in PATH."""
    if count is not None and count.is_integer():
        count = int(count)

    resolver = Resolver(load_tables(path))
    request = ResolutionRequest(
        key=key,
        locale=locale,
        fallback_locale=fallback,
        args=args,
        gender=gender,
        count=count,
    )
    click.echo(resolver.resolve(request))
