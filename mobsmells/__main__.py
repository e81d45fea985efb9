import os
import sys
import click
import logging
import functools

from typing import Any, Optional, Tuple
from mobsmells.config import Config, FORMATS, default_config_path, read_config
from mobsmells.exceptions import EXCEPTIONS, CatalogLoadError, throw_exception
from mobsmells.output.formats import format_entries
from mobsmells.output.stats import CatalogStats, print_stats
from mobsmells.platform import Platform, Group, Category
from mobsmells.repr.entry import SmellEntry
from mobsmells.store import CatalogStore


def __get_platform(platform: str) -> Platform:
    p = Platform.from_key(platform)
    if p is None:
        raise click.BadOptionUsage(
            "platform",
            f"Invalid value for 'platform': '{platform}' is not a valid platform.",
        )
    return p


def __get_config(config: Optional[str]) -> Config:
    if config is None:
        config = default_config_path()
    elif not os.path.exists(config):
        raise click.BadOptionUsage(
            "config", f"Invalid value for 'config': Path '{config}' does not exist."
        )
    elif os.path.isdir(config):
        raise click.BadOptionUsage(
            "config", f"Invalid value for 'config': Path '{config}' should be a file."
        )

    try:
        res = read_config(config)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'--config'")

    logging.basicConfig(level=res.log_level)
    return res


def __load_store(catalog: Optional[str], config: Config) -> CatalogStore:
    if catalog is None:
        catalog = config.catalog_path
    try:
        return CatalogStore.load(catalog)
    except CatalogLoadError as e:
        throw_exception(EXCEPTIONS["CATALOG_COULD_NOT_LOAD"], str(e))
        sys.exit(1)


def __write(text: str, output: Optional[str]) -> None:
    if output is None:
        click.echo(text, nl=False)
    else:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)


def __common_params(func: Any) -> Any:
    @click.option(
        "--catalog",
        type=click.Path(exists=True, dir_okay=False),
        help="The catalog to load (markdown, YAML or JSON). "
        "Otherwise the catalog shipped with mobsmells is used.",
    )
    @click.option(
        "--config",
        type=click.Path(),
        help="The path for a config file. Otherwise the default config is used.",
    )
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        return func(*args, **kwargs)

    return wrapper


def __format_option(func: Any) -> Any:
    return click.option(
        "--format",
        type=click.Choice(FORMATS),
        help="The output format. Defaults to the format in the config file.",
    )(func)


def __platform_option(required: bool) -> Any:
    return click.option(
        "--platform",
        type=click.Choice([p.key for p in Platform]),
        required=required,
        help="The mobile platform to be considered.",
    )


@click.group()
def cli():
    pass


@cli.command(name="list", help="List the smells of the catalog.")
@__common_params
@__format_option
@__platform_option(required=False)
@click.option(
    "--group",
    type=click.Choice([g.key for g in Group]),
    help="Only list the smells of the given group.",
)
@click.option(
    "--category",
    type=click.Choice([c.label for c in Category], case_sensitive=False),
    help="Only list the smells of the given category.",
)
def list_smells(
    catalog: Optional[str],
    config: Optional[str],
    format: Optional[str],
    platform: Optional[str],
    group: Optional[str],
    category: Optional[str],
) -> None:
    cfg = __get_config(config)
    store = __load_store(catalog, cfg)

    entries: Tuple[SmellEntry, ...]
    if platform is None:
        entries = store.all()
    else:
        entries = store.list_by_platform(__get_platform(platform))
    if group is not None:
        entries = tuple(e for e in entries if e.group == Group[group])
    if category is not None:
        entries = tuple(e for e in entries if e.category == Category.from_label(category))

    __write(
        format_entries(entries, format or cfg.format, cfg.fields, cfg.max_width), None
    )


@cli.command(help="Show the smell called NAME.")
@__common_params
@__platform_option(required=True)
@click.argument("name", type=str, required=True)
def show(
    catalog: Optional[str],
    config: Optional[str],
    platform: str,
    name: str,
) -> None:
    cfg = __get_config(config)
    store = __load_store(catalog, cfg)
    p = __get_platform(platform)

    entry = store.find_by_name(p, name)
    if entry is None:
        click.echo(f"No smell named '{name}' for {p.label}.", err=True)
        sys.exit(1)
    click.echo(str(entry), nl=False)


@cli.command(help="Search the smells whose name or description contains TERM.")
@__common_params
@__format_option
@__platform_option(required=False)
@click.argument("term", type=str, required=True)
def search(
    catalog: Optional[str],
    config: Optional[str],
    format: Optional[str],
    platform: Optional[str],
    term: str,
) -> None:
    cfg = __get_config(config)
    store = __load_store(catalog, cfg)
    p = None if platform is None else __get_platform(platform)

    entries = store.search(term, p)
    __write(
        format_entries(entries, format or cfg.format, cfg.fields, cfg.max_width), None
    )


@cli.command(
    help="Export the catalog.\n"
    "OUTPUT is an optional file to which the catalog is written."
)
@__common_params
@click.option(
    "--format",
    type=click.Choice(FORMATS),
    required=True,
    help="The export format.",
)
@click.option(
    "--linter",
    is_flag=True,
    default=False,
    help="Omits the CSV header, for tools that consume the rows directly.",
)
@click.argument("output", type=click.Path(), required=False)
def export(
    catalog: Optional[str],
    config: Optional[str],
    format: str,
    linter: bool,
    output: Optional[str],
) -> None:
    cfg = __get_config(config)
    store = __load_store(catalog, cfg)
    __write(
        format_entries(
            store.all(), format, cfg.fields, cfg.max_width, header=not linter
        ),
        output,
    )


@cli.command(help="Print a summary of the catalog.")
@__common_params
@click.option(
    "--table-format",
    type=click.Choice(("prettytable", "latex")),
    required=False,
    default="prettytable",
    help="The presentation format of the tables that summarize the catalog.",
)
def stats(catalog: Optional[str], config: Optional[str], table_format: str) -> None:
    cfg = __get_config(config)
    store = __load_store(catalog, cfg)
    catalog_stats = CatalogStats()
    catalog_stats.compute(store)
    print_stats(catalog_stats, table_format)


@cli.command(help="Check that the catalog in PATH can be loaded.")
@click.argument("path", type=click.Path(exists=True, dir_okay=False), required=True)
def validate(path: str) -> None:
    try:
        store = CatalogStore.load(path)
    except CatalogLoadError as e:
        click.echo(f"Invalid catalog: {e}", err=True)
        sys.exit(1)

    click.echo(f"{path}: {len(store)} smells")
    for platform in Platform:
        click.echo(f"  {platform.label}: {len(store.list_by_platform(platform))}")


def main() -> None:
    cli(prog_name="mobsmells")


if __name__ == "__main__":
    main()
