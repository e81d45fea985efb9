import io
import csv
import json
import pandas as pd  # type: ignore

from importlib import resources
from typing import Any, Dict, Iterable, List, Sequence, Tuple
from jinja2 import Environment, FileSystemLoader
from prettytable import PrettyTable
from ruamel.yaml import YAML

from mobsmells.platform import Platform, Group, Category
from mobsmells.repr.entry import SmellEntry

TITLE = "Mobile Code Smells"

# Keys the structured catalog format cannot do without
REQUIRED_FIELDS = ("platform", "category", "name", "description")

Sections = List[
    Tuple[Platform, List[Tuple[Group, List[Tuple[Category, List[SmellEntry]]]]]]
]


def get_records(
    entries: Iterable[SmellEntry], fields: Sequence[str]
) -> List[Dict[str, Any]]:
    records: List[Dict[str, Any]] = []
    for e in entries:
        record = e.as_dict()
        records.append({f: record[f] for f in fields})
    return records


def get_sections(entries: Iterable[SmellEntry]) -> Sections:
    """Group entries by platform, group and category.

    Every platform is listed, even the ones without entries. Groups and
    categories keep the order in which they first appear.
    """
    tree: Dict[Platform, Dict[Group, Dict[Category, List[SmellEntry]]]] = {
        p: {} for p in Platform
    }
    for e in entries:
        groups = tree[e.platform]
        groups.setdefault(e.group, {}).setdefault(e.category, []).append(e)

    return [
        (
            platform,
            [
                (group, list(categories.items()))
                for group, categories in groups.items()
            ],
        )
        for platform, groups in tree.items()
    ]


def __escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", "<br>")


def to_markdown(entries: Iterable[SmellEntry], title: str = TITLE) -> str:
    loader = FileSystemLoader(str(resources.files("mobsmells.output") / "resources"))
    env = Environment(
        loader=loader,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["cell"] = __escape_cell
    template = env.get_template("catalog.md.j2")
    return template.render(title=title, sections=get_sections(entries))


def to_csv(entries: Iterable[SmellEntry], fields: Sequence[str], header: bool) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    if header:
        writer.writerow(fields)
    for record in get_records(entries, fields):
        writer.writerow([record[f] for f in fields])
    return output.getvalue()


def to_json(entries: Iterable[SmellEntry], fields: Sequence[str]) -> str:
    return json.dumps(get_records(entries, fields), indent=2) + "\n"


def to_yaml(entries: Iterable[SmellEntry], fields: Sequence[str]) -> str:
    yaml = YAML()
    yaml.default_flow_style = False
    # Keeps long descriptions on a single line
    yaml.width = 4096
    fields = list(fields) + [f for f in REQUIRED_FIELDS if f not in fields]
    output = io.StringIO()
    yaml.dump(get_records(entries, fields), output)
    return output.getvalue()


def to_prettytable(
    entries: Iterable[SmellEntry], fields: Sequence[str], max_width: int
) -> str:
    table = PrettyTable()
    table.field_names = [f.capitalize() for f in fields]
    for f in table.field_names:
        table.align[f] = "l"  # type: ignore
    table.max_width = max_width
    for record in get_records(entries, fields):
        table.add_row([record[f] for f in fields])  # type: ignore
    return table.get_string() + "\n"


def to_latex(entries: Iterable[SmellEntry], fields: Sequence[str]) -> str:
    table = pd.DataFrame(
        [[record[f] for f in fields] for record in get_records(entries, fields)],
        columns=[f"\\textbf{{{f.capitalize()}}}" for f in fields],
    )
    latex: str = (
        table.style.hide(axis="index")  # type: ignore
        .format(escape="latex")  # type: ignore
        .to_latex()  # type: ignore
    )
    return latex


def format_entries(
    entries: Iterable[SmellEntry],
    format: str,
    fields: Sequence[str],
    max_width: int = 80,
    header: bool = True,
) -> str:
    if format == "prettytable":
        return to_prettytable(entries, fields, max_width)
    elif format == "csv":
        return to_csv(entries, fields, header)
    elif format == "json":
        return to_json(entries, fields)
    elif format == "yaml":
        return to_yaml(entries, fields)
    elif format == "markdown":
        return to_markdown(entries)
    elif format == "latex":
        return to_latex(entries, fields)
    else:
        raise ValueError(f"Invalid format: {format}")
