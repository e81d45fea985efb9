import sys
import pandas as pd  # type: ignore

from prettytable import PrettyTable
from typing import Dict, Iterable, List, Optional, TextIO, Tuple

from mobsmells.platform import Platform, Category
from mobsmells.repr.entry import SmellEntry


class CatalogStats:
    def __init__(self) -> None:
        self.occurrences: Dict[Tuple[Platform, Category], int] = {}
        self.platforms: Dict[Platform, int] = {p: 0 for p in Platform}
        self.total = 0

    def compute(self, entries: Iterable[SmellEntry]) -> None:
        for e in entries:
            key = (e.platform, e.category)
            self.occurrences[key] = self.occurrences.get(key, 0) + 1
            self.platforms[e.platform] += 1
            self.total += 1

    def rows(self) -> List[Tuple[str, str, str, int, float]]:
        """Rows of the summary table, sorted by platform, group and category.

        The last column is the share of the platform's smells in the category.
        """
        rows: List[Tuple[str, str, str, int, float]] = []
        for platform in Platform:
            for category in Category:
                n = self.occurrences.get((platform, category), 0)
                if n == 0:
                    continue
                rows.append(
                    (
                        platform.label,
                        category.group.label,
                        category.label,
                        n,
                        round(n / max(1, self.platforms[platform]) * 100, 2),
                    )
                )
        return rows


def print_stats(
    stats: CatalogStats, format: str, f: Optional[TextIO] = None
) -> None:
    if f is None:
        f = sys.stdout
    rows = stats.rows()
    totals = [(p.label, n) for p, n in stats.platforms.items()]

    if format == "prettytable":
        table = PrettyTable()
        table.field_names = [
            "Platform",
            "Group",
            "Category",
            "Smells",
            "Proportion of platform (%)",
        ]
        table.align["Category"] = "r"  # type: ignore
        table.align["Smells"] = "l"  # type: ignore
        table.align["Proportion of platform (%)"] = "l"  # type: ignore

        biggest_value = [len(name) for name in table.field_names]
        for row in rows:
            for i, s in enumerate(row):
                if len(str(s)) > biggest_value[i]:
                    biggest_value[i] = len(str(s))
            table.add_row(row)  # type: ignore

        div_row = [i * "-" for i in biggest_value]
        table.add_row(div_row)  # type: ignore
        table.add_row(["Combined", "", "", stats.total, 100.0 if stats.total else 0.0])  # type: ignore
        print(table, file=f)

        attributes = PrettyTable()
        attributes.field_names = ["Platform", "Total smells"]
        for total in totals:
            attributes.add_row(total)  # type: ignore
        print(attributes, file=f)
    elif format == "latex":
        table = pd.DataFrame(
            rows + [("Combined", "", "", stats.total, 100.0 if stats.total else 0.0)],
            columns=[
                "\\textbf{Platform}",
                "\\textbf{Group}",
                "\\textbf{Category}",
                "\\textbf{Smells}",
                "\\textbf{Proportion of platform (\\%)}",
            ],
        )
        latex: str = (
            table.style.hide(axis="index")  # type: ignore
            .format(escape="latex", precision=2, thousands=",")  # type: ignore
            .to_latex()  # type: ignore
        )
        combined = latex[: latex.rfind("\\\\")].rfind("\\\\")
        latex = latex[:combined] + "\\\\\n\\midrule\n" + latex[combined + 3 :]
        print(latex, file=f)

        attributes = pd.DataFrame(
            totals,
            columns=["\\textbf{Platform}", "\\textbf{Total smells}"],
        )
        print(
            attributes.style.hide(axis="index")  # type: ignore
            .format(escape="latex", precision=2, thousands=",")  # type: ignore
            .to_latex(),  # type: ignore
            file=f,
        )
    else:
        raise ValueError(f"Invalid table format: {format}")
