import os
from abc import ABC, abstractmethod
from typing import Dict, List, Set, Tuple

from mobsmells.exceptions import EXCEPTIONS, CatalogLoadError
from mobsmells.platform import Platform, Category
from mobsmells.repr.entry import SmellEntry


class Parser(ABC):
    def parse(self, path: str) -> List[SmellEntry]:
        if not os.path.isfile(path):
            raise CatalogLoadError(path, EXCEPTIONS["CATALOG_NOT_FOUND"].format(path))

        with open(path, "r", encoding="utf-8") as f:
            try:
                content = f.read()
            except UnicodeDecodeError as e:
                raise CatalogLoadError(
                    path, EXCEPTIONS["CATALOG_COULD_NOT_LOAD"].format(e)
                ) from e

        entries = self.parse_content(content, path)
        self.check_unique_names(entries, path)
        return entries

    @abstractmethod
    def parse_content(self, content: str, path: str) -> List[SmellEntry]:
        pass

    @staticmethod
    def check_unique_names(entries: List[SmellEntry], path: str) -> None:
        seen: Set[Tuple[Platform, Category, str]] = set()
        for e in entries:
            key = (e.platform, e.category, e.name)
            if key in seen:
                raise CatalogLoadError(
                    path,
                    EXCEPTIONS["CATALOG_DUPLICATE_NAME"].format(
                        e.name, e.platform.label, e.category.label
                    ),
                    e.line if e.line != -1 else None,
                )
            seen.add(key)


def get_parser(path: str) -> Parser:
    # Imported here to avoid a cycle between the parsers and this module
    from mobsmells.parsers.markdown import MarkdownParser
    from mobsmells.parsers.yaml import YamlParser

    parsers: Dict[str, Parser] = {
        "md": MarkdownParser(),
        "markdown": MarkdownParser(),
        "yml": YamlParser(),
        "yaml": YamlParser(),
        "json": YamlParser(),
    }
    extension = os.path.splitext(path)[1].lstrip(".").lower()
    if extension not in parsers:
        raise CatalogLoadError(path, EXCEPTIONS["CATALOG_UNKNOWN_FORMAT"].format(path))
    return parsers[extension]
