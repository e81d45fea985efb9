import logging

from importlib import resources
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from mobsmells.parsers.parser import Parser, get_parser
from mobsmells.platform import Platform, Group, Category
from mobsmells.repr.entry import SmellEntry


def default_catalog_path() -> str:
    return str(resources.files("mobsmells") / "resources" / "catalog.md")


class CatalogStore:
    """Read-only, in-memory collection of smell entries.

    The store is populated once, at construction time, and never changes
    afterwards. Every query returns tuples (or ``None`` when a lookup finds
    nothing) so it is safe to share a store between threads.
    """

    def __init__(self, entries: Iterable[SmellEntry]) -> None:
        self.__entries: Tuple[SmellEntry, ...] = tuple(entries)

        by_platform: Dict[Platform, List[SmellEntry]] = {p: [] for p in Platform}
        by_category: Dict[Tuple[Platform, Category], List[SmellEntry]] = {}
        by_name: Dict[Tuple[Platform, str], SmellEntry] = {}

        for e in self.__entries:
            by_platform[e.platform].append(e)
            by_category.setdefault((e.platform, e.category), []).append(e)
            # Names are only unique within a category, the first one wins
            by_name.setdefault((e.platform, e.name), e)

        self.__by_platform: Mapping[Platform, Tuple[SmellEntry, ...]] = (
            MappingProxyType({k: tuple(v) for k, v in by_platform.items()})
        )
        self.__by_category: Mapping[
            Tuple[Platform, Category], Tuple[SmellEntry, ...]
        ] = MappingProxyType({k: tuple(v) for k, v in by_category.items()})
        self.__by_name: Mapping[Tuple[Platform, str], SmellEntry] = MappingProxyType(
            by_name
        )

    @staticmethod
    def load(
        path: Optional[str] = None, parser: Optional[Parser] = None
    ) -> "CatalogStore":
        """Load a catalog from a file.

        Args:
            path (Optional[str]): Path of the catalog. Defaults to the catalog
                document shipped with the package.
            parser (Optional[Parser]): Parser to use. Defaults to the parser
                matching the extension of the path.

        Returns:
            CatalogStore: The populated store.

        Raises:
            CatalogLoadError: If the catalog is missing or malformed.
        """
        if path is None:
            path = default_catalog_path()
        if parser is None:
            parser = get_parser(path)

        store = CatalogStore(parser.parse(path))
        logging.info(f"Loaded {len(store)} smells from {path}")
        return store

    def all(self) -> Tuple[SmellEntry, ...]:
        return self.__entries

    def list_by_platform(self, platform: Platform) -> Tuple[SmellEntry, ...]:
        return self.__by_platform[platform]

    def list_by_category(
        self, platform: Platform, category: Category
    ) -> Tuple[SmellEntry, ...]:
        return self.__by_category.get((platform, category), ())

    def list_by_group(self, platform: Platform, group: Group) -> Tuple[SmellEntry, ...]:
        return tuple(e for e in self.__by_platform[platform] if e.group == group)

    def find_by_name(self, platform: Platform, name: str) -> Optional[SmellEntry]:
        return self.__by_name.get((platform, name))

    def search(
        self, term: str, platform: Optional[Platform] = None
    ) -> Tuple[SmellEntry, ...]:
        entries = self.__entries if platform is None else self.__by_platform[platform]
        term = term.lower()
        return tuple(
            e
            for e in entries
            if term in e.name.lower() or term in e.description.lower()
        )

    def platforms(self) -> Tuple[Platform, ...]:
        return tuple(dict.fromkeys(e.platform for e in self.__entries))

    def categories(self, platform: Platform) -> Tuple[Category, ...]:
        return tuple(dict.fromkeys(e.category for e in self.__by_platform[platform]))

    def __len__(self) -> int:
        return len(self.__entries)

    def __iter__(self) -> Iterator[SmellEntry]:
        return iter(self.__entries)

    def __contains__(self, entry: object) -> bool:
        return entry in self.__entries
