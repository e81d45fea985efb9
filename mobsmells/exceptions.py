import sys
import traceback

from typing import List, Optional

EXCEPTIONS = {
    "CATALOG_NOT_FOUND": "Catalog - File does not exist: {}",
    "CATALOG_UNKNOWN_FORMAT": "Catalog - Unknown catalog format: {}",
    "CATALOG_COULD_NOT_LOAD": "Catalog - Could not load catalog: {}",
    "MARKDOWN_MISSING_COLUMN": "Markdown - Table header is missing the '{}' column",
    "MARKDOWN_ROW_COLUMNS": "Markdown - Table row has {} cells, expected {}",
    "MARKDOWN_EMPTY_CELL": "Markdown - Table row has an empty '{}' cell",
    "MARKDOWN_NO_HEADER": "Markdown - Table delimiter row without a header row",
    "MARKDOWN_NO_DELIMITER": "Markdown - Table header is not followed by a delimiter row",
    "MARKDOWN_OUTSIDE_SECTION": "Markdown - Table is not inside a platform, group and category section",
    "MARKDOWN_GROUP_OUTSIDE_PLATFORM": "Markdown - Group '{}' is not inside a platform section",
    "MARKDOWN_CATEGORY_OUTSIDE_GROUP": "Markdown - Category '{}' does not belong to the current group ({})",
    "CATALOG_DUPLICATE_NAME": "Catalog - Duplicate smell '{}' in {} / {}",
    "YAML_COULD_NOT_PARSE": "YAML - Could not parse file: {}",
    "YAML_INVALID_RECORD": "YAML - Invalid record: {}",
    "YAML_GROUP_MISMATCH": "YAML - Category '{}' does not belong to group '{}'",
}


class CatalogLoadError(Exception):
    """The catalog source is malformed and no store can be built from it."""

    def __init__(self, path: str, message: str, line: Optional[int] = None) -> None:
        self.path = path
        self.message = message
        self.line = line
        if line is not None:
            super().__init__(f"{path}:{line}: {message}")
        else:
            super().__init__(f"{path}: {message}")


def throw_exception(exception: str, *args: str) -> None:
    print("Error:", exception.format(*args), file=sys.stderr)
    print("=" * 20 + " Traceback " + "=" * 20, file=sys.stderr)
    exc: List[str] = traceback.format_exc().split("\n")
    if len(exc) > 40:
        exc = exc[:20] + ["..."] + exc[-20:]
    print("\n".join(exc), file=sys.stderr)
    print("=" * 51, file=sys.stderr)
