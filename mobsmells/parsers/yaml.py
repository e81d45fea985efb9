import json
import jsonschema

from importlib import resources
from typing import Any, List, Optional
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from ruamel.yaml.nodes import SequenceNode

from mobsmells.parsers.parser import Parser
from mobsmells.exceptions import EXCEPTIONS, CatalogLoadError
from mobsmells.platform import Platform, Group, Category
from mobsmells.repr.entry import SmellEntry


def load_schema() -> Any:
    schema = resources.files("mobsmells.parsers") / "resources" / "catalog.schema.json"
    return json.loads(schema.read_text(encoding="utf-8"))


class YamlParser(Parser):
    """Parser for catalogs stored as a list of records (YAML or JSON).

    Each record holds ``platform``, ``category``, ``name`` and
    ``description``. ``group`` and ``code`` are optional and only checked
    for consistency, so the output of ``mobsmells export --format yaml`` can
    be loaded back.
    """

    def __get_lines(self, content: str) -> List[int]:
        node = YAML().compose(content)
        if not isinstance(node, SequenceNode):
            return []
        return [item.start_mark.line + 1 for item in node.value]

    def __line(self, lines: List[int], index: Any) -> Optional[int]:
        if isinstance(index, int) and index < len(lines):
            return lines[index]
        return None

    def parse_content(self, content: str, path: str) -> List[SmellEntry]:
        lines: List[int] = []
        try:
            if path.lower().endswith(".json"):
                records = json.loads(content)
            else:
                records = YAML(typ="safe").load(content)
                lines = self.__get_lines(content)
        except (YAMLError, json.JSONDecodeError) as e:
            raise CatalogLoadError(
                path, EXCEPTIONS["YAML_COULD_NOT_PARSE"].format(e)
            ) from e

        # An empty document is an empty catalog
        if records is None:
            records = []

        try:
            jsonschema.validate(records, load_schema())
        except jsonschema.ValidationError as e:
            index = e.absolute_path[0] if len(e.absolute_path) > 0 else None
            raise CatalogLoadError(
                path,
                EXCEPTIONS["YAML_INVALID_RECORD"].format(e.message),
                self.__line(lines, index),
            ) from e

        entries: List[SmellEntry] = []
        for i, record in enumerate(records):
            platform = Platform.from_key(record["platform"])
            category = Category.from_label(record["category"])
            assert platform is not None and category is not None
            line = self.__line(lines, i)

            if "group" in record and Group[record["group"]] != category.group:
                raise CatalogLoadError(
                    path,
                    EXCEPTIONS["YAML_GROUP_MISMATCH"].format(
                        category.label, record["group"]
                    ),
                    line,
                )

            entries.append(
                SmellEntry(
                    platform,
                    category,
                    record["name"].strip(),
                    record["description"].strip(),
                    -1 if line is None else line,
                )
            )

        return entries
