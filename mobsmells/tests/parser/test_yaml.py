import os
import unittest

from mobsmells.exceptions import CatalogLoadError
from mobsmells.parsers.parser import get_parser
from mobsmells.parsers.markdown import MarkdownParser
from mobsmells.parsers.yaml import YamlParser
from mobsmells.platform import Platform, Group, Category

FILES = os.path.join(os.path.dirname(__file__), "files")


class TestYamlParser(unittest.TestCase):
    def __help_test_error(self, file: str, line: int | None, message: str) -> None:
        path = os.path.join(FILES, file)
        with self.assertRaises(CatalogLoadError) as ctx:
            YamlParser().parse(path)
        self.assertEqual(ctx.exception.line, line)
        self.assertIn(message, ctx.exception.message)

    def test_yaml_valid(self) -> None:
        entries = YamlParser().parse(os.path.join(FILES, "valid.yaml"))
        self.assertEqual(len(entries), 2)

        self.assertEqual(entries[0].platform, Platform.android)
        self.assertEqual(entries[0].category, Category.optimized_api)
        self.assertEqual(entries[0].group, Group.environmental)
        self.assertEqual(entries[0].name, "Fused Location")
        self.assertEqual(entries[0].line, 1)

        self.assertEqual(entries[1].category, Category.privacy)
        self.assertEqual(
            entries[1].description,
            "`TelephonyManager#getDeviceId` allows tracking users.",
        )
        self.assertEqual(entries[1].line, 5)

    def test_json_valid(self) -> None:
        entries = YamlParser().parse(os.path.join(FILES, "valid.json"))
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].category, Category.leakage)
        self.assertEqual(entries[0].name, "Media Leak")
        self.assertEqual(entries[0].line, -1)

    def test_yaml_missing_field(self) -> None:
        self.__help_test_error("missing_field.yaml", 5, "'description' is a required")

    def test_yaml_unknown_platform(self) -> None:
        self.__help_test_error("unknown_platform.yaml", 1, "'windows-phone'")

    def test_yaml_group_mismatch(self) -> None:
        self.__help_test_error(
            "group_mismatch.yaml", 1, "Category 'Leakage' does not belong"
        )

    def test_yaml_duplicate(self) -> None:
        self.__help_test_error("duplicate.yaml", 5, "Duplicate smell 'Sensor Leak'")

    def test_yaml_not_yaml(self) -> None:
        self.__help_test_error("not_yaml.yaml", None, "YAML - Could not parse")


def test_get_parser():
    assert isinstance(get_parser("catalog.md"), MarkdownParser)
    assert isinstance(get_parser("catalog.yml"), YamlParser)
    assert isinstance(get_parser("catalog.YAML"), YamlParser)
    assert isinstance(get_parser("catalog.json"), YamlParser)


def test_get_parser_unknown_extension():
    try:
        get_parser("catalog.txt")
        assert False
    except CatalogLoadError as e:
        assert "Unknown catalog format" in e.message


def test_get_parser_dotted_folder():
    assert isinstance(get_parser("smells.v2/catalog.yaml"), YamlParser)
    try:
        get_parser("smells.md/catalog")
        assert False
    except CatalogLoadError as e:
        assert "Unknown catalog format" in e.message
