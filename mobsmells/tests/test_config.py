import os
import unittest

from tempfile import NamedTemporaryFile
from mobsmells.config import Config, default_config_path, read_config


class TestConfig(unittest.TestCase):
    def __write(self, content: str) -> str:
        with NamedTemporaryFile("w", suffix=".ini", delete=False) as f:
            f.write(content)
        self.addCleanup(os.remove, f.name)
        return f.name

    def test_default_config(self) -> None:
        config = read_config(default_config_path())
        self.assertEqual(config, Config())

    def test_missing_file_keeps_defaults(self) -> None:
        self.assertEqual(read_config("does_not_exist.ini"), Config())

    def test_custom_config(self) -> None:
        config = read_config(
            self.__write(
                "[catalog]\npath = smells.yaml\n"
                '[output]\nformat = json\nfields = ["code", "name"]\nmax_width = 40\n'
                "[logging]\nlevel = debug\n"
            )
        )
        self.assertEqual(config.catalog_path, "smells.yaml")
        self.assertEqual(config.format, "json")
        self.assertEqual(config.fields, ["code", "name"])
        self.assertEqual(config.max_width, 40)
        self.assertEqual(config.log_level, "DEBUG")

    def test_invalid_values(self) -> None:
        for content in [
            "[output]\nformat = xml\n",
            "[output]\nfields = name\n",
            "[output]\nfields = []\n",
            '[output]\nfields = ["severity"]\n',
            "[output]\nmax_width = wide\n",
            "[logging]\nlevel = loud\n",
        ]:
            with self.assertRaises(ValueError):
                read_config(self.__write(content))
