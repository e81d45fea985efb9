import json
import configparser

from dataclasses import dataclass, field
from importlib import resources
from typing import List, Optional

FIELDS = ("code", "platform", "group", "category", "name", "description")
FORMATS = ("prettytable", "csv", "json", "yaml", "markdown", "latex")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_config_path() -> str:
    return str(resources.files("mobsmells") / "configs" / "default.ini")


@dataclass
class Config:
    catalog_path: Optional[str] = None
    format: str = "prettytable"
    fields: List[str] = field(
        default_factory=lambda: ["platform", "group", "category", "name", "description"]
    )
    max_width: int = 80
    log_level: str = "WARNING"


def read_config(config_path: str) -> Config:
    """Read a configuration file.

    Missing sections and options keep their default value. List options are
    JSON-encoded.

    Args:
        config_path (str): Path of the INI file.

    Returns:
        Config: The configuration.

    Raises:
        ValueError: If an option has an invalid value.
    """
    config = configparser.ConfigParser()
    config.read(config_path)
    res = Config()

    if config.has_option("catalog", "path") and config["catalog"]["path"] != "":
        res.catalog_path = config["catalog"]["path"]

    if config.has_section("output"):
        output = config["output"]
        if "format" in output:
            res.format = output["format"]
            if res.format not in FORMATS:
                raise ValueError(f"Invalid output format: '{res.format}'")
        if "fields" in output:
            try:
                fields = json.loads(output["fields"])
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid output fields: {e}") from e
            if not isinstance(fields, list) or len(fields) == 0:
                raise ValueError("Output fields should be a non-empty list")
            for f in fields:
                if f not in FIELDS:
                    raise ValueError(f"Invalid output field: '{f}'")
            res.fields = fields
        if "max_width" in output:
            res.max_width = output.getint("max_width")

    if config.has_option("logging", "level"):
        res.log_level = config["logging"]["level"].upper()
        if res.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid logging level: '{res.log_level}'")

    return res
