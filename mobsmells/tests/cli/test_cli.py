import os
import csv
import io
import sys
import subprocess

from click.testing import CliRunner
from tempfile import TemporaryDirectory
from mobsmells.__main__ import cli
from mobsmells.store import CatalogStore

RESOURCES = os.path.join(os.path.dirname(__file__), "resources")


def test_cli_help():
    run = subprocess.run(
        [sys.executable, "-m", "mobsmells", "--help"], capture_output=True
    )
    assert run.returncode == 0
    assert b"export" in run.stdout


def test_cli_show():
    result = CliRunner().invoke(
        cli, ["show", "--platform", "android", "Fused Location"]
    )
    assert result.exit_code == 0
    assert "Android / Environmental / Optimized API" in result.output
    assert "Fused Location:" in result.output


def test_cli_show_not_found():
    result = CliRunner().invoke(
        cli, ["show", "--platform", "android", "Nonexistent Smell Name"]
    )
    assert result.exit_code == 1
    assert "No smell named 'Nonexistent Smell Name' for Android." in result.output


def test_cli_show_invalid_platform():
    result = CliRunner().invoke(cli, ["show", "--platform", "symbian", "Media Leak"])
    assert result.exit_code == 2


def test_cli_list_csv():
    result = CliRunner().invoke(
        cli,
        ["list", "--platform", "android", "--category", "power", "--format", "csv"],
    )
    assert result.exit_code == 0
    rows = list(csv.reader(io.StringIO(result.output)))
    assert rows[0] == ["platform", "group", "category", "name", "description"]
    assert [row[3] for row in rows[1:]] == ["Charge Awareness", "Save Mode Awareness"]


def test_cli_list_group():
    result = CliRunner().invoke(
        cli, ["list", "--group", "social", "--format", "json"]
    )
    assert result.exit_code == 0
    assert "Tracking Id" in result.output
    assert "Fused Location" not in result.output


def test_cli_list_ios_is_empty():
    result = CliRunner().invoke(cli, ["list", "--platform", "ios", "--format", "csv"])
    assert result.exit_code == 0
    assert result.output == "platform,group,category,name,description\n"


def test_cli_search():
    result = CliRunner().invoke(cli, ["search", "--format", "csv", "GPS"])
    assert result.exit_code == 0
    assert "Fused Location" in result.output


def test_cli_config():
    result = CliRunner().invoke(
        cli,
        [
            "list",
            "--config",
            os.path.join(RESOURCES, "custom.ini"),
            "--catalog",
            os.path.join(RESOURCES, "catalog.yaml"),
        ],
    )
    assert result.exit_code == 0
    rows = list(csv.reader(io.StringIO(result.output)))
    assert rows == [
        ["code", "name"],
        ["android_leakage_sensor_leak", "Sensor Leak"],
        ["android_power_charge_awareness", "Charge Awareness"],
    ]


def test_cli_invalid_config():
    result = CliRunner().invoke(
        cli, ["list", "--config", os.path.join(RESOURCES, "invalid_fields.ini")]
    )
    assert result.exit_code == 2
    assert "severity" in result.output

    result = CliRunner().invoke(
        cli, ["list", "--config", os.path.join(RESOURCES, "missing.ini")]
    )
    assert result.exit_code == 2


def test_cli_broken_catalog():
    result = CliRunner().invoke(
        cli, ["list", "--catalog", os.path.join(RESOURCES, "broken.md")]
    )
    assert result.exit_code == 1


def test_cli_export():
    with TemporaryDirectory() as tmp:
        output = os.path.join(tmp, "catalog.md")
        result = CliRunner().invoke(cli, ["export", "--format", "markdown", output])
        assert result.exit_code == 0
        assert CatalogStore.load(output).all() == CatalogStore.load().all()


def test_cli_export_linter():
    result = CliRunner().invoke(cli, ["export", "--format", "csv", "--linter"])
    assert result.exit_code == 0
    rows = list(csv.reader(io.StringIO(result.output)))
    assert len(rows) == len(CatalogStore.load())


def test_cli_stats():
    result = CliRunner().invoke(cli, ["stats"])
    assert result.exit_code == 0
    assert "Combined" in result.output

    result = CliRunner().invoke(cli, ["stats", "--table-format", "latex"])
    assert result.exit_code == 0
    assert "\\midrule" in result.output


def test_cli_validate():
    result = CliRunner().invoke(
        cli, ["validate", os.path.join(RESOURCES, "catalog.yaml")]
    )
    assert result.exit_code == 0
    assert "2 smells" in result.output
    assert "iOS: 0" in result.output

    result = CliRunner().invoke(cli, ["validate", os.path.join(RESOURCES, "broken.md")])
    assert result.exit_code == 1
    assert "broken.md:9" in result.output
