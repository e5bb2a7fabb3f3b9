# tests/cli/test_cli.py
"""Tests for GIGS CLI."""

import json
from pathlib import Path

from typer.testing import CliRunner

# Note: In Click 8.0+, mix_stderr is no longer a CliRunner parameter.
# Stderr output is combined with stdout by default when using CliRunner.invoke()
runner = CliRunner()


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_version_flag(self) -> None:
        """--version shows version info."""
        from gigs.cli import app

        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "gigs version" in result.stdout

    def test_help_flag(self) -> None:
        """--help shows available commands."""
        from gigs.cli import app

        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "table" in result.stdout
        assert "factories" in result.stdout


class TestTableCommand:
    """Loading a dataset file from the command line."""

    def test_prints_rows_as_json_lines(self, ellipsoid_file: Path) -> None:
        from gigs.cli import app

        result = runner.invoke(app, ["table", str(ellipsoid_file), "--types", "int,str,str,float"])
        assert result.exit_code == 0

        rows = [json.loads(line) for line in result.stdout.splitlines()]
        assert len(rows) == 47
        assert rows[0][0] == 7001
        assert [7030, "WGS 84", "WGS84", 6378137.0] in rows

    def test_regroup_options(self, tmp_path: Path) -> None:
        from gigs.cli import app

        path = tmp_path / "crs.txt"
        path.write_text(
            "32601\tWGS 84 / UTM zone 1N\tTM\n"
            "32602\tWGS 84 / UTM zone 2N\tTM\n"
            "4326\tWGS 84\tGeographic\n",
            encoding="utf-8",
        )

        result = runner.invoke(
            app,
            ["table", str(path), "-t", "int,str,str", "--pattern", r"\s+zone\s+\w+", "-c", "2"],
        )
        assert result.exit_code == 0
        rows = [json.loads(line) for line in result.stdout.splitlines()]
        assert rows == [[[32601, 32602], "WGS 84 / UTM", "TM"], [4326, "WGS 84", "Geographic"]]

    def test_null_numbers_print_as_json_null(self, tmp_path: Path) -> None:
        from gigs.cli import app

        path = tmp_path / "sphere.txt"
        path.write_text("7052\tNULL\t6370997.0\n", encoding="utf-8")

        result = runner.invoke(app, ["table", str(path), "--types", "int,float,float"])
        assert result.exit_code == 0

        def reject(constant: str) -> None:
            raise ValueError(constant)

        line = result.stdout.strip()
        assert json.loads(line, parse_constant=reject) == [7052, None, 6370997.0]

    def test_unknown_type(self, ellipsoid_file: Path) -> None:
        from gigs.cli import app

        result = runner.invoke(app, ["table", str(ellipsoid_file), "--types", "int,decimal"])
        assert result.exit_code == 1
        assert "decimal" in result.output

    def test_format_error(self, tmp_path: Path) -> None:
        from gigs.cli import app

        path = tmp_path / "bad.txt"
        path.write_text("# header\nnot-a-number\n", encoding="utf-8")

        result = runner.invoke(app, ["table", str(path), "--types", "int"])
        assert result.exit_code == 1
        assert "line 2" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        from gigs.cli import app

        result = runner.invoke(app, ["table", str(tmp_path / "absent.txt"), "--types", "int"])
        assert result.exit_code == 1
        assert "Cannot read" in result.output


class TestFactoriesCommand:
    """Listing discovered factories."""

    def test_no_providers_installed(self, tmp_path: Path) -> None:
        from gigs.cli import app

        settings = tmp_path / "settings.yaml"
        settings.write_text("entry_point_group: gigs.tests.no-such-group\n")

        result = runner.invoke(app, ["factories", "--settings", str(settings)])
        assert result.exit_code == 0
        assert "No factories found" in result.output

    def test_capability_filter(self, tmp_path: Path) -> None:
        from gigs.cli import app

        settings = tmp_path / "settings.yaml"
        settings.write_text("entry_point_group: gigs.tests.no-such-group\n")

        result = runner.invoke(
            app,
            ["factories", "--settings", str(settings), "-c", "datum_authority_factory"],
        )
        assert result.exit_code == 0
        assert "No factories found" in result.output

    def test_unknown_capability(self) -> None:
        from gigs.cli import app

        result = runner.invoke(app, ["factories", "--capability", "teapot_factory"])
        assert result.exit_code == 1
        assert "Unknown capability: 'teapot_factory'" in result.output
        assert "crs_authority_factory" in result.output

    def test_missing_settings_file(self, tmp_path: Path) -> None:
        from gigs.cli import app

        result = runner.invoke(app, ["factories", "--settings", str(tmp_path / "absent.yaml")])
        assert result.exit_code == 1
        assert "Settings file not found" in result.output

    def test_invalid_settings(self, tmp_path: Path) -> None:
        from gigs.cli import app

        settings = tmp_path / "settings.yaml"
        settings.write_text("options:\n  isMagicSupported: true\n")

        result = runner.invoke(app, ["factories", "--settings", str(settings)])
        assert result.exit_code == 1
        assert "Configuration errors" in result.output
