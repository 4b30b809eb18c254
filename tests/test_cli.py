"""Tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from rodaje.cli import app
from rodaje.store import YamlProjectStore

runner = CliRunner()

PROJECTS_YAML = """\
projects:
  verano:
    name: Spot Verano
    confirmed: true
    primary: {start: 2025-06-10, end: 2025-06-20}
    fitting: {start: 2025-06-08, end: 2025-06-08}
    prep: {start: 2025-06-02, end: 2025-06-07}
    city: Madrid
  lluvia:
    name: Lluvia
    confirmed: true
    primary: {start: 2025-06-20, end: 2025-06-25}
  tentativo:
    name: Tentativo
    confirmed: false
    primary: {start: 2025-06-10, end: 2025-06-12}
"""


@pytest.fixture
def projects_file(tmp_path: Path) -> Path:
    path = tmp_path / "projects.yaml"
    path.write_text(PROJECTS_YAML)
    return path


class TestDeriveCommand:
    """Test the derive command."""

    def test_default_phases(self) -> None:
        """Test the stock derivation is printed."""
        result = runner.invoke(app, ["derive", "2025-06-10", "2025-06-20"])

        assert result.exit_code == 0
        assert "Preparation: 2025-06-02..2025-06-07" in result.stdout
        assert "Fitting:     2025-06-08..2025-06-08" in result.stdout
        assert "Shooting:    2025-06-10..2025-06-20" in result.stdout

    def test_hand_edited_fitting(self) -> None:
        """Test a given fitting is kept and prep follows it."""
        result = runner.invoke(
            app, ["derive", "2025-06-10", "2025-06-20", "--fitting-start", "2025-06-05"]
        )

        assert result.exit_code == 0
        assert "Fitting:     2025-06-05..2025-06-05" in result.stdout
        assert "Preparation: 2025-05-30..2025-06-04" in result.stdout

    def test_invalid_date(self) -> None:
        """Test a bad date exits with an error."""
        result = runner.invoke(app, ["derive", "2025-02-30", "2025-03-02"])

        assert result.exit_code == 1
        assert "Error: Invalid ISO date" in result.output

    def test_uses_config(self, tmp_path: Path) -> None:
        """Test the phase policy comes from --config."""
        config_path = tmp_path / "custom.yaml"
        config_path.write_text("phases:\n  fitting_offset_days: -1\n")

        result = runner.invoke(
            app, ["--config", str(config_path), "derive", "2025-06-10", "2025-06-20"]
        )

        assert result.exit_code == 0
        assert "Fitting:     2025-06-09..2025-06-09" in result.stdout

    def test_missing_config(self, tmp_path: Path) -> None:
        """Test a named config that does not exist is an error."""
        result = runner.invoke(
            app, ["--config", str(tmp_path / "nope.yaml"), "derive", "2025-06-10", "2025-06-20"]
        )

        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_verbose_logs_derivation(self) -> None:
        """Test -v shows what was recomputed."""
        result = runner.invoke(app, ["-v", "1", "derive", "2025-06-10", "2025-06-20"])

        assert result.exit_code == 0
        assert "Fitting derived from primary start 2025-06-10" in result.output


class TestValidateCommand:
    """Test the validate command."""

    def test_all_valid(self, projects_file: Path) -> None:
        """Test a clean file."""
        result = runner.invoke(app, ["validate", str(projects_file)])

        assert result.exit_code == 0
        assert "All 3 project(s) valid" in result.stdout

    def test_reports_invalid(self, tmp_path: Path) -> None:
        """Test invalid projects are listed and the exit code is 1."""
        path = tmp_path / "projects.yaml"
        path.write_text(
            "projects:\n"
            "  bad:\n"
            "    primary: {start: 2025-06-20, end: 2025-06-10}\n"
            "  half:\n"
            "    primary: {start: 2025-06-20}\n"
        )

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "bad:" in result.output
        assert "half:" in result.output
        assert "2 of 2 project(s) invalid" in result.output


class TestCheckCommand:
    """Test the check command."""

    def test_reports_conflicts(self, projects_file: Path) -> None:
        """Test touching shooting days are reported and pending projects ignored."""
        result = runner.invoke(app, ["check", str(projects_file), "--id", "lluvia"])

        assert result.exit_code == 0
        assert "Lluvia: 1 conflict(s)" in result.stdout
        assert 'Shooting overlaps with "Spot Verano"' in result.stdout
        assert "Tentativo" not in result.stdout

    def test_all_projects(self, projects_file: Path) -> None:
        """Test every project is checked by default."""
        result = runner.invoke(app, ["check", str(projects_file)])

        assert result.exit_code == 0
        assert "Spot Verano: 1 conflict(s)" in result.stdout
        assert "Tentativo: no conflicts" in result.stdout

    def test_unknown_id(self, projects_file: Path) -> None:
        """Test an unknown project ID."""
        result = runner.invoke(app, ["check", str(projects_file), "--id", "nope"])

        assert result.exit_code == 1
        assert "Unknown project: nope" in result.output


class TestMonthCommand:
    """Test the month command."""

    def test_month_grid(self, projects_file: Path) -> None:
        """Test the grid, badges, stats and legend are printed."""
        result = runner.invoke(app, ["month", str(projects_file), "--month", "2025-06"])

        assert result.exit_code == 0
        assert "June 2025" in result.stdout
        assert "R Spot Verano"[:11] in result.stdout
        assert "F Spot Verano"[:11] in result.stdout
        assert "R? Tentativo"[:11] in result.stdout
        assert "(26)" in result.stdout
        assert "Free " in result.stdout
        assert "Projects this month:" in result.stdout
        assert "Tentativo (pending)" in result.stdout

    def test_invalid_month(self, projects_file: Path) -> None:
        """Test a malformed month."""
        result = runner.invoke(app, ["month", str(projects_file), "--month", "2025-13"])

        assert result.exit_code == 1


class TestListCommand:
    """Test the list command."""

    def test_current(self, projects_file: Path) -> None:
        """Test confirmed projects running on the reference day."""
        result = runner.invoke(app, ["list", str(projects_file), "--today", "2025-06-05"])

        assert result.exit_code == 0
        assert "Spot Verano [Confirmed] Madrid | 2025-06-02 -> 2025-06-20" in result.stdout
        assert "Lluvia" not in result.stdout

    def test_pending(self, projects_file: Path) -> None:
        """Test the pending tab."""
        result = runner.invoke(
            app, ["list", str(projects_file), "--tab", "pending", "--today", "2025-06-05"]
        )

        assert result.exit_code == 0
        assert "Tentativo [Pending]" in result.stdout

    def test_empty_tab(self, projects_file: Path) -> None:
        """Test a tab with nothing in it."""
        result = runner.invoke(
            app, ["list", str(projects_file), "--tab", "past", "--today", "2025-06-05"]
        )

        assert result.exit_code == 0
        assert "No past projects." in result.stdout


class TestAddCommand:
    """Test the add command."""

    def test_add_without_conflicts(self, tmp_path: Path) -> None:
        """Test a new project is derived and saved."""
        path = tmp_path / "projects.yaml"

        result = runner.invoke(
            app,
            ["add", str(path), "--name", "Spot Uno", "--start", "2025-06-10", "--end", "2025-06-20"],
        )

        assert result.exit_code == 0
        assert "Saved spot-uno" in result.stdout
        saved = YamlProjectStore(path).get("spot-uno")
        assert saved.fitting_start == "2025-06-08"
        assert saved.prep_start == "2025-06-02"
        assert saved.prep_end == "2025-06-07"

    def test_conflict_declined(self, projects_file: Path) -> None:
        """Test answering no leaves the file alone."""
        before = projects_file.read_text()

        result = runner.invoke(
            app,
            ["add", str(projects_file), "--name", "Choque", "--start", "2025-06-15", "--end", "2025-06-16"],
            input="n\n",
        )

        assert result.exit_code == 1
        assert "Choque: 2 conflict(s)" in result.output
        assert "Not saved." in result.output
        assert projects_file.read_text() == before

    def test_conflict_confirmed(self, projects_file: Path) -> None:
        """Test answering yes saves anyway."""
        result = runner.invoke(
            app,
            ["add", str(projects_file), "--name", "Choque", "--start", "2025-06-15", "--end", "2025-06-16"],
            input="y\n",
        )

        assert result.exit_code == 0
        assert YamlProjectStore(projects_file).get("choque").confirmed is True

    def test_yes_flag_skips_prompt(self, projects_file: Path) -> None:
        """Test --yes saves without asking."""
        result = runner.invoke(
            app,
            [
                "add",
                str(projects_file),
                "--name",
                "Choque",
                "--start",
                "2025-06-15",
                "--end",
                "2025-06-16",
                "--yes",
            ],
        )

        assert result.exit_code == 0
        assert "Saved choque" in result.stdout

    def test_pending_never_prompts(self, projects_file: Path) -> None:
        """Test pending projects are saved without conflict checks."""
        result = runner.invoke(
            app,
            [
                "add",
                str(projects_file),
                "--name",
                "Quiza",
                "--start",
                "2025-06-15",
                "--end",
                "2025-06-16",
                "--pending",
            ],
        )

        assert result.exit_code == 0
        assert "conflict" not in result.output
        assert YamlProjectStore(projects_file).get("quiza").confirmed is False

    def test_reversed_range_rejected(self, tmp_path: Path) -> None:
        """Test an end before the start blocks saving."""
        path = tmp_path / "projects.yaml"

        result = runner.invoke(
            app, ["add", str(path), "--name", "X", "--start", "2025-06-20", "--end", "2025-06-10"]
        )

        assert result.exit_code == 1
        assert "ends" in result.output
        assert not path.exists()
