#!/usr/bin/env python3
"""
Integration tests for the journal CLI (daybook).

Tests entry commands end to end against a temporary database, with the
external editor patched out.
"""
import pytest
from unittest.mock import patch
from click.testing import CliRunner

from daybook.cli import cli
from daybook.cli.entries import default_title


class TestJournalCLI:
    """Test journal CLI commands with a temporary database."""

    @pytest.fixture
    def runner(self):
        """Create Click test runner."""
        return CliRunner()

    @pytest.fixture
    def test_dirs(self, tmp_path):
        """Temporary database and log locations."""
        return {
            "db_path": tmp_path / "journal.db",
            "log_dir": tmp_path / "logs",
        }

    def invoke_cli(self, runner, test_dirs, args, **kwargs):
        """Helper to invoke CLI with test configuration."""
        base_args = [
            "--db-path", str(test_dirs["db_path"]),
            "--log-dir", str(test_dirs["log_dir"]),
        ]
        return runner.invoke(cli, base_args + args, **kwargs)

    def create(self, runner, test_dirs, title, content="Body", tags=""):
        result = self.invoke_cli(
            runner,
            test_dirs,
            ["create", "--title", title, "--content", content, "--tags", tags],
        )
        assert result.exit_code == 0, result.output
        return result

    # ---- help / setup ----

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ["create", "list", "show", "edit", "delete", "tags", "init"]:
            assert command in result.output

    def test_init_command(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["init"])
        assert result.exit_code == 0
        assert "Database ready" in result.output
        assert test_dirs["db_path"].exists()

    def test_init_twice(self, runner, test_dirs):
        self.invoke_cli(runner, test_dirs, ["init"])
        result = self.invoke_cli(runner, test_dirs, ["init"])
        assert result.exit_code == 0

    # ---- create / list ----

    def test_create_with_options(self, runner, test_dirs):
        result = self.create(runner, test_dirs, "Monday", tags="foo, bar")
        assert "Entry [1 - Monday] created" in result.output

        result = self.invoke_cli(runner, test_dirs, ["list"])
        assert result.exit_code == 0
        assert "1 - Monday" in result.output

    def test_create_prompts_and_editor(self, runner, test_dirs):
        with patch("click.edit", return_value="Written in editor") as mock_edit:
            result = self.invoke_cli(
                runner, test_dirs, ["create"], input="Tuesday\nwork, ideas\n"
            )

        assert result.exit_code == 0, result.output
        mock_edit.assert_called_once()
        assert "Entry [1 - Tuesday] created" in result.output

        result = self.invoke_cli(runner, test_dirs, ["show", "1"])
        assert "Written in editor" in result.output
        assert "ideas,work" in result.output

    def test_create_default_title(self, runner, test_dirs):
        with patch("click.edit", return_value="Body"):
            result = self.invoke_cli(runner, test_dirs, ["create"], input="\n\n")

        assert result.exit_code == 0, result.output
        assert f"Entry [1 - {default_title()}] created" in result.output

    def test_create_aborted_editor(self, runner, test_dirs):
        with patch("click.edit", return_value=None):
            result = self.invoke_cli(
                runner, test_dirs, ["create", "--title", "Draft", "--tags", ""]
            )

        assert result.exit_code == 0
        assert "Entry not saved" in result.output

        result = self.invoke_cli(runner, test_dirs, ["list"])
        assert "No entries found" in result.output

    def test_list_newest_first(self, runner, test_dirs):
        self.create(runner, test_dirs, "First")
        self.create(runner, test_dirs, "Second")

        result = self.invoke_cli(runner, test_dirs, ["list"])
        lines = [line for line in result.output.splitlines() if line.strip()]
        assert lines == ["2 - Second", "1 - First"]

    # ---- delete ----

    def test_delete_existing(self, runner, test_dirs):
        self.create(runner, test_dirs, "Monday", tags="foo")

        result = self.invoke_cli(runner, test_dirs, ["delete", "1"])
        assert result.exit_code == 0
        assert "Entry [1 - Monday] deleted" in result.output

        result = self.invoke_cli(runner, test_dirs, ["tags"])
        assert "No tags found" in result.output

    @pytest.mark.parametrize("raw_id", ["abc", "0", "1.5"])
    def test_delete_non_numeric(self, runner, test_dirs, raw_id):
        result = self.invoke_cli(runner, test_dirs, ["delete", raw_id])
        assert result.exit_code == 0
        assert "Entry id must be a number" in result.output

    def test_delete_missing(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["delete", "42"])
        assert result.exit_code == 0
        assert "Entry with id 42 not found" in result.output

    # ---- show ----

    def test_show_by_id(self, runner, test_dirs):
        self.create(runner, test_dirs, "Monday", content="Slept well.", tags="foo,bar")

        result = self.invoke_cli(runner, test_dirs, ["show", "1"])
        assert result.exit_code == 0
        assert "Title:\nMonday" in result.output
        assert "Content:\nSlept well." in result.output
        assert "Tags:\nbar,foo" in result.output
        assert "Created:" in result.output
        assert "Updated:" in result.output

    def test_show_with_selection(self, runner, test_dirs):
        self.create(runner, test_dirs, "First", content="one")
        self.create(runner, test_dirs, "Second", content="two")

        result = self.invoke_cli(runner, test_dirs, ["show"], input="2\n")
        assert result.exit_code == 0
        assert "1) Second" in result.output
        assert "2) First" in result.output
        assert "Title:\nFirst" in result.output

    def test_show_empty_journal(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["show"])
        assert result.exit_code == 0
        assert "No entries found" in result.output

    def test_show_missing_id(self, runner, test_dirs):
        self.create(runner, test_dirs, "Monday")
        result = self.invoke_cli(runner, test_dirs, ["show", "9"])
        assert "Entry with id 9 not found" in result.output

    @pytest.mark.parametrize("command", ["show", "edit", "delete"])
    def test_explicit_id_on_empty_journal(self, runner, test_dirs, command):
        result = self.invoke_cli(runner, test_dirs, [command, "7"])
        assert result.exit_code == 0
        assert "Entry with id 7 not found" in result.output
        assert "No entries found" not in result.output

    # ---- edit ----

    def test_edit_with_options(self, runner, test_dirs):
        self.create(runner, test_dirs, "Lunch", content="Sandwich", tags="Turkey,Cheese")

        result = self.invoke_cli(
            runner,
            test_dirs,
            ["edit", "1", "--title", "Dinner", "--content", "Salad", "--tags", "chicken, salad"],
        )
        assert result.exit_code == 0, result.output
        assert "Entry [1 - Dinner] updated" in result.output

        result = self.invoke_cli(runner, test_dirs, ["tags"])
        assert "chicken (1)" in result.output
        assert "salad (1)" in result.output
        assert "Turkey" not in result.output
        assert "Cheese" not in result.output

    def test_edit_prompts_keep_current_values(self, runner, test_dirs):
        self.create(runner, test_dirs, "Monday", content="Original", tags="work")

        with patch("click.edit", return_value=None) as mock_edit:
            result = self.invoke_cli(runner, test_dirs, ["edit", "1"], input="\n\n")

        assert result.exit_code == 0, result.output
        mock_edit.assert_called_once_with("Original")

        result = self.invoke_cli(runner, test_dirs, ["show", "1"])
        assert "Title:\nMonday" in result.output
        assert "Content:\nOriginal" in result.output
        assert "Tags:\nwork" in result.output

    def test_edit_editor_changes_content(self, runner, test_dirs):
        self.create(runner, test_dirs, "Monday", content="Original")

        with patch("click.edit", return_value="Rewritten"):
            result = self.invoke_cli(runner, test_dirs, ["edit", "1"], input="\n\n")

        assert result.exit_code == 0, result.output
        result = self.invoke_cli(runner, test_dirs, ["show", "1"])
        assert "Content:\nRewritten" in result.output

    def test_edit_missing_id(self, runner, test_dirs):
        self.create(runner, test_dirs, "Monday")
        result = self.invoke_cli(runner, test_dirs, ["edit", "5", "--title", "x"])
        assert result.exit_code == 0
        assert "Entry with id 5 not found" in result.output

    # ---- tags ----

    def test_tags_with_counts(self, runner, test_dirs):
        self.create(runner, test_dirs, "A", tags="work,ideas")
        self.create(runner, test_dirs, "B", tags="work")

        result = self.invoke_cli(runner, test_dirs, ["tags"])
        lines = [line for line in result.output.splitlines() if line.strip()]
        assert lines == ["work (2)", "ideas (1)"]

    # ---- migrations ----

    def test_migration_status(self, runner, test_dirs):
        self.invoke_cli(runner, test_dirs, ["init"])
        result = self.invoke_cli(runner, test_dirs, ["migration", "status"])
        assert result.exit_code == 0
        assert "up_to_date" in result.output

    def test_migration_history(self, runner, test_dirs):
        self.invoke_cli(runner, test_dirs, ["init"])
        result = self.invoke_cli(runner, test_dirs, ["migration", "history"])
        assert result.exit_code == 0
        assert "Initial journal schema" in result.output
        assert "(current)" in result.output

    def test_downgrade_to_base_is_not_undone_by_migration_commands(self, runner, test_dirs):
        self.create(runner, test_dirs, "Monday")

        result = self.invoke_cli(runner, test_dirs, ["migration", "downgrade", "base"])
        assert result.exit_code == 0, result.output

        result = self.invoke_cli(runner, test_dirs, ["migration", "status"])
        assert "Current Revision: None" in result.output
        assert "needs_migration" in result.output

        result = self.invoke_cli(runner, test_dirs, ["migration", "upgrade"])
        assert result.exit_code == 0, result.output
        result = self.invoke_cli(runner, test_dirs, ["migration", "status"])
        assert "up_to_date" in result.output

    def test_migration_status_on_new_file_leaves_it_unversioned(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["migration", "status"])
        assert result.exit_code == 0, result.output
        assert "Current Revision: None" in result.output

        result = self.invoke_cli(runner, test_dirs, ["list"])
        assert result.exit_code == 0, result.output
        assert "No entries found" in result.output

    # ---- errors ----

    def test_storage_failure_exits_non_zero(self, runner, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        dirs = {"db_path": blocker / "journal.db", "log_dir": tmp_path / "logs"}

        result = self.invoke_cli(runner, dirs, ["list"])
        assert result.exit_code == 1
        assert "Error - DatabaseError" in result.output
