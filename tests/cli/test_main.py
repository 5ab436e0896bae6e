"""Tests for CLI main module."""

import json as _json
import pathlib as _pathlib
import typing as _typing

import click.testing as _click_testing

import refmerge.cli as cli

WriteDoc = _typing.Callable[[str, str], _pathlib.Path]


class TestCLIBasics:
    """Top-level group behaviour."""

    def setup_method(self) -> None:
        """Set up a CLI runner."""
        self.runner = _click_testing.CliRunner()

    def test_help_shows_all_commands(self) -> None:
        """Help output should list all available commands."""
        result = self.runner.invoke(cli.cli, ["--help"])
        assert result.exit_code == 0
        for cmd in ["merge", "diff", "config"]:
            assert cmd in result.output, f"Command '{cmd}' missing from help"

    def test_version_shows_current_version(self) -> None:
        """Version flag should show the package version."""
        result = self.runner.invoke(cli.cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_invalid_settings_fail_cleanly(self, write_doc: WriteDoc) -> None:
        """Bad REFMERGE_* values are reported, not raised."""
        current = write_doc("current.yaml", "x: 1\n")
        result = self.runner.invoke(
            cli.cli,
            ["merge", str(current)],
            env={"REFMERGE_OUTPUT__FORMAT": "xml"},
        )
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestMergeCommand:
    """refmerge merge."""

    def setup_method(self) -> None:
        """Set up a CLI runner."""
        self.runner = _click_testing.CliRunner()

    def test_merge_with_remove_tag(self, write_doc: WriteDoc) -> None:
        """!remove in a changes file deletes the key."""
        current = write_doc("current.yaml", "x: 1\ny: 1\nz: 1\n")
        changes = write_doc("changes.yaml", "y: !remove\n")

        result = self.runner.invoke(cli.cli, ["merge", str(current), str(changes)])

        assert result.exit_code == 0, result.output
        assert result.output == "x: 1\nz: 1\n"

    def test_merge_multiple_changes_in_order(self, write_doc: WriteDoc) -> None:
        """Changes files are applied left to right."""
        current = write_doc("current.json", '{"a": 1}')
        first = write_doc("first.yaml", "a: 2\nb: [1, 2, 3]\n")
        second = write_doc("second.yaml", "b:\n  0: 9\n  2: !remove\n")

        result = self.runner.invoke(
            cli.cli,
            ["merge", "--format", "json", str(current), str(first), str(second)],
        )

        assert result.exit_code == 0, result.output
        assert _json.loads(result.output) == {"a": 2, "b": [9, 2]}

    def test_merge_without_changes_echoes_current(self, write_doc: WriteDoc) -> None:
        """No changes prints the current document."""
        current = write_doc("current.yaml", "a: [1, 2]\n")

        result = self.runner.invoke(cli.cli, ["merge", str(current)])

        assert result.exit_code == 0
        assert result.output == "a:\n- 1\n- 2\n"

    def test_format_from_environment(self, write_doc: WriteDoc) -> None:
        """REFMERGE_OUTPUT__FORMAT selects the default format."""
        current = write_doc("current.yaml", "a: 1\n")
        changes = write_doc("changes.yaml", "b: 2\n")

        result = self.runner.invoke(
            cli.cli,
            ["merge", str(current), str(changes)],
            env={"REFMERGE_OUTPUT__FORMAT": "json", "REFMERGE_OUTPUT__INDENT": "0"},
        )

        assert result.exit_code == 0, result.output
        assert result.output == '{\n"a": 1,\n"b": 2\n}\n'

    def test_sort_keys_flag(self, write_doc: WriteDoc) -> None:
        """--sort-keys overrides insertion order."""
        current = write_doc("current.yaml", "b: 1\na: 2\n")

        result = self.runner.invoke(cli.cli, ["merge", "--sort-keys", str(current)])

        assert result.output == "a: 2\nb: 1\n"

    def test_changes_from_stdin(self, write_doc: WriteDoc) -> None:
        """"-" reads a changes document from stdin."""
        current = write_doc("current.yaml", "a: 1\n")

        result = self.runner.invoke(
            cli.cli, ["merge", str(current), "-"], input="a: 5\n"
        )

        assert result.exit_code == 0, result.output
        assert result.output == "a: 5\n"

    def test_output_file(self, write_doc: WriteDoc, tmp_path: _pathlib.Path) -> None:
        """-o writes the result to a file."""
        current = write_doc("current.yaml", "a: 1\n")
        changes = write_doc("changes.yaml", "a: 2\n")
        target = tmp_path / "out.yaml"

        result = self.runner.invoke(
            cli.cli, ["merge", "-o", str(target), str(current), str(changes)]
        )

        assert result.exit_code == 0, result.output
        assert result.output == ""
        assert target.read_text(encoding="utf-8") == "a: 2\n"

    def test_missing_input_exits_with_error(self, tmp_path: _pathlib.Path) -> None:
        """A missing file is a clean CLI error."""
        result = self.runner.invoke(cli.cli, ["merge", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Error in input" in result.output

    def test_leftover_marker_exits_with_error(self, write_doc: WriteDoc) -> None:
        """A !remove that lands in the output is reported."""
        current = write_doc("current.yaml", "a: 1\n")
        changes = write_doc("changes.yaml", "a:\n  b: !remove\n")

        result = self.runner.invoke(cli.cli, ["merge", str(current), str(changes)])

        assert result.exit_code == 1
        assert "REMOVE marker" in result.output

    def test_huge_index_key_is_ignored(self, write_doc: WriteDoc) -> None:
        """An out-of-range list index in a patch leaves the list as is."""
        current = write_doc("current.yaml", "- 1\n- 2\n")
        changes = write_doc("changes.yaml", "'99999999999999999999': x\n")

        result = self.runner.invoke(cli.cli, ["merge", str(current), str(changes)])

        assert result.exit_code == 0, result.output
        assert result.output == "- 1\n- 2\n"

    def test_verbose_flag(self, write_doc: WriteDoc) -> None:
        """--verbose is accepted before the subcommand."""
        current = write_doc("current.yaml", "a: 1\n")

        result = self.runner.invoke(cli.cli, ["--verbose", "merge", str(current)])

        assert result.exit_code == 0, result.output


class TestDiffCommand:
    """refmerge diff."""

    def setup_method(self) -> None:
        """Set up a CLI runner."""
        self.runner = _click_testing.CliRunner()

    def test_plain_output(self, write_doc: WriteDoc) -> None:
        """Plain output lists one change per line."""
        current = write_doc("current.yaml", "x: 1\ny: 1\nz: 1\n")
        changes = write_doc("changes.yaml", "y: !remove\nz: 2\nw: 3\n")

        result = self.runner.invoke(
            cli.cli, ["diff", "--no-color", str(current), str(changes)]
        )

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "changed  <root>",
            "removed  y",
            "changed  z",
            "added    w",
        ]

    def test_unchanged(self, write_doc: WriteDoc) -> None:
        """No-op changes report 'unchanged'."""
        current = write_doc("current.yaml", "x: {a: [1, 2]}\n")
        changes = write_doc("changes.yaml", "x: {a: {1: 2}}\n")

        result = self.runner.invoke(
            cli.cli, ["diff", "--no-color", str(current), str(changes)]
        )

        assert result.exit_code == 0
        assert result.output == "unchanged\n"

    def test_json_output(self, write_doc: WriteDoc) -> None:
        """--json emits path lists with a change kind."""
        current = write_doc("current.yaml", "y: [1, 2, 3]\n")
        changes = write_doc("changes.yaml", "y:\n  1: !remove\n")

        result = self.runner.invoke(cli.cli, ["diff", "--json", str(current), str(changes)])

        assert result.exit_code == 0, result.output
        assert _json.loads(result.output) == [
            {"path": [], "change": "changed"},
            {"path": ["y"], "change": "changed"},
            {"path": ["y", 1], "change": "changed"},
            {"path": ["y", 2], "change": "removed"},
        ]

    def test_table_output(self, write_doc: WriteDoc) -> None:
        """--color renders a rich table."""
        current = write_doc("current.yaml", "x: 1\n")
        changes = write_doc("changes.yaml", "x: 2\n")

        result = self.runner.invoke(
            cli.cli, ["diff", "--color", str(current), str(changes)]
        )

        assert result.exit_code == 0, result.output
        assert "Path" in result.output
        assert "changed" in result.output


class TestConfigCommand:
    """refmerge config show."""

    def setup_method(self) -> None:
        """Set up a CLI runner."""
        self.runner = _click_testing.CliRunner()

    def test_show_yaml(self) -> None:
        """Default output is YAML with both sections."""
        result = self.runner.invoke(cli.cli, ["config", "show"])

        assert result.exit_code == 0
        assert "output:" in result.output
        assert "format: yaml" in result.output
        assert "level: warning" in result.output

    def test_show_json(self) -> None:
        """--json emits the settings as JSON."""
        result = self.runner.invoke(
            cli.cli,
            ["config", "show", "--json"],
            env={"REFMERGE_OUTPUT__INDENT": "4"},
        )

        assert result.exit_code == 0
        data = _json.loads(result.output)
        assert data["output"] == {"format": "yaml", "indent": 4, "sort_keys": False}
        assert data["logging"] == {"level": "warning"}

    def test_warns_about_unknown_settings(self) -> None:
        """Unknown nested settings are reported on stderr."""
        result = self.runner.invoke(
            cli.cli,
            ["config", "show"],
            env={"REFMERGE_OUTPUT__INDNET": "4"},
        )

        assert result.exit_code == 0
        assert "unknown setting output.indnet" in result.output
