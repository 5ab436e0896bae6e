"""
Main CLI entry point for refmerge.

Provides the command-line interface using Click:
- refmerge merge: merge changes documents into a current document
- refmerge diff: list the paths a merge would change
- refmerge config show: print effective settings
"""

import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic

import refmerge
import refmerge.config as config
import refmerge.core as core
import refmerge.loader as loader

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_MISSING: _typing.Any = object()


def _configure_logging(level: int) -> None:
    """Send refmerge log records to stderr at the given level."""
    _logging.basicConfig(
        stream=_sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _logging.getLogger("refmerge").setLevel(level)


def _load_documents(paths: _typing.Sequence[str]) -> list[_typing.Any]:
    """Load every input document, turning load errors into CLI errors."""
    documents = []
    for path in paths:
        try:
            documents.append(loader.load_file(path))
        except loader.InputFileError as e:
            raise _click.ClickException(str(e)) from None
    return documents


def _merge_documents(
    current_path: str,
    changes_paths: _typing.Sequence[str],
) -> tuple[_typing.Any, _typing.Any]:
    """Load and merge the inputs. Returns (current, merged)."""
    current, *changes = _load_documents([current_path, *changes_paths])
    merged = core.merge(current, *changes)
    if merged is current:
        _logger.debug("Changes made no difference; result is the current document")
    return current, merged


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(refmerge.__version__, "-v", "--version", prog_name="refmerge")
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging on stderr",
)
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """refmerge - reference-preserving deep merge for YAML/JSON documents.

    Changes documents may use the !remove tag to delete a key or list
    element from the result.
    """
    try:
        settings = config.Settings()
    except _pydantic.ValidationError as e:
        raise _click.ClickException(f"Invalid configuration:\n{e}") from None

    _configure_logging(_logging.DEBUG if verbose else settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


# =============================================================================
# merge
# =============================================================================


@cli.command(name="merge")
@_click.argument("current", type=str)
@_click.argument("changes", nargs=-1, type=str)
@_click.option(
    "-f",
    "--format",
    "output_format",
    type=_click.Choice(loader.OUTPUT_FORMATS),
    default=None,
    help="Output format (default: from settings, yaml)",
)
@_click.option("--indent", type=_click.IntRange(0, 8), default=None, help="Indentation width")
@_click.option("--sort-keys/--no-sort-keys", default=None, help="Sort mapping keys")
@_click.option(
    "-o",
    "--output",
    type=_click.Path(dir_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Write the result to a file instead of stdout",
)
@_click.pass_context
def merge_cmd(
    ctx: _click.Context,
    current: str,
    changes: tuple[str, ...],
    output_format: str | None,
    indent: int | None,
    sort_keys: bool | None,
    output: _pathlib.Path | None,
) -> None:
    """Merge CHANGES documents into the CURRENT document.

    Changes are applied left to right. Use "-" to read a document from
    stdin.

    Examples:
        refmerge merge state.yaml patch.yaml
        refmerge merge -f json state.json patch1.yaml patch2.yaml
        cat patch.yaml | refmerge merge state.yaml -
    """
    settings: config.Settings = ctx.obj["settings"]

    _, merged = _merge_documents(current, changes)

    try:
        text = loader.dump(
            merged,
            output_format or settings.output_format,
            indent=settings.output.indent if indent is None else indent,
            sort_keys=settings.output.sort_keys if sort_keys is None else sort_keys,
        )
    except (TypeError, ValueError) as e:
        raise _click.ClickException(str(e)) from None

    if output is None:
        _click.echo(text, nl=False)
        return

    try:
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        raise _click.ClickException(f"Cannot write {output}: {e.strerror or e}") from None
    _logger.debug("Wrote merge result to %s", output)


# =============================================================================
# diff
# =============================================================================


def _lookup(value: _typing.Any, path: core.Path) -> _typing.Any:
    """Follow path into value. Returns _MISSING if any step is absent."""
    for key in path:
        if not core.is_collection(value):
            return _MISSING
        if core.is_record(value):
            value = value.get(key, _MISSING)
        elif isinstance(key, int) and key < len(value):
            value = value[key]
        else:
            return _MISSING
    return value


def _describe_changes(
    before: _typing.Any,
    after: _typing.Any,
) -> list[tuple[core.Path, str]]:
    """Pair each changed path with "added", "removed" or "changed"."""
    described = []
    for path in core.changed_paths(before, after):
        if _lookup(before, path) is _MISSING:
            change = "added"
        elif _lookup(after, path) is _MISSING:
            change = "removed"
        else:
            change = "changed"
        described.append((path, change))
    return described


def _format_path(path: core.Path) -> str:
    """Format a path as dotted text, "<root>" for the empty path."""
    return ".".join(str(key) for key in path) if path else "<root>"


def _should_use_color(cli_flag: bool | None) -> tuple[bool, bool]:
    """Determine whether to use color output.

    Priority:
    1. CLI flag (--color / --no-color) if specified
    2. REFMERGE_COLOR env var (1=on, 0=off)
    3. NO_COLOR env var (if set, disable color) - standard convention
    4. Auto-detect: color if stdout is a TTY

    Returns:
        Tuple of (color_enabled, force_color).
        force_color is True when color was explicitly requested (not auto-detected).
    """
    if cli_flag is not None:
        return (cli_flag, cli_flag)

    env_color = _os.environ.get("REFMERGE_COLOR")
    if env_color is not None:
        enabled = env_color.lower() in ("1", "true", "yes", "on")
        return (enabled, enabled)

    if _os.environ.get("NO_COLOR") is not None:
        return (False, False)

    return (_sys.stdout.isatty(), False)


def _print_changes_table(
    changes: list[tuple[core.Path, str]],
    *,
    force_color: bool,
) -> None:
    """Print changed paths as a rich table."""
    import rich.console as _rich_console
    import rich.table as _rich_table

    console = _rich_console.Console(
        force_terminal=force_color,
        no_color=False if force_color else None,
        color_system="truecolor" if force_color else "auto",
    )
    styles = {"added": "green", "removed": "red", "changed": "yellow"}

    table = _rich_table.Table(show_header=True, header_style="bold")
    table.add_column("Path")
    table.add_column("Change")
    for path, change in changes:
        table.add_row(_format_path(path), f"[{styles[change]}]{change}[/]")
    console.print(table)


@cli.command(name="diff")
@_click.argument("current", type=str)
@_click.argument("changes", nargs=-1, type=str)
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable table output (default: auto-detect TTY)",
)
def diff_cmd(
    current: str,
    changes: tuple[str, ...],
    as_json: bool,
    use_color: bool | None,
) -> None:
    """List the paths that merging CHANGES into CURRENT would change.

    Paths not listed are shared by reference between the current document
    and the merge result.

    Examples:
        refmerge diff state.yaml patch.yaml
        refmerge diff --json state.yaml patch.yaml
    """
    before, after = _merge_documents(current, changes)
    described = _describe_changes(before, after)

    if as_json:
        payload = [{"path": list(path), "change": change} for path, change in described]
        _click.echo(_json.dumps(payload, indent=2))
        return

    if not described:
        _click.echo("unchanged")
        return

    color_enabled, force_color = _should_use_color(use_color)
    if color_enabled:
        _print_changes_table(described, force_color=force_color)
        return

    for path, change in described:
        _click.echo(f"{change:<8} {_format_path(path)}")


# =============================================================================
# config
# =============================================================================


@cli.group(name="config")
def config_cmd() -> None:
    """Inspect refmerge configuration."""


@config_cmd.command(name="show")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def config_show(ctx: _click.Context, as_json: bool) -> None:
    """Show effective configuration.

    Values come from REFMERGE_* environment variables (nested sections use
    a double underscore, e.g. REFMERGE_OUTPUT__FORMAT=json) and defaults.
    """
    settings: config.Settings = ctx.obj["settings"]

    data = {
        "output": settings.output.model_dump(mode="json", exclude=set(settings.output.get_extra_fields())),
        "logging": settings.logging.model_dump(mode="json", exclude=set(settings.logging.get_extra_fields())),
    }
    if as_json:
        _click.echo(_json.dumps(data, indent=2))
    else:
        _click.echo(loader.dump(data, "yaml"), nl=False)

    for path, value in settings.collect_unknown_fields().items():
        _click.echo(f"Warning: unknown setting {path}={value!r}", err=True)


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="refmerge")


if __name__ == "__main__":
    main()
