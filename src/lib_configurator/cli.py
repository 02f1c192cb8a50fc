"""CLI adapter for ``lib_configurator`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators check what a target resolves to (which file wins, how it
decodes) without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_load` – builds a :class:`~lib_configurator.core.Configurator` from
  the given files, directories, and inline values and prints one target.
* :func:`main` – entry point used by the ``console_scripts`` registration.

System Role
-----------
Outermost layer: it only talks to :mod:`lib_configurator.core`.
``lib_cli_exit_tools`` turns library errors (``NotFound``,
``RegistrationConflict``, decoder errors) into exit codes and short messages.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.memory_loader.default import MemoryLoader
from .core import Configurator

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

FORMAT_CHOICES: Final[tuple[str, ...]] = ("raw", "json", "xml", "toml", "yaml")


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_configurator")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Resolve configuration targets through files and in-memory values",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_configurator",
    message="lib_configurator version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_configurator")
    except metadata.PackageNotFoundError:
        click.echo("lib_configurator (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_configurator')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("load", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("target")
@click.option(
    "--file",
    "files",
    multiple=True,
    help="File path or glob pattern to register (repeatable)",
)
@click.option(
    "--dir",
    "directories",
    multiple=True,
    type=click.Path(path_type=Path, exists=True, file_okay=False, dir_okay=True, readable=True),
    help="Directory whose regular files are registered (repeatable)",
)
@click.option(
    "--ext",
    "extensions",
    multiple=True,
    help="Restrict --dir registration to these extensions (repeatable)",
)
@click.option(
    "--value",
    "values",
    multiple=True,
    help="Inline NAME=CONTENT pair that overrides files (repeatable)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(FORMAT_CHOICES, case_sensitive=False),
    default="raw",
    show_default=True,
    help="Print raw content or decode it and print JSON",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print decoded JSON output with the provided indent size",
)
def cli_load(
    target: str,
    files: Sequence[str],
    directories: Sequence[Path],
    extensions: Sequence[str],
    values: Sequence[str],
    output_format: str,
    indent: Optional[int],
) -> None:
    """Resolve TARGET and print its content.

    Files are registered first (``--dir`` then ``--file``); ``--value`` entries
    are served by an in-memory loader registered afterwards, so they take
    priority over files.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["load", "app", "--value", "app=hello"])
    >>> result.output
    'hello'
    """

    configurator = Configurator()
    for directory in directories:
        configurator.add_dir(directory, *extensions)
    for pattern in files:
        configurator.add_file(pattern)
    if values:
        configurator.use(MemoryLoader(_parse_values(values)))

    fmt = output_format.lower()
    if fmt == "raw":
        click.echo(str(configurator.load(target)), nl=False)
        return
    decoded = getattr(configurator, f"load_{fmt}")(target)
    click.echo(json.dumps(decoded, indent=indent, ensure_ascii=False, default=str))


def _parse_values(values: Sequence[str]) -> dict[str, bytes]:
    """Split ``NAME=CONTENT`` pairs; later pairs for the same name win.

    Examples
    --------
    >>> _parse_values(["app=a=b", "db={}"])
    {'app': b'a=b', 'db': b'{}'}
    """

    parsed: dict[str, bytes] = {}
    for entry in values:
        name, separator, content = entry.partition("=")
        if not separator or not name:
            raise click.BadParameter(f"expected NAME=CONTENT, got {entry!r}", param_hint="--value")
        parsed[name] = content.encode("utf-8")
    return parsed


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_configurator",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
