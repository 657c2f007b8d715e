"""killtree command line."""

import sys

import click

from killtree import logging as killtree_logging
from killtree.config import DEFAULT_SIGNAL, Config
from killtree.core import kill_tree
from killtree.errors import KillTreeError
from killtree.models import Killed, MaybeAlreadyTerminated, Output


def format_output(output: Output) -> str:
    """One display line per processed id."""
    if isinstance(output, Killed):
        return (
            f"Killed process. process id: {output.process_id}, "
            f"parent process id: {output.parent_process_id}, name: {output.name}"
        )
    if isinstance(output, MaybeAlreadyTerminated):
        return f"Maybe already terminated process. process id: {output.process_id}"
    raise TypeError(f"Unexpected output: {output!r}")


@click.command("killtree")
@click.argument("process_id", type=click.IntRange(min=0))
@click.option(
    "--signal",
    "signal_name",
    default=DEFAULT_SIGNAL,
    show_default=True,
    help="Signal sent to every process in the tree (ignored on Windows).",
)
@click.option(
    "--include-target/--no-include-target",
    default=True,
    show_default=True,
    help="Also kill PROCESS_ID itself, not only its descendants.",
)
@click.option("-q", "--quiet", is_flag=True, help="Do not print the killed processes.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for diagnostics on stderr (default: $KILLTREE_LOG_LEVEL or WARNING).",
)
def cli(
    process_id: int,
    signal_name: str,
    include_target: bool,
    quiet: bool,
    log_level: str | None,
) -> None:
    """Kill PROCESS_ID and all of its descendant processes, children first."""
    if log_level is not None:
        killtree_logging.set_level(log_level)

    config = Config(signal=signal_name, include_target=include_target)
    try:
        outputs = kill_tree(process_id, config)
    except KillTreeError as err:
        click.secho(str(err), fg="red", err=True)
        sys.exit(1)

    if quiet:
        return
    for output in outputs:
        click.echo(format_output(output))


def main() -> None:
    """Entry point for the killtree command."""
    cli()


if __name__ == "__main__":
    main()
