"""
dtsviz CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import sys

import click

from .. import __version__
from .commands import convert, export, inspect, run, serve, tree
from .utils import echo_error


@click.group()
@click.version_option(version=__version__, prog_name="dtsviz")
def main():
    """dtsviz: dependency and syntax tree graph viewer.

    \b
    Quick Start:
      dtsviz run python ./src ./out --web
      dtsviz convert out/depends-output-file.dot
      dtsviz serve out/depends-output-file.converted.dot
    """
    pass


# Register commands
main.add_command(run.run)
main.add_command(convert.convert)
main.add_command(tree.tree)
main.add_command(serve.serve)
main.add_command(inspect.inspect)
main.add_command(export.export)


def cli() -> None:
    """Console entry point: usage errors exit with 1, like pipeline failures."""
    try:
        main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        echo_error("Aborted!")
        sys.exit(1)


if __name__ == "__main__":
    cli()
