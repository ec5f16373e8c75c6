#!/usr/bin/env python3
"""WCLI - Main entry point"""

import rich_click as click

from wcli.commands import SessionCommand
from wcli.constants import VERSION

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.MAX_WIDTH = 100
click.rich_click.STYLE_COMMAND = "bold magenta"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_EPILOG_TEXT = "dim"


@click.command(
    name="wcli",
    epilog="Tuning: WCLI_TIMEOUT, WCLI_CONNECT_TIMEOUT, WCLI_LOG_DIR, WCLI_VERBOSE",
)
@click.version_option(version=VERSION, prog_name="wcli")
@click.argument(
    "env_file",
    required=False,
    type=click.Path(dir_okay=False),
)
def cli(env_file):
    """
    Run quick commands on an EC2 instance

    Reads PASS, EC2 and PEM from ENV_FILE (default: ./.env, then
    ~/.wcli/.env), connects once and opens an interactive prompt.

    \b
    Sub-shells:
      cmd     run Linux commands (sudo, install, remove)
      git     run git commands inside a repository
      sql     run queries against the local mariadb server
      test    run Python unit tests inside a virtualenv
    """
    SessionCommand(env_file=env_file).run()


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
