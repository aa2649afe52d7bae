"""CLI entrypoint for wunderlist-status."""

import logging
from pathlib import Path

import rich_click as click

from wunderlist_status import __version__
from wunderlist_status.status.controllers import StatusCliController, StatusCommand

click.rich_click.USE_MARKDOWN = True
STATUS_CONTROLLER = StatusCliController()


@click.command()
@click.version_option(version=__version__, prog_name="wunderlist-status")
@click.argument("access_token", required=False, default=None)
@click.argument("client_id", required=False, default=None)
@click.option(
    "--color/--no-color",
    default=None,
    help="Force or disable urgency colors. Auto-detected from the terminal by default.",
)
@click.option(
    "--cache-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="File holding the last successful render.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log requests and cache activity.")
def wunderlist_status(
    access_token: str | None,
    client_id: str | None,
    color: bool | None,
    cache_path: Path | None,
    verbose: bool,
) -> None:
    """Print Wunderlist lists and tasks, falling back to the last cached output.

    `ACCESS_TOKEN` and `CLIENT_ID` override `WUNDERLIST_ACCESS_TOKEN` and
    `WUNDERLIST_CLIENT_ID` from the environment.
    """

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    try:
        STATUS_CONTROLLER.run(
            StatusCommand(
                access_token=access_token,
                client_id=client_id,
                cache_path=cache_path,
                color=color,
            ),
            echo=click.echo,
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


if __name__ == "__main__":  # pragma: no cover
    wunderlist_status()
