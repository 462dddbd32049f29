"""judgesync CLI entrypoint."""

from __future__ import annotations

import logging

import click
from rich.logging import RichHandler

from judgesync import __version__


@click.group()
@click.version_option(version=__version__, prog_name="judgesync")
@click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False),
    envvar="JUDGESYNC_CONFIG",
    default=None,
    help="Settings YAML file.",
)
@click.option("--base-url", envvar="JUDGESYNC_BASE_URL", default=None, help="Judge API base URL.")
@click.option("--contest", envvar="JUDGESYNC_CONTEST", default=None, help="Contest id.")
@click.option("--token", envvar="JUDGESYNC_TOKEN", default=None, help="Bearer token.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(
    ctx: click.Context,
    config: str | None,
    base_url: str | None,
    contest: str | None,
    token: str | None,
    verbose: bool,
) -> None:
    """judgesync — keep contest solutions in sync with the judge."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj.update(
        config=config,
        overrides={"base_url": base_url, "contest_id": contest, "token": token},
    )


def _configure_logging(verbose: bool) -> None:
    root = logging.getLogger()
    if root.handlers:
        return
    root.addHandler(RichHandler(show_path=False, rich_tracebacks=True))
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


# Register subcommands
from judgesync.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
