"""CLI entrypoint for texcompile."""

import logging
from pathlib import Path

import rich_click as click

from texcompile import __version__
from texcompile.compile.controllers import CompileCliController, CompileCommand
from texcompile.compile.errors import CompileClientError

click.rich_click.USE_MARKDOWN = True
COMPILE_CONTROLLER = CompileCliController()


@click.command()
@click.version_option(version=__version__, prog_name="texcompile")
@click.argument("input_file", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--output-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory for the resulting PDF. Defaults to the current directory.",
)
@click.option(
    "--base-url",
    default=None,
    help="Compilation service URL. If omitted, TEXCOMPILE_BASE_URL or https://texcompile.ru.",
)
@click.option(
    "--poll-interval",
    "poll_interval_seconds",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds between status checks. If omitted, TEXCOMPILE_POLL_INTERVAL_SECONDS or 5.",
)
@click.option(
    "--max-attempts",
    type=click.IntRange(min=1),
    default=None,
    help="Status checks before giving up. If omitted, TEXCOMPILE_MAX_POLL_ATTEMPTS or 120.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def texcompile(  # noqa: PLR0913
    input_file: Path,
    output_dir: Path | None,
    base_url: str | None,
    poll_interval_seconds: float | None,
    max_attempts: int | None,
    verbose: bool,
) -> None:
    """Compile a `.tex` file or `.zip` project remotely and save `<name>.pdf`."""

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    command = CompileCommand(
        input_path=input_file,
        output_dir=output_dir,
        base_url=base_url,
        poll_interval_seconds=poll_interval_seconds,
        max_attempts=max_attempts,
    )
    try:
        COMPILE_CONTROLLER.run(command, _emit_line)
    except ValueError as error:
        raise click.UsageError(str(error)) from error
    except CompileClientError as error:
        raise click.ClickException(str(error)) from error


def _emit_line(line: str) -> None:
    click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    texcompile()
