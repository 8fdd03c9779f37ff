"""Command line entry point for commit-stats."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from datetime import datetime, timedelta

import click
import httpx
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .dates import normalize_timestamp
from .exceptions import CommitStatsError
from .github.client import DEFAULT_TIMEOUT
from .orchestrator import run

_RELATIVE_DATE = re.compile(r"^(\d+)([dwmy])$")
_UNIT_DAYS = {"d": 1, "w": 7, "m": 30, "y": 365}


def _parse_relative_date(value: str) -> str | None:
    """Turn ``7d``, ``2w``, ``3m`` or ``1y`` into a ``YYYY-MM-DD`` date in the past."""
    match = _RELATIVE_DATE.match(value)
    if not match:
        return None
    amount, unit = int(match.group(1)), match.group(2)
    return (datetime.now() - timedelta(days=amount * _UNIT_DAYS[unit])).strftime("%Y-%m-%d")


def _resolve_date(value: str | None) -> str | None:
    if value is None:
        return None
    return _parse_relative_date(value) or value


def _validate_date(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    resolved = _resolve_date(value)
    if resolved is not None:
        try:
            normalize_timestamp(resolved)
        except CommitStatsError as exc:
            raise click.BadParameter(str(exc)) from exc
    return resolved


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    for name in ("commit_stats", "httpx"):
        log = logging.getLogger(name)
        log.handlers[:] = [handler]
    logging.getLogger("commit_stats").setLevel(level)
    # request lines from httpx only in verbose mode
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.command()
@click.argument("username")
@click.option("--org", default=None, help="Organization whose repositories are searched instead of the user's.")
@click.option(
    "--since",
    default="1y",
    show_default=True,
    callback=_validate_date,
    help="Window start: YYYY-MM-DD or relative (7d, 2w, 3m, 1y).",
)
@click.option(
    "--until",
    default=None,
    callback=_validate_date,
    help="Window end (inclusive): YYYY-MM-DD or relative. Defaults to today.",
)
@click.option("--language", default="R", show_default=True, help="Language a repository must contain.")
@click.option("--token", envvar="GITHUB_TOKEN", default=None, help="GitHub token (or GITHUB_TOKEN / GITHUB_PAT).")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "csv"]),
    default="table",
    show_default=True,
)
@click.option("--output", "output_file", default=None, type=click.Path(dir_okay=False), help="Write output to a file.")
@click.option(
    "--skip-failed-languages",
    is_flag=True,
    default=False,
    help="Skip repositories whose language lookup fails instead of aborting.",
)
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True, help="Per-request timeout in seconds.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.version_option(version=__version__)
def main(
    username: str,
    org: str | None,
    since: str,
    until: str | None,
    language: str,
    token: str | None,
    output_format: str,
    output_file: str | None,
    skip_failed_languages: bool,
    timeout: float,
    verbose: bool,
) -> None:
    """Summarize the commits of USERNAME across the repositories of an account."""
    token = token or os.environ.get("GITHUB_PAT")
    if not token:
        raise click.UsageError("A GitHub token is required: pass --token or set GITHUB_TOKEN.")

    _configure_logging(verbose)
    until = until or datetime.now().strftime("%Y-%m-%d")

    try:
        asyncio.run(run(
            username=username,
            token=token,
            start_date=since,
            end_date=until,
            org=org,
            language=language,
            output_format=output_format,
            output_file=output_file,
            strict=not skip_failed_languages,
            timeout=timeout,
        ))
    except (CommitStatsError, httpx.HTTPError) as exc:
        raise click.ClickException(str(exc)) from exc
