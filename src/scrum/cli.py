"""Click CLI entrypoint — `scrum <subcommand>`.

Every call is stateless: flags are folded into an immutable options
object and handed to the get/set flows along with the storage backend.
"""

from __future__ import annotations

import datetime
import logging
import sys
from typing import Optional

import click

from scrum.config import GetOptions, ScrumConfig, SetOptions, load_config
from scrum.defaults import DATE_INPUT_FORMAT
from scrum.errors import ConfigurationError, ScrumError

log = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class _ClickHandler(logging.Handler):
    """Log records to stderr via click, resolved at emit time."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("scrum")
    logger.setLevel(level)
    if not any(isinstance(h, _ClickHandler) for h in logger.handlers):
        handler = _ClickHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)


def _today() -> datetime.date:
    return datetime.date.today()


def _fail(exc: ScrumError) -> click.ClickException:
    if isinstance(exc, ConfigurationError):
        return click.UsageError(exc.message)
    return click.ClickException(exc.message)


def _open_storage(config: ScrumConfig):
    from scrum.storage import open_storage
    try:
        return open_storage(config)
    except ScrumError as exc:
        raise _fail(exc) from exc


@click.group()
@click.version_option(package_name="scrum-cli")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help="Config file (default: $SCRUM_CONFIG or ~/.config/scrum/config.yaml)")
@click.option("--log-level", default=None, type=click.Choice(_LOG_LEVELS, case_sensitive=False),
              help="Log level (default: INFO)")
@click.option("--color/--no-color", default=None, help="Colorize get output")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], log_level: Optional[str], color: Optional[bool]) -> None:
    """scrum — post and read daily scrum updates."""
    try:
        config = load_config(config_path)
    except ConfigurationError as exc:
        raise click.ClickException(exc.message) from exc
    _configure_logging((log_level or config.log_level).upper())
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["color"] = config.color if color is None else color


# =========================================================================
# get
# =========================================================================

@cli.command(epilog="""\b
Examples:
  $ scrum get                      # Get my scrum for today
  $ scrum get -t -u other.username # Get other.username's scrum for tomorrow""")
@click.option("-a", "--all", "all_users", is_flag=True, help="Get scrum for all users")
@click.option("-D", "--date", "date", type=click.DateTime(formats=[DATE_INPUT_FORMAT]), default=None,
              help="Date for scrum (YYYY-MM-DD, default: today)")
@click.option("-t", "--tomorrow", is_flag=True, help="Get scrum for the next day")
@click.option("-y", "--yesterday", is_flag=True, help="Get scrum for yesterday")
@click.option("-u", "--user", envvar="USER", default="", help="Get scrum for specified user (default: $USER)")
@click.option("-P/-N", "--use-pager/--no-pager", default=None,
              help="Use a pager to read the output ($PAGER, less(1), or more(1)); default when stdout is a terminal")
@click.option("-Z", "--utc", is_flag=True, help="Show mtime in UTC")
@click.pass_context
def get(ctx: click.Context, all_users: bool, date: Optional[datetime.datetime], tomorrow: bool,
        yesterday: bool, user: str, use_pager: Optional[bool], utc: bool) -> None:
    """Get scrum information, either for yourself (or teammates)."""
    from scrum.get_scrum import get_all, get_one
    from scrum.output import terminal_width
    from scrum.pager import Pager
    from scrum.paths import shift

    if tomorrow and yesterday:
        raise click.UsageError("tomorrow and yesterday are conflicting options")
    if not all_users and not user.strip():
        raise click.UsageError("a user is required (pass --user or set $USER)")

    scrum_date = date.date() if date else _today()
    try:
        if tomorrow:
            scrum_date = shift(scrum_date, 1)
        elif yesterday:
            scrum_date = shift(scrum_date, -1)
    except OverflowError as exc:
        raise click.UsageError("date out of range") from exc

    stdout = sys.stdout
    opts = GetOptions(
        date=scrum_date,
        user=user.strip(),
        all_users=all_users,
        use_pager=stdout.isatty() if use_pager is None else use_pager,
        utc=utc,
    )

    config: ScrumConfig = ctx.obj["config"]
    storage = _open_storage(config)
    color = ctx.obj["color"] and (opts.use_pager or stdout.isatty())

    pager = Pager() if opts.use_pager else None
    try:
        out = pager.open() if pager else stdout
        if opts.all_users:
            get_all(out, storage, opts.date, config.ignore_users, width=terminal_width(), utc=opts.utc, color=color)
        else:
            get_one(out, storage, opts.date, opts.user, utc=opts.utc, color=color)
    except ScrumError as exc:
        raise _fail(exc) from exc
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    except BrokenPipeError:
        log.debug("output closed early")
    finally:
        if pager:
            pager.wait()
        else:
            stdout.flush()


# =========================================================================
# set
# =========================================================================

@cli.command("set")
@click.option("-u", "--user", envvar="USER", required=True, help="User to scrum as (default: $USER)")
@click.option("-f", "--force", is_flag=True, help="Force overwrite of any present scrum")
@click.option("-t", "--tomorrow", is_flag=True, help="Scrum for tomorrow")
@click.option("-d", "--days", default=0, type=int, help="Scrum for n days from now")
@click.option("-s", "--sick", default=0, type=click.IntRange(min=0), help="Sick leave for n days")
@click.option("-v", "--vacation", default=0, type=click.IntRange(min=0), help="Vacation for n days")
@click.option("-i", "--file", "file", default=None, type=click.Path(dir_okay=False, allow_dash=True),
              help="File to read scrum from ('-' for stdin)")
@click.option("-D", "--date", "date", type=click.DateTime(formats=[DATE_INPUT_FORMAT]), default=None,
              help="Date the offsets count from (YYYY-MM-DD, default: today)")
@click.pass_context
def set_(ctx: click.Context, user: str, force: bool, tomorrow: bool, days: int, sick: int,
         vacation: int, file: Optional[str], date: Optional[datetime.datetime]) -> None:
    """Set your scrum status."""
    from scrum.set_scrum import set_scrum, validate

    opts = SetOptions(
        date=date.date() if date else _today(),
        user=user.strip(),
        force=force,
        tomorrow=tomorrow,
        days=days,
        sick=sick,
        vacation=vacation,
        file=file,
    )
    try:
        validate(opts)
    except ScrumError as exc:
        raise _fail(exc) from exc

    storage = _open_storage(ctx.obj["config"])
    try:
        result = set_scrum(storage, opts)
    except ScrumError as exc:
        raise _fail(exc) from exc

    for path in result.written:
        log.debug("wrote %s", path)
    if result.skipped and not result.written:
        log.info("nothing written; %d day(s) already scrummed", len(result.skipped))


if __name__ == "__main__":
    cli()
