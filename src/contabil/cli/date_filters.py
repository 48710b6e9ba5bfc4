"""CLI helpers for date range resolution."""

from datetime import date

import click

from contabil.utils.date_parser import PERIODS, get_period_range, parse_date


def period_options(func):
    """Attach one ``--<period>`` flag per accounting period."""
    for period in reversed(PERIODS):
        func = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Use {period.replace('-', ' ')}",
        )(func)
    return func


def collect_period_flags(kwargs: dict) -> dict[str, bool]:
    """Pop the period flags added by ``period_options`` out of command kwargs."""
    return {period: kwargs.pop(period.replace("-", "_"), False) for period in PERIODS}


def parse_date_or_exit(ctx, value: str, label: str) -> date:
    """Parse a CLI date argument, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)
    flag_names = ", ".join(f"--{period}" for period in PERIODS)

    if period_count > 1:
        click.echo(
            f"Error: Only one period option ({flag_names}) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_period_range(period)
                break
    else:
        if start_date:
            start = parse_date_or_exit(ctx, start_date, "start date")
        if end_date:
            end = parse_date_or_exit(ctx, end_date, "end date")

        if start is None and end is None and default_range is not None:
            start, end = default_range

    return start, end
