"""Time Tracker CLI sub-commands."""

import typer

app = typer.Typer(no_args_is_help=True)


@app.command("jobs")
def jobs(
    include_inactive: bool = typer.Option(False, "--all", "-a", help="Include inactive job codes"),
):
    """Print the job code tree from the timesheet API."""
    from burn.cli.common import exit_on_error
    from burn.timetracker.client import TimesheetClient
    from burn.timetracker.jobs import build_job_tree, prune_inactive

    with exit_on_error():
        codes = TimesheetClient.from_config().fetch_jobcodes()

    tree = build_job_tree(codes)
    if not include_inactive:
        tree = prune_inactive(tree, codes)
    if not tree:
        typer.echo("No job codes found.")
        return

    for root in tree:
        for depth, node in root.walk():
            typer.echo(f"  {'  ' * depth}{node.name}  [{node.id}]")


@app.command("holidays")
def holidays(
    year: int = typer.Option(None, "--year", "-y", help="Calendar year (default: current year)"),
):
    """List observed U.S. federal holidays for a year."""
    from datetime import date

    from burn.timetracker.holidays import federal_holiday_schedule

    year = year or date.today().year
    typer.echo(f"\n  Federal holidays observed in {year}")
    for day, name in federal_holiday_schedule(year):
        typer.echo(f"    {day.isoformat()}  {day.strftime('%a')}  {name}")


@app.command("working-days")
def working_days_cmd(
    start: str = typer.Argument(..., help="Start date YYYY-MM-DD"),
    end: str = typer.Argument(..., help="End date YYYY-MM-DD (inclusive)"),
    hours_per_day: float = typer.Option(None, "--hours-per-day", help="Override projection.hours_per_day"),
):
    """Count Mon-Fri, non-holiday working days in a date range."""
    from burn.cli.common import exit_on_error, parse_date_option
    from burn.core.config import get_hours_per_day
    from burn.timetracker.holidays import working_days

    with exit_on_error():
        sd = parse_date_option(start, "Start")
        ed = parse_date_option(end, "End")
        per_day = hours_per_day if hours_per_day is not None else get_hours_per_day()

    days = working_days(sd, ed)
    typer.echo(f"  {sd} to {ed}: {days} working days ({days * per_day:g} hours)")
