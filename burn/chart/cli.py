"""Chart CLI sub-commands."""

import typer

app = typer.Typer(no_args_is_help=True)


@app.command("generate")
def generate(
    job_id: int = typer.Argument(..., help="Job code id"),
    query_stop: str = typer.Option(None, "--query-stop", "-q", help="Actuals through YYYY-MM-DD (default: end of last month)"),
    pop_start: str = typer.Option(None, "--pop-start", help="PoP start YYYY-MM-DD (default: stored record)"),
    pop_end: str = typer.Option(None, "--pop-end", help="PoP end YYYY-MM-DD (default: stored record)"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table | json"),
):
    """Generate the cumulative burn vs. ceiling series for a job.

    Actual hours are fetched month by month from the timesheet API up to the
    query stop; the rest of the PoP is projected at 8 hours per working day.
    """
    from burn.chart.generator import ChartGenerator
    from burn.cli.common import exit_on_error, parse_date_option
    from burn.core.output import format_hours, format_json, format_table

    with exit_on_error():
        qs = parse_date_option(query_stop, "Query stop")
        ps = parse_date_option(pop_start, "PoP start")
        pe = parse_date_option(pop_end, "PoP end")
        result = ChartGenerator().generate(job_id, query_stop=qs, pop_start=ps, pop_end=pe)

    if output_format == "json":
        typer.echo(format_json(result))
        return

    typer.echo(
        f"\n  Job {result.job_id}  |  PoP: {result.pop_start} to {result.pop_end}"
        f"  |  Query Stop: {result.query_stop}"
    )

    rows = []
    for idx, (point, monthly) in enumerate(zip(result.cumulative_series, result.monthly_series)):
        ceiling = result.ceiling_series[idx] if result.ceiling_series else None
        ceiling75 = result.ceiling75_series[idx] if result.ceiling75_series else None
        rows.append([
            point.month,
            "projected" if result.is_projected(idx) else "actual",
            monthly.value,
            point.value,
            ceiling,
            ceiling75,
        ])
    typer.echo("")
    typer.echo(format_table(["Month", "Kind", "Hours", "Cumulative", "Ceiling", "75%"], rows))

    typer.echo(
        f"\n  Projected Total: {format_hours(result.projected_total)}"
        f"  |  Ceiling: {format_hours(result.ceiling_total)}"
    )
    if result.employee_names:
        typer.echo(f"\n  Employees ({len(result.employee_names)}):")
        for name in result.employee_names:
            typer.echo(f"    - {name}")
