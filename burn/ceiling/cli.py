"""Ceiling CLI sub-commands."""

import typer

app = typer.Typer(no_args_is_help=True)


def _print_record(job_id, record):
    from burn.core.output import format_hours, format_table

    pop_start = record.pop_start.isoformat() if record.pop_start else "-"
    pop_end = record.pop_end.isoformat() if record.pop_end else "-"
    typer.echo(f"\n  Job {job_id}  |  PoP: {pop_start} to {pop_end}")
    if not record.has_valid_pop:
        from burn.ceiling.models import pop_validation_message

        typer.echo(f"  ! {pop_validation_message(record.pop_start, record.pop_end)}")

    if not record.releases:
        typer.echo("  No ceiling releases.")
        return

    rows = [
        [r.date.isoformat(), r.hours, r.note or "", r.id]
        for r in record.releases
    ]
    typer.echo("")
    typer.echo(format_table(["Date", "Hours", "Note", "ID"], rows))
    typer.echo(f"\n  Total ceiling: {format_hours(record.total_hours)}")


@app.command("list")
def list_records():
    """List jobs that have a stored ceiling record."""
    from burn.ceiling.store import CeilingStore, load_record_or_empty
    from burn.core.output import format_hours

    store = CeilingStore()
    ids = store.job_ids()
    if not ids:
        typer.echo("No ceiling records.")
        return
    for job_id in ids:
        record = load_record_or_empty(store, job_id)
        typer.echo(
            f"  {job_id:>8}  {len(record.releases):>3} releases  "
            f"{format_hours(record.total_hours)}"
        )


@app.command("show")
def show(
    job_id: int = typer.Argument(..., help="Job code id"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table | json"),
):
    """Show a job's PoP and ceiling releases."""
    from burn.ceiling.store import CeilingStore
    from burn.cli.common import exit_on_error
    from burn.core.output import format_json

    with exit_on_error():
        record = CeilingStore().load_record(job_id)

    if output_format == "json":
        typer.echo(format_json(record))
        return
    _print_record(job_id, record)


@app.command("add", context_settings={"ignore_unknown_options": True})
def add(
    job_id: int = typer.Argument(..., help="Job code id"),
    release_date: str = typer.Argument(..., help="Effective date YYYY-MM-DD"),
    hours: str = typer.Argument(..., help="Hours released (negative reduces the ceiling)"),
    note: str = typer.Option(None, "--note", "-n", help="Optional note"),
):
    """Add a ceiling release."""
    from burn.ceiling.store import CeilingStore
    from burn.cli.common import exit_on_error, parse_date_option

    store = CeilingStore()
    with exit_on_error():
        day = parse_date_option(release_date, "Release date")
        record = store.load_record(job_id)
        release = record.add_release(day, hours, note)
        store.save_record(job_id, record)

    typer.echo(f"Added release {release.id}: {release.hours:g} h on {release.date}")


@app.command("edit")
def edit(
    job_id: int = typer.Argument(..., help="Job code id"),
    release_id: str = typer.Argument(..., help="Release id (see 'burn ceiling show')"),
    release_date: str = typer.Option(None, "--date", "-d", help="New date YYYY-MM-DD"),
    hours: str = typer.Option(None, "--hours", help="New hours"),
    note: str = typer.Option(None, "--note", "-n", help="New note ('' clears it)"),
):
    """Edit an existing ceiling release."""
    from burn.ceiling.store import CeilingStore
    from burn.cli.common import exit_on_error, parse_date_option

    store = CeilingStore()
    with exit_on_error():
        day = parse_date_option(release_date, "Release date")
        record = store.load_record(job_id)
        try:
            release = record.update_release(release_id, day=day, hours=hours, note=note)
        except KeyError:
            typer.echo(f"Release not found: {release_id}", err=True)
            raise typer.Exit(1)
        store.save_record(job_id, record)

    typer.echo(f"Updated release {release.id}: {release.hours:g} h on {release.date}")


@app.command("remove")
def remove(
    job_id: int = typer.Argument(..., help="Job code id"),
    release_id: str = typer.Argument(..., help="Release id (see 'burn ceiling show')"),
):
    """Delete a ceiling release."""
    from burn.ceiling.store import CeilingStore
    from burn.cli.common import exit_on_error

    store = CeilingStore()
    with exit_on_error():
        record = store.load_record(job_id)
        if not record.remove_release(release_id):
            typer.echo(f"Release not found: {release_id}", err=True)
            raise typer.Exit(1)
        store.save_record(job_id, record)

    typer.echo(f"Removed release {release_id}")


@app.command("set-pop")
def set_pop(
    job_id: int = typer.Argument(..., help="Job code id"),
    start: str = typer.Argument(..., help="PoP start YYYY-MM-DD"),
    end: str = typer.Argument(..., help="PoP end YYYY-MM-DD"),
):
    """Set a job's Period of Performance."""
    from burn.ceiling.store import CeilingStore
    from burn.cli.common import exit_on_error, parse_date_option

    store = CeilingStore()
    with exit_on_error():
        sd = parse_date_option(start, "PoP start")
        ed = parse_date_option(end, "PoP end")
        record = store.load_record(job_id)
        record.set_pop(sd, ed)
        store.save_record(job_id, record)

    typer.echo(f"PoP for job {job_id}: {sd} to {ed}")
