"""
Burn CLI - Main Entry Point

Unified Typer CLI that assembles all module sub-commands.

Usage:
    burn version
    burn timetracker [command]
    burn ceiling [command]
    burn chart [command]
"""

import importlib

import typer

import burn

app = typer.Typer(
    name="burn",
    help="Labor-hour burn projection against contract ceilings.",
    no_args_is_help=True,
)


@app.command()
def version():
    """Show Burn version."""
    typer.echo(f"burn {burn.__version__}")


def _register_modules():
    """Register module CLI sub-apps."""
    module_registry = [
        ("burn.timetracker.cli", "timetracker", "Job codes, holidays & working days"),
        ("burn.ceiling.cli", "ceiling", "Ceiling releases & Period of Performance"),
        ("burn.chart.cli", "chart", "Burn chart generation"),
    ]

    for module_path, name, help_text in module_registry:
        mod = importlib.import_module(module_path)
        app.add_typer(mod.app, name=name, help=help_text)


_register_modules()


def main():
    """Entry point for the burn CLI."""
    app()


if __name__ == "__main__":
    main()
