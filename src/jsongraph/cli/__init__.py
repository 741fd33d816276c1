"""jsongraph CLI: build and lay out graphs from JSON files.

Entry point for the `jsongraph` command. Requires ``pip install jsongraph[cli]``.

Commands:
    build      Node/edge table (or JSON) for a document
    layout     Positioned nodes and edges as JSON
    inspect    Tree view of the graph
"""

from __future__ import annotations


def _require_typer():
    """Check that typer is available."""
    try:
        import typer  # noqa: F401
    except ImportError:
        import sys

        print("Error: typer is required for the CLI. Install with: pip install jsongraph[cli]", file=sys.stderr)
        raise SystemExit(1) from None


def create_app():
    """Create the Typer app with all commands."""
    _require_typer()

    import typer

    from jsongraph.cli import commands

    app = typer.Typer(
        name="jsongraph",
        help="Turn JSON documents into laid-out node/edge graphs.",
        no_args_is_help=True,
    )
    app.command("build")(commands.build)
    app.command("layout")(commands.layout)
    app.command("inspect")(commands.inspect)

    return app


def main():
    """CLI entry point."""
    app = create_app()
    app()
