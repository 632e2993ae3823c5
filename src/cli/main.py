"""OmniRecall CLI entry point."""

import typer

from src.cli.admin import clear, stats
from src.cli.ask import ask
from src.cli.index import index
from src.cli.search import context, search

app = typer.Typer(
    name="omnirecall",
    help="OmniRecall - Index local documents and ask questions grounded in them.",
)

app.command(name="index")(index)
app.command(name="search")(search)
app.command(name="context")(context)
app.command(name="ask")(ask)
app.command(name="stats")(stats)
app.command(name="clear")(clear)


if __name__ == "__main__":
    app()
