"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .articles import compare_command, extract_command, originals_command
from .init import init_command
from .run import run_command
from .tools import scrape_command, search_command

app = typer.Typer(
    name="blogrefresh",
    help="Blog Refresh - rewrite stored articles with reference-guided LLM edits",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("run")(run_command)
app.command("originals")(originals_command)
app.command("extract")(extract_command)
app.command("compare")(compare_command)
app.command("search")(search_command)
app.command("scrape")(scrape_command)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
