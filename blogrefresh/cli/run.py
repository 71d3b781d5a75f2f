"""Run command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import Config
from ..errors import ConfigurationError
from ..pipeline import PipelineOrchestrator, RunSummary

console = Console()


def print_run_summary(summary: RunSummary) -> None:
    """Render the run summary table."""
    table = Table(title="Pipeline Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="bold")

    table.add_row("Processed", str(summary.processed))
    table.add_row("Succeeded", f"[green]{summary.succeeded}[/green]")
    table.add_row("Failed", f"[red]{summary.failed}[/red]" if summary.failed else "0")
    table.add_row("Skipped", f"[yellow]{summary.skipped}[/yellow]" if summary.skipped else "0")
    table.add_row("Started", summary.started_at)
    table.add_row("Finished", summary.finished_at)
    table.add_row("Duration", f"{summary.duration:.1f}s")
    if summary.llm_usage:
        usage = summary.llm_usage
        table.add_row(
            "LLM",
            f"{usage.get('provider')} / {usage.get('model')} - "
            f"{usage.get('api_calls', 0)} calls, {usage.get('total_tokens', 0)} tokens",
        )

    console.print("\n")
    console.print(table)


def run_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ~/.config/blogrefresh/config.yaml)",
    ),
    only_one: Optional[bool] = typer.Option(
        None,
        "--only-one/--all",
        help="Stop after the first article with enough references (default: PROCESS_ONLY_ONE)",
    ),
    rewrite_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Rewrite output format: markdown or html (default: REWRITE_FORMAT)",
    ),
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        "-p",
        help="LLM provider: openai, gemini or openrouter (default: LLM_PROVIDER)",
    ),
) -> None:
    """Rewrite every original article that has no updated version yet."""
    try:
        config = Config(config_path)
        settings = config.config

        if only_one is not None:
            settings.pipeline.process_only_one = only_one
        if rewrite_format is not None:
            if rewrite_format.lower() not in ("markdown", "html"):
                raise ConfigurationError(f"Unsupported rewrite format: {rewrite_format}")
            settings.pipeline.rewrite_format = rewrite_format.lower()
        if provider is not None:
            settings.llm.provider = provider.strip().lower()

        orchestrator = PipelineOrchestrator.from_config(config)
        summary = orchestrator.run()
        print_run_summary(summary)

    except KeyboardInterrupt:
        console.print("\n[yellow]Pipeline interrupted by user[/yellow]")
        raise typer.Exit(1)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Pipeline failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)
