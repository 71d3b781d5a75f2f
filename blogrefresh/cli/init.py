"""Init command implementation."""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from ..config import DEFAULT_CONFIG_PATH, ConfigModel, save_config
from ..generation import SUPPORTED_PROVIDERS

console = Console()


def init_command(
    config_dir: Path = typer.Option(
        DEFAULT_CONFIG_PATH.parent,
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    port: int = typer.Option(5000, "--port", help="Port of the article API"),
    provider: str = typer.Option("openrouter", "--provider", "-p", help="LLM provider"),
    rewrite_format: str = typer.Option("markdown", "--format", "-f", help="markdown or html"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write a starter configuration file."""
    console.print(Panel.fit("📝 Blog Refresh - Initialization", style="bold blue"))

    provider = provider.strip().lower()
    if provider not in SUPPORTED_PROVIDERS:
        console.print(f"[red]❌ Unsupported provider: {provider}[/red]")
        raise typer.Exit(1)

    config_path = config_dir / "config.yaml"
    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists: {config_path} (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)

    # API keys stay in the environment; the file only carries non-secret settings
    try:
        config = ConfigModel(
            store={"port": port},
            llm={"provider": provider},
            pipeline={"rewrite_format": rewrite_format},
        )
    except ValidationError as e:
        console.print(f"[red]❌ Invalid settings: {e}[/red]")
        raise typer.Exit(1)
    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    key_var = f"{provider.upper()}_API_KEY"
    console.print(
        Panel(
            f"[green]✅ Blog Refresh initialized![/green]\n\n"
            f"Configuration: {config_path}\n\n"
            f"Next steps:\n"
            f"1. Set search key: [bold]export SERPER_API_KEY=your_key[/bold]\n"
            f"2. Set LLM key: [bold]export {key_var}=your_key[/bold]\n"
            f"3. Seed originals: [bold]blogrefresh extract[/bold]\n"
            f"4. Run: [bold]blogrefresh run --only-one[/bold]",
            style="green",
        )
    )
