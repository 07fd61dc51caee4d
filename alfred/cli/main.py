"""CLI entry point.

Provides the main CLI application with commands for:
- chat: Talk to the ALFReD advisor (one-shot or interactive)
- tools: List the registered data tools
"""

import asyncio
from typing import Annotated

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

app = typer.Typer(
    name="alfred",
    help="ALFReD: federal regulation and economic data advisor",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()

EXIT_WORDS = {"exit", "quit"}


@app.command()
def chat(
    message: Annotated[
        str | None,
        typer.Argument(help="Message to send (or leave empty for interactive mode)"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", "-l", help="Override LOG_LEVEL"),
    ] = None,
) -> None:
    """Chat with the ALFReD advisor.

    Examples:
        alfred chat "Get the most recent Federal Register docs for the CFPB"
        alfred chat  # Interactive mode
    """
    from alfred.logging_config import configure_logging

    configure_logging(log_level.upper() if log_level else None)  # type: ignore[arg-type]
    asyncio.run(_chat(message))


async def _chat(initial_message: str | None) -> None:
    """Run a chat session against the default orchestrator."""
    import httpx

    from alfred.agents import build_orchestrator
    from alfred.agents.prompts import EXAMPLE_PROMPTS
    from alfred.conversation import ConversationManager
    from alfred.exceptions import ConfigurationError
    from alfred.settings import get_settings
    from alfred.tracing import get_tracing_status, init_mlflow

    settings = get_settings()
    init_mlflow()
    trace_status = get_tracing_status()
    console.print(
        "[dim]Model: {model} ({provider}) | traces: {traces}[/dim]".format(
            model=settings.llm_model,
            provider=settings.llm_provider,
            traces="on" if trace_status["traces_enabled"] else "off",
        )
    )

    async with httpx.AsyncClient(timeout=settings.adapter_timeout_seconds) as http_client:
        try:
            orchestrator = build_orchestrator(settings, http_client)
        except ConfigurationError as e:
            console.print(f"[red]Configuration error:[/red] {e}")
            raise typer.Exit(1) from e

        conversation = ConversationManager().get()

        if initial_message:
            await _send(orchestrator, conversation, initial_message)
            return

        examples = "\n".join(f"  • {prompt}" for prompt in EXAMPLE_PROMPTS)
        console.print(
            Panel(
                "[bold blue]ALFReD[/bold blue]\n\n"
                f"Try one of these:\n{examples}\n\n"
                "Type [cyan]'exit'[/cyan] or [cyan]'quit'[/cyan] to end.",
                title="🏛️ ALFReD",
                border_style="blue",
            )
        )

        while True:
            try:
                text = Prompt.ask("[bold cyan]You[/bold cyan]")
            except (EOFError, KeyboardInterrupt):
                break
            if text.strip().lower() in EXIT_WORDS:
                break
            if not text.strip():
                continue
            await _send(orchestrator, conversation, text)

    console.print("[dim]Goodbye.[/dim]")


async def _send(orchestrator, conversation, text: str) -> None:
    """Submit one message and live-render its reply until sealed."""
    from alfred.cli.render import render_view

    cycle = orchestrator.submit(conversation, text)
    with Live(render_view(cycle.reply.value), console=console, refresh_per_second=12) as live:
        async for view in cycle.reply.updates():
            live.update(render_view(view))
    await cycle.wait()
    console.print()


@app.command()
def tools() -> None:
    """List the data tools available to the advisor."""
    asyncio.run(_list_tools())


async def _list_tools() -> None:
    import httpx

    from alfred.settings import get_settings
    from alfred.tools import build_default_registry

    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.adapter_timeout_seconds) as http_client:
        registry = build_default_registry(settings, http_client)

    table = Table(title="Registered tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Parameters", style="dim")
    table.add_column("Description")
    for descriptor in registry.list_tools():
        params = ", ".join(descriptor.json_schema().get("properties", {}))
        table.add_row(descriptor.name, params, descriptor.description.splitlines()[0])

    console.print(table)
    if not len(registry):
        console.print("[yellow]No tools registered.[/yellow]")


if __name__ == "__main__":
    app()
