"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown

from .providers import console_debug_callback, get_session

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="sentient-chat",
    help="Chat with the Sentient DeFi assistant",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()

_EXIT_WORDS = ("exit", "quit", "q")


def _log_level_option():
    return typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show request log with level: debug (all), info, warning, or error"
    )


@app.command(name="tui")
def tui_command(log_level: str | None = _log_level_option()):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        session = get_session(console)
        await run_textual_tui(session, log_level=log_level)

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass
    console.print("\n[dim]Goodbye![/dim]")


@app.command()
def chat(log_level: str | None = _log_level_option()):
    """Start an interactive chat in the console."""
    async def _chat():
        session = get_session(console)
        if log_level is not None:
            session.set_debug_callback(console_debug_callback(console, log_level))

        async with session.client:
            console.print("[bold cyan]Sentient AI Assistant[/bold cyan]")
            console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")
            console.print(f"[bold green]Assistant:[/bold green] {session.store.last_response}\n")

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if user_input.strip().lower() in _EXIT_WORDS:
                    console.print("[dim]Goodbye![/dim]")
                    break

                with console.status("[dim]Assistant is typing...[/dim]"):
                    message = await session.send(user_input)
                if message is None:
                    continue

                console.print("[bold green]Assistant:[/bold green]")
                console.print(Markdown(message.content))
                console.print()

    asyncio.run(_chat())


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question for the assistant"),
    log_level: str | None = _log_level_option(),
):
    """Ask a single question and print the answer."""
    async def _ask() -> bool:
        session = get_session(console)
        if log_level is not None:
            session.set_debug_callback(console_debug_callback(console, log_level))

        async with session.client:
            message = await session.send(question)

        if message is None:
            console.print("[red]Error: question is empty[/red]")
            return False

        console.print(Markdown(message.content))
        return session.last_reply is not None and session.last_reply.ok

    if not asyncio.run(_ask()):
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
