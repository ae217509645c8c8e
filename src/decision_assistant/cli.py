"""Command line entry point using Typer."""
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from decision_assistant.config.settings import get_settings

app = typer.Typer(
    name="decision-assistant",
    help="Decision assistant with a mandatory reflection timer",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: HOST setting)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default: PORT setting)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the chat API server."""
    settings = get_settings()
    if not settings.openai_api_key:
        console.print("[yellow]OPENAI_API_KEY is not set - chat requests will fail.[/yellow]")

    uvicorn.run(
        "decision_assistant.api.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


@app.command()
def chat(
    url: Optional[str] = typer.Option(None, "--url", "-u", help="API base URL (default: CLIENT_API_URL setting)"),
    log_file: Path = typer.Option(
        Path("decision-assistant-client.log"),
        "--log-file",
        help="Where client logs go while the UI owns the terminal",
    ),
):
    """Open the terminal chat client."""
    from decision_assistant.client.api_client import ChatApiClient, ChatApiError
    from decision_assistant.client.app import DecisionChatApp
    from decision_assistant.infrastructure.observability.logging import configure_logging

    settings = get_settings()

    with log_file.open("a", encoding="utf-8") as stream:
        configure_logging(stream=stream)
        try:
            api = ChatApiClient(url or settings.client_api_url, timeout=settings.client_timeout)
        except ChatApiError as e:
            console.print(str(e), style="red", markup=False)
            raise typer.Exit(code=1)
        DecisionChatApp(api).run()


if __name__ == "__main__":
    app()
