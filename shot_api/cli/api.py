import os
from typing import Optional
import typer

from shot_api.config import get_config
from shot_api.console import console
import uvicorn

api_app = typer.Typer()


@api_app.callback()
def api(
    verbose: bool = typer.Option(
        False,
        help="show the log messages",
    ),
):
    "api server cli"


@api_app.command()
def run(
    env: str = typer.Option(
        "dev",
        help="environment to run",
    ),
    host: Optional[str] = typer.Option(
        None,
        help="host to bind, defaults to the configured api_server_host",
    ),
    port: Optional[int] = typer.Option(
        None,
        help="port to bind, defaults to the configured api_server_port",
    ),
):
    os.environ["ENV"] = env
    config = get_config()
    console.quiet = False
    console.log(f"running {env}")
    uvicorn.run(
        "shot_api.api.app:create_app",
        factory=True,
        host=host or config.api_server_host,
        port=port or config.api_server_port,
    )
