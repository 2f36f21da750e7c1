"""CLI commands for xmlrpc_api.

Entry point ``xmlrpc-api``: call a remote method, encode/decode messages, and
serve a method map over HTTP.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from xmlrpc_api import __version__
from xmlrpc_api.cli.shared.logging_utils import configure_console_logging, ensure_rotating_log_file
from xmlrpc_api.cli.shared.values import load_method_map, load_object, parse_cli_value
from xmlrpc_api.client.transport import XmlRpcClient
from xmlrpc_api.codec.document import parse_document
from xmlrpc_api.config.loader import get_config
from xmlrpc_api.config.schema import Config
from xmlrpc_api.protocol.fault import Fault
from xmlrpc_api.protocol.request import Request
from xmlrpc_api.protocol.response import Response
from xmlrpc_api.utils.exceptions import RequestError, XmlRpcValueError

app = typer.Typer(
    name="xmlrpc-api",
    help="XML-RPC client, codec and server tools",
    no_args_is_help=True,
)

console = Console()

_state: dict[str, object] = {"config_path": None}


def _config() -> Config:
    return get_config(config_path=_state["config_path"])  # type: ignore[arg-type]


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"xmlrpc-api v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to config.json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print debug logs to stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """XML-RPC tools."""
    _state["config_path"] = config_path
    cfg = _config()
    level = "DEBUG" if verbose else cfg.logging.level
    configure_console_logging(level)
    if cfg.logging.file:
        ensure_rotating_log_file(cfg.logging.file, level=level)


def _print_params(params: list) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Value")
    for index, value in enumerate(params, start=1):
        table.add_row(str(index), type(value).__name__, repr(value))
    console.print(table)


@app.command()
def call(
    method: str = typer.Argument(..., help="Remote method name"),
    params: list[str] | None = typer.Argument(None, help="Parameters (JSON values, else strings)"),
    url: str | None = typer.Option(None, "--url", "-u", help="Service URL (defaults to config client.url)"),
    timeout: float | None = typer.Option(None, "--timeout", help="HTTP timeout in seconds"),
):
    """Invoke a remote XML-RPC method and print the result."""
    cfg = _config()
    client = XmlRpcClient(
        url or cfg.client.url,
        timeout=timeout if timeout is not None else cfg.client.timeout,
        indent=cfg.codec.indent,
    )
    values = [parse_cli_value(p) for p in params or []]
    try:
        result = client.call(method, *values)
    except Fault as f:
        console.print(f"[red]Fault {f.fault_code}:[/red] {f.fault_string}")
        raise typer.Exit(1)
    except (RequestError, XmlRpcValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
    console.print(result)


@app.command()
def encode(
    method: str = typer.Argument(..., help="Method name"),
    params: list[str] | None = typer.Argument(None, help="Parameters (JSON values, else strings)"),
    indent: int | None = typer.Option(None, "--indent", "-i", help="Indentation (defaults to config codec.indent)"),
):
    """Print the methodCall XML for a method and parameters."""
    cfg = _config()
    values = [parse_cli_value(p) for p in params or []]
    request = Request(
        method_name=method,
        params=values,
        indent=indent if indent is not None else cfg.codec.indent,
    )
    typer.echo(request.xml, nl=not request.xml.endswith("\n"))


@app.command()
def decode(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="methodCall or methodResponse XML file"),
):
    """Parse an XML-RPC message file and print its contents."""
    try:
        document = parse_document(path.read_bytes())
        kind = document.getroot().tag
        if kind == "methodCall":
            request = Request(doc=document)
            console.print(f"[bold]methodCall[/bold] {request.method_name}")
            _print_params(request.params)
        elif kind == "methodResponse":
            response = Response(doc=document)
            if response.is_valid:
                console.print("[bold]methodResponse[/bold]")
                console.print(response.value)
            else:
                console.print(f"[bold]methodResponse[/bold] [red]fault[/red] {response.error()}")
        else:
            console.print(f"[red]Not an XML-RPC message:[/red] root element is <{kind}>")
            raise typer.Exit(1)
    except XmlRpcValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)


@app.command()
def serve(
    handlers: str = typer.Option(..., "--handlers", help="Method map to serve, as module:attribute"),
    target: str | None = typer.Option(None, "--target", help="Object whose methods string entries name"),
    host: str | None = typer.Option(None, "--host", help="Bind host (defaults to config server.host)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (defaults to config server.port)"),
    path: str | None = typer.Option(None, "--path", help="Endpoint path (defaults to config server.path)"),
):
    """Serve a method map over HTTP."""
    from xmlrpc_api.api.server import run_server

    cfg = _config().model_copy(deep=True)
    if host:
        cfg.server.host = host
    if port:
        cfg.server.port = port
    if path:
        cfg.server.path = path
    try:
        method_map = load_method_map(handlers)
        target_obj = load_object(target) if target else None
    except (ImportError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
    console.print(f"Serving {len(method_map)} method(s) on http://{cfg.server.host}:{cfg.server.port}{cfg.server.path}")
    run_server(method_map, target=target_obj, config=cfg)


if __name__ == "__main__":
    app()
