"""MCP config-merge CLI (Claude Desktop / Cursor)"""

import asyncio
import json
import shlex

import typer
from rich.console import Console
from rich.table import Table

from prompthub.errors import PromptHubError
from prompthub.skills import platform_install

app = typer.Typer(name="mcp", help="Register skills as MCP servers in Claude Desktop or Cursor")
console = Console()


def _check_target(target: str) -> str:
    if target not in platform_install.MCP_TARGETS:
        console.print(f"[red]Invalid target: {target}. Use {' or '.join(platform_install.MCP_TARGETS)}.[/red]")
        raise typer.Exit(1)
    return target


@app.command("install")
def install_server(
    target: str = typer.Argument(..., help="claude or cursor"),
    name: str = typer.Argument(..., help="Server name"),
    command: str = typer.Option("", help="Command to run"),
    args: str = typer.Option("", help="Arguments (space separated strings)"),
    config_json: str = typer.Option("", "--json", help="Full server config as JSON"),
):
    """Add a server entry to a tool's config file"""
    _check_target(target)

    if config_json:
        try:
            mcp_config = json.loads(config_json)
        except ValueError as e:
            console.print(f"[red]Invalid JSON: {e}[/red]")
            raise typer.Exit(1)
    elif command:
        mcp_config = {"command": command, "args": shlex.split(args)}
    else:
        console.print("[red]Provide --command or --json.[/red]")
        raise typer.Exit(1)

    try:
        asyncio.run(platform_install.install_to_platform(target, name, mcp_config))
    except (PromptHubError, OSError, ValueError) as e:
        console.print(f"[red]Failed to install {name}: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Added MCP server {name} to {target}[/green]")


@app.command("uninstall")
def uninstall_server(
    target: str = typer.Argument(..., help="claude or cursor"),
    name: str = typer.Argument(..., help="Server name to remove"),
):
    """Remove a server entry from a tool's config file"""
    _check_target(target)
    try:
        asyncio.run(platform_install.uninstall_from_platform(target, name))
    except (PromptHubError, OSError, ValueError) as e:
        console.print(f"[red]Failed to uninstall {name}: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Removed MCP server {name} from {target}[/green]")


@app.command("status")
def server_status(name: str = typer.Argument(..., help="Server name")):
    """Show which tools have the server registered"""
    status = asyncio.run(platform_install.get_platform_status(name))

    table = Table(title=f"MCP Server: {name}")
    table.add_column("Target", style="cyan")
    table.add_column("Config file", style="blue")
    table.add_column("Registered")
    for target, present in status.items():
        table.add_row(
            target,
            str(platform_install.get_mcp_config_path(target)),
            "[green]yes[/green]" if present else "[dim]no[/dim]",
        )
    console.print(table)
