"""Skills CLI"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from prompthub.cli_mcp import app as mcp_app
from prompthub.config import load_config
from prompthub.errors import PromptHubError
from prompthub.skills.install import list_installed
from prompthub.skills.manager import SkillManager
from prompthub.skills.platforms import get_platform_skills_dir
from prompthub.skills.registry import SKILL_REGISTRY_VERSION

app = typer.Typer(name="prompthub", help="Manage SKILL.md skills and install them into AI coding tools")
registry_app = typer.Typer(name="registry", help="Browse and install built-in skills")
app.add_typer(registry_app, name="registry")
app.add_typer(mcp_app, name="mcp")

console = Console()

_state: dict = {}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.json"),
):
    """prompthub skills"""
    config = load_config(config_path)
    level = "DEBUG" if verbose else config.logging.level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    _state["config"] = config
    _state.pop("manager", None)


def _manager() -> SkillManager:
    if "manager" not in _state:
        _state["manager"] = SkillManager(_state.get("config"))
    return _state["manager"]


def _run(coro):
    try:
        return asyncio.run(coro)
    except PromptHubError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command("list")
def list_skills():
    """List stored skills"""
    skills = _manager().get_all()
    if not skills:
        console.print("[yellow]No skills stored.[/yellow]")
        return

    table = Table(title="Skills")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Author")
    table.add_column("Tags", style="magenta")
    for skill in skills:
        table.add_row(skill.id[:8], skill.name, skill.version, skill.author, ", ".join(skill.tags))
    console.print(table)


@app.command("show")
def show_skill(skill_id: str = typer.Argument(..., help="Skill id")):
    """Print a skill's SKILL.md"""
    try:
        console.print(_manager().export(skill_id, "skillmd"), markup=False, highlight=False)
    except PromptHubError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command("search")
def search_skills(query: str = typer.Argument(..., help="Text to look for in name, description or tags")):
    """Search stored skills"""
    skills = _manager().search(query)
    if not skills:
        console.print(f"[yellow]No skills match '{query}'.[/yellow]")
        return
    for skill in skills:
        console.print(f"[cyan]{skill.name}[/cyan] [dim]{skill.id[:8]}[/dim] {skill.description or ''}")


@app.command("add")
def add_from_github(url: str = typer.Argument(..., help="https://github.com/owner/repo")):
    """Clone a GitHub repository and register it as a skill"""
    skill = _run(_manager().install_from_github(url))
    console.print(f"[green]Installed skill: {skill.name}[/green] [dim]{skill.id}[/dim]")


@app.command("installed")
def installed():
    """List cloned skill folders in the private skills directory"""
    names = list_installed(_manager().skills_dir)
    if not names:
        console.print("[yellow]No skill folders installed.[/yellow]")
        return
    for name in names:
        console.print(name)


@app.command("scan")
def scan(preview: bool = typer.Option(False, "--preview", help="List skills without importing")):
    """Find SKILL.md skills in AI tool directories"""
    manager = _manager()

    if preview:
        found = _run(manager.scan_local_preview())
        if not found:
            console.print("[yellow]No local skills found.[/yellow]")
            return
        table = Table(title="Local Skills")
        table.add_column("Name", style="cyan")
        table.add_column("Version")
        table.add_column("Platforms", style="green")
        table.add_column("Path", style="dim")
        for item in found:
            table.add_row(item.name, item.version, ", ".join(item.platforms), item.file_path)
        console.print(table)
        return

    result = _run(manager.scan_local())
    console.print(
        f"[green]Imported {result.imported}[/green], "
        f"[yellow]skipped {result.skipped}[/yellow], "
        f"[red]failed {result.failed}[/red]"
    )
    for error in result.errors:
        console.print(f"[red]  {error}[/red]")


@app.command("validate")
def validate(path: Path = typer.Argument(..., help="Skill folder containing SKILL.md")):
    """Validate a skill folder"""
    result = _manager().validate_package(path)
    for error in result.errors:
        console.print(f"[red]error[/red]: {error}")
    for warning in result.warnings:
        console.print(f"[yellow]warning[/yellow]: {warning}")
    if result.valid:
        console.print("[green]Valid skill package[/green]")
    else:
        raise typer.Exit(1)


@app.command("platforms")
def platforms():
    """List supported AI tools and their skills directories"""
    manager = _manager()
    detected = set(_run(manager.detect_installed_platforms()))

    table = Table(title="Platforms")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Skills directory", style="blue")
    table.add_column("Detected", style="green")
    for platform in manager.get_supported_platforms():
        table.add_row(
            platform.id,
            platform.name,
            str(get_platform_skills_dir(platform)),
            "yes" if platform.id in detected else "",
        )
    console.print(table)


@app.command("detect")
def detect():
    """Print the ids of AI tools found on this machine"""
    for platform_id in _run(_manager().detect_installed_platforms()):
        console.print(platform_id)


@app.command("install")
def install(
    skill_id: str = typer.Argument(..., help="Skill id"),
    platform: str = typer.Option(..., "--platform", "-p", help="Platform id"),
    symlink: bool = typer.Option(False, "--symlink", help="Link to a shared canonical copy"),
):
    """Install a stored skill's SKILL.md into a platform"""
    manager = _manager()
    try:
        skill = manager.require(skill_id)
        content = manager.export(skill_id, "skillmd")
    except PromptHubError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if symlink:
        path = _run(manager.install_skill_md_symlink(skill.name, content, platform))
    else:
        path = _run(manager.install_skill_md(skill.name, content, platform))
    console.print(f"[green]Installed {skill.name} to {platform}:[/green] {path}")


@app.command("uninstall")
def uninstall(
    name: str = typer.Argument(..., help="Skill name"),
    platform: str = typer.Option(..., "--platform", "-p", help="Platform id"),
):
    """Remove a skill's folder from a platform"""
    _run(_manager().uninstall_skill_md(name, platform))
    console.print(f"[green]Uninstalled {name} from {platform}[/green]")


@app.command("status")
def status(name: str = typer.Argument(..., help="Skill name")):
    """Show where a skill's SKILL.md is installed"""
    result = _run(_manager().get_skill_md_install_status(name))
    table = Table(title=f"Install status: {name}")
    table.add_column("Platform", style="cyan")
    table.add_column("Installed")
    for platform_id, present in result.items():
        table.add_row(platform_id, "[green]yes[/green]" if present else "[dim]no[/dim]")
    console.print(table)


@app.command("export")
def export(
    skill_id: str = typer.Argument(..., help="Skill id"),
    format: str = typer.Option("skillmd", "--format", "-f", help="skillmd or json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
):
    """Export a skill as SKILL.md or JSON"""
    try:
        text = _manager().export(skill_id, format)
    except (PromptHubError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if output:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Exported to {output}[/green]")
    else:
        console.print(text, markup=False, highlight=False)


@app.command("import")
def import_skill(path: Path = typer.Argument(..., help="JSON file produced by export")):
    """Import a skill from JSON"""
    try:
        skill = _manager().import_from_json(path.read_text(encoding="utf-8"))
    except (PromptHubError, OSError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Imported skill: {skill.name}[/green] [dim]{skill.id}[/dim]")


@registry_app.command("list")
def registry_list(category: Optional[str] = typer.Option(None, help="Filter by category")):
    """List built-in registry skills"""
    table = Table(title=f"Skill Registry v{SKILL_REGISTRY_VERSION}")
    table.add_column("Slug", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="magenta")
    table.add_column("Author")
    for entry in _manager().list_registry(category):
        table.add_row(entry.slug, entry.name, entry.category, entry.author)
    console.print(table)


@registry_app.command("install")
def registry_install(
    slug: str = typer.Argument(..., help="Registry slug"),
    refresh: bool = typer.Option(False, "--refresh", help="Fetch the latest SKILL.md first"),
):
    """Install a built-in registry skill"""
    skill = _run(_manager().install_from_registry(slug, refresh=refresh))
    console.print(f"[green]Installed skill: {skill.name}[/green] [dim]{skill.id}[/dim]")


if __name__ == "__main__":
    app()
