"""Skiller command line"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from skiller.config import SkillerConfig, load_config
from skiller.errors import ExternalProcessError, SearchError, SkillerError
from skiller.external import SkillsCLI, search_skills
from skiller.external.skills_cli import CommandResult
from skiller.format import format_agents, format_count, format_path, format_relative_date, truncate
from skiller.ledger import get_skill_source, lock_entries, recent_entries
from skiller.skills import DeactivationEngine, SkillManager

app = typer.Typer(name="skiller", help="Manage agent skills across every installed coding agent")
console = Console()

SCOPE_CHOICES = ("all", "global", "project")


@app.callback()
def main(
    ctx: typer.Context,
    home: Optional[Path] = typer.Option(None, "--home", help="Home directory to manage (default: $SKILLER_HOME or ~)"),
    project: Optional[Path] = typer.Option(None, "--project", help="Project root (default: current directory)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(console=console)])
    ctx.obj = load_config(home=home, project_root=project)


def _config(ctx: typer.Context) -> SkillerConfig:
    return ctx.obj


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _print_result(result: CommandResult, success: str, failure: str) -> None:
    if result.success:
        console.print(f"[green]{success}[/green]")
        if result.output.strip():
            console.print(result.output.strip())
    else:
        console.print(f"[red]{failure}[/red]")
        if result.output.strip():
            console.print(result.output.strip())
        raise typer.Exit(1)


def _names(manager: SkillManager, agent_ids: list[str]) -> str:
    return format_agents([manager.catalog.display_name(a) for a in agent_ids])


@app.command("list")
def list_skills(
    ctx: typer.Context,
    scope: str = typer.Option("all", "--scope", "-s", help="Scope: 'all', 'global' or 'project'"),
):
    """List installed skills"""
    if scope not in SCOPE_CHOICES:
        _fail(f"Invalid scope: {scope}. Use 'all', 'global' or 'project'.")
    manager = SkillManager(_config(ctx))
    skills = manager.discover(scope)

    if not skills:
        console.print("[yellow]No skills found. Use 'skiller search' to find skills.[/yellow]")
        return

    table = Table(title=f"Installed Skills ({len(skills)})")
    table.add_column("Name", style="bold")
    table.add_column("Source", style="dim")
    table.add_column("Agents", style="cyan")
    table.add_column("Scope", style="dim")
    table.add_column("Updated", style="dim")
    table.add_column("Description")
    for skill in skills:
        entry = skill.lock_entry
        table.add_row(
            skill.name,
            entry.source if entry else "",
            _names(manager, skill.agents),
            skill.scope,
            format_relative_date(entry.updated_at) if entry and entry.updated_at else "",
            truncate(skill.description, 60),
        )
    console.print(table)


@app.command("dashboard")
def dashboard(ctx: typer.Context):
    """Overview of detected agents and installed skills"""
    config = _config(ctx)
    manager = SkillManager(config)
    skills = manager.discover()
    lock = manager.lock_store.read()
    usage = manager.agent_usage(skills)

    table = Table(title=f"Detected Agents ({len(usage)})")
    table.add_column("Agent", style="bold")
    table.add_column("Skills", style="cyan")
    for row in usage:
        counts = []
        if row.global_count:
            counts.append(f"{row.global_count} global")
        if row.project_count:
            counts.append(f"{row.project_count} project")
        table.add_row(row.display_name, ", ".join(counts) or "[dim]no skills[/dim]")
    console.print(table)

    global_count = sum(1 for s in skills if s.scope == "global")
    console.print(f"Total unique skills: [bold]{len(skills)}[/bold]")
    console.print(f"Global: [cyan]{global_count}[/cyan]  Project: [cyan]{len(skills) - global_count}[/cyan]")
    console.print(f"Lock file entries: [dim]{len(lock_entries(lock))}[/dim]")

    recent = recent_entries(lock)
    if recent:
        console.print()
        console.print("[bold]Recent activity:[/bold]")
        for name, entry in recent:
            console.print(f"  {name}  [dim]{get_skill_source(entry)}  {format_relative_date(entry.updated_at)}[/dim]")


@app.command("agents")
def list_agents(ctx: typer.Context):
    """Show every supported agent and its skill directories"""
    config = _config(ctx)
    manager = SkillManager(config)
    table = Table(title="Agents")
    table.add_column("Agent", style="bold")
    table.add_column("Installed")
    table.add_column("Global dir", style="dim")
    table.add_column("Project dir", style="dim")
    for agent in manager.catalog.agents:
        installed = agent.is_installed()
        table.add_row(
            agent.display_name,
            "[green]yes[/green]" if installed else "[dim]no[/dim]",
            format_path(agent.global_skills_dir, config.home_directory),
            agent.project_skills_dir,
        )
    console.print(table)


@app.command("disable")
def disable(
    ctx: typer.Context,
    names: List[str] = typer.Argument(..., help="Skill names to deactivate"),
):
    """Deactivate skills (they can be reactivated later)"""
    config = _config(ctx)
    manager = SkillManager(config)
    engine = DeactivationEngine(config, catalog=manager.catalog)
    active = {skill.name: skill for skill in manager.active()}

    failed = []
    for name in names:
        skill = active.get(name)
        if skill is None:
            console.print(f"[yellow]No active skill named {name}[/yellow]")
            failed.append(name)
            continue
        try:
            entry = engine.deactivate(skill)
        except SkillerError as e:
            console.print(f"[red]Failed to deactivate {name}: {e}[/red]")
            failed.append(name)
            continue
        console.print(f"[green]Deactivated {name}[/green] ({format_count(len(entry.agent_links), 'agent link')})")

    if failed:
        raise typer.Exit(1)


@app.command("enable")
def enable(
    ctx: typer.Context,
    names: List[str] = typer.Argument(..., help="Skill names to reactivate"),
):
    """Reactivate previously deactivated skills"""
    engine = DeactivationEngine(_config(ctx))

    failed = []
    for name in names:
        try:
            restored = engine.reactivate(name)
        except SkillerError as e:
            console.print(f"[red]Failed to reactivate {name}: {e}[/red]")
            failed.append(name)
            continue
        if restored:
            console.print(f"[green]Reactivated {name}[/green]")
        else:
            console.print(f"[yellow]{name} is not deactivated[/yellow]")

    if failed:
        raise typer.Exit(1)


@app.command("disabled")
def list_disabled(ctx: typer.Context):
    """List deactivated skills"""
    config = _config(ctx)
    entries = DeactivationEngine(config).disabled_entries()
    if not entries:
        console.print("[yellow]No deactivated skills found.[/yellow]")
        return

    table = Table(title=f"Deactivated Skills ({len(entries)})")
    table.add_column("Name", style="bold")
    table.add_column("Disabled", style="dim")
    table.add_column("Agent links", style="cyan")
    table.add_column("Canonical path", style="dim")
    for name, entry in entries.items():
        table.add_row(
            name,
            entry.disabled_at.split("T")[0],
            ", ".join(entry.agent_links) or "-",
            format_path(entry.canonical_path, config.home_directory),
        )
    console.print(table)


@app.command("search")
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Search query"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum number of results"),
):
    """Search skills.sh for installable skills"""
    if not query.strip():
        _fail("Please enter a search query")
    config = _config(ctx)
    try:
        results = search_skills(query, limit=limit, config=config.search)
    except SearchError as e:
        _fail(f"Search failed: {e}. Please try again.")

    if not results:
        console.print("[yellow]No skills found for that query. Try different keywords.[/yellow]")
        return

    table = Table(title=f"Search results ({len(results)})")
    table.add_column("Name", style="bold")
    table.add_column("Install with", style="cyan")
    table.add_column("Description", style="dim")
    for result in results:
        table.add_row(result.name, result.install_source, truncate(result.description, 60))
    console.print(table)


@app.command("add")
def add(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Skill source, e.g. owner/repo"),
    global_: bool = typer.Option(False, "--global", "-g", help="Install globally instead of for this project"),
    agent: Optional[List[str]] = typer.Option(None, "--agent", "-a", help="Agent id (repeatable)"),
):
    """Install a skill with the skills CLI"""
    config = _config(ctx)
    cli = SkillsCLI(config.commands, cwd=str(config.project_root))
    try:
        result = cli.add(source, scope="global" if global_ else "project", agents=agent or [])
    except SkillerError as e:
        _fail(str(e))
    _print_result(result, "Installed successfully!", "Installation failed")


@app.command("remove")
def remove(
    ctx: typer.Context,
    names: List[str] = typer.Argument(..., help="Skill names to remove"),
    global_: bool = typer.Option(False, "--global", "-g", help="Remove from the global scope"),
    agent: Optional[List[str]] = typer.Option(None, "--agent", "-a", help="Agent id (repeatable)"),
):
    """Remove skills with the skills CLI"""
    config = _config(ctx)
    cli = SkillsCLI(config.commands, cwd=str(config.project_root))
    failed = False
    for name in names:
        try:
            result = cli.remove(name, scope="global" if global_ else None, agents=agent or [])
        except SkillerError as e:
            _fail(str(e))
        if result.success:
            console.print(f"[green]Removed {name}[/green]")
        else:
            console.print(f"[red]Failed to remove {name}[/red]")
            console.print(result.output.strip())
            failed = True
    if failed:
        raise typer.Exit(1)


@app.command("check")
def check(ctx: typer.Context):
    """Check installed skills for updates"""
    config = _config(ctx)
    try:
        result = SkillsCLI(config.commands, cwd=str(config.project_root)).check()
    except SkillerError as e:
        _fail(f"Check failed: {e}")
    if result.success and not result.output.strip():
        console.print("[green]All skills are up to date.[/green]")
        return
    _print_result(result, "Check complete", "Check failed")


@app.command("update")
def update(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Skill to update (default: all)"),
):
    """Update one skill or all of them"""
    config = _config(ctx)
    lock = SkillManager(config).lock_store.read()
    if not lock.entries:
        console.print("[yellow]No skills installed to update.[/yellow]")
        return
    try:
        result = SkillsCLI(config.commands, cwd=str(config.project_root)).update(name)
    except SkillerError as e:
        _fail(f"Update failed: {e}")
    _print_result(result, "Update complete", "Update failed")


@app.command("move")
def move(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Skill to move"),
    to_scope: Optional[str] = typer.Option(None, "--to-scope", help="New scope: 'global' or 'project'"),
    agent: Optional[List[str]] = typer.Option(None, "--agent", "-a", help="New target agent id (repeatable)"),
):
    """Move a skill to another scope or set of agents"""
    if to_scope not in (None, "global", "project"):
        _fail(f"Invalid scope: {to_scope}. Use 'global' or 'project'.")
    if to_scope is None and not agent:
        _fail("Nothing to do: pass --to-scope or --agent.")

    config = _config(ctx)
    skill = SkillManager(config).get(name)
    if skill is None:
        _fail(f"Skill not found: {name}")

    cli = SkillsCLI(config.commands, cwd=str(config.project_root))
    try:
        cli.move(skill, scope=to_scope, agents=agent or None)
    except ExternalProcessError as e:
        console.print(f"[red]Move failed: {e}[/red]")
        if skill.lock_entry and skill.lock_entry.source and "add" in e.command:
            console.print(
                f"[yellow]The skill was removed but reinstall failed. "
                f"You may need to reinstall manually: npx skills add {skill.lock_entry.source}[/yellow]"
            )
        raise typer.Exit(1)
    except SkillerError as e:
        _fail(str(e))
    console.print(f"[green]Moved {name} successfully[/green]")


@app.command("doctor")
def doctor(ctx: typer.Context):
    """Check paths, ledgers and the skills CLI"""
    config = _config(ctx)
    home = config.home_directory
    manager = SkillManager(config)
    cli = SkillsCLI(config.commands)

    available = cli.is_available()
    version = cli.version() if available else None
    lock = manager.lock_store.read()
    disabled = manager.disabled_store.read()

    def status(ok: bool, good: str, bad: str) -> str:
        return f"[green]{good}[/green]" if ok else f"[yellow]{bad}[/yellow]"

    console.print("[bold]Runtime[/bold]")
    console.print(f"  {config.commands.executable}:  {status(available, 'available', 'not found - install Node.js >= 18')}")
    console.print(f"  skills CLI:  {version or '[dim]not detected[/dim]'}")
    console.print()
    console.print("[bold]Paths[/bold]")
    console.print(f"  Project root:  [dim]{config.project_root}[/dim]")
    console.print(f"  Skills store:  {status(config.store_dir.is_dir(), format_path(config.store_dir, home), 'not found')}")
    console.print(f"  Lock file:  {status(config.lock_path.exists(), format_path(config.lock_path, home), 'not found')}")
    console.print(f"  Disabled manifest:  {status(config.disabled_path.exists(), format_path(config.disabled_path, home), 'not created yet')}")
    console.print()
    console.print("[bold]Stats[/bold]")
    console.print(f"  Detected agents:  {len(manager.catalog.detected())} of {len(manager.catalog.agents)}")
    console.print(f"  Lock entries:  {len(lock.entries)}")
    console.print(f"  Deactivated skills:  {len(disabled.entries)}")

    installed = {skill.name.lower() for skill in manager.discover()}
    missing = [
        name for name in lock.entries
        if name.lower() not in installed and name not in disabled.entries
    ]
    if missing:
        console.print()
        console.print(f"[yellow]{format_count(len(missing), 'lock entry', 'lock entries')} without an installed skill:[/yellow]")
        for name in missing:
            console.print(f"  {name}")


if __name__ == "__main__":
    app()
