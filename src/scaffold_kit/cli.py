"""scaffold-kit command line: create projects and manage their plugins."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import rich.console
import rich.prompt
import rich.table
import typer
from rich.logging import RichHandler
from rich.markup import escape

from .bootstrap import Bootstrapper
from .config import ToolConfig
from .errors import InstallRoutineFailedError, MalformedError, NotFoundError, ScaffoldError
from .loaders.manifest import discover_plugin_dirs
from .manager import PluginManager, make_plugin_manager
from .models.template import PlaceholderSpec
from .validation import ValidationResult, lint_plugin

app = typer.Typer(
    help="Create projects from a template and manage their plugins.",
    no_args_is_help=True,
)
plugin_app = typer.Typer(help="List, describe, add and remove plugins.", no_args_is_help=True)
app.add_typer(plugin_app, name="plugin")

console = rich.console.Console()

_STATUS_STYLE = {"available": "green", "planned": "yellow", "unknown": "dim"}


class RichPrompter:
    """Interactive prompts for bootstrap."""

    def ask(self, key: str, spec: PlaceholderSpec) -> str:
        return rich.prompt.Prompt.ask(
            escape(spec.description), default=spec.default or "", console=console
        )

    def choose_plugins(self, optional: list[str]) -> list[str]:
        console.print("\n[bold]Available Plugins[/bold]")
        for index, name in enumerate(optional, start=1):
            console.print(f"  {index}. [yellow]{escape(name)}[/yellow]")
        answer = rich.prompt.Prompt.ask(
            "Select plugins to include (comma-separated numbers, or Enter for none)",
            default="",
            console=console,
        )
        chosen: list[str] = []
        for part in answer.split(","):
            part = part.strip()
            if part.isdigit() and 1 <= int(part) <= len(optional):
                chosen.append(optional[int(part) - 1])
        return chosen


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    plugins_dir: Optional[Path] = typer.Option(
        None, "--plugins-dir", help="Directory holding plugin directories."
    ),
    template_dir: Optional[Path] = typer.Option(
        None, "--template-dir", help="Project template directory."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
) -> None:
    """Create projects from a template and manage their plugins."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )
    config = ToolConfig.default().with_overrides(plugins_dir, template_dir)
    ctx.obj = {"config": config, "verbose": verbose}


def _config(ctx: typer.Context) -> ToolConfig:
    return ctx.obj["config"]


def _manager(ctx: typer.Context) -> PluginManager:
    return make_plugin_manager(_config(ctx).plugins_root)


@contextmanager
def _fatal_errors(ctx: typer.Context) -> Iterator[None]:
    try:
        yield
    except ScaffoldError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        if isinstance(e, InstallRoutineFailedError) and ctx.obj.get("verbose"):
            console.print(f"[yellow]{escape(e.trace)}[/yellow]")
        raise typer.Exit(1) from e
    except OSError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


@app.command()
def new(
    ctx: typer.Context,
    project_name: str = typer.Argument(..., help="Directory name for the new project."),
) -> None:
    """Create a new project from the template."""
    with _fatal_errors(ctx):
        bootstrapper = Bootstrapper(_config(ctx), _manager(ctx), RichPrompter())
        result = bootstrapper.run(project_name)

    for name, reason in result.skipped.items():
        console.print(f"[yellow]Skipped plugin {escape(name)}:[/yellow] {escape(reason)}")
    console.print(f"[green]Project {escape(project_name)} created successfully![/green]")
    console.print("\n[bold]Next Steps:[/bold]")
    console.print(f"  [cyan]cd {escape(project_name)}[/cyan]")
    console.print("  [cyan]npm install[/cyan]")
    console.print("  [cyan]npm run dev[/cyan]")


@plugin_app.command("list")
def list_plugins(ctx: typer.Context) -> None:
    """List available plugins."""
    summaries = _manager(ctx).list_plugins()
    if not summaries:
        console.print("No plugins found")
        return
    table = rich.table.Table(title="Available Plugins")
    table.add_column("Plugin", style="bold")
    table.add_column("Status")
    table.add_column("Version")
    table.add_column("Description")
    for summary in summaries:
        style = _STATUS_STYLE.get(summary.status, "")
        description = summary.description or ""
        if summary.notes:
            description = f"{description}\nNote: {summary.notes}".strip()
        table.add_row(
            escape(summary.name),
            f"[{style}]{summary.status}[/{style}]",
            escape(summary.version or ""),
            escape(description),
        )
    console.print(table)


@plugin_app.command()
def info(
    ctx: typer.Context,
    plugin_name: str = typer.Argument(..., help="Plugin to describe."),
) -> None:
    """Show detailed information about a plugin."""
    with _fatal_errors(ctx):
        details = _manager(ctx).info(plugin_name)

    manifest = details.plugin.manifest
    console.rule(f"Plugin: {escape(plugin_name)}")
    console.print(f"  Name:        {escape(manifest.name or plugin_name)}")
    console.print(f"  Version:     {escape(manifest.version or 'N/A')}")
    console.print(f"  Author:      {escape(manifest.author or 'N/A')}")
    if manifest.description:
        console.print(f"\n[bold]Description[/bold]\n  {escape(manifest.description)}")

    style = _STATUS_STYLE.get(manifest.status, "")
    console.print(f"\n[bold]Status[/bold]\n  [{style}]{manifest.status}[/{style}]")
    if manifest.notes:
        console.print(f"  [yellow]Note: {escape(manifest.notes)}[/yellow]")

    if manifest.dependencies is not None:
        console.print("\n[bold]Dependencies[/bold]")
        for label, names in (
            ("Development", manifest.dev_dependencies),
            ("Production", manifest.prod_dependencies),
        ):
            if names:
                console.print(f"  [cyan]{label} Dependencies:[/cyan]")
                for dep in names:
                    console.print(f"    - {escape(dep)}")
            else:
                console.print(f"  [dim]{label} Dependencies: None[/dim]")
    if manifest.peer_dependencies:
        console.print("  [cyan]Peer Dependencies:[/cyan]")
        for dep, version in manifest.peer_dependencies.items():
            console.print(f"    - {escape(dep)}@{escape(version)}")

    console.print("\n[bold]Configuration Files[/bold]")
    if details.config_files:
        for relative, present in details.config_files.items():
            marker = "[green]✓[/green]" if present else "[red]✗[/red]"
            console.print(f"    {marker} {escape(relative)}")
    else:
        console.print("  [dim]No configuration files[/dim]")

    console.print("\n[bold]NPM Scripts[/bold]")
    if manifest.scripts:
        for name, command in manifest.scripts.items():
            console.print(f"    [green]{escape(name)}:[/green] [dim]{escape(command)}[/dim]")
    else:
        console.print("  [dim]No NPM scripts[/dim]")

    enabled = [feature for feature, on in manifest.features.items() if on]
    if enabled:
        console.print("\n[bold]Features[/bold]")
        for feature in enabled:
            console.print(f"  [green]✓ {escape(feature)}[/green]")

    console.print("\n[bold]Installation[/bold]")
    if details.readiness == "planned":
        console.print("  [yellow]This plugin is not yet available[/yellow]")
        console.print(f"  [yellow]{escape(manifest.notes or 'Coming soon')}[/yellow]")
    elif details.readiness == "manual":
        console.print("  [yellow]This plugin has no install routine[/yellow]")
        console.print("  [dim]Its files will be copied into the project as-is[/dim]")
    else:
        console.print("  [green]Ready to install[/green]")
        console.print(f"  [cyan]Run: scaffold-kit plugin add {escape(plugin_name)}[/cyan]")


@plugin_app.command()
def add(
    ctx: typer.Context,
    plugin_name: str = typer.Argument(..., help="Plugin to install."),
    project: Path = typer.Option(Path("."), "--project", "-p", help="Project root."),
) -> None:
    """Add a plugin to an existing project."""
    with _fatal_errors(ctx):
        result = _manager(ctx).install(plugin_name, project)

    if not result.installed:
        console.print(
            f"[yellow]Plugin '{escape(plugin_name)}' is planned but not yet available[/yellow]"
        )
        notes = result.notes or "This plugin will be available in a future release"
        console.print(f"  [yellow]{escape(notes)}[/yellow]")
        return
    console.print(f"[green]Plugin '{escape(plugin_name)}' installed successfully[/green]")
    console.print('Run "npm install" to install dependencies')


@plugin_app.command()
def remove(
    ctx: typer.Context,
    plugin_name: str = typer.Argument(..., help="Plugin to remove."),
    project: Path = typer.Option(Path("."), "--project", "-p", help="Project root."),
) -> None:
    """Remove a plugin from an existing project."""
    with _fatal_errors(ctx):
        result = _manager(ctx).remove(plugin_name, project)

    if result.descriptor_changed:
        console.print("[green]Updated package.json[/green]")
    if result.removed_files:
        console.print(
            f"[green]Removed {len(result.removed_files)} configuration file(s)[/green]"
        )
    for relative, error in result.failed_files.items():
        console.print(f"[yellow]Could not remove {escape(relative)}: {escape(error)}[/yellow]")
    console.print(f"[green]Plugin '{escape(plugin_name)}' removed successfully[/green]")
    if result.descriptor_changed:
        console.print('Run "npm install" to update installed packages')


@plugin_app.command()
def lint(
    ctx: typer.Context,
    plugin_name: Optional[str] = typer.Argument(None, help="Plugin to lint (default: all)."),
) -> None:
    """Check plugin manifests and that install routines only write declared keys."""
    manager = _manager(ctx)
    plugins_root = manager.plugins_root
    names = [plugin_name] if plugin_name else [p.name for p in discover_plugin_dirs(plugins_root)]

    failed = 0
    for name in names:
        try:
            result = lint_plugin(plugins_root / name, manager.routine_for(name))
        except (NotFoundError, MalformedError) as e:
            result = ValidationResult()
            result.error("manifest", str(e))
        _print_lint(name, result)
        if not result.valid:
            failed += 1

    if failed:
        console.print(f"\n[red bold]{failed} plugin(s) with errors.[/red bold]")
        raise typer.Exit(1)
    console.print("\n[green bold]0 errors found.[/green bold]")


def _print_lint(name: str, result: ValidationResult) -> None:
    if not result.issues:
        console.print(f"  {escape(name)}: [green]OK[/green]")
        return
    console.print(f"  {escape(name)}:")
    for issue in result.warnings:
        console.print(f"    [yellow]Warning:[/yellow] {escape(issue.message)}")
    for issue in result.errors:
        console.print(f"    [red]Error:[/red] {escape(issue.message)}")
