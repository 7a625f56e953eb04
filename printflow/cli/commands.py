"""CLI commands for printflow."""

import sys
from datetime import MAXYEAR, MINYEAR, date
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from printflow import __version__, __logo__

app = typer.Typer(
    name="printflow",
    help=f"{__logo__} printflow - Print production tracker",
    no_args_is_help=True,
)

console = Console()

STATUS_COLORS = {
    "done": "green",
    "in_progress": "yellow",
    "not_started": "white",
    "unplanned": "dim",
}

DELIVERY_ALIASES = {
    "pickup": "自取",
    "self-pickup": "自取",
    "self_pickup": "自取",
    "delivery": "宅配",
}


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} printflow v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """printflow - Print production tracker."""
    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def _open_repository():
    """Load config and return (repository, snapshot)."""
    from printflow.config.loader import load_config
    from printflow.storage.repository import ProjectRepository

    config = load_config()
    _configure_logging(config.log_level)
    repo = ProjectRepository(
        config.data_path,
        default_title=config.default_title,
        autosave_delay_ms=config.autosave_delay_ms,
    )
    snapshot = repo.load()
    for path in repo.quarantined:
        console.print(f"[yellow]Unreadable data was moved to {path}[/yellow]")
    return repo, snapshot


def _get_project_or_exit(snapshot, project_id: int):
    project = snapshot.get_project(project_id)
    if project is None:
        console.print(f"[red]Project {project_id} not found[/red]")
        raise typer.Exit(1)
    return project


def _parse_stage(text: str):
    """
    Parse a stage given as ``name[@YYYY-MM-DD][#tag]``.

    Examples: ``打樣確認@2024-05-01``, ``燙金加工@2024-05-03#燙金``.
    """
    from printflow.projects.models import Stage

    tag = None
    if "#" in text:
        text, tag = text.rsplit("#", 1)
    deadline = ""
    if "@" in text:
        text, deadline = text.rsplit("@", 1)
    return Stage(name=text.strip(), deadline=deadline.strip(), tag=(tag or "").strip() or None)


def _parse_delivery(value: Optional[str]):
    from printflow.projects.models import DeliveryMethod

    if value is None:
        return None
    method = DeliveryMethod.parse(DELIVERY_ALIASES.get(value.lower(), value))
    if method is None:
        console.print(f"[red]Unknown delivery method '{value}' (use pickup or delivery)[/red]")
        raise typer.Exit(1)
    return method


def _tag_markup(tag: str, overrides) -> str:
    """Render a tag as a colored chip using its palette entry."""
    from printflow.projects.tags import color_for, parse_token

    color = parse_token(color_for(tag, overrides))
    if color is None:
        return f"[reverse] {escape(tag)} [/reverse]"
    return f"[{color.text} on {color.background}] {escape(tag)} [/]"


def _deadline_markup(deadline: str) -> str:
    from printflow.projects.deadlines import classify

    status = classify(deadline)
    shown = deadline or "-"
    return f"[{status.color}]{shown}  {status.label}[/]"


# ============================================================================
# Onboard / Setup
# ============================================================================


@app.command()
def onboard():
    """Initialize printflow configuration and data directory."""
    from printflow.config.loader import get_config_path, load_config, save_config
    from printflow.storage.repository import ProjectRepository

    config_path = get_config_path()

    if config_path.exists():
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    config = load_config()
    save_config(config, config_path)
    console.print(f"[green]✓[/green] Created config at {config_path}")

    ProjectRepository(config.data_path, default_title=config.default_title).load()
    console.print(f"[green]✓[/green] Data directory at {config.data_path}")

    console.print(f"\n{__logo__} printflow is ready!")
    console.print("\nNext steps:")
    console.print("  1. Open a project: [cyan]printflow projects add \"海報\" --deadline 2024-05-01[/cyan]")
    console.print("  2. See the board: [cyan]printflow board[/cyan]")


@app.command()
def title(new_title: Optional[str] = typer.Argument(None, help="New application title")):
    """Show or change the application title."""
    from printflow.projects.store import set_app_title

    repo, snapshot = _open_repository()
    if new_title is None:
        console.print(snapshot.app_title)
        return

    repo.commit(snapshot, set_app_title(snapshot, new_title))
    console.print(f"[green]✓[/green] Title set to {new_title}")


# ============================================================================
# Views
# ============================================================================


@app.command()
def board():
    """Show active projects, most pressing first."""
    from printflow.projects.sorting import sort_board
    from printflow.projects.stages import current_stage_name, project_status

    repo, snapshot = _open_repository()
    projects = sort_board(snapshot.projects)

    if not projects:
        console.print("No active projects.")
        console.print("Add one with: [cyan]printflow projects add \"My Job\" --deadline YYYY-MM-DD[/cyan]")
        return

    table = Table(title=snapshot.app_title)
    table.add_column("ID", style="cyan")
    table.add_column("Project")
    table.add_column("Tags")
    table.add_column("Deadline")
    table.add_column("Current Stage")
    table.add_column("Status")

    for project in projects:
        status = project_status(project)
        table.add_row(
            str(project.id),
            escape(project.name),
            " ".join(_tag_markup(t, snapshot.tag_colors) for t in project.tags),
            _deadline_markup(project.deadline),
            escape(current_stage_name(project)),
            f"[{STATUS_COLORS[status.value]}]{status.label}[/]",
        )

    console.print(table)


@app.command("calendar")
def calendar_view(
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Year (default: this year)"),
    month: Optional[int] = typer.Option(None, "--month", "-m", help="Month 1-12 (default: this month)"),
    day: Optional[str] = typer.Option(None, "--day", "-d", help="List events of one day (YYYY-MM-DD)"),
):
    """Show stage and project deadlines on a month calendar."""
    from printflow.projects.calendar import event_color, events_in_month, events_on, month_grid
    from printflow.projects.dates import parse_date
    from printflow.projects.tags import parse_token

    repo, snapshot = _open_repository()

    if day is not None:
        target = parse_date(day)
        if target is None:
            console.print(f"[red]Invalid date: {day}[/red]")
            raise typer.Exit(1)
        events = events_on(target, snapshot.projects)
        if not events:
            console.print(f"Nothing due on {target.isoformat()}.")
            return
        table = Table(title=f"Due {target.isoformat()}")
        table.add_column("Kind")
        table.add_column("Project ID", style="cyan")
        table.add_column("Project")
        table.add_column("Item")
        for event in events:
            kind = "Stage" if event.kind == "stage" else "[bold]Deadline[/bold]"
            if event.stage_index is not None:
                item = f"{event.stage_index + 1}. {event.label}"
            else:
                item = event.label
            table.add_row(kind, str(event.project.id), escape(event.project.name), escape(item))
        console.print(table)
        return

    today = date.today()
    year = year if year is not None else today.year
    month = month if month is not None else today.month
    if not MINYEAR < year < MAXYEAR:
        # Sunday-first weeks of the edge years spill outside the date range
        console.print(f"[red]Year must be {MINYEAR + 1}-{MAXYEAR - 1}, got {year}[/red]")
        raise typer.Exit(1)
    if not 1 <= month <= 12:
        console.print(f"[red]Month must be 1-12, got {month}[/red]")
        raise typer.Exit(1)

    by_day = events_in_month(year, month, snapshot.projects)

    table = Table(title=f"{year} 年 {month} 月", show_lines=True)
    for i, name in enumerate(["日", "一", "二", "三", "四", "五", "六"]):
        table.add_column(name, style="red" if i in (0, 6) else "", width=14, overflow="ellipsis")

    for week in month_grid(year, month):
        cells = []
        for cell in week:
            if cell is None:
                cells.append("")
                continue
            number = f"[reverse]{cell.day}[/reverse]" if cell == today else str(cell.day)
            lines = [number]
            for event in by_day.get(cell, []):
                color = parse_token(event_color(event, snapshot.tag_colors))
                text = escape(event.label) if event.kind == "stage" else f"★ {escape(event.label)}"
                lines.append(f"[{color.text} on {color.background}]{text}[/]" if color else text)
            cells.append("\n".join(lines))
        table.add_row(*cells)

    console.print(table)


@app.command()
def workspace():
    """Show active projects grouped by craft tag."""
    from printflow.projects.tags import color_for, parse_token
    from printflow.projects.workspace import group_by_tag, workspace_rows

    repo, snapshot = _open_repository()
    groups = group_by_tag(snapshot.projects)

    if not groups:
        console.print("No active project uses a craft tag.")
        return

    emphasis_styles = {"overdue": "dim strike", "urgent": "bold red", "plain": ""}

    for tag, projects in groups.items():
        color = parse_token(color_for(tag, snapshot.tag_colors))
        table = Table(
            title=_tag_markup(tag, snapshot.tag_colors),
            caption=f"COUNT: {len(projects)}",
            border_style=color.border if color else None,
        )
        table.add_column("ID", style="cyan")
        table.add_column("Project")
        table.add_column("Current Stage")
        table.add_column("Due Date")
        table.add_column("Status", justify="right")

        for row in workspace_rows(projects):
            style = emphasis_styles[row.deadline_emphasis]
            due = f"[{style}]{row.project.deadline}[/]" if style else row.project.deadline
            table.add_row(str(row.project.id), escape(row.project.name), escape(row.current_stage), due, row.badge)

        console.print(table)


@app.command()
def archive():
    """Show archived projects, latest deadline first."""
    from printflow.projects.sorting import sort_archive

    repo, snapshot = _open_repository()
    projects = sort_archive(snapshot.projects)

    if not projects:
        console.print("No archived projects.")
        return

    table = Table(title="Archive")
    table.add_column("ID", style="cyan")
    table.add_column("Project", style="dim")
    table.add_column("Archived Deadline")
    table.add_column("Tags")

    for project in projects:
        table.add_row(str(project.id), escape(project.name), project.deadline or "-", escape(", ".join(project.tags)))

    console.print(table)


# ============================================================================
# Projects Commands
# ============================================================================

projects_app = typer.Typer(help="Create and edit projects")
app.add_typer(projects_app, name="projects")


@projects_app.command("add")
def projects_add(
    name: str = typer.Argument(..., help="Project name"),
    deadline: str = typer.Option(..., "--deadline", "-d", help="Total deadline (YYYY-MM-DD)"),
    tags: list[str] = typer.Option([], "--tag", "-t", help="Tag (repeatable)"),
    stages: list[str] = typer.Option([], "--stage", "-s", help="Stage as name[@YYYY-MM-DD][#tag] (repeatable)"),
    delivery: Optional[str] = typer.Option(None, "--delivery", help="pickup or delivery"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Free-text notes"),
):
    """Open a new project."""
    from printflow.projects.store import add_global_tag, create_project, new_project, validate_project_form

    repo, snapshot = _open_repository()

    issues = validate_project_form(name, deadline)
    if issues:
        console.print("[red]Cannot create project:[/red]")
        for issue in issues:
            console.print(f"  - {issue}")
        raise typer.Exit(1)

    project = new_project(
        snapshot,
        name=name,
        deadline=deadline,
        tags=[t.strip() for t in tags if t.strip()],
        stages=[_parse_stage(s) for s in stages] if stages else None,
        delivery_method=_parse_delivery(delivery),
        notes=notes,
    )

    updated = create_project(snapshot, project)
    for tag in project.tags:
        updated = add_global_tag(updated, tag)
    repo.commit(snapshot, updated)

    console.print(f"[green]✓[/green] Created project: {project.id}")
    console.print(f"  Deadline: {_deadline_markup(project.deadline)}")


@projects_app.command("show")
def projects_show(project_id: int = typer.Argument(..., help="Project ID")):
    """Show project details and stages."""
    from printflow.projects.deadlines import is_stage_urgent
    from printflow.projects.stages import active_stage_deadline, current_stage_name, project_status

    repo, snapshot = _open_repository()
    project = _get_project_or_exit(snapshot, project_id)

    status = project_status(project)
    console.print(f"# {project.name}")
    console.print(f"  ID: {project.id}")
    console.print(f"  Status: [{STATUS_COLORS[status.value]}]{status.label}[/]" + ("  [dim](archived)[/dim]" if project.archived else ""))
    console.print(f"  Deadline: {_deadline_markup(project.deadline)}")
    console.print(f"  Current stage: {current_stage_name(project)}")
    console.print(f"  Working towards: {active_stage_deadline(project) or '-'}")
    if project.tags:
        console.print(f"  Tags: {' '.join(_tag_markup(t, snapshot.tag_colors) for t in project.tags)}")
    if project.delivery_method:
        console.print(f"  Delivery: {project.delivery_method.value}")
    if project.notes:
        console.print(f"  Notes: {project.notes}")

    if project.stages:
        console.print(f"\n## Stages ({len(project.stages)})")
        for i, stage in enumerate(project.stages, start=1):
            icon = "✓" if stage.completed else "○"
            urgent = " [bold red]![/bold red]" if is_stage_urgent(stage) else ""
            due = f" [dim]{stage.deadline}[/dim]" if stage.deadline else ""
            tag = f" #{stage.tag}" if stage.tag else ""
            console.print(f"  {icon} {i}. {stage.name}{tag}{due}{urgent}")


@projects_app.command("edit")
def projects_edit(
    project_id: int = typer.Argument(..., help="Project ID"),
    name: Optional[str] = typer.Option(None, "--name", help="New name"),
    deadline: Optional[str] = typer.Option(None, "--deadline", "-d", help="New total deadline"),
    tags: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Replace tags (repeatable)"),
    clear_tags: bool = typer.Option(False, "--clear-tags", help="Remove all tags (combine with --tag to start over)"),
    add_stages: list[str] = typer.Option([], "--add-stage", help="Append stage name[@date][#tag]"),
    remove_stage: Optional[int] = typer.Option(None, "--remove-stage", help="Remove stage by number"),
    delivery: Optional[str] = typer.Option(None, "--delivery", help="pickup or delivery"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Replace notes"),
):
    """Edit a project (full replacement of the changed fields)."""
    from dataclasses import replace

    from printflow.projects.store import update_project, validate_project_form

    repo, snapshot = _open_repository()
    project = _get_project_or_exit(snapshot, project_id)

    changes = {}
    if name is not None:
        changes["name"] = name.strip()
    if deadline is not None:
        changes["deadline"] = deadline.strip()
    if clear_tags:
        changes["tags"] = ()
    if tags:
        unique: list[str] = []
        for tag in (t.strip() for t in tags):
            if tag and tag not in unique:
                unique.append(tag)
        changes["tags"] = tuple(unique)
    if delivery is not None:
        changes["delivery_method"] = _parse_delivery(delivery)
    if notes is not None:
        changes["notes"] = notes

    stages = list(project.stages)
    if remove_stage is not None:
        if not 1 <= remove_stage <= len(stages):
            console.print(f"[red]Stage {remove_stage} does not exist[/red]")
            raise typer.Exit(1)
        del stages[remove_stage - 1]
    stages.extend(_parse_stage(s) for s in add_stages)
    changes["stages"] = tuple(stages)

    edited = replace(project, **changes)
    issues = validate_project_form(edited.name, edited.deadline)
    if issues:
        console.print("[red]Cannot save project:[/red]")
        for issue in issues:
            console.print(f"  - {issue}")
        raise typer.Exit(1)

    repo.commit(snapshot, update_project(snapshot, edited))
    console.print(f"[green]✓[/green] Updated project {project_id}")


@projects_app.command("delete")
def projects_delete(
    project_id: int = typer.Argument(..., help="Project ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a project."""
    from printflow.projects.store import delete_project

    repo, snapshot = _open_repository()
    project = _get_project_or_exit(snapshot, project_id)

    if not yes and not typer.confirm(f"Delete project '{project.name}'?"):
        raise typer.Exit()

    repo.commit(snapshot, delete_project(snapshot, project_id))
    console.print(f"[green]✓[/green] Deleted project {project_id}")


@projects_app.command("archive")
def projects_archive(
    project_id: int = typer.Argument(..., help="Project ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Archive a project, or restore it if already archived."""
    from printflow.projects.store import toggle_archive

    repo, snapshot = _open_repository()
    project = _get_project_or_exit(snapshot, project_id)

    if not project.archived and not yes and not typer.confirm(f"Archive project '{project.name}'?"):
        raise typer.Exit()

    repo.commit(snapshot, toggle_archive(snapshot, project_id))
    verb = "Restored" if project.archived else "Archived"
    console.print(f"[green]✓[/green] {verb} project {project_id}")


@projects_app.command("toggle-stage")
def projects_toggle_stage(
    project_id: int = typer.Argument(..., help="Project ID"),
    stage: int = typer.Argument(..., help="Stage number (1-based)"),
):
    """Mark a stage done, or reopen it."""
    from printflow.projects.stages import current_stage_name
    from printflow.projects.store import toggle_stage_completed

    repo, snapshot = _open_repository()
    _get_project_or_exit(snapshot, project_id)

    updated = toggle_stage_completed(snapshot, project_id, stage - 1)
    if updated is snapshot:
        console.print(f"[red]Stage {stage} does not exist[/red]")
        raise typer.Exit(1)

    repo.commit(snapshot, updated)
    project = updated.get_project(project_id)
    done = project.stages[stage - 1].completed
    console.print(f"[green]✓[/green] Stage {stage} {'done' if done else 'reopened'}")
    console.print(f"  Current stage: {current_stage_name(project)}")


@projects_app.command("clear-archived")
def projects_clear_archived(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Permanently delete every archived project."""
    from printflow.projects.store import clear_archived

    repo, snapshot = _open_repository()
    count = len(snapshot.archived_projects)
    if count == 0:
        console.print("No archived projects.")
        return

    if not yes and not typer.confirm(f"Permanently delete {count} archived projects?"):
        raise typer.Exit()

    repo.commit(snapshot, clear_archived(snapshot))
    console.print(f"[green]✓[/green] Deleted {count} archived projects")


# ============================================================================
# Tags Commands
# ============================================================================

tags_app = typer.Typer(help="Manage the tag registry and tag colors")
app.add_typer(tags_app, name="tags")


@tags_app.command("list")
def tags_list():
    """List registered tags with their colors."""
    from printflow.projects.tags import derived_color

    repo, snapshot = _open_repository()

    used = {t for p in snapshot.projects for t in p.tags}
    tags = list(snapshot.available_tags) + sorted(used - set(snapshot.available_tags))
    if not tags:
        console.print("No tags yet.")
        return

    table = Table(title="Tags")
    table.add_column("Tag")
    table.add_column("Color")
    table.add_column("Registered", justify="center")
    table.add_column("Projects", justify="right")

    for tag in tags:
        color = "custom" if tag in snapshot.tag_colors else derived_color(tag).name
        count = sum(1 for p in snapshot.projects if tag in p.tags)
        registered = "✓" if tag in snapshot.available_tags else ""
        table.add_row(_tag_markup(tag, snapshot.tag_colors), color, registered, str(count))

    console.print(table)


@tags_app.command("add")
def tags_add(tag: str = typer.Argument(..., help="Tag to register")):
    """Register a tag."""
    from printflow.projects.store import add_global_tag

    repo, snapshot = _open_repository()
    updated = add_global_tag(snapshot, tag)
    if updated is snapshot:
        console.print(f"[yellow]Tag '{tag.strip()}' already registered[/yellow]")
        return

    repo.commit(snapshot, updated)
    console.print(f"[green]✓[/green] Added tag {tag.strip()}")


@tags_app.command("remove")
def tags_remove(
    tag: str = typer.Argument(..., help="Tag to remove from the registry"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Remove a tag from the registry. Projects keep it."""
    from printflow.projects.store import remove_global_tag

    repo, snapshot = _open_repository()
    if tag not in snapshot.available_tags:
        console.print(f"[yellow]Tag '{tag}' is not registered[/yellow]")
        return

    if not yes and not typer.confirm(f"Remove '{tag}' from the tag registry?"):
        raise typer.Exit()

    repo.commit(snapshot, remove_global_tag(snapshot, tag))
    console.print(f"[green]✓[/green] Removed tag {tag}")


@tags_app.command("color")
def tags_color(
    tag: str = typer.Argument(..., help="Tag"),
    color: Optional[str] = typer.Argument(None, help="Palette index, palette name or color token"),
    reset: bool = typer.Option(False, "--reset", help="Go back to the derived color"),
):
    """Pin a color to a tag, or show the palette."""
    from printflow.projects.store import set_tag_color
    from printflow.projects.tags import TAG_PALETTE, resolve_color

    repo, snapshot = _open_repository()

    if reset:
        repo.commit(snapshot, set_tag_color(snapshot, tag, None))
        console.print(f"[green]✓[/green] {tag} uses its derived color again")
        return

    if color is None:
        table = Table(title="Palette")
        table.add_column("#", justify="right")
        table.add_column("Name")
        for i, entry in enumerate(TAG_PALETTE):
            table.add_row(str(i), f"[{entry.text} on {entry.background}] {entry.name} [/]")
        console.print(table)
        return

    token = resolve_color(color)
    if token is None:
        console.print(f"[red]Unknown color '{color}'[/red]")
        raise typer.Exit(1)

    updated = set_tag_color(snapshot, tag, token)
    repo.commit(snapshot, updated)
    console.print(f"[green]✓[/green] {_tag_markup(tag, updated.tag_colors)}")


# ============================================================================
# Memos Commands
# ============================================================================

memos_app = typer.Typer(help="Notebook pages")
app.add_typer(memos_app, name="memos")


def _get_memo_or_exit(snapshot, memo_ref: str):
    """Find a memo by tab number (1-based) or id prefix."""
    from printflow.projects.memos import get_memo

    if memo_ref.isdigit() and 1 <= int(memo_ref) <= len(snapshot.memos):
        return snapshot.memos[int(memo_ref) - 1]
    memo = get_memo(snapshot, memo_ref)
    if memo is None:
        matches = [m for m in snapshot.memos if m.id.startswith(memo_ref)]
        memo = matches[0] if len(matches) == 1 else None
    if memo is None:
        console.print(f"[red]Memo {memo_ref} not found[/red]")
        raise typer.Exit(1)
    return memo


@memos_app.command("list")
def memos_list():
    """List notebook pages."""
    from datetime import datetime

    repo, snapshot = _open_repository()

    table = Table(title="Memos")
    table.add_column("#", justify="right")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Updated")

    for i, memo in enumerate(snapshot.memos, start=1):
        updated = datetime.fromtimestamp(memo.updated_at / 1000).strftime("%Y-%m-%d %H:%M") if memo.updated_at else "-"
        table.add_row(str(i), memo.id[:8], memo.title, updated)

    console.print(table)


@memos_app.command("add")
def memos_add(title: str = typer.Argument("新記事", help="Page title")):
    """Add a notebook page."""
    from printflow.projects.memos import add_memo

    repo, snapshot = _open_repository()
    updated = repo.commit(snapshot, add_memo(snapshot, title))
    console.print(f"[green]✓[/green] Added memo {updated.memos[-1].id[:8]}: {title}")


@memos_app.command("show")
def memos_show(memo_ref: str = typer.Argument(..., help="Tab number or memo ID")):
    """Print a notebook page."""
    repo, snapshot = _open_repository()
    memo = _get_memo_or_exit(snapshot, memo_ref)
    console.print(f"# {memo.title}\n")
    console.print(memo.content or "[dim]Empty page[/dim]", markup=False)


@memos_app.command("write")
def memos_write(
    memo_ref: str = typer.Argument(..., help="Tab number or memo ID"),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="New content"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read content from file"),
    append: bool = typer.Option(False, "--append", "-a", help="Append instead of replacing"),
):
    """Replace (or append to) a page's content."""
    from printflow.projects.memos import update_memo_content
    from printflow.storage.repository import MEMOS_KEY

    if (text is None) == (file is None):
        console.print("[red]Give exactly one of --text or --file[/red]")
        raise typer.Exit(1)

    repo, snapshot = _open_repository()
    memo = _get_memo_or_exit(snapshot, memo_ref)

    content = text if text is not None else file.read_text(encoding="utf-8")
    if append and memo.content:
        content = f"{memo.content}\n{content}"

    updated = update_memo_content(snapshot, memo.id, content)
    repo.save_debounced(updated, MEMOS_KEY)
    repo.flush()
    console.print(f"[green]✓[/green] Saved {memo.title}")


@memos_app.command("rename")
def memos_rename(
    memo_ref: str = typer.Argument(..., help="Tab number or memo ID"),
    title: str = typer.Argument(..., help="New title"),
):
    """Rename a notebook page."""
    from printflow.projects.memos import rename_memo

    repo, snapshot = _open_repository()
    memo = _get_memo_or_exit(snapshot, memo_ref)
    updated = rename_memo(snapshot, memo.id, title)
    if updated is snapshot:
        console.print("[red]Title cannot be empty[/red]")
        raise typer.Exit(1)

    repo.commit(snapshot, updated)
    console.print(f"[green]✓[/green] Renamed to {title}")


@memos_app.command("delete")
def memos_delete(
    memo_ref: str = typer.Argument(..., help="Tab number or memo ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a notebook page (at least one page is kept)."""
    from printflow.projects.memos import delete_memo

    repo, snapshot = _open_repository()
    memo = _get_memo_or_exit(snapshot, memo_ref)

    if len(snapshot.memos) <= 1:
        console.print("[yellow]At least one page has to stay[/yellow]")
        raise typer.Exit(1)

    if not yes and not typer.confirm(f"Delete page '{memo.title}'?"):
        raise typer.Exit()

    repo.commit(snapshot, delete_memo(snapshot, memo.id))
    console.print(f"[green]✓[/green] Deleted {memo.title}")


# ============================================================================
# Backup Commands
# ============================================================================


@app.command("export")
def export_data(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Backup file (default: printflow-backup-<date>.json)"),
):
    """Write a backup of all data."""
    from printflow.storage.backup import backup_filename, dump_backup

    repo, snapshot = _open_repository()
    path = output or Path(backup_filename())
    path.write_text(dump_backup(snapshot), encoding="utf-8")
    console.print(f"[green]✓[/green] Exported {len(snapshot.projects)} projects to {path}")


@app.command("import")
def import_data(
    path: Path = typer.Argument(..., help="Backup file"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Replace all data with a backup."""
    from printflow.exceptions import BackupError
    from printflow.storage.backup import apply_backup, load_backup

    repo, snapshot = _open_repository()

    try:
        backup = load_backup(path.read_bytes())
    except OSError as e:
        console.print(f"[red]Cannot read {path}: {e}[/red]")
        raise typer.Exit(1)
    except BackupError as e:
        console.print(f"[red]Import failed: {e.message}[/red]")
        if e.hint:
            console.print(f"  [dim]{e.hint}[/dim]")
        raise typer.Exit(e.exit_code)

    console.print(f"Backup contains {len(backup.projects)} projects.")
    if not yes and not typer.confirm("This replaces all current data. Continue?"):
        raise typer.Exit()

    repo.replace_all(apply_backup(snapshot, backup))
    logger.info(f"Imported backup {path}")
    console.print(f"[green]✓[/green] Imported {len(backup.projects)} projects")


if __name__ == "__main__":
    app()
