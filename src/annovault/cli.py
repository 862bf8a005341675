"""Typer-based CLI for annovault."""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import file_ops
from .config import AnnovaultConfig, resolve_log_level
from .errors import AnnovaultError
from .models.document import Annotation, AnnotationType, NormalizedRect
from .workspace import WorkspaceManager

app = typer.Typer(
    name="annovault",
    help="annovault - Workspace vault for documents and their annotation sidecars",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
    ),
):
    """Configure logging for every command."""
    logging.basicConfig(
        level=resolve_log_level(debug),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _manager(root: str | None) -> WorkspaceManager:
    try:
        config = AnnovaultConfig.from_env(cli_root=root)
    except AnnovaultError as e:
        _fail(e)
    return WorkspaceManager.from_config(config)


def _fail(error: AnnovaultError) -> NoReturn:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(code=1)


workspaces_app = typer.Typer(help="Workspace commands")
app.add_typer(workspaces_app, name="workspaces")


@workspaces_app.command("list")
def workspaces_list(
    root: str = typer.Option(
        None,
        "--root",
        "-r",
        help="Workspaces root (default: ANNOVAULT_ROOT env or ~/hackxindia26)",
    ),
):
    """List workspaces under the root (directories containing a .vault)."""
    manager = _manager(root)
    try:
        workspaces = manager.list_workspaces()
    except AnnovaultError as e:
        _fail(e)

    if not workspaces:
        console.print(f"[dim]No workspaces in {manager.root}[/dim]")
        return

    table = Table(title=f"Workspaces in {manager.root}")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Path", style="dim")
    for workspace in workspaces:
        table.add_row(workspace.name, workspace.path)
    console.print(table)


@workspaces_app.command("create")
def workspaces_create(
    name: str = typer.Argument(..., help="Workspace name"),
    root: str = typer.Option(None, "--root", "-r", help="Workspaces root"),
):
    """Create a workspace and its .vault folder."""
    manager = _manager(root)
    try:
        path = manager.create_workspace(name)
    except AnnovaultError as e:
        _fail(e)
    console.print(f"[green]+[/green] Created workspace [cyan]{name}[/cyan] at {path}")


@workspaces_app.command("add")
def workspaces_add(
    name: str = typer.Argument(..., help="Workspace name"),
    source: Path = typer.Argument(..., help="File or folder to copy into the workspace"),
    root: str = typer.Option(None, "--root", "-r", help="Workspaces root"),
):
    """Copy a file into a workspace (numbered name on conflict)."""
    manager = _manager(root)
    try:
        dest = manager.add_file(name, source)
    except AnnovaultError as e:
        _fail(e)
    console.print(f"[green]+[/green] Added {dest.name} to [cyan]{name}[/cyan]")


@workspaces_app.command("files")
def workspaces_files(
    name: str = typer.Argument(..., help="Workspace name"),
    root: str = typer.Option(None, "--root", "-r", help="Workspaces root"),
):
    """List content files in a workspace."""
    manager = _manager(root)
    try:
        files = manager.list_files(name)
    except AnnovaultError as e:
        _fail(e)

    if not files:
        console.print("[dim]No files in workspace[/dim]")
        return
    for file_name in sorted(files):
        console.print(file_name)


annotations_app = typer.Typer(help="Annotation sidecar commands")
app.add_typer(annotations_app, name="annotations")


@annotations_app.command("show")
def annotations_show(
    workspace: str = typer.Argument(..., help="Workspace name"),
    file_name: str = typer.Argument(..., help="Content file name, e.g. report.pdf"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw sidecar JSON"),
    root: str = typer.Option(None, "--root", "-r", help="Workspaces root"),
):
    """Show the annotations stored for a workspace file."""
    manager = _manager(root)
    try:
        document = manager.load_annotations(workspace, file_name)
    except AnnovaultError as e:
        _fail(e)

    if as_json:
        console.print_json(document.model_dump_json())
        return

    if not document.pages:
        console.print(f"[dim]No annotations for {file_name}[/dim]")
        return

    table = Table(title=f"Annotations for {file_name}")
    table.add_column("Page", style="cyan", justify="right")
    table.add_column("Type", style="magenta")
    table.add_column("Author", style="yellow")
    table.add_column("Contents", style="dim")
    for page_num in sorted(document.pages):
        for annotation in document.pages[page_num].annotations:
            contents = annotation.contents
            if len(contents) > 60:
                contents = contents[:57] + "..."
            table.add_row(
                str(page_num),
                annotation.annotation_type.name.title().replace("_", ""),
                annotation.author or "-",
                contents,
            )
    console.print(table)


def _parse_rect(rect: str) -> NormalizedRect:
    parts = [p.strip() for p in rect.split(",")]
    if len(parts) != 4:
        raise typer.BadParameter("Expected left,top,right,bottom")
    try:
        left, top, right, bottom = (float(p) for p in parts)
    except ValueError:
        raise typer.BadParameter("Rectangle values must be numbers")
    return NormalizedRect(left=left, top=top, right=right, bottom=bottom)


@annotations_app.command("add")
def annotations_add(
    workspace: str = typer.Argument(..., help="Workspace name"),
    file_name: str = typer.Argument(..., help="Content file name"),
    page: int = typer.Option(..., "--page", "-p", min=0, help="Page number"),
    annotation_type: str = typer.Option("Highlight", "--type", "-t", help="Annotation type name"),
    author: str = typer.Option("", "--author", help="Author"),
    contents: str = typer.Option("", "--contents", "-c", help="Free-text contents"),
    rect: str = typer.Option("0,0,0,0", "--rect", help="Bounding rect as left,top,right,bottom"),
    color: str = typer.Option("#ffff00", "--color", help="Hex color"),
    opacity: float = typer.Option(1.0, "--opacity", help="Opacity"),
    root: str = typer.Option(None, "--root", "-r", help="Workspaces root"),
):
    """Append an annotation to a workspace file's sidecar."""
    try:
        kind = AnnotationType.from_name(annotation_type)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--type")
    bounding_rect = _parse_rect(rect)

    manager = _manager(root)
    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    annotation_id = str(uuid.uuid4())
    annotation = Annotation(
        id=annotation_id,
        annotation_type=kind,
        author=author,
        contents=contents,
        unique_name=annotation_id,
        creation_date=now,
        modification_date=now,
        bounding_rect=bounding_rect,
        color=color,
        opacity=opacity,
    )

    try:
        document = manager.load_annotations(workspace, file_name)
        document.add_annotation(page, annotation)
        manager.save_annotations(workspace, file_name, document)
    except AnnovaultError as e:
        _fail(e)
    console.print(f"[green]+[/green] Added {kind.name.lower()} annotation {annotation_id[:8]}... on page {page}")


fs_app = typer.Typer(help="Generic file operations")
app.add_typer(fs_app, name="fs")


@fs_app.command("copy")
def fs_copy(
    source: Path = typer.Argument(..., help="File or folder to copy"),
    dest_dir: Path = typer.Argument(..., help="Destination directory"),
):
    """Copy into a directory, numbering the name on conflict."""
    try:
        dest = file_ops.copy_entry(source, dest_dir)
    except AnnovaultError as e:
        _fail(e)
    console.print(f"[green]+[/green] Copied to {dest}")


@fs_app.command("move")
def fs_move(
    source: Path = typer.Argument(..., help="File or folder to move"),
    dest_dir: Path = typer.Argument(..., help="Destination directory"),
):
    """Move into a directory, numbering the name on conflict."""
    try:
        dest = file_ops.move_entry(source, dest_dir)
    except AnnovaultError as e:
        _fail(e)
    console.print(f"[green]+[/green] Moved to {dest}")


@fs_app.command("rename")
def fs_rename(
    path: Path = typer.Argument(..., help="File or folder to rename"),
    new_name: str = typer.Argument(..., help="New base name"),
):
    """Rename within the same parent directory."""
    try:
        dest = file_ops.rename_entry(path, new_name)
    except AnnovaultError as e:
        _fail(e)
    console.print(f"[green]+[/green] Renamed to {dest}")


@fs_app.command("delete")
def fs_delete(
    path: Path = typer.Argument(..., help="File or folder to delete"),
    folder: bool = typer.Option(False, "--folder", help="Delete a folder recursively"),
):
    """Delete a file, or a folder with --folder."""
    try:
        if folder:
            file_ops.delete_folder(path)
        else:
            file_ops.delete_file(path)
    except AnnovaultError as e:
        _fail(e)
    console.print(f"[green]-[/green] Deleted {path}")


@fs_app.command("binary")
def fs_binary(
    path: Path = typer.Argument(..., help="File to classify"),
):
    """Report whether a file looks binary."""
    try:
        result = file_ops.is_file_binary(path)
    except AnnovaultError as e:
        _fail(e)
    console.print("binary" if result else "text")


@fs_app.command("read")
def fs_read(
    path: Path = typer.Argument(..., help="Text file to print"),
):
    """Print a text file; refuses binary content."""
    try:
        content = file_ops.read_file_content(path)
    except AnnovaultError as e:
        _fail(e)
    console.print(content, markup=False, highlight=False, end="")


if __name__ == "__main__":
    app()
