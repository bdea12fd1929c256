"""
Command-line interface for textundo.

Run without a command for the interactive menu, or use one of the commands
directly.
"""
import logging

import click
from rich.console import Console

from . import __version__
from .config import ConfigError, loadSettings
from .dump import FORMATS, SerializationError, readDump, writeDump
from .document import SnapshotError, TextDocument
from .editor import EditorError, TextEditor
from .history import (
    NOTHING_TO_REDO,
    NOTHING_TO_UNDO,
    REDONE,
    ROLLED_BACK,
    SAVED,
    UNDONE,
)
from .search import buildIndex, findFiles, parseKeywords
from .storage import StorageError, loadText, storeText


logger = logging.getLogger(__name__)

console = Console()

# Errors reported to the user without ending the session.
_reportedErrors = (StorageError, SnapshotError, EditorError, SerializationError)

_eventMessages = {
    SAVED: "State saved",
    UNDONE: "Change undone",
    REDONE: "Change redone",
    ROLLED_BACK: "Edit rolled back",
    NOTHING_TO_UNDO: "Nothing to undo",
    NOTHING_TO_REDO: "Nothing to redo",
}


def _echo(text, style=None):
    # Paths and file content are printed verbatim: no markup, no wrapping.
    console.print(text, style=style, markup=False, highlight=False, soft_wrap=True)


def _reportEvent(event, snapshot):
    _echo(_eventMessages[event], style="dim")


def _reportError(action, error):
    _echo(f"✗ {error}", style="red")
    logger.error("Error in %s: %s", action, error, exc_info=True)


def _printMenu(title, entries):
    console.print(f"\n[bold]{title}[/bold]")
    for key, label in entries:
        console.print(f"  {key}. {label}")


def editorSession(editor, path):
    """Open `path` in `editor` and run the interactive edit loop until the
    user goes back to the main menu.
    """
    try:
        editor.openFile(path)
    except _reportedErrors as e:
        _reportError("open", e)
        return
    _echo(f"Editing {editor.document.path}", style="green")

    entries = [
        ("1", "View content"),
        ("2", "Edit"),
        ("3", "Undo"),
        ("4", "Redo"),
        ("5", "Back to main menu"),
    ]
    while True:
        _printMenu("Editor", entries)
        choice = click.prompt("Choose an action", default="", show_default=False).strip()
        try:
            if choice == "1":
                _echo(editor.showContent())
            elif choice == "2":
                newContent = click.prompt("New text", default="", show_default=False)
                editor.edit(newContent)
            elif choice == "3":
                editor.undo()
            elif choice == "4":
                editor.redo()
            elif choice == "5":
                editor.closeFile()
                return
            else:
                _echo("Invalid choice", style="yellow")
        except _reportedErrors as e:
            _reportError("editor", e)
        _echo(f"Status: undo available: {editor.canUndo()}, redo available: {editor.canRedo()}",
              style="cyan")


def _printFiles(files):
    if not files:
        _echo("  (no files)", style="dim")
    for path in files:
        _echo(f"  {path}")


def searchFiles(settings, directory, keywordText):
    keywords = parseKeywords(keywordText)
    if not keywords:
        _echo("No keywords given", style="yellow")
        return False
    try:
        files = findFiles(directory, keywords, settings.pattern, settings.encoding)
    except StorageError as e:
        _reportError("search", e)
        return False
    console.print("\n[bold]Files found:[/bold]")
    _printFiles(files)
    return True


def indexFiles(settings, directory, keywordText):
    keywords = parseKeywords(keywordText)
    if not keywords:
        _echo("No keywords given", style="yellow")
        return False
    try:
        index = buildIndex(directory, keywords, settings.pattern, settings.encoding)
    except StorageError as e:
        _reportError("index", e)
        return False
    console.print("\n[bold]Index:[/bold]")
    for keyword, files in index.items():
        _echo(f"Keyword: {keyword}", style="bold")
        _printFiles(files)
    return True


def mainMenu(settings):
    editor = TextEditor(settings, monitor=_reportEvent)
    entries = [
        ("1", "Edit a file"),
        ("2", "Search files by keywords"),
        ("3", "Index files"),
        ("4", "Quit"),
    ]
    while True:
        _printMenu("textundo", entries)
        choice = click.prompt("Choose an action", default="", show_default=False).strip()
        if choice == "1":
            path = click.prompt("Path of the file")
            editorSession(editor, path)
        elif choice == "2":
            directory = click.prompt("Directory to search")
            keywordText = click.prompt("Keywords, separated by commas")
            searchFiles(settings, directory, keywordText)
        elif choice == "3":
            directory = click.prompt("Directory to index")
            keywordText = click.prompt("Keywords, separated by commas")
            indexFiles(settings, directory, keywordText)
        elif choice == "4":
            return
        else:
            _echo("Invalid choice", style="yellow")


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="textundo")
@click.pass_context
def cli(ctx):
    """
    textundo - a text editor with undo/redo history

    Without a command, the interactive menu is started.
    """
    try:
        settings = loadSettings()
    except ConfigError as e:
        raise click.ClickException(str(e))
    logging.basicConfig(
        level=settings.logLevel,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        mainMenu(settings)


@cli.command()
@click.argument("path")
@click.pass_obj
def edit(settings, path):
    """Edit a text file interactively, with undo and redo."""
    editorSession(TextEditor(settings, monitor=_reportEvent), path)


@cli.command()
@click.argument("directory")
@click.argument("keywords")
@click.pass_context
def search(ctx, directory, keywords):
    """List the files in DIRECTORY containing any of KEYWORDS (comma-separated)."""
    if not searchFiles(ctx.obj, directory, keywords):
        ctx.exit(1)


@cli.command()
@click.argument("directory")
@click.argument("keywords")
@click.pass_context
def index(ctx, directory, keywords):
    """Show, per keyword, the files in DIRECTORY containing it."""
    if not indexFiles(ctx.obj, directory, keywords):
        ctx.exit(1)


@cli.command()
@click.argument("path")
@click.argument("output")
@click.option("--format", "-f", "format", type=click.Choice(FORMATS), default="binary",
              show_default=True, help="Encoding of the dump")
@click.pass_context
def dump(ctx, path, output, format):
    """Save the state of the text file PATH to OUTPUT."""
    settings = ctx.obj
    try:
        content, exists = loadText(path, settings.encoding)
        if not exists:
            raise StorageError("dump", path, "no such file")
        writeDump(TextDocument(path, content).export(), output, format)
    except _reportedErrors as e:
        _reportError("dump", e)
        ctx.exit(1)
    _echo(f"✓ Wrote {format} dump of {path} to {output}", style="green")


@cli.command()
@click.argument("dumpfile")
@click.option("--format", "-f", "format", type=click.Choice(FORMATS), default=None,
              help="Encoding of the dump (detected when omitted)")
@click.option("--write", is_flag=True, help="Write the restored content back to its file")
@click.pass_context
def restore(ctx, dumpfile, format, write):
    """Show the state saved in DUMPFILE, optionally writing it back."""
    settings = ctx.obj
    try:
        snapshot = readDump(dumpfile, format)
        if write:
            storeText(snapshot.path, snapshot.content, settings.encoding)
    except _reportedErrors as e:
        _reportError("restore", e)
        ctx.exit(1)
    _echo(f"Path: {snapshot.path}", style="bold")
    _echo(snapshot.content)
    if write:
        _echo(f"✓ Restored {snapshot.path}", style="green")


def main():
    cli()


if __name__ == "__main__":
    main()
