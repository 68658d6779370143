"""Main entry point for todofocus."""

import typer

from todofocus import __version__
from todofocus.commands import config, tags, tasks, timer
from todofocus.config import get_config_manager
from todofocus.ui.console import get_console
from todofocus.utils.logger import log_file_path

app = typer.Typer(
    name="todofocus",
    help="Tasks, tags and a focus timer from the command line",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(tags.app, name="tags", help="Tag management commands")
app.add_typer(timer.app, name="timer", help="Focus timer")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information, the storage backend and the log file."""
    console.print(f"[bold]todofocus[/bold] version [task.id]{__version__}[/task.id]")
    storage = get_config_manager().config.storage
    console.print(f"Storage backend: [tag]{storage.backend}[/tag]")
    console.print(f"Log file: [muted]{log_file_path()}[/muted]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
