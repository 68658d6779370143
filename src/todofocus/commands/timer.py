"""Focus timer commands."""

import asyncio

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from todofocus.config import get_config_manager
from todofocus.core.factory import build_timer
from todofocus.focus.notifications import ConsoleNotifier
from todofocus.focus.timer import TimerState
from todofocus.ui.console import get_console
from todofocus.ui.formatters import format_success, format_warning

from .decorators import command_wrapper
from .utils import open_workspace, resolve_task

console = get_console()
app = typer.Typer(help="Focus timer", no_args_is_help=True)

REFRESH_SECONDS = 0.2


@app.command("start")
@command_wrapper
async def start_timer(
    minutes: int | None = typer.Option(
        None, "--minutes", "-m", help="Custom duration in minutes (1-999)"
    ),
    preset: int | None = typer.Option(
        None, "--preset", "-p", help="Preset duration in minutes"
    ),
    task_id: str | None = typer.Option(
        None, "--task", "-t", help="Task ID or suffix to focus on"
    ),
    title: str | None = typer.Option(
        None, "--title", help="Countdown title; renames the task when one is bound"
    ),
) -> None:
    """Run a countdown, recording a focus session when it ends."""
    if minutes is not None and preset is not None:
        format_warning("Both --minutes and --preset given; using --minutes")

    config = get_config_manager().config
    async with open_workspace(load=task_id is not None) as workspace:
        timer = build_timer(
            config,
            workspace.gateway,
            channel=ConsoleNotifier(console),
            task_repository=workspace.tasks,
        )

        if minutes is not None:
            timer.set_custom_minutes(minutes)
        elif preset is not None:
            timer.set_preset(preset * 60)
        if task_id is not None:
            timer.bind_task(resolve_task(workspace, task_id))
        if title is not None:
            await timer.rename(title)

        await timer.notifier.ensure_permission()

        console.print(f"\n[timer]{timer.title}[/timer]")
        console.print(f"Duration: {timer.display}\n")

        timer.start()
        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                console=console,
            ) as progress:
                bar = progress.add_task(timer.display, total=timer.initial_time)
                while timer.is_running:
                    progress.update(
                        bar,
                        description=f"{timer.display} remaining",
                        completed=timer.initial_time - timer.time_left,
                    )
                    await asyncio.sleep(REFRESH_SECONDS)
                await timer.settle()
                progress.update(bar, description=timer.display, completed=timer.initial_time)
        except asyncio.CancelledError:
            timer.reset()
            format_warning("Timer stopped")
            raise
        finally:
            timer.close()

        if timer.state is TimerState.ALERTED:
            timer.dismiss()
            format_success("Focus session complete")
