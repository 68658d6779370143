"""Configuration commands."""

import json

import pydantic
import typer
from pydantic import BaseModel

from todofocus.config import get_config_manager
from todofocus.models import ValidationError
from todofocus.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management", no_args_is_help=True)


def _parse_value(raw: str):
    """Interpret JSON literals (numbers, booleans, null, lists), else keep text."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.command("get")
@command_wrapper
def get_config(
    key: str | None = typer.Argument(None, help="Dot-separated key, e.g. storage.backend"),
) -> None:
    """Show the configuration or one value."""
    manager = get_config_manager()
    value = manager.config if key is None else manager.get(key)
    if isinstance(value, BaseModel):
        value = value.model_dump()
    format_output(value, "json")


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Dot-separated key"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_manager().set(key, _parse_value(value))
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid value for {key}: {e.errors()[0]['msg']}") from e
    format_success(f"{key} updated")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Key to reset (all if omitted)"),
) -> None:
    """Reset configuration to defaults."""
    get_config_manager().reset(key)
    format_success(f"{key or 'configuration'} reset")
