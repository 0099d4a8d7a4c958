"""Output formatting helpers for CLI commands."""
from __future__ import annotations

import functools
import json
import sys
from typing import Any, Callable

import click

from grab_rig.errors import GrabRigError


def format_output(data: Any, fmt: str = "text") -> str:
    """Render a command result as JSON or as indented ``key: value`` text."""
    if fmt == "json":
        return json.dumps(data, indent=2, default=str)
    return "\n".join(_text_lines(data, 0))


def _text_lines(data: Any, depth: int) -> list[str]:
    pad = "  " * depth
    if isinstance(data, dict):
        lines = []
        for key, value in data.items():
            if isinstance(value, (dict, list)) and value:
                lines.append(f"{pad}{key}:")
                lines.extend(_text_lines(value, depth + 1))
            else:
                lines.append(f"{pad}{key}: {_scalar(value)}")
        return lines
    if isinstance(data, list):
        lines = []
        for item in data:
            if isinstance(item, (dict, list)):
                lines.append(f"{pad}-")
                lines.extend(_text_lines(item, depth + 1))
            else:
                lines.append(f"{pad}- {_scalar(item)}")
        return lines
    return [f"{pad}{_scalar(data)}"]


def _scalar(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, (dict, list)):
        return "none"
    return str(value)


def print_success(message: str) -> None:
    click.secho(f"✓ {message}", fg="green")


def print_info(message: str) -> None:
    click.secho(message, fg="cyan")


def print_warning(message: str) -> None:
    click.secho(f"! {message}", fg="yellow", err=True)


def print_error(message: str) -> None:
    click.secho(f"✗ {message}", fg="red", err=True)


def handle_grab_rig_errors(func: Callable) -> Callable:
    """Print grab-rig errors and exit with status 1 instead of a traceback."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except GrabRigError as e:
            print_error(str(e))
            sys.exit(1)

    return wrapper
