"""Typer application for the `cb` command."""

from .main import app, main

__all__ = ["app", "main"]
