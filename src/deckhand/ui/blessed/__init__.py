"""Blessed-based full-screen terminal UI."""

from .app import execute_command, main_loop, run_interactive_ui

__all__ = ["execute_command", "main_loop", "run_interactive_ui"]
