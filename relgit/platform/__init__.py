"""Platform layer: process execution."""

from .process import CommandResult, run

__all__ = ["CommandResult", "run"]
