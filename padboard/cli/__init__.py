"""Command line interface for inspecting and driving a stored clipboard."""
from padboard.cli.main import main, run

__all__ = ["main", "run"]
