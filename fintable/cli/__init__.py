"""Command line entrypoint (``python -m fintable.cli`` / ``fintable``)."""

from .__main__ import main

__all__ = ["main"]
