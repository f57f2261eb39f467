"""CLI package for interacting with the device readings intake service.

The Typer application lives in ``cli.app`` and is not re-exported here, so
``cli.app`` keeps resolving to the module that tests patch.
"""

__all__ = []
