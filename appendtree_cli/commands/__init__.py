"""
CLI command modules.
"""

from appendtree_cli.commands import demo, root

__all__ = ["demo", "root"]
