"""CLI command implementations for the chests application.

This package contains subcommands for the chests CLI, including:
- validate: Validate a configuration file
"""

from chests.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
