"""Application layer - use cases and orchestration."""

from .commands import GenerateChestCommand
from .dtos import ChestReport

__all__ = [
    "ChestReport",
    "GenerateChestCommand",
]
