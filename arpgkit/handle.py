"""Generational handles referring to pooled resources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

__all__ = ["Handle"]

T = TypeVar("T")


@dataclass(frozen=True, order=True)
class Handle(Generic[T]):
    """A slot index plus a generation; valid generations start at 1.

    Handles compare by index first, then by generation.
    """

    index: int = 0
    generation: int = 0

    def is_valid(self) -> bool:
        """Return True unless this is the null handle's generation."""
        return self.generation != 0