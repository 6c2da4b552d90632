"""
franchise_ops.errors
====================

Exceptions raised by the decision core.
"""

from __future__ import annotations

from typing import Optional


class InvalidRecord(ValueError):
    """
    A record violates a data-integrity rule the resolver cannot repair
    (missing start or due date, non-positive duration, ...).

    ``field`` names the offending attribute so HTTP callers can point at it.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
