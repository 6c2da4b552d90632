

"""
franchise_ops.portfolio
=======================

An in-memory registry that stores :class:`franchise_ops.models.Franchise`
objects keyed by a slugified version of their name.

This module is intentionally simple (standard library only) so the HTTP
layer and the tests can use it without any storage behind it.
"""

from __future__ import annotations

from typing import Dict, List

from .dates import DateLike
from .lifecycle import franchise_status
from .models import ContractStatus, Franchise


class FranchiseRegistry:
    """
    Dictionary-backed registry of franchises.

    Example
    -------
    >>> from datetime import date
    >>> from franchise_ops.models import ContractRecord, Franchise
    >>> reg = FranchiseRegistry()
    >>> reg.add(Franchise("Agence Lyon", [ContractRecord(date(2024, 5, 1), 5)]))
    >>> [f.name for f in reg.find_by_contract_status(ContractStatus.ACTIVE, date(2025, 1, 1))]
    ['Agence Lyon']
    """

    def __init__(self) -> None:
        self._franchises: Dict[str, Franchise] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def add(self, franchise: Franchise) -> None:
        """Insert or overwrite a franchise."""
        self._franchises[franchise.slug] = franchise

    def get(self, slug: str) -> Franchise:
        """Retrieve by slug (raise KeyError if not present)."""
        return self._franchises[slug]

    def find_by_contract_status(self, status: ContractStatus, now: DateLike) -> List[Franchise]:
        """Franchises whose current (last) contract resolves to *status*."""
        return [f for f in self._franchises.values()
                if franchise_status(f.contracts, now) is status]

    # ------------------------------------------------------------------
    # Dunder helpers for convenience
    # ------------------------------------------------------------------
    def __iter__(self):
        return iter(self._franchises.values())

    def __len__(self) -> int:
        return len(self._franchises)
