

"""
franchise_ops
=============

Decision core of the franchise-operations dashboard: keeps marketing
channel distributions summing to 100 and derives lifecycle states for
contracts, royalty payments and marketing campaigns.

Nothing in the package touches storage or the system clock; callers pass
plain records and the reference time ``now``.

Sub-modules
~~~~~~~~~~~
- :pymod:`franchise_ops.models`      – record dataclasses + status enums
- :pymod:`franchise_ops.allocation`  – channel share normalisation
- :pymod:`franchise_ops.lifecycle`   – contract / payment / campaign status
- :pymod:`franchise_ops.royalties`   – payment schedule, stats cards, marketing budget
- :pymod:`franchise_ops.ingest`      – pydantic validation of raw rows
- :pymod:`franchise_ops.portfolio`   – ``FranchiseRegistry`` in-memory registry
- :pymod:`franchise_ops.settings`    – environment-driven configuration

Quick start
-----------
>>> from datetime import date
>>> from franchise_ops import normalize_allocation, resolve_status
>>> from franchise_ops.models import ContractRecord
>>> normalize_allocation({"email": 1, "website": 1, "search ads": 1})
{'email': 34, 'website': 33, 'search ads': 33}
>>> resolve_status("contract", ContractRecord(date(2020, 1, 1), 5), date(2025, 1, 2)).status
<ContractStatus.EXPIRED: 'expired'>
"""

from .allocation import normalize_allocation
from .lifecycle import resolve_status

__all__ = [
    "normalize_allocation",
    "resolve_status",
    "models",
    "allocation",
    "lifecycle",
    "royalties",
    "ingest",
    "portfolio",
    "settings",
]

__version__ = "0.1.0"
