"""
api.allocation
==============

Endpoints behind the channel distribution card.

Editing a slider calls ``/edit`` (siblings untouched) or ``/rebalance``
(siblings follow); the "Adjust" action calls ``/normalize``.
"""

from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from franchise_ops.allocation import (
    apply_raw_edit,
    is_balanced,
    normalize_allocation,
    rebalance_around,
)
from franchise_ops.ingest import channel_map
from franchise_ops.settings import Settings
from .deps import get_settings

router = APIRouter(prefix="/allocation", tags=["allocation"])


class SharesRequest(BaseModel):
    """A stored channel → percentage mapping."""
    shares: Dict[str, float] = Field(..., min_length=1)


class EditRequest(SharesRequest):
    channel: str = Field(..., min_length=1)
    value: float = Field(..., ge=0, le=100)


def _response(shares: Dict[str, float]) -> Dict[str, object]:
    return {"shares": shares, "balanced": is_balanced(shares)}


@router.get("/default")
def default_distribution(settings: Settings = Depends(get_settings)):
    """Distribution proposed for a new marketing action."""
    return _response(normalize_allocation(channel_map(settings.default_channels)))


@router.post("/normalize")
def normalize(data: SharesRequest):
    """Scale the shares to integers summing to exactly 100."""
    return _response(normalize_allocation(channel_map(data.shares)))


@router.post("/edit")
def edit(data: EditRequest):
    """Change one channel only; the result may be unbalanced."""
    return _response(apply_raw_edit(channel_map(data.shares), data.channel, data.value))


@router.post("/rebalance")
def rebalance(data: EditRequest):
    """Change one channel and move the others proportionally."""
    return _response(rebalance_around(channel_map(data.shares), data.channel, data.value))


@router.post("/balanced")
def balanced(data: SharesRequest):
    shares = channel_map(data.shares)
    return {"balanced": is_balanced(shares), "total": sum(shares.values())}
