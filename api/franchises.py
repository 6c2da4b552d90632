"""
api.franchises
==============

Minimal franchise registry endpoints: register a franchise with its contract
sequence and read back contract statuses.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from franchise_ops.errors import InvalidRecord
from franchise_ops.ingest import CampaignRow, ContractRow, PaymentRow
from franchise_ops.lifecycle import franchise_status
from franchise_ops.models import ContractStatus, Franchise
from franchise_ops.portfolio import FranchiseRegistry
from .deps import get_registry, invalid_record, reference_date

router = APIRouter(prefix="/franchises", tags=["franchises"])


class FranchiseBody(BaseModel):
    name: str = Field(..., min_length=1)
    contracts: List[ContractRow] = Field(default_factory=list)
    payments: List[PaymentRow] = Field(default_factory=list)
    campaigns: List[CampaignRow] = Field(default_factory=list)


def _summary(franchise: Franchise, now: date) -> dict:
    status = franchise_status(franchise.contracts, now)
    return {
        "slug": franchise.slug,
        "name": franchise.name,
        "contracts": len(franchise.contracts),
        "status": status.value if status else None,
    }


@router.post("", status_code=201)
def add_franchise(body: FranchiseBody, reg: FranchiseRegistry = Depends(get_registry)):
    franchise = Franchise(
        name=body.name,
        contracts=[c.to_record() for c in body.contracts],
        payments=[p.to_record() for p in body.payments],
        campaigns=[c.to_record() for c in body.campaigns],
    )
    reg.add(franchise)
    return {"slug": franchise.slug}


@router.get("")
def list_franchises(
    status: Optional[ContractStatus] = Query(None, description="Filter on current contract status"),
    now: Optional[date] = None,
    reg: FranchiseRegistry = Depends(get_registry),
):
    today = reference_date(now)
    try:
        franchises = reg.find_by_contract_status(status, today) if status else list(reg)
        return [_summary(f, today) for f in franchises]
    except InvalidRecord as exc:
        raise invalid_record(exc)


@router.get("/{slug}")
def get_franchise(slug: str, now: Optional[date] = None,
                  reg: FranchiseRegistry = Depends(get_registry)):
    try:
        franchise = reg.get(slug)
    except KeyError:
        raise HTTPException(status_code=404, detail="Franchise not found")
    try:
        return _summary(franchise, reference_date(now))
    except InvalidRecord as exc:
        raise invalid_record(exc)
