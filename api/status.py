"""
api.status
==========

Status endpoints for contracts, royalty payments and campaigns, plus the
contract-sequence helpers used by the franchise detail page.
"""

from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from franchise_ops.errors import InvalidRecord
from franchise_ops.ingest import CampaignRow, ContractRow, PaymentRow
from franchise_ops.lifecycle import resolve_contract_types, resolve_status, suggest_renewal_start
from franchise_ops.settings import Settings
from .deps import get_settings, invalid_record, reference_date, reference_time

router = APIRouter(tags=["status"])


class ContractRequest(BaseModel):
    contract: ContractRow
    now: Optional[date] = None


class PaymentRequest(BaseModel):
    payment: PaymentRow
    now: Optional[date] = None
    grace_window_days: Optional[int] = Field(None, ge=0)
    pending_window_days: Optional[int] = Field(None, ge=0)


class CampaignRequest(BaseModel):
    campaign: CampaignRow
    now: Optional[datetime] = None


class ContractSequenceRequest(BaseModel):
    contracts: List[ContractRow]
    now: Optional[date] = None


@router.post("/status/contract")
def contract_status(data: ContractRequest):
    try:
        resolution = resolve_status("contract", data.contract.to_record(), reference_date(data.now))
    except InvalidRecord as exc:
        raise invalid_record(exc)
    return resolution.as_dict()


@router.post("/status/payment")
def payment_status(data: PaymentRequest, settings: Settings = Depends(get_settings)):
    grace = data.grace_window_days
    pending = data.pending_window_days
    try:
        resolution = resolve_status(
            "payment",
            data.payment.to_record(),
            reference_date(data.now),
            grace_window_days=settings.grace_window_days if grace is None else grace,
            pending_window_days=settings.pending_window_days if pending is None else pending,
        )
    except InvalidRecord as exc:
        raise invalid_record(exc)
    return resolution.as_dict()


@router.post("/status/campaign")
def campaign_status(data: CampaignRequest):
    resolution = resolve_status("campaign", data.campaign.to_record(), reference_time(data.now))
    return resolution.as_dict()


@router.post("/contracts/types")
def contract_types(data: ContractSequenceRequest):
    """
    Contract history table: type by position, status and end date of each
    contract, in the order given.
    """
    records = [row.to_record() for row in data.contracts]
    now = reference_date(data.now)
    rows = []
    try:
        for record, kind in zip(records, resolve_contract_types(records)):
            resolution = resolve_status("contract", record, now)
            rows.append({"type": kind.value, **resolution.as_dict()})
    except InvalidRecord as exc:
        raise invalid_record(exc)
    return rows


@router.post("/contracts/renewal")
def renewal_start(data: ContractRequest):
    """Suggested start date for the contract that renews *contract*."""
    try:
        start = suggest_renewal_start(data.contract.to_record())
    except InvalidRecord as exc:
        raise invalid_record(exc)
    return {"start_date": start.isoformat()}
