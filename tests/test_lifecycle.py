"""
tests/test_lifecycle.py
=======================

Unit tests for franchise_ops.lifecycle
"""

from datetime import date, datetime, timedelta

import pytest

from franchise_ops.errors import InvalidRecord
from franchise_ops.lifecycle import (
    franchise_status,
    resolve_campaign_display,
    resolve_contract_status,
    resolve_contract_types,
    resolve_payment_status,
    resolve_status,
    suggest_renewal_start,
)
from franchise_ops.models import (
    CampaignRecord,
    CampaignStatus,
    ContractRecord,
    ContractStatus,
    ContractType,
    PaymentLogEntry,
    PaymentRecord,
    PaymentStatus,
)
from franchise_ops.settings import settings

DUE = date(2025, 3, 1)


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------
def test_contract_end_date_is_inclusive(contract_2020):
    """A contract is still active on its end date."""
    assert resolve_contract_status(contract_2020, date(2025, 1, 1)) is ContractStatus.ACTIVE
    assert resolve_contract_status(contract_2020, datetime(2025, 1, 1, 23, 59)) is ContractStatus.ACTIVE


def test_contract_expires_day_after_end(contract_2020):
    assert resolve_contract_status(contract_2020, date(2025, 1, 2)) is ContractStatus.EXPIRED


def test_terminated_overrides_dates():
    contract = ContractRecord(date(2024, 1, 1), 20, terminated=True)
    assert resolve_contract_status(contract, date(2024, 6, 1)) is ContractStatus.TERMINATED


@pytest.mark.parametrize("duration", [0, -1, None, 2.5])
def test_bad_duration_rejected(duration):
    with pytest.raises(InvalidRecord) as info:
        resolve_contract_status(ContractRecord(date(2024, 1, 1), duration), date(2024, 6, 1))
    assert info.value.field == "duration_years"


def test_missing_start_rejected():
    with pytest.raises(InvalidRecord):
        resolve_contract_status(ContractRecord(None, 5), date(2024, 6, 1))


def test_invalid_record_is_a_value_error():
    with pytest.raises(ValueError):
        resolve_contract_status(ContractRecord(None, 5), date(2024, 6, 1))


def test_contract_types_follow_position_not_dates():
    contracts = [
        ContractRecord(date(2022, 1, 1), 3),
        ContractRecord(date(2015, 1, 1), 5),
        ContractRecord(date(2030, 1, 1), 5),
    ]
    assert resolve_contract_types(contracts) == [
        ContractType.INITIAL, ContractType.RENEWAL, ContractType.RENEWAL,
    ]
    assert resolve_contract_types([]) == []


def test_renewal_starts_day_after_end(contract_2020):
    assert suggest_renewal_start(contract_2020) == date(2025, 1, 2)


def test_renewal_after_termination():
    contract = ContractRecord(date(2020, 1, 1), 5, terminated=True,
                              termination_date=date(2023, 6, 15))
    assert suggest_renewal_start(contract) == date(2023, 6, 16)


def test_franchise_status_uses_last_contract(contract_2020):
    renewal = ContractRecord(date(2025, 1, 2), 5)
    assert franchise_status([contract_2020, renewal], date(2026, 1, 1)) is ContractStatus.ACTIVE
    assert franchise_status([], date(2026, 1, 1)) is None


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
def test_upcoming_before_due():
    record = PaymentRecord(due_date=DUE)
    assert resolve_payment_status(record, DUE - timedelta(days=1), 10) is PaymentStatus.UPCOMING


@pytest.mark.parametrize("days_after", [0, 9])
def test_grace_inside_window(days_after):
    record = PaymentRecord(due_date=DUE)
    now = DUE + timedelta(days=days_after)
    assert resolve_payment_status(record, now, 10, 1) is PaymentStatus.GRACE


def test_late_after_grace_window():
    record = PaymentRecord(due_date=DUE)
    assert resolve_payment_status(record, DUE + timedelta(days=10), 10, 1) is PaymentStatus.LATE


def test_pending_window_without_grace():
    record = PaymentRecord(due_date=DUE)
    assert resolve_payment_status(record, DUE, 0, 3) is PaymentStatus.PENDING
    assert resolve_payment_status(record, DUE + timedelta(days=2), 0, 3) is PaymentStatus.PENDING
    assert resolve_payment_status(record, DUE + timedelta(days=3), 0, 3) is PaymentStatus.LATE


def test_payment_date_means_paid():
    record = PaymentRecord(due_date=DUE, payment_date=date(2025, 5, 1))
    assert resolve_payment_status(record, date(2030, 1, 1), 10) is PaymentStatus.PAID


def test_paid_stays_paid_long_after_due():
    log = [PaymentLogEntry(datetime(2025, 3, 2, 9, 0), PaymentStatus.PAID, amount=1200)]
    record = PaymentRecord(due_date=DUE, logs=log)
    for now in (DUE, DUE + timedelta(days=30), date(2040, 1, 1)):
        assert resolve_payment_status(record, now, 10) is PaymentStatus.PAID


def test_latest_log_entry_wins():
    logs = [
        PaymentLogEntry(datetime(2025, 3, 20), PaymentStatus.PAID),
        PaymentLogEntry(datetime(2025, 3, 5), PaymentStatus.LATE),
    ]
    record = PaymentRecord(due_date=DUE, explicit_status=PaymentStatus.LATE, logs=logs)
    assert resolve_payment_status(record, date(2025, 4, 1), 10) is PaymentStatus.PAID


def test_stored_paid_survives_an_older_log_entry():
    log = [PaymentLogEntry(datetime(2025, 1, 5), PaymentStatus.UPCOMING)]
    record = PaymentRecord(due_date=date(2025, 1, 1), explicit_status=PaymentStatus.PAID, logs=log)
    assert resolve_payment_status(record, date(2026, 1, 1), 10) is PaymentStatus.PAID


def test_explicit_non_paid_status_does_not_block_dates():
    record = PaymentRecord(due_date=DUE, explicit_status=PaymentStatus.UPCOMING)
    assert resolve_payment_status(record, date(2025, 6, 1), 10) is PaymentStatus.LATE


def test_missing_due_date_rejected():
    with pytest.raises(InvalidRecord) as info:
        resolve_payment_status(PaymentRecord(due_date=None), DUE, 10)
    assert info.value.field == "due_date"


# ---------------------------------------------------------------------------
# Campaigns
# ---------------------------------------------------------------------------
def _campaign(start, end, status=CampaignStatus.IN_PROGRESS):
    return CampaignRecord(status=status, start_date=start, end_date=end)


def test_campaign_day_counts():
    display = resolve_campaign_display(
        _campaign(date(2025, 3, 1), date(2025, 3, 31)), datetime(2025, 3, 10, 12, 0))
    assert display.status is CampaignStatus.IN_PROGRESS
    assert display.day_count == 31
    assert display.days_remaining == 21


def test_campaign_finished_has_no_days_left():
    display = resolve_campaign_display(
        _campaign(date(2025, 3, 1), date(2025, 3, 31), CampaignStatus.COMPLETED), date(2025, 5, 1))
    assert display.status is CampaignStatus.COMPLETED
    assert display.days_remaining == 0


def test_campaign_day_count_minimum_one():
    assert resolve_campaign_display(_campaign(date(2025, 3, 1), date(2025, 3, 1)), DUE).day_count == 1
    assert resolve_campaign_display(_campaign(date(2025, 3, 5), date(2025, 3, 1)), DUE).day_count == 1


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------
def test_resolve_status_contract(contract_2020):
    res = resolve_status("contract", contract_2020, date(2025, 1, 2))
    assert res.status is ContractStatus.EXPIRED
    assert res.end_date == date(2025, 1, 1)
    assert res.as_dict()["status"] == "expired"


def test_resolve_status_payment_with_explicit_windows():
    res = resolve_status("payment", PaymentRecord(due_date=DUE), DUE,
                         grace_window_days=0, pending_window_days=1)
    assert res.status is PaymentStatus.PENDING
    assert res.end_date is None


def test_pending_window_only_counts_past_the_grace_window():
    grace = settings.grace_window_days
    after_grace = DUE + timedelta(days=grace)
    assert resolve_status("payment", PaymentRecord(due_date=DUE), after_grace).status is PaymentStatus.LATE
    res = resolve_status("payment", PaymentRecord(due_date=DUE), after_grace, pending_window_days=grace + 5)
    assert res.status is PaymentStatus.PENDING


def test_resolve_status_campaign():
    res = resolve_status("campaign", _campaign(date(2025, 3, 1), date(2025, 3, 31)),
                         datetime(2025, 3, 10, 12, 0))
    assert res.as_dict() == {
        "kind": "campaign",
        "status": "in_progress",
        "end_date": "2025-03-31",
        "day_count": 31,
        "days_remaining": 21,
    }


def test_resolve_status_unknown_kind():
    with pytest.raises(ValueError):
        resolve_status("franchise", None, DUE)
