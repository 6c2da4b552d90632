"""
franchise_ops.cli
=================

Command-line access to the decision core, handy for checking a stored
distribution or a contract by hand.

Examples
--------
$ python -m franchise_ops.cli normalize "social media=33.3" email=33.3 website=33.3
$ python -m franchise_ops.cli contract-status --start 2020-01-01 --years 5 --now 2025-01-02
$ python -m franchise_ops.cli payment-status --due 2025-03-01 --now 2025-03-20
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from datetime import date
from typing import List, Optional

from .allocation import is_balanced, normalize
from .ingest import channel_map, parse_flag
from .lifecycle import resolve_status
from .models import ContractRecord, PaymentRecord
from .settings import configure_logging, settings

logger = logging.getLogger(__name__)


def _pair(text: str):
    name, sep, value = text.rpartition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected CHANNEL=VALUE, got {text!r}")
    try:
        return name, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from None


def _iso_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{text!r} is not an ISO date (YYYY-MM-DD)") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m franchise_ops.cli",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Franchise operations utilities
            ------------------------------
            normalize        rebalance a channel distribution to 100
            contract-status  resolve a contract's lifecycle status
            payment-status   resolve a royalty payment's status
            """
        ),
    )
    parser.add_argument("--log-level", default=None, help="override FRANCHISE_OPS_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p_norm = sub.add_parser("normalize", help="normalise CHANNEL=VALUE pairs")
    p_norm.add_argument("pairs", nargs="+", type=_pair, metavar="CHANNEL=VALUE")

    p_contract = sub.add_parser("contract-status", help="resolve a contract status")
    p_contract.add_argument("--start", type=_iso_date, required=True)
    p_contract.add_argument("--years", type=int, required=True)
    p_contract.add_argument("--terminated", default="no", help="yes/no/true/false")
    p_contract.add_argument("--terminated-on", type=_iso_date, default=None)
    p_contract.add_argument("--now", type=_iso_date, default=None)

    p_payment = sub.add_parser("payment-status", help="resolve a payment status")
    p_payment.add_argument("--due", type=_iso_date, required=True)
    p_payment.add_argument("--paid-on", type=_iso_date, default=None)
    p_payment.add_argument("--grace", type=int, default=settings.grace_window_days)
    p_payment.add_argument("--pending", type=int, default=settings.pending_window_days)
    p_payment.add_argument("--now", type=_iso_date, default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_level:
        configure_logging(args.log_level.upper())
    else:
        configure_logging()

    if args.command == "normalize":
        raw = channel_map(dict(args.pairs))
        result = normalize(raw)
        if not is_balanced(raw):
            logger.info(f"Input summed to {sum(raw.values())}; rebalanced to 100")
        print(json.dumps(result))
        return 0

    now = args.now or date.today()
    try:
        if args.command == "contract-status":
            record = ContractRecord(
                start_date=args.start,
                duration_years=args.years,
                terminated=parse_flag(args.terminated),
                termination_date=args.terminated_on,
            )
            resolution = resolve_status("contract", record, now)
        else:
            record = PaymentRecord(due_date=args.due, payment_date=args.paid_on)
            resolution = resolve_status(
                "payment", record, now,
                grace_window_days=args.grace,
                pending_window_days=args.pending,
            )
    except ValueError as exc:  # InvalidRecord or an unreadable --terminated flag
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(resolution.as_dict()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
