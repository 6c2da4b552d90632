"""
Pytest configuration: make sure `import franchise_ops` works regardless of
where pytest is invoked.

It prepends the project root (one directory above *tests/*) to
``sys.path`` **before** any tests are collected.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# /path/to/project/tests -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def contract_2020():
    """Five-year contract starting 2020-01-01 (ends 2025-01-01)."""
    from franchise_ops.models import ContractRecord
    return ContractRecord(start_date=date(2020, 1, 1), duration_years=5)
