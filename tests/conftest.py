"""
Test configuration for the policyscan project.

Ensures the project root is on sys.path so tests can import `policyscan.*`
modules, and provides shared fixtures.
"""
import os
import sys
from datetime import date, timedelta


PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from policyscan.core.policy_record import PolicyRecord


TODAY = date(2024, 6, 15)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_policy():
    """Build a PolicyRecord with sensible defaults; ids are generated per call."""
    counter = {"n": 0}

    def _make(policy_type="health", premium=1000, coverage=None, expiry_days=365, **kwargs):
        counter["n"] += 1
        expiry = kwargs.pop("expiry_date", None)
        if expiry is None and expiry_days is not None:
            expiry = TODAY + timedelta(days=expiry_days)
        return PolicyRecord(
            id=kwargs.pop("id", f"POL-{counter['n']:03d}"),
            type=policy_type,
            premium=premium,
            coverage=coverage,
            expiry_date=expiry,
            **kwargs,
        )

    return _make
