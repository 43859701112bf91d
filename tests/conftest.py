"""Canonical loans used across the engine and API tests.

Fixture: 10 000 borrowed, 500/month, 12% annual, 24 months.
"""

import pytest

from loancalc.models.loan import LoanParameters


@pytest.fixture
def canonical_loan() -> LoanParameters:
    """Repayment above the 470.73 amortizing payment: paid off in period 23."""
    return LoanParameters(
        capital=10000.0,
        repayment=500.0,
        periods=24,
        annual_rate=0.12,
    )


@pytest.fixture
def mortgage() -> LoanParameters:
    """200K over 30 years at 7.42%. Repayment is the unknown."""
    return LoanParameters(
        capital=200000.0,
        periods=360,
        annual_rate=0.0742,
    )
