"""Amortization schedule computation and the fixed-width schedule report.

Pure functions: floats in, dataclasses out. No I/O.
"""

import math
from collections.abc import Iterable, Iterator

from loancalc.engine.errors import InvalidParametersError
from loancalc.engine.formatting import format_amount, pad_right
from loancalc.models.loan import AmortizationRow, ScheduleSummary

PERIOD_WIDTH = 8
AMOUNT_WIDTH = 15
COLUMN_SEPARATOR = " | "
HEADERS = ("Period", "Interest", "Principal", "Remaining")
RULE = "-" * (PERIOD_WIDTH + 3 * (len(COLUMN_SEPARATOR) + AMOUNT_WIDTH))


def _check_parameters(capital: float, repayment: float, periods: float, annual_rate: float) -> None:
    values = {
        "capital": capital,
        "repayment": repayment,
        "periods": periods,
        "annual_rate": annual_rate,
    }
    invalid = [
        name for name, value in values.items()
        if value is None or not math.isfinite(value) or value <= 0
    ]
    if invalid:
        raise InvalidParametersError(
            "Invalid parameters for an amortization schedule: " + ", ".join(invalid)
        )


def _rows(capital: float, repayment: float, periods: int, monthly_rate: float) -> Iterator[AmortizationRow]:
    remaining = capital
    for period in range(1, periods + 1):
        interest = remaining * monthly_rate
        # A repayment below the interest never pays down the balance;
        # the final payment only covers what is left
        principal = min(max(repayment - interest, 0.0), remaining)
        remaining = max(remaining - principal, 0.0)
        yield AmortizationRow(
            period=period,
            interest=interest,
            principal=principal,
            remaining=remaining,
        )
        if remaining <= 0:
            return


def generate_schedule(
    capital: float,
    repayment: float,
    periods: float,
    annual_rate: float,
) -> Iterator[AmortizationRow]:
    """Lazily generate the monthly amortization rows of a fixed-repayment loan.

    Parameters are checked immediately: any value <= 0 raises InvalidParametersError
    before a row exists. The sequence runs for floor(periods) months and stops early
    once the balance reaches zero. The final principal is clamped to the remaining
    balance, so that row may not sum to `repayment`.

    Args:
        capital: Amount borrowed
        repayment: Fixed monthly payment
        periods: Duration in months; fractional values are truncated
        annual_rate: Annual interest rate (e.g. 0.12 for 12%)
    """
    _check_parameters(capital, repayment, periods, annual_rate)
    return _rows(capital, repayment, math.floor(periods), annual_rate / 12)


def summarize_schedule(rows: Iterable[AmortizationRow]) -> ScheduleSummary:
    """Totals over a schedule. Consumes the iterable."""
    count = 0
    total_interest = 0.0
    total_principal = 0.0
    final_balance = 0.0
    for row in rows:
        count += 1
        total_interest += row.interest
        total_principal += row.principal
        final_balance = row.remaining
    return ScheduleSummary(
        periods=count,
        total_interest=total_interest,
        total_principal=total_principal,
        final_balance=final_balance,
    )


def _line(period: str, interest: str, principal: str, remaining: str) -> str:
    cells = [pad_right(period, PERIOD_WIDTH)] + [
        pad_right(cell, AMOUNT_WIDTH) for cell in (interest, principal, remaining)
    ]
    return COLUMN_SEPARATOR.join(cells) + "\n"


def render_schedule(rows: Iterable[AmortizationRow]) -> str:
    """Fixed-width text table: Period | Interest | Principal | Remaining."""
    lines = [_line(*HEADERS), RULE + "\n"]
    for row in rows:
        lines.append(_line(
            str(row.period),
            format_amount(row.interest),
            format_amount(row.principal),
            format_amount(row.remaining),
        ))
    return "".join(lines)


def schedule_report(capital: float, repayment: float, periods: float, annual_rate: float) -> str:
    return render_schedule(generate_schedule(capital, repayment, periods, annual_rate))
