"""Closed-form annuity formulas: solve for capital, repayment or duration.

Pure functions: float in, float out. No I/O.
Rates are annual fractions (0.07 for 7%) compounded monthly.
"""

import math

from loancalc.engine.errors import InvalidInputError, MathematicallyUndefinedError


def require_positive(**values: float) -> None:
    """Raise InvalidInputError unless every value is finite and > 0."""
    for name, value in values.items():
        if value is None:
            raise InvalidInputError(f"{name} is required")
        if not math.isfinite(value) or value <= 0:
            raise InvalidInputError(f"{name} must be a positive number, got {value}")


def discount_factor(monthly_rate: float, periods: float) -> float:
    """(1 + m)^-n, or NaN when the base is not positive. Overflow gives inf."""
    base = 1 + monthly_rate
    if base <= 0:
        return math.nan
    try:
        return base ** -periods
    except OverflowError:
        return math.inf


def annuity_factor(monthly_rate: float, periods: float) -> float:
    """1 - (1 + m)^-n: share of the capital repaid by n payments, per unit of interest."""
    return 1 - discount_factor(monthly_rate, periods)


def _checked(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise MathematicallyUndefinedError(f"{what} is not finite for these inputs")
    return value


def solve_capital(repayment: float, periods: float, annual_rate: float) -> float:
    """Capital repaid by `periods` monthly payments of `repayment`.

    C = R * (1 - (1+m)^-n) / m
    """
    require_positive(repayment=repayment, periods=periods, annual_rate=annual_rate)
    m = annual_rate / 12
    return _checked(repayment * annuity_factor(m, periods) / m, "Capital")


def solve_repayment(capital: float, periods: float, annual_rate: float) -> float:
    """Fixed monthly repayment that amortizes `capital` over `periods`.

    R = C * m / (1 - (1+m)^-n)
    """
    require_positive(capital=capital, periods=periods, annual_rate=annual_rate)
    m = annual_rate / 12
    factor = annuity_factor(m, periods)
    if factor == 0:
        raise MathematicallyUndefinedError(
            f"Duration {periods} is too short to amortize at rate {annual_rate}"
        )
    return _checked(capital * m / factor, "Repayment")


def solve_duration(capital: float, repayment: float, annual_rate: float) -> float:
    """Number of monthly periods (fractional) to repay `capital` with `repayment`.

    n = -ln(1 - C*m/R) / ln(1+m)
    """
    require_positive(capital=capital, repayment=repayment, annual_rate=annual_rate)
    m = annual_rate / 12
    interest_share = capital * m / repayment
    if interest_share >= 1:
        # Repayment does not exceed the first month's interest: the loan never amortizes
        raise MathematicallyUndefinedError(
            f"Repayment {repayment} does not cover monthly interest {capital * m}"
        )
    return _checked(-math.log1p(-interest_share) / math.log1p(m), "Duration")
