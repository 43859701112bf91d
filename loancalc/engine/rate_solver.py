"""Annual interest rate from capital, repayment and duration, using scipy.

Newton-Raphson on the repayment equation with an analytic derivative.
Pure functions. No I/O beyond logging.
"""

import logging
import math

from scipy.optimize import newton

from loancalc.config import settings
from loancalc.engine.annuity import annuity_factor, discount_factor, require_positive
from loancalc.engine.errors import InvalidInputError
from loancalc.models.loan import RateSolution, SolverStatus

logger = logging.getLogger(__name__)


class _Breakdown(Exception):
    """Raised from inside the Newton callbacks to stop the iteration."""

    def __init__(self, status: SolverStatus, annual_rate: float):
        super().__init__(status.value)
        self.status = status
        self.annual_rate = annual_rate


def _repayment(capital: float, monthly_rate: float, periods: float) -> float:
    """C * m / (1 - (1+m)^-n)"""
    return capital * monthly_rate / annuity_factor(monthly_rate, periods)


def _repayment_derivative(capital: float, monthly_rate: float, periods: float) -> float:
    """d/dm [C * m / (1 - (1+m)^-n)] = C * (A - m*n*(1+m)^(-n-1)) / A^2, A = 1 - (1+m)^-n"""
    a = annuity_factor(monthly_rate, periods)
    growth = discount_factor(monthly_rate, periods + 1)
    return capital * (a - monthly_rate * periods * growth) / a ** 2


def solve_rate(
    capital: float,
    repayment: float,
    periods: float,
    tolerance: float | None = None,
    max_iter: int | None = None,
    initial_rate: float | None = None,
) -> RateSolution:
    """Find the annual rate r such that solve_repayment(capital, periods, r) == repayment.

    Iterates r_new = r - f(r)/f'(r) with f(r) = repayment - C*m/(1-(1+m)^-n), m = r/12,
    until |r_new - r| < tolerance. Defaults for tolerance, iteration cap and the
    starting guess come from settings (1e-6, 100, 5%).

    Never raises for numerical trouble: the returned RateSolution carries the status.
    Exhausting max_iter returns the last estimate; a zero or non-finite derivative
    returns NaN.
    """
    require_positive(capital=capital, repayment=repayment, periods=periods)
    tolerance = settings.rate_tolerance if tolerance is None else tolerance
    max_iter = settings.rate_max_iter if max_iter is None else max_iter
    initial_rate = settings.rate_initial_guess if initial_rate is None else initial_rate
    if not tolerance > 0:
        raise InvalidInputError(f"tolerance must be positive, got {tolerance}")
    if max_iter < 1:
        raise InvalidInputError(f"max_iter must be at least 1, got {max_iter}")

    iterations = 0

    def f(annual_rate: float) -> float:
        nonlocal iterations
        iterations += 1
        annual_rate = float(annual_rate)
        value = repayment - _repayment(capital, annual_rate / 12, periods)
        if not math.isfinite(value):
            raise _Breakdown(SolverStatus.NON_FINITE, annual_rate)
        return value

    def f_prime(annual_rate: float) -> float:
        annual_rate = float(annual_rate)
        # Chain rule: dm/dr = 1/12
        value = -_repayment_derivative(capital, annual_rate / 12, periods) / 12
        if not math.isfinite(value):
            raise _Breakdown(SolverStatus.NON_FINITE, annual_rate)
        if value == 0:
            raise _Breakdown(SolverStatus.ZERO_DERIVATIVE, annual_rate)
        return value

    try:
        root, result = newton(
            f,
            initial_rate,
            fprime=f_prime,
            tol=tolerance,
            maxiter=max_iter,
            full_output=True,
            disp=False,
        )
    except ZeroDivisionError:
        # Annuity factor of exactly zero at this iterate
        logger.warning("Rate solver hit a zero annuity factor after %d iterations", iterations)
        return RateSolution(rate=math.nan, iterations=iterations, status=SolverStatus.NON_FINITE)
    except _Breakdown as e:
        logger.warning(
            "Rate solver stopped at annual rate %s after %d iterations: %s",
            e.annual_rate, iterations, e.status.value,
        )
        return RateSolution(rate=math.nan, iterations=iterations, status=e.status)

    rate = float(root)
    if not math.isfinite(rate):
        logger.warning("Rate solver diverged after %d iterations", result.iterations)
        return RateSolution(rate=math.nan, iterations=result.iterations, status=SolverStatus.NON_FINITE)
    if not result.converged:
        logger.warning(
            "Rate solver did not converge after %d iterations (last estimate %s)",
            result.iterations, rate,
        )
        return RateSolution(rate=rate, iterations=result.iterations, status=SolverStatus.MAX_ITERATIONS)

    logger.debug("Rate solver converged to %s in %d iterations", rate, result.iterations)
    return RateSolution(rate=rate, iterations=result.iterations, status=SolverStatus.CONVERGED)
