from dataclasses import dataclass
from enum import Enum


class SolveTarget(Enum):
    CAPITAL = "capital"
    DURATION = "duration"
    REPAYMENT = "repayment"
    RATE = "rate"

    @property
    def label(self) -> str:
        return _TARGET_LABELS[self]


_TARGET_LABELS = {
    SolveTarget.CAPITAL: "Capital",
    SolveTarget.DURATION: "Duration (periods)",
    SolveTarget.REPAYMENT: "Periodic repayment",
    SolveTarget.RATE: "Rate",
}


class SolverStatus(Enum):
    CONVERGED = "converged"
    MAX_ITERATIONS = "max_iterations"
    ZERO_DERIVATIVE = "zero_derivative"
    NON_FINITE = "non_finite"


@dataclass(frozen=True)
class LoanParameters:
    """Loan terms as entered by the user. The field being solved for is None."""
    capital: float | None = None
    repayment: float | None = None  # Per period (monthly)
    periods: float | None = None  # May be fractional when solved for
    annual_rate: float | None = None  # Fraction, e.g. 0.0742 for 7.42%

    @property
    def monthly_rate(self) -> float | None:
        if self.annual_rate is None:
            return None
        return self.annual_rate / 12


@dataclass(frozen=True)
class AmortizationRow:
    period: int
    interest: float
    principal: float
    remaining: float

    @property
    def payment(self) -> float:
        return self.interest + self.principal


@dataclass(frozen=True)
class ScheduleSummary:
    periods: int
    total_interest: float
    total_principal: float
    final_balance: float

    @property
    def total_paid(self) -> float:
        return self.total_interest + self.total_principal

    @property
    def paid_off(self) -> bool:
        return self.final_balance <= 0


@dataclass(frozen=True)
class RateSolution:
    rate: float  # Annual, fraction. NaN when the solver broke down.
    iterations: int
    status: SolverStatus

    @property
    def converged(self) -> bool:
        return self.status is SolverStatus.CONVERGED
