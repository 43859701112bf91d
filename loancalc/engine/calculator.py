"""Four-field loan calculator: pick the unknown, solve it from the other three.

Shared by the dashboard, the API and the CLI. Field values arrive as typed by
the user (text or numbers, rate as a percentage) and are parsed here so every
front end validates the same way.
"""

import logging
import math
from dataclasses import dataclass

from loancalc.engine.annuity import solve_capital, solve_duration, solve_repayment
from loancalc.engine.errors import (
    InvalidInputError,
    InvalidParametersError,
    MathematicallyUndefinedError,
)
from loancalc.engine.rate_solver import solve_rate
from loancalc.engine.schedule import generate_schedule, render_schedule, summarize_schedule
from loancalc.models.loan import (
    AmortizationRow,
    LoanParameters,
    ScheduleSummary,
    SolverStatus,
    SolveTarget,
)

logger = logging.getLogger(__name__)

# Input field computed for each target
TARGET_FIELDS = {
    SolveTarget.CAPITAL: "capital",
    SolveTarget.DURATION: "periods",
    SolveTarget.REPAYMENT: "repayment",
    SolveTarget.RATE: "annual_rate",
}

FIELD_LABELS = {
    "capital": "Capital",
    "repayment": "Repayment",
    "periods": "Duration (periods)",
    "annual_rate": "Annual rate (%)",
}


@dataclass(frozen=True)
class Solution:
    target: SolveTarget
    value: float  # Annual rate as a fraction for SolveTarget.RATE
    status: SolverStatus = SolverStatus.CONVERGED

    @property
    def converged(self) -> bool:
        return self.status is SolverStatus.CONVERGED

    @property
    def display(self) -> str:
        """Value as written back into the computed field (rate in percent)."""
        if self.target is SolveTarget.RATE:
            return f"{self.value * 100:.6f}"
        return f"{self.value:.6f}"


@dataclass(frozen=True)
class ScheduleResult:
    rows: list[AmortizationRow]
    summary: ScheduleSummary
    report: str


def parse_field(value, name: str) -> float | None:
    """Parse a widget value. Empty -> None. Accepts "1 234,50" as well as "1234.50"."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip().replace(" ", "").replace("\u00a0", "")
    if not text:
        return None
    try:
        return float(text.replace(",", "."))
    except ValueError:
        raise InvalidInputError(f"{FIELD_LABELS.get(name, name)}: not a number: {value!r}")


def parameters_from_fields(capital=None, repayment=None, periods=None, rate_percent=None) -> LoanParameters:
    """Build LoanParameters from raw field values. The rate field is a percentage."""
    rate = parse_field(rate_percent, "annual_rate")
    return LoanParameters(
        capital=parse_field(capital, "capital"),
        repayment=parse_field(repayment, "repayment"),
        periods=parse_field(periods, "periods"),
        annual_rate=rate / 100 if rate is not None else None,
    )


def locked_field(target: SolveTarget) -> str:
    return TARGET_FIELDS[target]


def editable_fields(target: SolveTarget) -> dict[str, bool]:
    """Field name -> editable. Only the field being computed is read-only."""
    locked = locked_field(target)
    return {name: name != locked for name in TARGET_FIELDS.values()}


def _require(params: LoanParameters, names, error=InvalidInputError) -> None:
    missing = [FIELD_LABELS[n] for n in names if getattr(params, n) is None]
    if missing:
        raise error("Missing value for: " + ", ".join(missing))


def solve(target: SolveTarget, params: LoanParameters) -> Solution:
    """Compute the field selected by `target` from the three others.

    Raises InvalidInputError for missing or non-positive inputs and
    MathematicallyUndefinedError when no finite answer exists. A rate search that
    hits its iteration cap is returned with converged=False and its last estimate.
    """
    required = [n for n in TARGET_FIELDS.values() if n != TARGET_FIELDS[target]]
    _require(params, required)
    logger.debug("Solving for %s", target.value)

    if target is SolveTarget.CAPITAL:
        value = solve_capital(params.repayment, params.periods, params.annual_rate)
    elif target is SolveTarget.DURATION:
        value = solve_duration(params.capital, params.repayment, params.annual_rate)
    elif target is SolveTarget.REPAYMENT:
        value = solve_repayment(params.capital, params.periods, params.annual_rate)
    else:
        result = solve_rate(params.capital, params.repayment, params.periods)
        if math.isnan(result.rate):
            raise MathematicallyUndefinedError(
                f"Interest rate could not be determined ({result.status.value})"
            )
        return Solution(target=target, value=result.rate, status=result.status)

    return Solution(target=target, value=value)


def schedule_for(params: LoanParameters) -> ScheduleResult:
    """Amortization rows, totals and text report. All four fields are required."""
    _require(params, TARGET_FIELDS.values(), InvalidParametersError)
    rows = list(generate_schedule(params.capital, params.repayment, params.periods, params.annual_rate))
    return ScheduleResult(
        rows=rows,
        summary=summarize_schedule(rows),
        report=render_schedule(rows),
    )
