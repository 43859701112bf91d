"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, Field

from loancalc.models.loan import SolveTarget, SolverStatus


# ---- Request schemas ----

class SolveRequest(BaseModel):
    target: SolveTarget = Field(..., description="Field to compute")
    capital: float | None = None
    repayment: float | None = Field(None, description="Monthly repayment")
    periods: float | None = Field(None, description="Duration in months")
    annual_rate: float | None = Field(None, description="Annual rate as a fraction, e.g. 0.0742")


class ScheduleRequest(BaseModel):
    capital: float
    repayment: float
    periods: float
    annual_rate: float = Field(..., description="Annual rate as a fraction, e.g. 0.0742")


# ---- Response schemas ----

class SolveResponse(BaseModel):
    target: SolveTarget
    value: float
    converged: bool
    status: SolverStatus


class AmortizationRowResponse(BaseModel):
    period: int
    interest: float
    principal: float
    remaining: float


class ScheduleSummaryResponse(BaseModel):
    periods: int
    total_interest: float
    total_principal: float
    total_paid: float
    final_balance: float
    paid_off: bool


class ScheduleResponse(BaseModel):
    rows: list[AmortizationRowResponse]
    summary: ScheduleSummaryResponse
    report: str
