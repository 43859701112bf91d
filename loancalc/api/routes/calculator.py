"""Calculator routes: solve for the missing loan field, build schedules."""

from fastapi import APIRouter, HTTPException

from loancalc.api.schemas import (
    SolveRequest,
    SolveResponse,
    ScheduleRequest,
    ScheduleResponse,
    AmortizationRowResponse,
    ScheduleSummaryResponse,
)
from loancalc.engine.calculator import schedule_for, solve
from loancalc.engine.errors import LoanCalcError
from loancalc.models.loan import LoanParameters

router = APIRouter(prefix="/api/v1", tags=["calculator"])


@router.post("/solve", response_model=SolveResponse)
def solve_field(req: SolveRequest):
    """Compute `target` from the three other fields.

    A rate search that exhausts its iterations still returns 200 with converged=false.
    """
    params = LoanParameters(
        capital=req.capital,
        repayment=req.repayment,
        periods=req.periods,
        annual_rate=req.annual_rate,
    )
    try:
        solution = solve(req.target, params)
    except LoanCalcError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SolveResponse(
        target=solution.target,
        value=solution.value,
        converged=solution.converged,
        status=solution.status,
    )


@router.post("/schedule", response_model=ScheduleResponse)
def schedule(req: ScheduleRequest):
    params = LoanParameters(
        capital=req.capital,
        repayment=req.repayment,
        periods=req.periods,
        annual_rate=req.annual_rate,
    )
    try:
        result = schedule_for(params)
    except LoanCalcError as e:
        raise HTTPException(status_code=400, detail=str(e))

    s = result.summary
    return ScheduleResponse(
        rows=[
            AmortizationRowResponse(
                period=r.period,
                interest=r.interest,
                principal=r.principal,
                remaining=r.remaining,
            )
            for r in result.rows
        ],
        summary=ScheduleSummaryResponse(
            periods=s.periods,
            total_interest=s.total_interest,
            total_principal=s.total_principal,
            total_paid=s.total_paid,
            final_balance=s.final_balance,
            paid_off=s.paid_off,
        ),
        report=result.report,
    )
