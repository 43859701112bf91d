import pytest

from loancalc.config import settings
from loancalc.engine.calculator import (
    Solution,
    editable_fields,
    locked_field,
    parameters_from_fields,
    parse_field,
    schedule_for,
    solve,
)
from loancalc.engine.errors import (
    InvalidInputError,
    InvalidParametersError,
    MathematicallyUndefinedError,
)
from loancalc.models.loan import LoanParameters, SolverStatus, SolveTarget


class TestParseField:
    @pytest.mark.parametrize("raw,expected", [
        ("1234.5", 1234.5),
        ("1 234,50", 1234.5),
        ("  7.42 ", 7.42),
        ("7,42", 7.42),
        ("1 000", 1000.0),
        (24, 24.0),
        (0.12, 0.12),
    ])
    def test_numbers(self, raw, expected):
        assert parse_field(raw, "capital") == expected

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_is_none(self, raw):
        assert parse_field(raw, "capital") is None

    def test_not_a_number(self):
        with pytest.raises(InvalidInputError, match="Capital: not a number"):
            parse_field("ten thousand", "capital")


class TestParametersFromFields:
    def test_rate_is_percent(self):
        params = parameters_from_fields("10000", "500", "24", "12")
        assert params == LoanParameters(capital=10000, repayment=500, periods=24, annual_rate=0.12)
        assert params.monthly_rate == pytest.approx(0.01)

    def test_blank_fields(self):
        params = parameters_from_fields("10000", "", None, "7.42")
        assert params.repayment is None
        assert params.periods is None
        assert params.annual_rate == pytest.approx(0.0742)


class TestFieldLocking:
    @pytest.mark.parametrize("target,field", [
        (SolveTarget.CAPITAL, "capital"),
        (SolveTarget.DURATION, "periods"),
        (SolveTarget.REPAYMENT, "repayment"),
        (SolveTarget.RATE, "annual_rate"),
    ])
    def test_only_computed_field_locked(self, target, field):
        assert locked_field(target) == field
        editable = editable_fields(target)
        assert editable[field] is False
        assert sum(editable.values()) == 3

    def test_labels(self):
        assert [t.label for t in SolveTarget] == [
            "Capital", "Duration (periods)", "Periodic repayment", "Rate",
        ]


class TestSolve:
    def test_capital(self):
        params = LoanParameters(repayment=470.734722, periods=24, annual_rate=0.12)
        solution = solve(SolveTarget.CAPITAL, params)
        assert solution.value == pytest.approx(10000, abs=0.01)
        assert solution.converged

    def test_repayment(self, mortgage):
        solution = solve(SolveTarget.REPAYMENT, mortgage)
        back = solve(SolveTarget.CAPITAL, LoanParameters(
            repayment=solution.value, periods=mortgage.periods, annual_rate=mortgage.annual_rate,
        ))
        assert back.value == pytest.approx(mortgage.capital, rel=1e-6)

    def test_duration(self, canonical_loan):
        solution = solve(SolveTarget.DURATION, canonical_loan)
        assert solution.value == pytest.approx(22.4257, abs=1e-3)

    def test_rate(self):
        params = LoanParameters(capital=10000, repayment=470.734722, periods=24)
        solution = solve(SolveTarget.RATE, params)
        assert solution.value == pytest.approx(0.12, abs=1e-6)
        assert solution.display.startswith("12.0000")

    def test_computed_field_ignored(self, canonical_loan):
        """A stale value in the field being computed does not matter."""
        solution = solve(SolveTarget.REPAYMENT, canonical_loan)
        assert solution.value == pytest.approx(470.7347, abs=1e-3)

    def test_missing_field(self):
        params = LoanParameters(capital=10000, annual_rate=0.12)
        with pytest.raises(InvalidInputError, match="Missing value for: Duration"):
            solve(SolveTarget.REPAYMENT, params)

    def test_zero_is_invalid(self):
        params = parameters_from_fields("10000", "0", "24", "12")
        with pytest.raises(InvalidInputError):
            solve(SolveTarget.DURATION, params)

    def test_undefined_duration(self):
        params = LoanParameters(capital=100000, repayment=500, annual_rate=0.12)
        with pytest.raises(MathematicallyUndefinedError):
            solve(SolveTarget.DURATION, params)

    def test_rate_breakdown_raises(self):
        params = LoanParameters(capital=5e-324, repayment=500, periods=24)
        with pytest.raises(MathematicallyUndefinedError, match="zero_derivative"):
            solve(SolveTarget.RATE, params)

    def test_rate_not_converged_is_best_effort(self, monkeypatch):
        monkeypatch.setattr(settings, "rate_max_iter", 1)
        params = LoanParameters(capital=10000, repayment=500, periods=24)
        solution = solve(SolveTarget.RATE, params)
        assert not solution.converged
        assert solution.status is SolverStatus.MAX_ITERATIONS


class TestSolutionDisplay:
    def test_rate_in_percent(self):
        assert Solution(SolveTarget.RATE, 0.0742).display == "7.420000"

    def test_amount(self):
        assert Solution(SolveTarget.CAPITAL, 10000.5).display == "10000.500000"


class TestScheduleFor:
    def test_canonical(self, canonical_loan):
        result = schedule_for(canonical_loan)
        assert len(result.rows) == 23
        assert result.summary.paid_off
        assert result.report.startswith("  Period |")

    def test_missing_field(self):
        params = LoanParameters(capital=10000, repayment=500, periods=24)
        with pytest.raises(InvalidParametersError, match="Annual rate"):
            schedule_for(params)

    def test_invalid_parameters(self):
        params = parameters_from_fields("-1", "500", "24", "12")
        with pytest.raises(InvalidParametersError):
            schedule_for(params)
