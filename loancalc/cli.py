"""CLI for the loan calculator.

Usage:
    python -m loancalc.cli solve rate --capital 10000 --repayment 500 --periods 24
    python -m loancalc.cli solve repayment --capital 10000 --periods 24 --rate 12
    python -m loancalc.cli schedule --capital 10000 --repayment 500 --periods 24 --rate 12
"""

import argparse
import logging
import sys

from loancalc.config import settings
from loancalc.engine.calculator import FIELD_LABELS, locked_field, parameters_from_fields, schedule_for, solve
from loancalc.engine.errors import LoanCalcError
from loancalc.engine.formatting import format_amount
from loancalc.models.loan import SolveTarget


def print_solution(solution) -> None:
    name = FIELD_LABELS[locked_field(solution.target)]
    print(f"  {name}: {solution.display}")
    if not solution.converged:
        print(f"  Warning: rate search did not converge ({solution.status.value}); last estimate shown.")


def print_schedule(result) -> None:
    print(result.report, end="")
    s = result.summary
    print()
    print(f"  Total interest:   {format_amount(s.total_interest)}")
    print(f"  Total paid:       {format_amount(s.total_paid)}")
    print(f"  Final balance:    {format_amount(s.final_balance)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Loan amortization calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    fields = argparse.ArgumentParser(add_help=False)
    fields.add_argument("--capital", help="Amount borrowed")
    fields.add_argument("--repayment", help="Monthly repayment")
    fields.add_argument("--periods", help="Duration in months")
    fields.add_argument("--rate", help="Annual interest rate in percent (e.g. 7.42)")

    solve_parser = sub.add_parser("solve", parents=[fields], help="Compute the missing field")
    solve_parser.add_argument("target", choices=[t.value for t in SolveTarget], help="Field to compute")

    sub.add_parser("schedule", parents=[fields], help="Print the amortization schedule")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level)
    args = build_parser().parse_args(argv)

    try:
        params = parameters_from_fields(args.capital, args.repayment, args.periods, args.rate)
        if args.command == "solve":
            print_solution(solve(SolveTarget(args.target), params))
        else:
            print_schedule(schedule_for(params))
    except LoanCalcError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
