"""Error types raised by the loan engine.

All derive from ValueError so callers catching ValueError keep working.
"""


class LoanCalcError(ValueError):
    pass


class InvalidInputError(LoanCalcError):
    """A required parameter is missing, non-numeric, non-finite or not positive."""


class InvalidParametersError(InvalidInputError):
    """Loan parameters cannot produce an amortization schedule."""


class MathematicallyUndefinedError(LoanCalcError):
    """The formula has no real value for these inputs (log of a non-positive
    number, a zero annuity factor, a solver breakdown)."""
