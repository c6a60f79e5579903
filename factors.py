"""
Time value of money factors.

Six closed-form interest-rate factors, each a dimensionless multiplier that
turns an amount into its time-adjusted equivalent:

    FVIF  : Future value of a present lump sum
    PVIF  : Present value of a future lump sum
    FVAIF : Future value of periodic savings
    PVAIF : Present value of periodic payments
    SFF   : Required periodic savings to reach a future goal
    CRF   : Fixed periodic payment to repay a loan or deplete a fund

Arithmetic follows IEEE-754: a zero denominator gives inf or nan instead of
raising, e.g. SFF with r=0.
"""
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Union

import numpy as np
from fastmcp.exceptions import ToolError

if TYPE_CHECKING:
    from arguments import CalculationRequest


class UnknownOperation(ToolError):
    """The requested operation has no factor formula."""

    def __init__(self, operation: object):
        self.operation = operation
        super().__init__(f"unknown operation: {operation}")


class Operation(str, Enum):
    FUTURE_VALUE_FACTOR = "FVIF"
    PRESENT_VALUE_FACTOR = "PVIF"
    FUTURE_VALUE_OF_ANNUITY_FACTOR = "FVAIF"
    PRESENT_VALUE_OF_ANNUITY_FACTOR = "PVAIF"
    SINKING_FUND_FACTOR = "SFF"
    CAPITAL_RECOVERY_FACTOR = "CRF"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def parse(cls, value: Union["Operation", str]) -> "Operation":
        """Look up an operation by its code, raising UnknownOperation if there is none."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownOperation(value) from None


_DESCRIPTIONS = {
    Operation.FUTURE_VALUE_FACTOR: "Future value of a present lump sum",
    Operation.PRESENT_VALUE_FACTOR: "Present value of a future lump sum",
    Operation.FUTURE_VALUE_OF_ANNUITY_FACTOR: "Future value of periodic savings",
    Operation.PRESENT_VALUE_OF_ANNUITY_FACTOR: "Present value of periodic payments",
    Operation.SINKING_FUND_FACTOR: "Required periodic savings to reach a future goal",
    Operation.CAPITAL_RECOVERY_FACTOR: "Fixed periodic payment to repay a loan or deplete a fund",
}


@dataclass(frozen=True)
class CalculationResult:
    rate: float
    periods: float
    amount: float
    factor: float
    value: float


def _future_value(r, n):
    # (1+r)^n
    return np.power(1 + r, n)


def _present_value(r, n):
    # (1+r)^(-n)
    return np.power(1 + r, -n)


def _future_value_of_annuity(r, n):
    # ((1+r)^n - 1) / r
    return (np.power(1 + r, n) - 1) / r


def _present_value_of_annuity(r, n):
    # (1 - (1+r)^(-n)) / r
    return (1 - np.power(1 + r, -n)) / r


def _sinking_fund(r, n):
    # r / ((1+r)^n - 1)
    return r / (np.power(1 + r, n) - 1)


def _capital_recovery(r, n):
    # r(1+r)^n / ((1+r)^n - 1)
    growth = np.power(1 + r, n)
    return (r * growth) / (growth - 1)


FACTOR_FORMULAS: Dict[Operation, Callable] = {
    Operation.FUTURE_VALUE_FACTOR: _future_value,
    Operation.PRESENT_VALUE_FACTOR: _present_value,
    Operation.FUTURE_VALUE_OF_ANNUITY_FACTOR: _future_value_of_annuity,
    Operation.PRESENT_VALUE_OF_ANNUITY_FACTOR: _present_value_of_annuity,
    Operation.SINKING_FUND_FACTOR: _sinking_fund,
    Operation.CAPITAL_RECOVERY_FACTOR: _capital_recovery,
}

if set(FACTOR_FORMULAS) != set(Operation):
    raise RuntimeError("every Operation needs exactly one factor formula")


def calculate_factor(operation: Union[Operation, str], rate: float, periods: float) -> float:
    """
    Calculate the interest-rate factor for an operation.

    Args:
        operation: An Operation or its code, e.g. "FVIF"
        rate: The interest rate as a decimal (e.g. 0.05 for 5%)
        periods: The number of periods (e.g. years)

    Returns:
        The factor as a float. Undefined results (division by zero, negative
        base with a fractional exponent) come back as inf or nan.

    Raises:
        UnknownOperation: If the operation has no formula.
    """
    formula = FACTOR_FORMULAS[Operation.parse(operation)]
    with np.errstate(all="ignore"):
        factor = formula(np.float64(rate), np.float64(periods))
    return float(factor)


def compute(request: "CalculationRequest") -> CalculationResult:
    """Apply the request's factor to its amount."""
    factor = calculate_factor(request.operation, request.rate, request.periods)
    with np.errstate(all="ignore"):
        value = float(np.float64(request.amount) * factor)
    return CalculationResult(
        rate=request.rate,
        periods=request.periods,
        amount=request.amount,
        factor=factor,
        value=value,
    )
