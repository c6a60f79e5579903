"""Turn raw tool arguments into a validated CalculationRequest."""
from dataclasses import dataclass
from numbers import Real
from typing import Any, Mapping

from fastmcp.exceptions import ToolError

from factors import Operation


class MissingParameter(ToolError):
    """A required argument was absent or had the wrong type."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"missing {name}")


@dataclass(frozen=True)
class CalculationRequest:
    operation: Operation
    rate: float
    periods: float
    amount: float


def _number(args: Mapping[str, Any], name: str) -> float:
    value = args.get(name)
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MissingParameter(name)
    return float(value)


def normalize_rate(rate: float) -> float:
    """
    Treat a rate above 1 as a caller mistake and scale it down by 10.

    5 becomes 0.5; 1.0, 0 and negative rates are returned unchanged.
    """
    if rate > 1:
        return rate / 10.0
    return rate


def extract_operation(args: Mapping[str, Any]) -> Operation:
    value = args.get("operation")
    if not isinstance(value, str):
        raise MissingParameter("operation")
    return Operation.parse(value)


def extract_rate(args: Mapping[str, Any]) -> float:
    return normalize_rate(_number(args, "r"))


def extract_periods(args: Mapping[str, Any]) -> float:
    return _number(args, "n")


def extract_amount(args: Mapping[str, Any]) -> float:
    return _number(args, "amount")


def resolve_request(args: Mapping[str, Any]) -> CalculationRequest:
    """
    Validate the tool arguments in order: operation, r, n, amount.

    Raises:
        MissingParameter: On the first argument that is absent or mistyped.
        UnknownOperation: If operation is not one of the supported codes.
    """
    return CalculationRequest(
        operation=extract_operation(args),
        rate=extract_rate(args),
        periods=extract_periods(args),
        amount=extract_amount(args),
    )
