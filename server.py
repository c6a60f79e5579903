# server.py
import math
from typing import Annotated, Any, Dict, Mapping

from fastmcp import FastMCP
from fastmcp.server.dependencies import get_context
from fastmcp.tools import Tool, ToolResult
from fastmcp.utilities.logging import configure_logging, get_logger
from pydantic import BaseModel, Field

from arguments import resolve_request
from factors import CalculationResult, Operation, compute
from settings import Settings, load_settings

logger = get_logger("finance_calculator")

TOOL_NAME = "financial_calculator"

_OPERATION_HELP = "\n".join(f"- {op.value} : {op.description}" for op in Operation)

TOOL_DESCRIPTION = f"""This tool performs time value of money calculations using six standard financial planning operations.
The financial operation to perform. Must be one of: {', '.join(op.value for op in Operation)}.

It helps estimate future values, present values, loan repayments, and savings requirements based on interest rate, time period, and amount.
"""


class CalculatorArguments(BaseModel):
    """Published input schema of the calculator tool. Values are checked by resolve_request."""

    operation: Annotated[Operation, Field(description=f"The financial operation to perform. Must be one of:\n{_OPERATION_HELP}")]
    r: Annotated[float, Field(description="The annual interest rate as a decimal (e.g., 0.05 for 5%)")]
    n: Annotated[float, Field(description="The number of periods (typically years) for the calculation.")]
    amount: Annotated[float, Field(description=(
        "The monetary value used in the calculation:\n"
        '- For "FVIF" and "PVIF": a single lump-sum amount\n'
        '- For "FVAIF", "PVAIF", "SFF", and "CRF": a periodic (e.g. annual) amount'
    ))]


def _truncate(value: float) -> str:
    # inf and nan have no integer form
    if not math.isfinite(value):
        return str(value)
    return str(int(value))


def format_result(result: CalculationResult) -> str:
    """Render a result as the tool's one-line text response."""
    return "rate = %f n = %f amount = %f result rate = %f result is %s" % (
        result.rate,
        result.periods,
        result.amount,
        result.factor,
        _truncate(result.value),
    )


def calculate(arguments: Mapping[str, Any]) -> str:
    """
    Run one calculator request.

    Args:
        arguments: Raw tool arguments: operation, r, n and amount

    Returns:
        The formatted result line

    Raises:
        MissingParameter: If an argument is absent or has the wrong type
        UnknownOperation: If the operation is not supported
    """
    request = resolve_request(arguments)
    return format_result(compute(request))


class FinancialCalculatorTool(Tool):
    """
    The financial_calculator tool.

    Arguments arrive untouched from the client, so a missing or mistyped
    value is reported as "missing <name>" rather than a schema error.
    """

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        text = calculate(arguments)
        logger.debug("%s %s -> %s", self.name, arguments, text)
        await get_context().info(text)
        return ToolResult(content=text)


def build_mcp_server(name: str = Settings.name) -> FastMCP:
    mcp = FastMCP(name, version="1.0.0")
    mcp.add_tool(FinancialCalculatorTool(
        name=TOOL_NAME,
        description=TOOL_DESCRIPTION,
        parameters=CalculatorArguments.model_json_schema(),
    ))
    return mcp


def main() -> None:
    settings = load_settings()
    # stdout carries JSON-RPC under stdio, so logs go to stderr
    configure_logging(level=settings.log_level)
    logger.info("Starting %s on %s transport", settings.name, settings.transport)
    mcp = build_mcp_server(settings.name)
    if settings.transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport=settings.transport, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
