import pytest

from mcp_client import MCPStdioClient, parse_tool_arguments


def test_parse_tool_arguments():
    argv = ["--operation=CRF", "--r=0.05", "--n=30", "--amount=1e5", "--use-uv"]
    assert parse_tool_arguments(argv) == {"operation": "CRF", "r": 0.05, "n": 30, "amount": 100000.0}


def test_parse_tool_arguments_keeps_bad_numbers_as_text():
    # the server rejects these, the client just passes them through
    assert parse_tool_arguments(["--r=five", "--operation=5"]) == {"r": "five", "operation": "5"}


@pytest.mark.asyncio
async def test_calculate_requires_connection():
    client = MCPStdioClient()
    with pytest.raises(RuntimeError, match="Not connected"):
        await client.calculate({"operation": "FVIF", "r": 0.05, "n": 10, "amount": 1000})
