import asyncio
import os
import sys
from typing import Any, Dict, List, Optional
from contextlib import AsyncExitStack

from dotenv import load_dotenv

# MCP imports for stdio communication
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

TOOL_NAME = "financial_calculator"

USAGE = (
    "Usage: uv run mcp_client.py <path_to_server_script> --operation=OP --r=RATE --n=PERIODS --amount=AMOUNT"
    " [--use-uv] [--server-dir=DIR]\n"
    "Example: uv run mcp_client.py server.py --operation=FVIF --r=0.05 --n=10 --amount=1000"
)


class MCPStdioClient:
    """
    An MCP client that connects to the finance calculator server using stdio
    communication and calls its financial_calculator tool.
    """

    def __init__(self):
        # Load environment variables from .env file first
        load_dotenv()

        self.session: Optional[ClientSession] = None
        self.stdio = None
        self.write = None
        self.exit_stack = AsyncExitStack()

        # Store server tools
        self.tools = []

    async def connect_to_server(self, server_script_path: str, use_uv: bool = False, server_dir: str = None) -> bool:
        """
        Connect to an MCP server via stdio

        Args:
            server_script_path: Path to the server script (.py)
            use_uv: Whether to use uv to run the server
            server_dir: Directory to run uv from

        Returns:
            bool: True if connection successful, False otherwise
        """
        try:
            print(f"Connecting to MCP server at: {server_script_path}")

            if not server_script_path.endswith('.py'):
                print("Error: Server script must be a .py file")
                return False

            # The server reads its FINANCE_CALCULATOR_* settings from here
            env = os.environ.copy()

            if use_uv and server_dir:
                print(f"Using uv to run server from directory: {server_dir}")
                command = "uv"
                script_name = os.path.basename(server_script_path)
                args = ["--directory", server_dir, "run", script_name]
            else:
                command = sys.executable
                args = [server_script_path]

            server_params = StdioServerParameters(
                command=command,
                args=args,
                env=env
            )

            # Connect to server
            stdio_transport = await self.exit_stack.enter_async_context(stdio_client(server_params))
            self.stdio, self.write = stdio_transport
            self.session = await self.exit_stack.enter_async_context(ClientSession(self.stdio, self.write))

            print("Initializing MCP session...")
            await self.session.initialize()

            response = await self.session.list_tools()
            self.tools = response.tools

            if self.tools:
                print(f"\nConnected to server with {len(self.tools)} tools:")
                for tool in self.tools:
                    print(f"  - {tool.name}")
            else:
                print("Connected to server but no tools available")

            return True

        except Exception as e:
            print(f"Error connecting to MCP server: {str(e)}")
            import traceback
            traceback.print_exc()
            return False

    async def calculate(self, arguments: Dict[str, Any]) -> str:
        """
        Call the financial_calculator tool

        Args:
            arguments: operation, r, n and amount

        Returns:
            The tool's text output

        Raises:
            RuntimeError: If not connected, or if the tool reported an error
        """
        if not self.session:
            raise RuntimeError("Not connected to an MCP server")

        if not any(tool.name == TOOL_NAME for tool in self.tools):
            raise RuntimeError(f"Server does not provide the {TOOL_NAME} tool")

        print(f"Calling tool: {TOOL_NAME} with parameters: {arguments}")
        result = await self.session.call_tool(TOOL_NAME, arguments)
        text = "\n".join(item.text for item in result.content if item.type == "text")
        if result.isError:
            raise RuntimeError(text)
        return text

    async def cleanup(self):
        """Clean up resources"""
        if self.session:
            await self.exit_stack.aclose()
            print("Connection to MCP server closed")


def _parse_value(value: str) -> Any:
    # Numbers go over the wire as JSON numbers, anything else as a string
    for convert in (int, float):
        try:
            return convert(value)
        except ValueError:
            pass
    return value


def parse_tool_arguments(argv: List[str]) -> Dict[str, Any]:
    """Collect --operation=, --r=, --n= and --amount= from the command line."""
    arguments = {}
    for arg in argv:
        for key in ("operation", "r", "n", "amount"):
            prefix = f"--{key}="
            if arg.startswith(prefix):
                value = arg[len(prefix):]
                arguments[key] = value if key == "operation" else _parse_value(value)
    return arguments


async def main():
    # Validate command line arguments
    if len(sys.argv) < 2:
        print(USAGE)
        return

    server_script = sys.argv[1]

    use_uv = "--use-uv" in sys.argv
    server_dir = None

    for arg in sys.argv:
        if arg.startswith("--server-dir="):
            server_dir = arg.split("=", 1)[1]

    # If using uv but no server directory specified, extract from server script path
    if use_uv and not server_dir:
        server_dir = os.path.dirname(server_script)
        if not server_dir:
            server_dir = "."

    arguments = parse_tool_arguments(sys.argv[2:])

    client = MCPStdioClient()

    try:
        if await client.connect_to_server(server_script, use_uv, server_dir):
            try:
                response = await client.calculate(arguments)
                print("\nResult:")
                print(response)
            except RuntimeError as e:
                print(f"\nError: {str(e)}")
    finally:
        await client.cleanup()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
