import os
from dataclasses import dataclass

from dotenv import load_dotenv

TRANSPORTS = ("stdio", "http", "sse", "streamable-http")


@dataclass(frozen=True)
class Settings:
    name: str = "Finance Calculator"
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"


def load_settings() -> Settings:
    """
    Read server settings from the environment.

    A .env file in the working directory is loaded first; variables already
    set in the environment take precedence over it.

    Raises:
        ValueError: If the transport is unknown or the port is not an integer.
    """
    load_dotenv()

    transport = os.getenv("FINANCE_CALCULATOR_TRANSPORT", Settings.transport).lower()
    if transport not in TRANSPORTS:
        raise ValueError(f"Invalid transport: {transport} (expected one of {', '.join(TRANSPORTS)})")

    port = os.getenv("FINANCE_CALCULATOR_PORT", str(Settings.port))
    try:
        port = int(port)
    except ValueError:
        raise ValueError(f"Invalid port: {port}") from None

    return Settings(
        name=os.getenv("FINANCE_CALCULATOR_NAME", Settings.name),
        transport=transport,
        host=os.getenv("FINANCE_CALCULATOR_HOST", Settings.host),
        port=port,
        log_level=os.getenv("FINANCE_CALCULATOR_LOG_LEVEL", Settings.log_level).upper(),
    )
