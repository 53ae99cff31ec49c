"""
Crate Availability MCP Server

An MCP server for checking whether a crate name is free on crates.io.
"""

import json
import logging
import os

from mcp.server.fastmcp import FastMCP

from . import __version__
from .checker import CheckError, check_crate

# Suppress httpx request logging by default
# Set CRATE_AVAILABILITY_DEBUG=1 to enable verbose HTTP logging
if not os.environ.get("CRATE_AVAILABILITY_DEBUG"):
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

VERSION = __version__

# Initialize the MCP server
mcp = FastMCP("crate-availability")
mcp._mcp_server.version = VERSION


@mcp.tool()
def version() -> str:
    """
    Get the version of the Crate Availability MCP server.

    Returns:
        Version string including server name and version number.
    """
    return f"Crate Availability MCP Server version {VERSION}"


@mcp.tool()
def check_crate_name(name: str, timeout: float | None = None) -> str:
    """
    Check whether a crate name is available on crates.io.

    Args:
        name: The crate name to check
        timeout: Seconds to wait for crates.io before giving up (default: 5)

    Returns:
        JSON with the name, availability ("available", "unavailable" or
        "unknown"), the HTTP status code, and an error reason when the
        availability could not be determined.
    """
    if not name or not name.strip():
        return json.dumps({"error": "No crate name provided"})

    try:
        result = check_crate(name.strip(), timeout)
    except CheckError as e:
        return json.dumps({"error": str(e)})

    return json.dumps(result.to_dict())
