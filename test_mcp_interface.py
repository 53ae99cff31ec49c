#!/usr/bin/env python3
"""
Test suite for the Crate Availability MCP Server via MCP Protocol

Starts `python -m crate_availability --serve` over stdio and calls its tools
through an MCP client session, against a local stand-in registry.

Usage:
    pip install -e '.[test]'
    python test_mcp_interface.py

Also collected by pytest (test_mcp_interface_suite).
"""

import sys

# Check Python version and dependencies early
if sys.version_info < (3, 10):
    print("Error: Python 3.10+ required")
    sys.exit(1)

try:
    import anyio
    from mcp import ClientSession
    from mcp.client.stdio import StdioServerParameters, stdio_client
except ImportError as e:
    print(f"Error: {e}")
    print()
    print("Install the package first:")
    print("    pip install -e '.[test]'")
    print("    python test_mcp_interface.py")
    sys.exit(1)

import os
import time
from pathlib import Path

from crate_availability import __version__
from test_server import RegistryHandler, TestRunner, local_registry


def extract_text(result) -> str:
    """Extract text content from MCP CallToolResult."""
    if result.content:
        for content in result.content:
            if hasattr(content, "text"):
                return content.text
    return ""


async def run_mcp_tests(runner: TestRunner, session: ClientSession):
    """Run all tests via MCP interface."""

    # =========================================================================
    # MCP Protocol Tests
    # =========================================================================
    runner.section("MCP Protocol - Tool Discovery")

    tools_result = await session.list_tools()
    tools = tools_result.tools
    tool_names = [t.name for t in tools]

    runner.test("version tool exists", "version" in tool_names)
    runner.test("check_crate_name tool exists", "check_crate_name" in tool_names)
    runner.test("exactly 2 tools exposed", len(tools) == 2, f"Found {len(tools)} tools")

    for tool in tools:
        if tool.name == "check_crate_name":
            properties = tool.inputSchema.get("properties", {})
            runner.test("check_crate_name has name parameter", "name" in properties)
            runner.test("check_crate_name has timeout parameter", "timeout" in properties)
            runner.test(
                "name is required",
                "name" in tool.inputSchema.get("required", []),
            )

    # =========================================================================
    # version
    # =========================================================================
    runner.section("version via MCP")

    result = await session.call_tool("version", {})
    text = extract_text(result)
    runner.test("version contains package version", __version__ in text, text)

    # =========================================================================
    # check_crate_name
    # =========================================================================
    runner.section("check_crate_name via MCP")

    result = await session.call_tool("check_crate_name", {"name": ""})
    runner.test_json("empty name returns error", extract_text(result), {
        "has error": lambda d: "error" in d,
    })

    result = await session.call_tool("check_crate_name", {"name": "serde"})
    runner.test_json("serde is unavailable", extract_text(result), {
        "availability": lambda d: d["availability"] == "unavailable",
        "status code": lambda d: d["status_code"] == 200,
    })

    result = await session.call_tool("check_crate_name", {"name": "fresh-crate", "timeout": 3})
    runner.test_json("fresh-crate is available", extract_text(result), {
        "availability": lambda d: d["availability"] == "available",
        "available flag": lambda d: d["available"] is True,
    })

    result = await session.call_tool("check_crate_name", {"name": "broken"})
    runner.test_json("registry error is unknown", extract_text(result), {
        "availability": lambda d: d["availability"] == "unknown",
        "has error": lambda d: "error" in d,
    })


async def main_async() -> bool:
    runner = TestRunner()

    print("\n" + "=" * 60)
    print("  CRATE AVAILABILITY MCP SERVER - MCP INTERFACE TEST SUITE")
    print("=" * 60)

    start_time = time.time()

    with local_registry():
        # The server subprocess only sees the environment passed here
        server_params = StdioServerParameters(
            command=sys.executable,  # Use the same Python that's running this test
            args=["-m", "crate_availability", "--serve"],
            cwd=str(Path(__file__).parent),
            env=dict(os.environ),
        )

        print("\nConnecting to MCP server via stdio...")

        with open(os.devnull, "w") as devnull:
            async with stdio_client(server_params, errlog=devnull) as (read_stream, write_stream):
                async with ClientSession(read_stream, write_stream) as session:
                    init_result = await session.initialize()
                    print(f"Connected to: {init_result.serverInfo.name} v{init_result.serverInfo.version}")

                    runner.section("MCP Connection")
                    runner.test("server initialized", True)
                    runner.test(
                        "server name is 'crate-availability'",
                        init_result.serverInfo.name == "crate-availability",
                        f"Got '{init_result.serverInfo.name}'",
                    )
                    runner.test(
                        "server version matches package",
                        init_result.serverInfo.version == __version__,
                        f"Got '{init_result.serverInfo.version}'",
                    )

                    await run_mcp_tests(runner, session)

        runner.test(
            "server queried the local registry",
            any(hit.startswith("/api/v1/crates/") for hit in RegistryHandler.hits),
        )

    elapsed = time.time() - start_time

    all_passed = runner.summary()

    print(f"\nCompleted in {elapsed:.1f} seconds")

    return all_passed


def test_mcp_interface_suite():
    assert anyio.run(main_async)


def main():
    result = anyio.run(main_async)
    sys.exit(0 if result else 1)


if __name__ == "__main__":
    main()
