"""
Crate Availability

Check whether a crate name is available on crates.io, from Python, the
command line, or as an MCP server.
"""

__version__ = "0.1.0"

from .checker import (  # noqa: E402
    Availability,
    CheckError,
    CheckResult,
    EmptyNameError,
    InvalidNameError,
    InvalidTimeoutError,
    check_availability,
    check_availability_with_timeout,
    check_crate,
)

__all__ = [
    "Availability",
    "CheckError",
    "CheckResult",
    "EmptyNameError",
    "InvalidNameError",
    "InvalidTimeoutError",
    "check_availability",
    "check_availability_with_timeout",
    "check_crate",
]


def main(argv: list[str] | None = None):
    """Main entry point for the CLI."""
    import sys

    if argv is None:
        argv = sys.argv[1:]

    # Server and info flags are only recognized as the first argument, so
    # "crate-availability -- -V" still checks a crate named "-V"
    command = argv[0] if argv else None

    if command in ("--help", "-h"):
        print_help()
        sys.exit(0)

    if command in ("--version", "-V"):
        print(f"crate-availability {__version__}")
        sys.exit(0)

    if command == "--show-config":
        show_config()
        sys.exit(0)

    if command == "--serve":
        from .server import mcp
        mcp.run()
        sys.exit(0)

    from .cli import main as cli_main
    sys.exit(cli_main(argv))


def print_help():
    """Print help message."""
    from .config import DEFAULT_REGISTRY_URL, DEFAULT_TIMEOUT

    print(f"""crate-availability {__version__}

Check whether a crate name is available on crates.io.

Usage:
    crate-availability NAME [options]   Check a crate name
    crate-availability --serve          Run the MCP server
    crate-availability --show-config    Show current configuration
    crate-availability --version        Show version
    crate-availability --help           Show this help

Options:
    --timeout SECONDS       Request timeout (default: {DEFAULT_TIMEOUT:g})
    --registry URL          Registry base URL (default: {DEFAULT_REGISTRY_URL})
    --color MODE            auto, always or never (default: auto)
    --json                  Output as JSON
    -v, --verbose           Log request details to stderr

Exit status:
    0 available, 1 unavailable, 2 unknown or error

Configuration:
    Environment variables take precedence over the config file:
        CRATE_AVAILABILITY_TIMEOUT      "timeout"
        CRATE_AVAILABILITY_REGISTRY     "registry_url"
        CRATE_AVAILABILITY_COLOR        "color"

MCP Setup:
    Add to your MCP client configuration:
    {{
      "mcpServers": {{
        "crate-availability": {{
          "command": "uvx",
          "args": ["crate-availability", "--serve"]
        }}
      }}
    }}
""")


def show_config():
    """Show current configuration."""
    from .config import (
        ENV_COLOR,
        ENV_REGISTRY,
        ENV_TIMEOUT,
        get_color_mode,
        get_config_file,
        get_default_timeout,
        get_registry_url,
        get_setting_source,
    )

    print("Configuration")
    print("=" * 50)
    print()

    config_file = get_config_file()
    print(f"Config file: {config_file}")
    print(f"  Exists: {config_file.exists()}")
    print()

    print(f"Timeout: {get_default_timeout():g}s")
    print(f"  Source: {get_setting_source(ENV_TIMEOUT, 'timeout')}")
    print(f"Registry: {get_registry_url()}")
    print(f"  Source: {get_setting_source(ENV_REGISTRY, 'registry_url')}")
    print(f"Color: {get_color_mode()}")
    print(f"  Source: {get_setting_source(ENV_COLOR, 'color')}")
