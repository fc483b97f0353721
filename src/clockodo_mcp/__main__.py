"""
Clockodo MCP CLI entry point.

Usage:
    python -m clockodo_mcp serve                 # Run MCP server
    python -m clockodo_mcp check                 # Verify Clockodo credentials
    python -m clockodo_mcp install               # Add to Claude Desktop
    python -m clockodo_mcp install --force       # Overwrite existing entry
    python -m clockodo_mcp install --remove      # Remove from Claude Desktop
"""

import argparse
import sys


def run_check() -> int:
    """
    Verify credentials by fetching the running stopwatch.

    Returns exit code (0 = success, 1 = error).
    """
    import httpx

    from clockodo_mcp.api.client import ClockodoAPIError, ClockodoClient, ConfigurationError
    from clockodo_mcp.settings import settings

    try:
        with ClockodoClient.from_settings(settings) as client:
            running = client.get_clock()
    except ConfigurationError as e:
        print(f"✗ {e}")
        return 1
    except (ClockodoAPIError, httpx.HTTPError) as e:
        print(f"✗ Clockodo request failed: {e}")
        return 1

    print(f"✓ Connected to Clockodo as {settings.api_user}")
    if running is not None:
        print(f"  Stopwatch running (ID: {running.id})")
    return 0


def main():
    parser = argparse.ArgumentParser(
        prog="clockodo-mcp",
        description="Clockodo MCP server for Claude Desktop"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # install command
    install_parser = subparsers.add_parser("install", help="Add to Claude Desktop")
    install_parser.add_argument(
        "--remove", "-r",
        action="store_true",
        dest="uninstall",
        help="Remove from Claude Desktop"
    )
    install_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite existing entry"
    )
    install_parser.add_argument(
        "--name", "-n",
        default="clockodo",
        help="Server name in config (default: clockodo)"
    )

    subparsers.add_parser("check", help="Verify Clockodo credentials")
    subparsers.add_parser("serve", help="Run MCP server")

    args = parser.parse_args()

    if args.command == "install":
        from clockodo_mcp.cli.install import run_install
        sys.exit(run_install(
            uninstall=args.uninstall,
            force=args.force,
            name=args.name,
        ))

    elif args.command == "check":
        sys.exit(run_check())

    elif args.command in ("serve", None):
        from clockodo_mcp.api.client import ConfigurationError
        from clockodo_mcp.server import serve
        try:
            serve()
        except ConfigurationError as e:
            print(f"Clockodo MCP server error: {e}", file=sys.stderr)
            sys.exit(1)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
