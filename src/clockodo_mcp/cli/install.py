"""
Install CLI command.

Adds clockodo-mcp to Claude Desktop configuration, running the
server with the current Python interpreter.
"""

import json
import sys
from pathlib import Path


def get_claude_config_path() -> Path:
    """Get Claude Desktop config path for current OS."""
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "Claude" / "claude_desktop_config.json"
    elif sys.platform == "win32":
        return Path.home() / "AppData" / "Roaming" / "Claude" / "claude_desktop_config.json"
    else:
        # Linux
        return Path.home() / ".config" / "Claude" / "claude_desktop_config.json"


def load_claude_config() -> dict:
    """Load existing Claude Desktop config or return empty structure."""
    config_path = get_claude_config_path()

    if config_path.exists():
        try:
            return json.loads(config_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, IOError):
            return {}

    return {}


def save_claude_config(config: dict) -> None:
    """Save Claude Desktop config."""
    config_path = get_claude_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")


def server_entry() -> dict:
    """Server definition pointing at the current interpreter."""
    return {
        "command": sys.executable,
        "args": ["-m", "clockodo_mcp", "serve"],
        "cwd": str(Path.cwd()),
    }


def install_to_claude(name: str = "clockodo", force: bool = False) -> bool:
    """
    Add clockodo-mcp to Claude Desktop configuration.

    Merges into existing config, preserving all other servers.
    Returns False if an entry with this name exists and force is not set.
    """
    config = load_claude_config()
    servers = config.setdefault("mcpServers", {})

    if name in servers and not force:
        return False

    servers[name] = server_entry()
    save_claude_config(config)
    return True


def uninstall_from_claude(name: str = "clockodo") -> bool:
    """
    Remove clockodo-mcp from Claude Desktop configuration.

    Returns True if removed, False if not found.
    """
    config = load_claude_config()

    if name not in config.get("mcpServers", {}):
        return False

    del config["mcpServers"][name]
    save_claude_config(config)
    return True


def run_install(uninstall: bool = False, force: bool = False, name: str = "clockodo") -> int:
    """
    Main install command entry point.

    Returns exit code (0 = success, 1 = error).
    """
    config_path = get_claude_config_path()

    if uninstall:
        if uninstall_from_claude(name):
            print(f"✓ Removed '{name}' from Claude Desktop")
            print(f"  Config: {config_path}")
            print("\nRestart Claude Desktop to apply changes.")
            return 0
        print(f"✗ '{name}' not found in Claude Desktop config")
        return 1

    if not install_to_claude(name, force=force):
        print(f"✗ '{name}' already installed in Claude Desktop")
        print("  Use --force to overwrite")
        return 1

    print(f"✓ Installed '{name}' to Claude Desktop")
    print(f"  Config: {config_path}")
    print(f"  Python: {sys.executable}")
    print("  Credentials are read from CLOCKODO_API_USER/CLOCKODO_API_KEY or .env in the working directory")
    print("\nRestart Claude Desktop to activate.")
    return 0
