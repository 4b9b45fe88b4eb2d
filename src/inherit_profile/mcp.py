"""MCP server inheritance.

Servers are keyed by name. A server the child defines itself (one without the
inherited flag) always wins; servers inherited earlier are refreshed from the
parents on every sync.
"""

import logging
from pathlib import Path
from typing import Any

from .jsonc import read_config_tree
from .jsonc import read_current_tree
from .jsonc import write_json
from .merger import INHERITED_FLAG
from .merger import is_inherited
from .merger import merge_flat_maps
from .report import ReportState
from .schema import ProfileIdentity

logger = logging.getLogger(__name__)

MCP_FILE = "mcp.json"
SERVERS_KEY = "mcpServers"


def collect_parent_servers(profile_map: dict[str, Path], parents: list[str]) -> dict[str, Any]:
    """Merge parent server definitions; later parents override earlier ones."""
    servers: dict[str, Any] = {}
    for parent in parents:
        parent_dir = profile_map.get(parent)
        if parent_dir is None:
            continue
        config = read_config_tree(parent_dir / MCP_FILE).tree
        parent_servers = config.get(SERVERS_KEY) if isinstance(config, dict) else None
        if isinstance(parent_servers, dict):
            logger.info("Loaded %d MCP servers from parent '%s'", len(parent_servers), parent)
            servers = merge_flat_maps(servers, parent_servers)
    return servers


def sync_mcp(profile_map: dict[str, Path], child: ProfileIdentity, parents: list[str], report: ReportState) -> int:
    """
    Merge parent MCP servers into the current profile's ``mcp.json``.

    Returns:
        Number of inherited servers written
    """
    parent_servers = collect_parent_servers(profile_map, parents)
    if not parent_servers:
        logger.info("No inherited MCP servers found")
        return 0

    current_path = child.file(MCP_FILE)
    current = read_current_tree(current_path, default={})
    if not isinstance(current, dict):
        current = {}
    current_servers = current.get(SERVERS_KEY)
    if not isinstance(current_servers, dict):
        current_servers = {}

    user_servers = {name: server for name, server in current_servers.items() if not is_inherited(server)}

    inherited_servers = {}
    for name, server in parent_servers.items():
        if not isinstance(server, dict):
            continue
        if name in user_servers:
            logger.info("MCP server '%s' is defined in the current profile; skipping inheritance", name)
            continue
        inherited_servers[name] = {**server, INHERITED_FLAG: True}
        report.mcp_servers.append(name)

    write_json(current_path, {**current, SERVERS_KEY: {**inherited_servers, **user_servers}})
    logger.info("Synced %d inherited MCP servers", len(inherited_servers))
    return len(inherited_servers)
