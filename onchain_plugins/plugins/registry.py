"""
Tool registry for the onchain plugins.

This module implements the concrete ToolRegistry that holds the tools a
wallet can use, and the aggregator that collects tools from toolsets.
"""

import logging
from typing import List, Sequence

from onchain_plugins.domains.wallet import EVMClients
from onchain_plugins.interfaces.plugins.plugins import (
    ToolRegistry as ToolRegistryInterface,
)
from onchain_plugins.interfaces.plugins.plugins import Tool, Toolset

# Setup logger for this module
logger = logging.getLogger(__name__)


class ToolRegistry(ToolRegistryInterface):
    """Instance-based registry of tools, kept in registration order."""

    def __init__(self):
        """Initialize an empty tool registry."""
        self._tools = {}  # name -> tool instance

    def register_tool(self, tool: Tool) -> bool:
        """Register a tool with this registry."""
        if tool.name in self._tools:
            logger.warning(f"Replacing already registered tool: {tool.name}")
        self._tools[tool.name] = tool
        logger.info(f"Successfully registered tool: {tool.name}")
        return True

    def get_tools(self) -> List[Tool]:
        """Get all registered tools in registration order."""
        return list(self._tools.values())


def get_onchain_tools(
    wallet: EVMClients,
    toolsets: Sequence[Toolset],
) -> List[Tool]:
    """Collect the tools every toolset offers for a wallet.

    Toolsets that do not support the wallet's chain are skipped. Tools keep
    the order in which their toolsets produced them; a later tool with the
    same name replaces the earlier one.

    Args:
        wallet: Client bundle the tools operate with
        toolsets: Credentialed toolsets to draw tools from

    Returns:
        The registered tools
    """
    registry = ToolRegistry()
    for toolset in toolsets:
        if not toolset.supports_chain(wallet.chain):
            logger.warning(
                f"Toolset {toolset.name} does not support chain {wallet.chain.name}; skipping"
            )
            continue
        for tool in toolset.get_tools(wallet):
            registry.register_tool(tool)
    return registry.get_tools()
