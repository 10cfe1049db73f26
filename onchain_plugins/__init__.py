"""
Onchain Plugins - Polymarket and Zora integrations for agent runtimes.

Each plugin exposes a wallet provider and a set of actions that turn a
conversation into onchain calls.
"""

from onchain_plugins.plugins.manager import PluginManager
from onchain_plugins.plugins.registry import ToolRegistry, get_onchain_tools
from onchain_plugins.plugins.tools.auto_tool import AutoTool
from onchain_plugins.plugins.polymarket import PolymarketPlugin, get_polymarket_plugin
from onchain_plugins.plugins.zora import ZoraPlugin, get_zora_plugin
from onchain_plugins.adapters.runtime_adapter import LLMAgentRuntime
from onchain_plugins.adapters.openai_adapter import OpenAIAdapter
from onchain_plugins.interfaces.plugins.plugins import Action, Plugin, Provider, Tool

__all__ = [
    # Plugins
    "PolymarketPlugin",
    "ZoraPlugin",
    "get_polymarket_plugin",
    "get_zora_plugin",
    # Plugin system
    "PluginManager",
    "ToolRegistry",
    "get_onchain_tools",
    "AutoTool",
    "Action",
    "Plugin",
    "Provider",
    "Tool",
    # Standalone runtime
    "LLMAgentRuntime",
    "OpenAIAdapter",
]
