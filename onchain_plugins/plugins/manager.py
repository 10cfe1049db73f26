"""
Plugin manager for the onchain plugins.

This module implements the concrete PluginManager that discovers, loads and
initializes plugins, and dispatches messages to their actions.
"""

import importlib.metadata
import inspect
import logging
from typing import Any, Dict, List, Mapping, Optional

from onchain_plugins.domains.runtime import ActionResponse, Memory, State
from onchain_plugins.interfaces.plugins.plugins import (
    PluginManager as PluginManagerInterface,
)
from onchain_plugins.interfaces.plugins.plugins import (
    Action,
    HandlerCallback,
    Plugin,
    Provider,
)
from onchain_plugins.interfaces.providers.runtime import AgentRuntime

ENTRY_POINT_GROUP = "onchain_plugins.plugins"

# Setup logger for this module
logger = logging.getLogger(__name__)


class PluginManager(PluginManagerInterface):
    """Manager for discovering, loading and dispatching to plugins."""

    def __init__(self, config: Optional[Mapping[str, str]] = None):
        """Initialize with an optional configuration mapping.

        Without one, plugins read the process environment.
        """
        self.config = dict(config) if config is not None else None
        self._plugins: Dict[str, Plugin] = {}
        # Entry points this manager has already loaded
        self._loaded_entry_points: set = set()

    def register_plugin(self, plugin: Plugin) -> bool:
        """Register a plugin in the manager.

        Args:
            plugin: The plugin to register

        Returns:
            True if registration succeeded, False otherwise
        """
        try:
            plugin.initialize(self.config)

            self._plugins[plugin.name] = plugin
            logger.info(
                f"Successfully registered plugin {plugin.name} "
                f"with {len(plugin.actions)} actions"
            )
            return True

        except Exception as e:
            logger.error(f"Error registering plugin {plugin.name}: {e}")
            self._plugins.pop(plugin.name, None)
            return False

    def load_plugins(self) -> List[str]:
        """Load all plugins exposed through entry points.

        Returns:
            List of loaded entry point names
        """
        loaded_plugins = []

        for entry_point in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            entry_point_id = f"{entry_point.name}:{entry_point.value}"
            if entry_point_id in self._loaded_entry_points:
                logger.info(f"Skipping already loaded plugin: {entry_point.name}")
                continue

            try:
                logger.info(f"Found plugin entry point: {entry_point.name}")
                self._loaded_entry_points.add(entry_point_id)
                plugin_factory = entry_point.load()
                plugin = plugin_factory(self.config)

                if self.register_plugin(plugin):
                    loaded_plugins.append(entry_point.name)

            except Exception as e:
                logger.error(f"Error loading plugin {entry_point.name}: {e}")

        return loaded_plugins

    def get_plugin(self, name: str) -> Optional[Plugin]:
        """Get a plugin by name."""
        return self._plugins.get(name)

    def list_plugins(self) -> List[Dict[str, Any]]:
        """List all registered plugins with their details."""
        return [
            {
                "name": plugin.name,
                "description": plugin.description,
                "actions": [action.name for action in plugin.actions],
            }
            for plugin in self._plugins.values()
        ]

    def list_actions(self) -> List[Action]:
        """All actions of all registered plugins, in registration order."""
        return [action for plugin in self._plugins.values() for action in plugin.actions]

    def get_action(self, name: str) -> Optional[Action]:
        """Get an action by name or simile, case-insensitively."""
        wanted = name.strip().lower()
        for action in self.list_actions():
            if action.name.lower() == wanted:
                return action
        for action in self.list_actions():
            if wanted in (simile.lower() for simile in action.similes):
                return action
        return None

    def get_providers(self) -> List[Provider]:
        """All providers of all registered plugins."""
        return [
            provider
            for plugin in self._plugins.values()
            for provider in plugin.providers
        ]

    async def get_provider_context(
        self, runtime: AgentRuntime, message: Optional[Memory] = None
    ) -> str:
        """Join the non-empty provider lines into one context block."""
        lines = []
        for provider in self.get_providers():
            line = await provider.get(runtime, message)
            if line:
                lines.append(line)
        return "\n".join(lines)

    async def execute_action(
        self,
        action_name: str,
        runtime: AgentRuntime,
        message: Memory,
        state: Optional[State] = None,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[HandlerCallback] = None,
    ) -> bool:
        """Dispatch a message to the named action.

        Unknown actions and rejected messages are reported through the
        callback and return False.
        """
        action = self.get_action(action_name)
        if action is None:
            logger.warning(f"Action {action_name} not found")
            await self._report(callback, f"Action {action_name} not found")
            return False

        if not await action.validate(runtime, message, state):
            logger.info(f"Action {action.name} rejected the message")
            await self._report(callback, f"Action {action.name} is not available")
            return False

        logger.info(f"Executing action {action.name}")
        return await action.handler(runtime, message, state, options, callback)

    async def _report(self, callback: Optional[HandlerCallback], error: str) -> None:
        if callback is None:
            return
        outcome = callback(ActionResponse(text=error, content={"error": error}))
        if inspect.isawaitable(outcome):
            await outcome

    def configure(self, config: Mapping[str, str]) -> None:
        """Merge configuration and re-initialize all plugins.

        Args:
            config: Configuration mapping
        """
        self.config = {**(self.config or {}), **dict(config)}
        logger.info("Configuring all plugins with updated config")
        for name, plugin in self._plugins.items():
            try:
                logger.info(f"Configuring plugin: {name}")
                plugin.initialize(self.config)
            except Exception as e:
                logger.error(f"Error configuring plugin {name}: {e}")
