"""
Polymarket prediction market plugin.
"""
import logging
from typing import Any, List, Mapping, Optional

from onchain_plugins.domains.polymarket import PolymarketClients, PolymarketCredentials
from onchain_plugins.interfaces.plugins.plugins import Action, Plugin, Provider
from onchain_plugins.plugins.polymarket.actions import get_polymarket_actions
from onchain_plugins.plugins.polymarket.provider import (
    PolymarketWalletProvider,
    get_polymarket_client,
)
from onchain_plugins.utils.config import resolve_config

__version__ = "0.0.1"


class PolymarketPlugin(Plugin):
    """Lists Polymarket events and markets for the agent."""

    def __init__(
        self,
        config: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self.logger = logger or logging.getLogger(__name__)
        self._actions: List[Action] = []
        self._providers: List[Provider] = [
            PolymarketWalletProvider(self.get_client, logger=self.logger)
        ]

    @property
    def name(self) -> str:
        return "[Polymarket] Integration"

    @property
    def description(self) -> str:
        return "Polymarket prediction market integration plugin"

    @property
    def version(self) -> str:
        return __version__

    @property
    def actions(self) -> List[Action]:
        return list(self._actions)

    @property
    def providers(self) -> List[Provider]:
        return list(self._providers)

    @property
    def evaluators(self) -> List[Any]:
        return []

    @property
    def services(self) -> List[Any]:
        return []

    def initialize(self, config: Optional[Mapping[str, str]] = None) -> List[Action]:
        """Build the actions when the credentials are present.

        Missing credentials leave the plugin loaded with no actions.
        """
        if config is not None:
            self._config = config
        self.logger.info(f"Loading {self.name} plugin v{__version__}")

        try:
            PolymarketCredentials.from_config(resolve_config(self._config))
        except ValueError as e:
            self.logger.warning(f"{e} Polymarket actions will not be available.")
            self._actions = []
            return self.actions

        try:
            self._actions = get_polymarket_actions(self.get_client, logger=self.logger)
            self.logger.info(
                f"Polymarket actions initialized: {[a.name for a in self._actions]}"
            )
        except Exception as e:
            self.logger.exception(f"Failed to initialize Polymarket actions: {e}")
            self._actions = []
        return self.actions

    async def get_client(self) -> PolymarketClients:
        """Bootstrap a fresh client bundle from the plugin configuration."""
        return await get_polymarket_client(self._config, logger=self.logger)


def get_polymarket_plugin(config: Optional[Mapping[str, str]] = None) -> PolymarketPlugin:
    """Entry point factory."""
    plugin = PolymarketPlugin(config)
    plugin.initialize()
    return plugin


__all__ = [
    "PolymarketPlugin",
    "PolymarketWalletProvider",
    "get_polymarket_client",
    "get_polymarket_actions",
    "get_polymarket_plugin",
]
