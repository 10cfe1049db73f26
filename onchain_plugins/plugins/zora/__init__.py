"""
Zora coin creation and trading plugin.
"""
import logging
from typing import Any, List, Mapping, Optional

from onchain_plugins.adapters.zora_coins import ZoraCoinsClient
from onchain_plugins.domains.wallet import EVMClients
from onchain_plugins.domains.zora import ZoraSettings
from onchain_plugins.interfaces.plugins.plugins import Action, Plugin, Provider
from onchain_plugins.plugins.zora.actions import get_zora_actions
from onchain_plugins.plugins.zora.metadata import ensure_metadata_uri
from onchain_plugins.plugins.zora.provider import (
    ZoraWalletProvider,
    get_zora_clients,
    resolve_zora_chain,
)
from onchain_plugins.utils.config import resolve_config

__version__ = "0.25.6-alpha.1"


class ZoraPlugin(Plugin):
    """Creates and trades Zora coins for the agent."""

    def __init__(
        self,
        config: Optional[Mapping[str, str]] = None,
        coins_client: Optional[ZoraCoinsClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self.coins_client = coins_client
        self.logger = logger or logging.getLogger(__name__)
        self._actions: List[Action] = []
        self._providers: List[Provider] = [
            ZoraWalletProvider(self.get_clients, logger=self.logger)
        ]

    @property
    def name(self) -> str:
        return "[Zora] Integration"

    @property
    def description(self) -> str:
        return "Zora coin creation and trading integration plugin"

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
        """Build the actions when the RPC URL and private key are present."""
        if config is not None:
            self._config = config
        self.logger.info(f"Loading {self.name} plugin v{__version__}")

        try:
            ZoraSettings.from_config(resolve_config(self._config))
        except ValueError:
            self.logger.warning(
                "Missing Zora credentials - Zora actions will not be available. "
                "Please set ZORA_RPC_URL and ZORA_PRIVATE_KEY environment variables."
            )
            self._actions = []
            return self.actions

        try:
            self._actions = get_zora_actions(
                self.get_clients,
                coins_client=self.coins_client,
                config=self._config,
                logger=self.logger,
            )
            self.logger.info("Zora actions initialized successfully.")
        except Exception as e:
            self.logger.exception(f"Failed to initialize Zora actions: {e}")
            self._actions = []
        return self.actions

    async def get_clients(self) -> EVMClients:
        """Bootstrap a fresh client bundle from the plugin configuration."""
        return await get_zora_clients(self._config, logger=self.logger)


def get_zora_plugin(config: Optional[Mapping[str, str]] = None) -> ZoraPlugin:
    """Entry point factory."""
    plugin = ZoraPlugin(config)
    plugin.initialize()
    return plugin


__all__ = [
    "ZoraPlugin",
    "ZoraWalletProvider",
    "ensure_metadata_uri",
    "get_zora_actions",
    "get_zora_clients",
    "get_zora_plugin",
    "resolve_zora_chain",
]
