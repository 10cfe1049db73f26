"""
Polymarket client bootstrap and wallet provider.
"""
import logging
from typing import Awaitable, Callable, Mapping, Optional

import httpx

from onchain_plugins.adapters.evm import create_evm_clients
from onchain_plugins.domains.chains import POLYGON
from onchain_plugins.domains.polymarket import PolymarketClients, PolymarketCredentials
from onchain_plugins.domains.runtime import Memory, State
from onchain_plugins.interfaces.plugins.plugins import Provider
from onchain_plugins.interfaces.providers.runtime import AgentRuntime
from onchain_plugins.plugins.registry import get_onchain_tools
from onchain_plugins.plugins.tools.polymarket import PolymarketToolset
from onchain_plugins.utils.config import resolve_config


async def get_polymarket_client(
    config: Optional[Mapping[str, str]] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    logger: Optional[logging.Logger] = None,
) -> PolymarketClients:
    """Build a Polygon client bundle with the Polymarket tools.

    Args:
        config: Configuration mapping, the process environment when omitted
        http_client: Optional HTTP client shared by the tools
        logger: Optional logger

    Returns:
        Account, wallet client, public client and tools

    Raises:
        ValueError: If the API credentials or wallet configuration are missing
        RuntimeError: If building the clients or tools fails
    """
    log = logger or logging.getLogger(__name__)
    credentials = PolymarketCredentials.from_config(resolve_config(config))

    try:
        clients = create_evm_clients(
            credentials.wallet_private_key,
            credentials.rpc_provider_url,
            POLYGON,
        )
        tools = get_onchain_tools(
            wallet=clients,
            toolsets=[PolymarketToolset(credentials, http_client=http_client)],
        )
        return PolymarketClients(
            account=clients.account,
            wallet_client=clients.wallet_client,
            public_client=clients.public_client,
            chain=clients.chain,
            tools=tools,
        )
    except Exception as e:
        log.error(f"Failed to initialize Polymarket client: {e}")
        raise RuntimeError(
            f"Failed to initialize Polymarket client: {str(e) or 'Unknown error'}"
        ) from e


class PolymarketWalletProvider(Provider):
    """Reports the Polymarket wallet address to the agent."""

    def __init__(
        self,
        get_client: Optional[Callable[[], Awaitable[PolymarketClients]]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._get_client = get_client or get_polymarket_client
        self.logger = logger or logging.getLogger(__name__)

    async def get(
        self,
        runtime: AgentRuntime,
        message: Optional[Memory] = None,
        state: Optional[State] = None,
    ) -> Optional[str]:
        try:
            clients = await self._get_client()
            return f"Polymarket Wallet Address: {clients.address}"
        except Exception as e:
            self.logger.error(f"Error in Polymarket provider: {e}")
            return f"Error initializing Polymarket wallet: {e}"
