"""
Zora client bootstrap and wallet provider.
"""
import logging
from typing import Awaitable, Callable, Mapping, Optional
from urllib.parse import urlparse

from onchain_plugins.adapters.evm import create_evm_clients
from onchain_plugins.domains.chains import BASE, BASE_SEPOLIA, Chain
from onchain_plugins.domains.runtime import Memory, State
from onchain_plugins.domains.wallet import EVMClients
from onchain_plugins.domains.zora import ZoraSettings
from onchain_plugins.interfaces.plugins.plugins import Provider
from onchain_plugins.interfaces.providers.runtime import AgentRuntime
from onchain_plugins.utils.config import resolve_config

logger = logging.getLogger(__name__)

CHAIN_ALIASES = {
    "base-sepolia": BASE_SEPOLIA,
    "sepolia": BASE_SEPOLIA,
    "testnet": BASE_SEPOLIA,
    "84532": BASE_SEPOLIA,
    "base": BASE,
    "base-mainnet": BASE,
    "mainnet": BASE,
    "8453": BASE,
}


def resolve_zora_chain(rpc_url: str, chain_override: Optional[str] = None) -> Chain:
    """Pick the chain the Zora clients bind to.

    A recognised override wins. Otherwise an RPC URL mentioning ``sepolia``
    or ``84532`` selects Base Sepolia, and anything else selects Base.
    """
    if chain_override:
        chain = CHAIN_ALIASES.get(chain_override.strip().lower())
        if chain is not None:
            return chain
        logger.warning(
            f"Unknown ZORA_CHAIN '{chain_override}', inferring the chain from the RPC URL"
        )

    hint = (rpc_url or "").lower()
    if "sepolia" in hint or "84532" in hint:
        return BASE_SEPOLIA
    return BASE


async def get_zora_clients(
    config: Optional[Mapping[str, str]] = None,
    logger: Optional[logging.Logger] = None,
) -> EVMClients:
    """Build the account and clients on the resolved Base chain.

    Raises:
        ValueError: If the RPC URL or private key is missing
        RuntimeError: If building the clients fails
    """
    log = logger or logging.getLogger(__name__)
    settings = ZoraSettings.from_config(resolve_config(config))

    try:
        chain = resolve_zora_chain(settings.rpc_url, settings.chain)
        clients = create_evm_clients(settings.private_key, settings.rpc_url, chain)
    except Exception as e:
        log.error(f"Failed to initialize Zora clients: {e}")
        raise RuntimeError(
            f"Failed to initialize Zora clients: {str(e) or 'Unknown error'}"
        ) from e

    if settings.debug:
        log.info(
            f"Zora clients on {chain.name} ({chain.id}) via "
            f"{urlparse(settings.rpc_url).netloc or settings.rpc_url} "
            f"for {clients.address}"
        )
    return clients


class ZoraWalletProvider(Provider):
    """Reports the Zora wallet address to the agent."""

    def __init__(
        self,
        get_clients: Optional[Callable[[], Awaitable[EVMClients]]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._get_clients = get_clients or get_zora_clients
        self.logger = logger or logging.getLogger(__name__)

    async def get(
        self,
        runtime: AgentRuntime,
        message: Optional[Memory] = None,
        state: Optional[State] = None,
    ) -> Optional[str]:
        try:
            clients = await self._get_clients()
            return f"Zora Wallet Address: {clients.address}"
        except Exception as e:
            self.logger.error(f"Error in Zora provider: {e}")
            return f"Error initializing Zora wallet: {e}"
