"""
EVM client construction.

Derives a local account from a private key and builds the two web3 clients
every plugin works with: a wallet client that signs and sends through the
account, and a read-only public client.
"""
import logging

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.providers import AsyncHTTPProvider

from onchain_plugins.domains.chains import Chain
from onchain_plugins.domains.wallet import EVMClients

logger = logging.getLogger(__name__)


def derive_account(private_key: str) -> LocalAccount:
    """Derive the signing account for a hex private key (``0x`` optional)."""
    key = private_key.strip()
    if not key.startswith("0x"):
        key = f"0x{key}"
    return Account.from_key(key)


def create_public_client(rpc_url: str) -> AsyncWeb3:
    """Read-only client over HTTP."""
    return AsyncWeb3(AsyncHTTPProvider(rpc_url))


def create_wallet_client(rpc_url: str, account: LocalAccount) -> AsyncWeb3:
    """Client that signs transactions locally with the account before sending."""
    w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
    w3.middleware_onion.inject(SignAndSendRawMiddlewareBuilder.build(account), layer=0)
    w3.eth.default_account = account.address
    return w3


def create_evm_clients(
    private_key: str,
    rpc_url: str,
    chain: Chain,
) -> EVMClients:
    """Build the account, wallet client and public client for a chain."""
    account = derive_account(private_key)
    public_client = create_public_client(rpc_url)
    wallet_client = create_wallet_client(rpc_url, account)
    logger.debug(f"Created EVM clients for {account.address} on {chain.name}")
    return EVMClients(
        account=account,
        wallet_client=wallet_client,
        public_client=public_client,
        chain=chain,
    )
