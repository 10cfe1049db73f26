"""
Zora coins client.

Deploys and trades Zora coins. The Zora SDK API prepares the contract call
(deployment calldata or a trade quote); the call is then signed and sent
through the wallet client and confirmed through the public client.
"""
import logging
from typing import Any, Dict, Optional, Tuple

import httpx
from web3 import AsyncWeb3

from onchain_plugins.domains.wallet import EVMClients
from onchain_plugins.domains.zora import (
    CoinDeployment,
    CreateCoinResult,
    TradeCoinResult,
    TradeParameters,
)

logger = logging.getLogger(__name__)

ZORA_API_URL = "https://api-sdk.zora.engineering"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RECEIPT_TIMEOUT = 120
DEFAULT_GAS_MULTIPLIER = 100


def _to_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, str):
        return int(value, 0)
    return int(value)


def _hex(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)


def _receipt_summary(receipt: Any) -> Dict[str, Any]:
    return {
        "transactionHash": _hex(receipt.get("transactionHash")),
        "blockNumber": receipt.get("blockNumber"),
        "gasUsed": receipt.get("gasUsed"),
        "effectiveGasPrice": receipt.get("effectiveGasPrice"),
        "status": receipt.get("status"),
    }


class ZoraCoinsClient:
    """Client for coin deployment and coin trades on Zora."""

    def __init__(
        self,
        api_url: str = ZORA_API_URL,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        receipt_timeout: int = DEFAULT_RECEIPT_TIMEOUT,
    ):
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self._http_client = http_client
        self.receipt_timeout = receipt_timeout

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.api_url}{path}"
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["api-key"] = self.api_key
        if self._http_client is not None:
            response = await self._http_client.post(url, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as client:
                response = await client.post(url, json=payload, headers=headers)
        response.raise_for_status()
        return response.json()

    async def _send_call(
        self,
        clients: EVMClients,
        to: str,
        data: str,
        value: int,
        gas_multiplier: int = DEFAULT_GAS_MULTIPLIER,
    ) -> Tuple[str, Any]:
        """Send a prepared call and wait for its receipt.

        Gas is estimated on the public client and scaled by
        ``gas_multiplier`` percent.

        Raises:
            RuntimeError: If the transaction reverts
        """
        tx = {
            "from": clients.address,
            "to": AsyncWeb3.to_checksum_address(to),
            "data": data,
            "value": value,
            "chainId": clients.chain.id,
        }
        gas = await clients.public_client.eth.estimate_gas(tx)
        tx["gas"] = gas * gas_multiplier // 100

        tx_hash = await clients.wallet_client.eth.send_transaction(tx)
        tx_hash_hex = _hex(tx_hash)
        logger.info(f"Sent transaction {tx_hash_hex} on {clients.chain.name}")

        receipt = await clients.public_client.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self.receipt_timeout
        )
        if receipt.get("status") != 1:
            raise RuntimeError(f"Transaction {tx_hash_hex} reverted")
        return tx_hash_hex, receipt

    async def create_coin(
        self,
        deployment: CoinDeployment,
        clients: EVMClients,
        gas_multiplier: int = DEFAULT_GAS_MULTIPLIER,
    ) -> CreateCoinResult:
        """Deploy a new coin.

        Args:
            deployment: Coin name, symbol, metadata URI and payout settings
            clients: Client bundle of the creator
            gas_multiplier: Gas limit as a percentage of the estimate

        Returns:
            Transaction hash, coin address and deployment details
        """
        payload = {
            "creator": clients.address,
            "name": deployment.name,
            "symbol": deployment.symbol,
            "metadata": {"type": "RAW_URI", "uri": deployment.uri},
            "currency": deployment.currency.value,
            "chainId": clients.chain.id,
            "payoutRecipientOverride": deployment.payout_recipient,
        }
        if deployment.platform_referrer:
            payload["platformReferrer"] = deployment.platform_referrer

        prepared = await self._post("/create/content", payload)
        calls = prepared.get("calls") or []
        if not calls:
            raise RuntimeError("Zora API returned no deployment call")
        call = calls[0]

        tx_hash, receipt = await self._send_call(
            clients,
            to=call["to"],
            data=call["data"],
            value=_to_int(call.get("value")),
            gas_multiplier=gas_multiplier,
        )
        address = prepared.get("predictedCoinAddress")
        return CreateCoinResult(
            hash=tx_hash,
            address=address,
            deployment={
                "coin": address,
                "name": deployment.name,
                "symbol": deployment.symbol,
                "uri": deployment.uri,
                "currency": deployment.currency.value,
                "payoutRecipient": deployment.payout_recipient,
                "chainId": clients.chain.id,
            },
            receipt=_receipt_summary(receipt),
        )

    async def trade_coin(
        self, trade: TradeParameters, clients: EVMClients
    ) -> TradeCoinResult:
        """Execute a trade from a quote.

        Args:
            trade: Sell and buy legs, amount in wei, slippage and sender
            clients: Client bundle of the trader

        Returns:
            Transaction hash, receipt summary and the quote traded against
        """
        payload = {
            "tokenIn": trade.sell.model_dump(exclude_none=True),
            "tokenOut": trade.buy.model_dump(exclude_none=True),
            "amountIn": str(trade.amount_in),
            "slippage": trade.slippage,
            "chainId": clients.chain.id,
            "sender": trade.sender,
            "recipient": trade.sender,
        }
        quote = await self._post("/quote", payload)
        call = quote.get("call")
        if not call:
            raise RuntimeError("Zora quote response missing call")

        tx_hash, receipt = await self._send_call(
            clients,
            to=call["target"],
            data=call["data"],
            value=_to_int(call.get("value")),
        )
        return TradeCoinResult(
            hash=tx_hash,
            receipt=_receipt_summary(receipt),
            quote=quote.get("quote"),
        )
