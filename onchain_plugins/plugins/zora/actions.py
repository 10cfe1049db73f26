"""
Zora coin actions.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from web3 import Web3

from onchain_plugins.adapters.zora_coins import ZoraCoinsClient
from onchain_plugins.domains.runtime import ActionExample, ActionResponse, Content, State
from onchain_plugins.domains.wallet import EVMClients
from onchain_plugins.domains.zora import (
    CoinDeployment,
    CreateCoinParams,
    DeployCurrency,
    PinataSettings,
    TradeCoinParams,
    TradeLeg,
    TradeParameters,
)
from onchain_plugins.interfaces.plugins.plugins import Action
from onchain_plugins.interfaces.providers.runtime import AgentRuntime
from onchain_plugins.plugins.actions.base_action import BlockchainAction, parameter_template
from onchain_plugins.plugins.zora.metadata import ensure_metadata_uri
from onchain_plugins.utils.config import resolve_config
from onchain_plugins.utils.serialization import to_json_safe

CREATE_COIN_GAS_MULTIPLIER = 120

CREATE_COIN_PARAMETERS = (
    "Extract coin creation parameters including name, symbol, metadata URI (optional), "
    "payout recipient address. Optionally include image and description for metadata."
)
TRADE_COIN_PARAMETERS = (
    "Extract trade parameters including sell type (eth), buy type (erc20), coin address, "
    "amount in ETH, and slippage tolerance."
)


def _example(request: str, reply: str, action: str) -> List[ActionExample]:
    return [
        ActionExample(user="{{user1}}", content=Content(text=request)),
        ActionExample(user="{{user2}}", content=Content(text=reply, action=action)),
    ]


CREATE_COIN_EXAMPLES = [
    _example(
        "Create a coin named 'My Awesome Coin' with symbol 'MAC'",
        "I'll create that coin for you",
        "CREATE_COIN",
    ),
    _example(
        "Deploy a new creator coin with metadata URI and payout address",
        "Creating your creator coin now",
        "CREATE_COIN",
    ),
    _example(
        "Launch a new token on Zora platform",
        "Launching your token on Zora",
        "CREATE_COIN",
    ),
]

TRADE_COIN_EXAMPLES = [
    _example(
        "Buy 0.001 ETH worth of coin at address 0x4e93a01c90f812284f71291a8d1415a904957156",
        "I'll execute that trade for you",
        "TRADE_COIN",
    ),
    _example(
        "Trade ETH for a creator coin with 5% slippage tolerance",
        "Executing the trade with 5% slippage",
        "TRADE_COIN",
    ),
    _example(
        "Swap ETH for a specific coin token",
        "Swapping ETH for your coin",
        "TRADE_COIN",
    ),
]


def parse_ether(amount: str) -> int:
    """Convert a decimal ether amount to wei.

    Raises:
        ValueError: If the amount is not a non-negative decimal number
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid ETH amount: {amount}") from e
    if not value.is_finite() or value < 0:
        raise ValueError(f"Invalid ETH amount: {amount}")
    return int(Web3.to_wei(value, "ether"))


class ZoraAction(BlockchainAction):
    """Shared wiring of the Zora actions."""

    result_label = "The Zora action"

    def __init__(
        self,
        name: str,
        description: str,
        similes: List[str],
        examples: List[List[ActionExample]],
        get_clients: Callable[[], Awaitable[EVMClients]],
        coins_client: Optional[ZoraCoinsClient] = None,
        config: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(
            name=name,
            description=description,
            similes=similes,
            examples=examples,
            get_clients=get_clients,
            logger=logger,
        )
        self.coins_client = coins_client or ZoraCoinsClient()
        self.config = config


class CreateCoinAction(ZoraAction):
    """Deploys a new creator coin."""

    def __init__(
        self,
        get_clients: Callable[[], Awaitable[EVMClients]],
        coins_client: Optional[ZoraCoinsClient] = None,
        config: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(
            name="CREATE_COIN",
            description=(
                "Create a new coin on Zora using the Zora Coins SDK. This action allows "
                "you to deploy a new creator coin with specified parameters including "
                "name, symbol, metadata URI, and payout recipient."
            ),
            similes=["deploy coin", "create token", "mint coin", "launch coin"],
            examples=CREATE_COIN_EXAMPLES,
            get_clients=get_clients,
            coins_client=coins_client,
            config=config,
            logger=logger,
        )

    @property
    def error_prefix(self) -> str:
        return "Error creating coin"

    async def run(
        self,
        runtime: AgentRuntime,
        clients: EVMClients,
        state: State,
        options: Dict[str, Any],
    ) -> ActionResponse:
        params = await self.extract_parameters(
            runtime,
            state,
            parameter_template(self.name, CREATE_COIN_PARAMETERS),
            CreateCoinParams,
        )
        uri = await ensure_metadata_uri(
            runtime, params, PinataSettings.from_config(resolve_config(self.config))
        )

        deployment = CoinDeployment(
            name=params.name,
            symbol=params.symbol,
            uri=uri,
            payout_recipient=params.payout_recipient,
            platform_referrer=params.platform_referrer or None,
            currency=(
                DeployCurrency.ZORA if params.currency == "ZORA" else DeployCurrency.ETH
            ),
        )
        self.logger.info(f"Creating coin {deployment.symbol} with metadata {uri}")
        result = await self.coins_client.create_coin(
            deployment, clients, gas_multiplier=CREATE_COIN_GAS_MULTIPLIER
        )

        text = await self.generate_response(runtime, state, result)
        return ActionResponse(
            text=text,
            content={
                "transactionHash": result.hash,
                "coinAddress": result.address,
                "deploymentDetails": to_json_safe(result.deployment),
            },
        )


class TradeCoinAction(ZoraAction):
    """Buys a coin with ETH."""

    def __init__(
        self,
        get_clients: Callable[[], Awaitable[EVMClients]],
        coins_client: Optional[ZoraCoinsClient] = None,
        config: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(
            name="TRADE_COIN",
            description=(
                "Trade coins on Zora using the Zora Coins SDK. This action allows you to "
                "buy or sell coins with specified amounts, slippage tolerance, and trade "
                "parameters."
            ),
            similes=["buy coin", "sell coin", "swap coin", "trade token"],
            examples=TRADE_COIN_EXAMPLES,
            get_clients=get_clients,
            coins_client=coins_client,
            config=config,
            logger=logger,
        )

    @property
    def error_prefix(self) -> str:
        return "Error trading coin"

    async def run(
        self,
        runtime: AgentRuntime,
        clients: EVMClients,
        state: State,
        options: Dict[str, Any],
    ) -> ActionResponse:
        params = await self.extract_parameters(
            runtime,
            state,
            parameter_template(self.name, TRADE_COIN_PARAMETERS),
            TradeCoinParams,
        )

        trade = TradeParameters(
            sell=TradeLeg(type="eth"),
            buy=TradeLeg(type="erc20", address=params.coin_address),
            amount_in=parse_ether(params.amount_in),
            slippage=params.slippage,
            sender=clients.address,
        )
        self.logger.info(
            f"Trading {params.amount_in} ETH for {params.coin_address} "
            f"(slippage {trade.slippage})"
        )
        result = await self.coins_client.trade_coin(trade, clients)

        text = await self.generate_response(runtime, state, result)
        return ActionResponse(
            text=text,
            content={
                "transactionHash": result.hash,
                "tradeDetails": to_json_safe(result),
            },
        )


def get_zora_actions(
    get_clients: Callable[[], Awaitable[EVMClients]],
    coins_client: Optional[ZoraCoinsClient] = None,
    config: Optional[Mapping[str, str]] = None,
    logger: Optional[logging.Logger] = None,
) -> List[Action]:
    """All Zora actions bound to a client factory."""
    coins_client = coins_client or ZoraCoinsClient()
    return [
        CreateCoinAction(get_clients, coins_client=coins_client, config=config, logger=logger),
        TradeCoinAction(get_clients, coins_client=coins_client, config=config, logger=logger),
    ]
