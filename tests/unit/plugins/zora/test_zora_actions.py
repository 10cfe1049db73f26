"""
Tests for the Zora coin actions and plugin.
"""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from onchain_plugins.adapters.zora_coins import ZoraCoinsClient
from onchain_plugins.domains.zora import (
    CreateCoinResult,
    DeployCurrency,
    TradeCoinResult,
)
from onchain_plugins.plugins.zora import ZoraPlugin, get_zora_plugin
from onchain_plugins.plugins.zora.actions import (
    CreateCoinAction,
    TradeCoinAction,
    get_zora_actions,
    parse_ether,
)
from onchain_plugins.plugins.zora.metadata import PINATA_PIN_JSON_URL

COIN = "0x4e93a01c90f812284f71291a8d1415a904957156"


@pytest.fixture
def clients(test_address):
    clients = MagicMock()
    clients.address = test_address
    return clients


@pytest.fixture
def coins_client():
    client = MagicMock(spec=ZoraCoinsClient)
    client.create_coin = AsyncMock(
        return_value=CreateCoinResult(
            hash="0xhash",
            address=COIN,
            deployment={"coin": COIN, "symbol": "MAC"},
            receipt={"blockNumber": 1},
        )
    )
    client.trade_coin = AsyncMock(
        return_value=TradeCoinResult(
            hash="0xtrade", receipt={"gasUsed": 2**60}, quote={"amountOut": "5"}
        )
    )
    return client


def _create(clients, coins_client, config=None):
    return CreateCoinAction(
        AsyncMock(return_value=clients), coins_client=coins_client, config=config or {}
    )


def _trade(clients, coins_client):
    return TradeCoinAction(AsyncMock(return_value=clients), coins_client=coins_client)


class TestParseEther:
    """Test suite for ether parsing."""

    @pytest.mark.parametrize(
        "amount,wei",
        [("0.001", 10**15), ("1", 10**18), (" 2.5 ", 25 * 10**17), ("0", 0)],
    )
    def test_valid(self, amount, wei):
        assert parse_ether(amount) == wei

    @pytest.mark.parametrize("amount", ["abc", "-1", "NaN", ""])
    def test_invalid(self, amount):
        with pytest.raises(ValueError):
            parse_ether(amount)


class TestDescriptors:
    """Test suite for the action descriptors."""

    def test_get_zora_actions(self):
        actions = get_zora_actions(AsyncMock())
        assert [a.name for a in actions] == ["CREATE_COIN", "TRADE_COIN"]
        assert actions[0].similes == ["deploy coin", "create token", "mint coin", "launch coin"]
        assert actions[1].similes == ["buy coin", "sell coin", "swap coin", "trade token"]
        assert actions[0].description.startswith("Create a new coin on Zora")
        assert actions[1].description.startswith("Trade coins on Zora")
        assert actions[0].coins_client is actions[1].coins_client
        assert len(actions[0].examples) == 3
        assert actions[1].examples[0][1].content.action == "TRADE_COIN"


class TestCreateCoinAction:
    """Test suite for CREATE_COIN."""

    @pytest.mark.asyncio
    async def test_with_supplied_uri(self, make_runtime, message, clients, coins_client, test_address):
        runtime = make_runtime(
            objects=[
                {
                    "name": "My Awesome Coin",
                    "symbol": "MAC",
                    "uri": "https://example.com/meta.json",
                    "payout_recipient": test_address,
                    "currency": "ZORA",
                }
            ],
            text="Your coin is live",
        )
        callback = MagicMock()

        assert await _create(clients, coins_client).handler(runtime, message, callback=callback) is True

        runtime.fetch.assert_not_called()
        deployment, passed_clients = coins_client.create_coin.call_args.args
        assert deployment.uri == "https://example.com/meta.json"
        assert deployment.currency is DeployCurrency.ZORA
        assert deployment.payout_recipient == test_address
        assert passed_clients is clients
        assert coins_client.create_coin.call_args.kwargs["gas_multiplier"] == 120

        response = callback.call_args.args[0]
        assert response.text == "Your coin is live"
        assert response.content == {
            "transactionHash": "0xhash",
            "coinAddress": COIN,
            "deploymentDetails": {"coin": COIN, "symbol": "MAC"},
        }
        assert 'The Zora action "CREATE_COIN" was executed successfully.' in runtime.text_calls[0]
        assert 'for the action "CREATE_COIN"' in runtime.object_calls[0]["context"]

    @pytest.mark.asyncio
    async def test_pins_metadata_when_uri_missing(self, make_runtime, message, clients, coins_client):
        runtime = make_runtime(
            objects=[{"name": "Coin", "symbol": "CN", "payout_recipient": "0xabc"}]
        )
        runtime.fetch.return_value = httpx.Response(
            200,
            json={"IpfsHash": "bafypinned"},
            request=httpx.Request("POST", PINATA_PIN_JSON_URL),
        )
        action = _create(clients, coins_client, config={"PINATA_JWT": "jwt"})

        assert await action.handler(runtime, message) is True

        runtime.fetch.assert_awaited_once()
        deployment = coins_client.create_coin.call_args.args[0]
        assert deployment.uri == "ipfs://bafypinned"
        assert deployment.currency is DeployCurrency.ETH
        assert deployment.platform_referrer is None

    @pytest.mark.asyncio
    async def test_missing_jwt_fails_before_sdk(self, make_runtime, message, clients, coins_client):
        runtime = make_runtime(
            objects=[{"name": "Coin", "symbol": "CN", "payout_recipient": "0xabc"}]
        )
        callback = MagicMock()

        assert await _create(clients, coins_client).handler(runtime, message, callback=callback) is False

        coins_client.create_coin.assert_not_called()
        callback.assert_called_once()
        response = callback.call_args.args[0]
        assert response.text.startswith("Error creating coin: Missing PINATA_JWT")
        assert response.content["error"].startswith("Missing PINATA_JWT")

    @pytest.mark.asyncio
    async def test_sdk_failure(self, make_runtime, message, clients, coins_client):
        coins_client.create_coin.side_effect = RuntimeError("Transaction 0x1 reverted")
        runtime = make_runtime(
            objects=[{"name": "C", "symbol": "C", "uri": "ipfs://x", "payout_recipient": "0xabc"}]
        )
        callback = AsyncMock()

        assert await _create(clients, coins_client).handler(runtime, message, callback=callback) is False
        callback.assert_awaited_once()
        assert callback.call_args.args[0].text == "Error creating coin: Transaction 0x1 reverted"


class TestTradeCoinAction:
    """Test suite for TRADE_COIN."""

    @pytest.mark.asyncio
    async def test_trade(self, make_runtime, message, clients, coins_client, test_address):
        runtime = make_runtime(objects=[{"coin_address": COIN, "amount_in": "0.001"}])
        callback = MagicMock()

        assert await _trade(clients, coins_client).handler(runtime, message, callback=callback) is True

        trade, passed_clients = coins_client.trade_coin.call_args.args
        assert trade.sell.type == "eth"
        assert trade.buy.type == "erc20"
        assert trade.buy.address == COIN
        assert trade.amount_in == 10**15
        assert trade.slippage == 0.05
        assert trade.sender == test_address
        assert passed_clients is clients

        response = callback.call_args.args[0]
        assert response.content["transactionHash"] == "0xtrade"
        assert response.content["tradeDetails"]["receipt"] == {"gasUsed": str(2**60)}
        assert response.content["tradeDetails"]["quote"] == {"amountOut": "5"}

    @pytest.mark.asyncio
    async def test_custom_slippage(self, make_runtime, message, clients, coins_client):
        runtime = make_runtime(
            objects=[{"coin_address": COIN, "amount_in": "1", "slippage": 0.1}]
        )
        await _trade(clients, coins_client).handler(runtime, message)
        assert coins_client.trade_coin.call_args.args[0].slippage == 0.1

    @pytest.mark.asyncio
    async def test_invalid_amount(self, make_runtime, message, clients, coins_client):
        runtime = make_runtime(objects=[{"coin_address": COIN, "amount_in": "lots"}])
        callback = MagicMock()

        assert await _trade(clients, coins_client).handler(runtime, message, callback=callback) is False
        coins_client.trade_coin.assert_not_called()
        assert callback.call_args.args[0].text == "Error trading coin: Invalid ETH amount: lots"

    @pytest.mark.asyncio
    async def test_bootstrap_failure(self, make_runtime, message, coins_client):
        action = TradeCoinAction(
            AsyncMock(side_effect=RuntimeError("Failed to initialize Zora clients: x")),
            coins_client=coins_client,
        )
        callback = MagicMock()

        assert await action.handler(make_runtime(), message, callback=callback) is False
        assert callback.call_args.args[0].content == {
            "error": "Failed to initialize Zora clients: x"
        }


class TestZoraPlugin:
    """Test suite for the plugin object."""

    def test_descriptor(self):
        plugin = ZoraPlugin({})
        assert plugin.name == "[Zora] Integration"
        assert plugin.description == "Zora coin creation and trading integration plugin"
        assert plugin.version == "0.25.6-alpha.1"
        assert plugin.evaluators == []
        assert plugin.services == []

    def test_missing_config_has_no_actions(self, caplog):
        plugin = ZoraPlugin({"ZORA_RPC_URL": "https://rpc.example.com"})
        assert plugin.initialize() == []
        assert "Missing Zora credentials" in caplog.text

    def test_factory(self, zora_config):
        plugin = get_zora_plugin(zora_config)
        assert [a.name for a in plugin.actions] == ["CREATE_COIN", "TRADE_COIN"]

    def test_shared_coins_client(self, zora_config, coins_client):
        plugin = ZoraPlugin(zora_config, coins_client=coins_client)
        actions = plugin.initialize()
        assert all(a.coins_client is coins_client for a in actions)

    @pytest.mark.asyncio
    async def test_provider_uses_plugin_config(self, zora_config, test_address):
        plugin = get_zora_plugin(zora_config)
        assert await plugin.providers[0].get(None) == f"Zora Wallet Address: {test_address}"
