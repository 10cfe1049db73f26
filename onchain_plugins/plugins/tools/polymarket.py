"""
Polymarket toolset.

Tools for browsing Polymarket events and markets and reading the wallet's
open orders. Event listings come from the public Gamma API; market and
order lookups go through the CLOB API with L2 credentials.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
from py_clob_client.client import ClobClient
from py_clob_client.clob_types import ApiCreds, OpenOrderParams
from pydantic import BaseModel, Field

from onchain_plugins.domains.chains import POLYGON, Chain
from onchain_plugins.domains.polymarket import EventQueryParams, PolymarketCredentials
from onchain_plugins.domains.wallet import EVMClients
from onchain_plugins.interfaces.plugins.plugins import Tool, Toolset
from onchain_plugins.plugins.tools.auto_tool import AutoTool

logger = logging.getLogger(__name__)

GAMMA_API_URL = "https://gamma-api.polymarket.com"
CLOB_API_URL = "https://clob.polymarket.com"
DEFAULT_TIMEOUT = 30.0
# Page fetched when events are filtered locally by a search query
QUERY_PAGE_SIZE = 100


class MarketInfoParams(BaseModel):
    """Parameters for a single market lookup."""

    condition_id: str = Field(..., description="Condition id of the market")


class OpenOrdersParams(BaseModel):
    """Filters for the wallet's open orders."""

    market: Optional[str] = Field(None, description="Condition id to filter by")
    asset_id: Optional[str] = Field(None, description="Outcome token id to filter by")


def _matches(event: Dict[str, Any], query: str) -> bool:
    needle = query.lower()
    for key in ("title", "slug", "description", "ticker"):
        value = event.get(key)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


class PolymarketEventsTool(AutoTool):
    """Lists Polymarket events from the Gamma API."""

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        gamma_url: str = GAMMA_API_URL,
    ):
        super().__init__(
            name="get_polymarket_events",
            description="List Polymarket events, optionally filtered by a search query and active status.",
            parameters=EventQueryParams,
        )
        self._http_client = http_client
        self._gamma_url = gamma_url.rstrip("/")

    async def _get(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self._gamma_url}{path}"
        if self._http_client is not None:
            response = await self._http_client.get(url, params=params)
        else:
            async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as client:
                response = await client.get(url, params=params)
        response.raise_for_status()
        return response.json()

    async def execute(self, **params) -> Dict[str, Any]:
        query = self.parse_params(params)
        page_size = max(query.limit, QUERY_PAGE_SIZE) if query.query else query.limit
        request_params = {
            "limit": page_size,
            "active": str(query.active).lower(),
            "closed": str(not query.active).lower(),
        }
        logger.info(f"Fetching Polymarket events: {request_params}")
        events = await self._get("/events", request_params)
        if not isinstance(events, list):
            events = events.get("data", []) if isinstance(events, dict) else []
        if query.query:
            events = [e for e in events if _matches(e, query.query)]
        return {"events": events[: query.limit]}


class _ClobTool(AutoTool):
    """Base for tools backed by the synchronous CLOB client."""

    def __init__(
        self,
        name: str,
        description: str,
        parameters,
        credentials: PolymarketCredentials,
        private_key: str,
        clob_url: str = CLOB_API_URL,
        chain: Chain = POLYGON,
    ):
        super().__init__(name, description, parameters=parameters)
        self._credentials = credentials
        self._private_key = private_key
        self._clob_url = clob_url
        self._chain = chain
        self._client: Optional[ClobClient] = None

    @property
    def clob_client(self) -> ClobClient:
        """Return the CLOB client, creating it on first use."""
        if self._client is None:
            self._client = ClobClient(
                host=self._clob_url,
                chain_id=self._chain.id,
                key=self._private_key,
                creds=ApiCreds(
                    api_key=self._credentials.api_key,
                    api_secret=self._credentials.secret,
                    api_passphrase=self._credentials.passphrase,
                ),
            )
        return self._client

    async def _run_sync(self, fn, *args) -> Any:
        return await asyncio.to_thread(fn, *args)


class PolymarketMarketInfoTool(_ClobTool):
    """Fetches a single market from the CLOB API."""

    def __init__(self, credentials: PolymarketCredentials, private_key: str, **kwargs):
        super().__init__(
            name="get_polymarket_market_info",
            description="Get details of a Polymarket market by condition id.",
            parameters=MarketInfoParams,
            credentials=credentials,
            private_key=private_key,
            **kwargs,
        )

    async def execute(self, **params) -> Any:
        query = self.parse_params(params)
        return await self._run_sync(self.clob_client.get_market, query.condition_id)


class PolymarketActiveOrdersTool(_ClobTool):
    """Lists the wallet's open CLOB orders."""

    def __init__(self, credentials: PolymarketCredentials, private_key: str, **kwargs):
        super().__init__(
            name="get_polymarket_active_orders",
            description="List open Polymarket orders of the wallet.",
            parameters=OpenOrdersParams,
            credentials=credentials,
            private_key=private_key,
            **kwargs,
        )

    async def execute(self, **params) -> Dict[str, Any]:
        query = self.parse_params(params)
        orders = await self._run_sync(
            self.clob_client.get_orders,
            OpenOrderParams(market=query.market, asset_id=query.asset_id),
        )
        return {"orders": orders}


class PolymarketToolset(Toolset):
    """Credentialed Polymarket tools for a Polygon wallet."""

    def __init__(
        self,
        credentials: PolymarketCredentials,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._credentials = credentials
        self._http_client = http_client

    @property
    def name(self) -> str:
        return "polymarket"

    def supports_chain(self, chain: Chain) -> bool:
        return chain.id == POLYGON.id

    def get_tools(self, wallet: EVMClients) -> List[Tool]:
        private_key = "0x" + bytes(wallet.account.key).hex()
        # Event listing first: actions pick the first event/market tool
        return [
            PolymarketEventsTool(http_client=self._http_client),
            PolymarketMarketInfoTool(self._credentials, private_key, chain=wallet.chain),
            PolymarketActiveOrdersTool(self._credentials, private_key, chain=wallet.chain),
        ]
