"""
Domain models for the Zora plugin.

Covers the plugin settings, the parameter schemas extracted from
conversation, and the request/result structs of the coins client.
"""
from enum import Enum
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from onchain_plugins.utils.config import missing_keys

ZORA_REQUIRED_KEYS = ("ZORA_RPC_URL", "ZORA_PRIVATE_KEY")

MISSING_ZORA_CREDENTIALS = (
    "Missing required Zora credentials. Please set ZORA_RPC_URL and "
    "ZORA_PRIVATE_KEY environment variables."
)

DEFAULT_SLIPPAGE = 0.05

_TRUTHY = {"1", "true", "yes", "on"}


class ZoraSettings(BaseModel):
    """Connection settings for the Zora plugin."""

    rpc_url: str
    private_key: str
    chain: Optional[str] = Field(None, description="Explicit chain override")
    debug: bool = False

    @classmethod
    def from_config(cls, config: Mapping[str, str]) -> "ZoraSettings":
        """Read and presence-check the settings.

        Raises:
            ValueError: If the RPC URL or private key is missing
        """
        if missing_keys(config, ZORA_REQUIRED_KEYS):
            raise ValueError(MISSING_ZORA_CREDENTIALS)
        chain = (config.get("ZORA_CHAIN") or "").strip() or None
        debug = (config.get("DEBUG_ZORA") or "").strip().lower() in _TRUTHY
        return cls(
            rpc_url=config["ZORA_RPC_URL"],
            private_key=config["ZORA_PRIVATE_KEY"],
            chain=chain,
            debug=debug,
        )


class PinataSettings(BaseModel):
    """Optional pinning service settings."""

    jwt: Optional[str] = None
    default_image_cid: Optional[str] = None

    @classmethod
    def from_config(cls, config: Mapping[str, str]) -> "PinataSettings":
        return cls(
            jwt=(config.get("PINATA_JWT") or "").strip() or None,
            default_image_cid=(config.get("PINATA_DEFAULT_IMAGE_CID") or "").strip()
            or None,
        )


class CreateCoinParams(BaseModel):
    """Coin creation parameters extracted from conversation."""

    name: str = Field(..., description="Coin name")
    symbol: str = Field(..., description="Coin ticker symbol")
    uri: Optional[str] = Field(None, description="Metadata URI (ipfs:// or https://)")
    image: Optional[str] = Field(None, description="Image URI for generated metadata")
    description: Optional[str] = Field(
        None, description="Description for generated metadata"
    )
    payout_recipient: str = Field(..., description="Address receiving creator payouts")
    platform_referrer: Optional[str] = Field(
        None, description="Optional platform referrer address"
    )
    currency: Optional[Literal["ZORA", "ETH"]] = Field(
        None, description="Currency the coin is paired with"
    )


class TradeCoinParams(BaseModel):
    """Trade parameters extracted from conversation."""

    sell_type: Literal["eth"] = Field("eth", description="Asset sold")
    buy_type: Literal["erc20"] = Field("erc20", description="Asset bought")
    coin_address: str = Field(..., description="Address of the coin to buy")
    amount_in: str = Field(..., description="Amount of ETH to spend, in ether")
    slippage: float = Field(
        DEFAULT_SLIPPAGE, description="Slippage tolerance as a fraction (0.05 = 5%)"
    )

    @field_validator("sell_type", "buy_type", "slippage", mode="before")
    @classmethod
    def drop_nulls(cls, v: Any, info) -> Any:
        """Treat nulls from the model as unset."""
        if v is None:
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("slippage")
    @classmethod
    def slippage_in_range(cls, v: float) -> float:
        """Validate that slippage is a fraction between 0 and 1."""
        if not 0 <= v <= 1:
            raise ValueError("Slippage must be between 0 and 1")
        return v


class DeployCurrency(str, Enum):
    """Backing currency of a new coin."""

    ZORA = "ZORA"
    ETH = "ETH"


class CoinDeployment(BaseModel):
    """Request to deploy a coin."""

    name: str
    symbol: str
    uri: str
    payout_recipient: str
    platform_referrer: Optional[str] = None
    currency: DeployCurrency = DeployCurrency.ETH


class TradeLeg(BaseModel):
    """One side of a trade."""

    type: Literal["eth", "erc20"]
    address: Optional[str] = None


class TradeParameters(BaseModel):
    """Request to trade a coin."""

    sell: TradeLeg
    buy: TradeLeg
    amount_in: int = Field(..., description="Amount sold, in wei")
    slippage: float = DEFAULT_SLIPPAGE
    sender: str


class CreateCoinResult(BaseModel):
    """Outcome of a coin deployment."""

    hash: str
    address: Optional[str] = None
    deployment: Optional[Dict[str, Any]] = None
    receipt: Optional[Dict[str, Any]] = None


class TradeCoinResult(BaseModel):
    """Outcome of a coin trade."""

    hash: str
    receipt: Optional[Dict[str, Any]] = None
    quote: Optional[Dict[str, Any]] = None
