"""
Domain models for the Polymarket plugin.
"""
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from onchain_plugins.domains.wallet import EVMClients
from onchain_plugins.utils.config import missing_keys

API_CREDENTIAL_KEYS = ("POLYMARKET_API_KEY", "POLYMARKET_SECRET", "POLYMARKET_PASSPHRASE")
WALLET_CONFIG_KEYS = ("WALLET_PRIVATE_KEY", "RPC_PROVIDER_URL")

MISSING_API_CREDENTIALS = (
    "Missing required Polymarket API credentials. Please set POLYMARKET_API_KEY, "
    "POLYMARKET_SECRET, and POLYMARKET_PASSPHRASE environment variables."
)
MISSING_WALLET_CONFIG = (
    "Missing required wallet configuration. Please set WALLET_PRIVATE_KEY "
    "and RPC_PROVIDER_URL environment variables."
)


class PolymarketCredentials(BaseModel):
    """Polymarket API credentials plus the wallet they trade from."""

    api_key: str
    secret: str
    passphrase: str
    wallet_private_key: str
    rpc_provider_url: str

    @classmethod
    def from_config(cls, config: Mapping[str, str]) -> "PolymarketCredentials":
        """Read and presence-check the credentials.

        The API credential group is checked before the wallet group.

        Raises:
            ValueError: If any value of either group is missing
        """
        if missing_keys(config, API_CREDENTIAL_KEYS):
            raise ValueError(MISSING_API_CREDENTIALS)
        if missing_keys(config, WALLET_CONFIG_KEYS):
            raise ValueError(MISSING_WALLET_CONFIG)
        return cls(
            api_key=config["POLYMARKET_API_KEY"],
            secret=config["POLYMARKET_SECRET"],
            passphrase=config["POLYMARKET_PASSPHRASE"],
            wallet_private_key=config["WALLET_PRIVATE_KEY"],
            rpc_provider_url=config["RPC_PROVIDER_URL"],
        )


class EventQueryParams(BaseModel):
    """Criteria for listing Polymarket events."""

    query: Optional[str] = Field(None, description="Search query for events")
    limit: int = Field(10, description="Maximum number of events to return")
    active: bool = Field(True, description="Filter for active events only")

    @field_validator("limit", mode="before")
    @classmethod
    def default_limit(cls, v: Any) -> Any:
        """Fall back to the default when the model leaves the limit out."""
        if v is None:
            return 10
        return v

    @field_validator("active", mode="before")
    @classmethod
    def default_active(cls, v: Any) -> Any:
        """Fall back to active-only when the model leaves the flag out."""
        if v is None:
            return True
        return v

    @field_validator("limit")
    @classmethod
    def limit_positive(cls, v: int) -> int:
        """Validate that the limit is positive."""
        if v < 1:
            raise ValueError("Limit must be at least 1")
        return v


class PolymarketClients(EVMClients):
    """Client bundle plus the tools discovered for the wallet."""

    tools: List[Any] = Field(default_factory=list)
