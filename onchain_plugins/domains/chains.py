"""
EVM chains the plugins can bind their clients to.
"""
from pydantic import BaseModel, ConfigDict, Field


class Chain(BaseModel):
    """An EVM network."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="EIP-155 chain id")
    name: str = Field(..., description="Human readable name")
    network: str = Field(..., description="Short network slug")
    native_currency: str = Field("ETH", description="Symbol of the gas token")
    testnet: bool = False


POLYGON = Chain(id=137, name="Polygon", network="matic", native_currency="POL")
BASE = Chain(id=8453, name="Base", network="base")
BASE_SEPOLIA = Chain(
    id=84532, name="Base Sepolia", network="base-sepolia", testnet=True
)
