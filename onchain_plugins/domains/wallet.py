"""
Client bundle shared by the plugins.
"""
from typing import Any

from pydantic import BaseModel, Field

from onchain_plugins.domains.chains import Chain


class EVMClients(BaseModel):
    """Account plus wallet-capable and read-only clients bound to one chain.

    Built per bootstrap call and owned by the invocation that built it.
    """

    model_config = {"arbitrary_types_allowed": True}

    account: Any = Field(..., description="Local signing account")
    wallet_client: Any = Field(..., description="Client that signs and sends")
    public_client: Any = Field(..., description="Read-only client")
    chain: Chain

    @property
    def address(self) -> str:
        """Checksummed address of the account."""
        return self.account.address
