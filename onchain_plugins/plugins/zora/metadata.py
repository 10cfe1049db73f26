"""
Coin metadata URI resolution.

A coin needs a metadata URI. When the conversation does not supply a usable
one, a minimal metadata document is pinned to IPFS through Pinata.
"""
import json
import logging
import time
from typing import Any, Dict

from onchain_plugins.domains.zora import CreateCoinParams, PinataSettings
from onchain_plugins.interfaces.providers.runtime import AgentRuntime

logger = logging.getLogger(__name__)

PINATA_PIN_JSON_URL = "https://api.pinata.cloud/pinning/pinJSONToIPFS"

URI_SCHEMES = ("ipfs://", "http://", "https://")

MISSING_PINATA_JWT = (
    "Missing PINATA_JWT. Cannot auto-generate metadata URI. Provide a valid uri "
    "or set PINATA_JWT to enable auto-pinning."
)


def build_metadata(params: CreateCoinParams, settings: PinataSettings) -> Dict[str, Any]:
    """Metadata document for a coin: name, description and optional image."""
    description = (params.description or "").strip() or f"Creator coin for {params.name}"
    image = (params.image or "").strip()
    if not image and settings.default_image_cid:
        image = f"ipfs://{settings.default_image_cid}"

    metadata: Dict[str, Any] = {"name": params.name, "description": description}
    if image:
        metadata["image"] = image
    return metadata


async def ensure_metadata_uri(
    runtime: AgentRuntime,
    params: CreateCoinParams,
    settings: PinataSettings,
) -> str:
    """Return a usable metadata URI for the coin.

    A supplied ``ipfs://``, ``http://`` or ``https://`` URI is returned as-is.
    Anything else triggers exactly one pin request through the runtime.

    Args:
        runtime: Host runtime used for the outbound request
        params: Extracted coin parameters
        settings: Pinata JWT and default image

    Returns:
        The supplied URI or ``ipfs://<hash>`` of the pinned document

    Raises:
        ValueError: If pinning is needed and no JWT is configured
        RuntimeError: If the pin request fails or returns no hash
    """
    provided = (params.uri or "").strip()
    if provided.startswith(URI_SCHEMES):
        return provided

    if not settings.jwt:
        raise ValueError(MISSING_PINATA_JWT)

    body = {
        "pinataContent": build_metadata(params, settings),
        "pinataMetadata": {
            "name": f"zora-coin-{params.symbol}-{int(time.time() * 1000)}"
        },
    }
    response = await runtime.fetch(
        PINATA_PIN_JSON_URL,
        method="POST",
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {settings.jwt}",
        },
        content=json.dumps(body),
    )

    if not response.is_success:
        raise RuntimeError(
            f"Pinata pinJSONToIPFS failed: {response.status_code} "
            f"{response.reason_phrase} {response.text}"
        )

    ipfs_hash = response.json().get("IpfsHash")
    if not ipfs_hash:
        raise RuntimeError("Pinata response missing IpfsHash")

    logger.info(f"Pinned metadata for {params.symbol} as {ipfs_hash}")
    return f"ipfs://{ipfs_hash}"
