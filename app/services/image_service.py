"""Image lookup through Google Custom Search."""

import asyncio
from typing import Any

import httpx
import structlog

from app.core.settings import ImageSearchConfig
from app.schemas.image_schema import ImageResult

logger = structlog.get_logger()

CUSTOM_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"


def first_image_url(payload: Any) -> str | None:
    """First item's ``link``, else its ``image.thumbnailLink``; None for any other shape."""
    items = payload.get("items") if isinstance(payload, dict) else None
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return None
    item = items[0]
    image = item.get("image")
    for url in (
        item.get("link"),
        image.get("thumbnailLink") if isinstance(image, dict) else None,
    ):
        if isinstance(url, str) and url:
            return url
    return None


class ImageLookupService:
    """Looks up one image per name; a failed lookup yields ``fallback=None``."""

    def __init__(self, client: httpx.AsyncClient, config: ImageSearchConfig) -> None:
        self._client = client
        self._config = config

    async def lookup(self, names: list[str]) -> dict[str, ImageResult]:
        """Look up every name concurrently and wait for all of them."""
        results = await asyncio.gather(*(self._lookup_one(name) for name in names))
        return {result.name: result for result in results}

    async def _lookup_one(self, name: str) -> ImageResult:
        fallback: str | None = None
        try:
            response = await self._client.get(
                CUSTOM_SEARCH_URL,
                params={
                    "key": self._config.api_key.get_secret_value(),
                    "cx": self._config.engine_id,
                    "searchType": "image",
                    "q": name,
                    "num": 1,
                },
            )
            response.raise_for_status()
            fallback = first_image_url(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Image lookup failed", name=name, error=str(exc))
        return ImageResult(name=name, fallback=fallback)
