"""
Image proxy route.

Endpoints:
- GET /api/image-proxy?url=...: Stream a third-party club image

Responses are plain text on failure so <img> tags degrade quietly.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, status
from fastapi.responses import PlainTextResponse, Response

from clubfit.services.image_proxy import is_proxyable_url, proxy_image

logger = logging.getLogger(__name__)

IMAGE_CACHE_CONTROL = "public, max-age=86400"
ERROR_CACHE_CONTROL = "public, max-age=3600"

router = APIRouter(
    prefix="/api",
    tags=["images"]
)


def _text(message: str, status_code: int, cache_control: Optional[str] = None) -> PlainTextResponse:
    headers = {"Cache-Control": cache_control} if cache_control else None
    return PlainTextResponse(message, status_code=status_code, headers=headers)


@router.get(
    "/image-proxy",
    summary="Proxy a club image",
    response_class=Response,
    responses={
        200: {"content": {"image/*": {}}},
        400: {"description": "Missing or non-http(s) URL"},
        404: {"description": "Image unavailable"},
    },
)
async def image_proxy_endpoint(url: Optional[str] = Query(default=None)):
    if not url:
        return _text("Missing image URL", status.HTTP_400_BAD_REQUEST)

    if not is_proxyable_url(url):
        logger.warning(f"Rejected non-http(s) image URL: {url[:100]}")
        return _text("Invalid image URL", status.HTTP_400_BAD_REQUEST)

    try:
        image = await proxy_image(url)
    except Exception as e:
        logger.error(f"Image proxy error for {url}: {e}", exc_info=True)
        return _text("Failed to load image", status.HTTP_500_INTERNAL_SERVER_ERROR, ERROR_CACHE_CONTROL)

    if image is None:
        return _text("Image unavailable", status.HTTP_404_NOT_FOUND, ERROR_CACHE_CONTROL)

    return Response(
        content=image.content,
        media_type=image.content_type,
        headers={
            "Cache-Control": IMAGE_CACHE_CONTROL,
            "Access-Control-Allow-Origin": "*",
        },
    )
