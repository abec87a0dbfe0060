"""Business logic for resource icons."""
import logging

from fastapi import Response
from fastapi.responses import RedirectResponse

from spiget_backend.settings import BackendSettings
from spiget_backend.utils.images import FALLBACK_ICON_PNG, decode_image, sniff_media_type
from spiget_types.resources import IconType

logger = logging.getLogger(__name__)


def icon_response(entity, icon_type: IconType, settings: BackendSettings) -> Response:
    """
    Serve the stored icon of a resource or author.

    raw: the decoded image bytes, or the bundled fallback PNG.
    url: a redirect to the marketplace copy, or to FALLBACK_ICON_URL.
    """
    if icon_type is IconType.URL:
        if entity.icon_url:
            return RedirectResponse(url=f"{settings.SPIGOT_URL.rstrip('/')}/{entity.icon_url.lstrip('/')}", status_code=302)
        return RedirectResponse(url=settings.FALLBACK_ICON_URL, status_code=302)

    payload = decode_image(entity.icon_data)
    if payload is None:
        if entity.icon_data:
            logger.warning(f"Stored icon of {type(entity).__name__} {entity.id} is not valid base64")
        payload = FALLBACK_ICON_PNG
    return Response(content=payload, media_type=sniff_media_type(payload))
