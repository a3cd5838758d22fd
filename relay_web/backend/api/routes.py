"""All routes for the iframe relay web backend."""

from __future__ import annotations
from logging import Logger
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from iframe_relay import ExtractionError, IframeResolver, NotConfiguredError
from iframe_relay.utils import ConfigStore

from ..pages import render_error, render_viewer

router = APIRouter()


# ---------------------------------------------------------------------------
# Shared application state (set by lifespan)
# ---------------------------------------------------------------------------

def get_resolver(request: Request) -> IframeResolver:
    return request.app.state.resolver


def get_config_store(request: Request) -> ConfigStore:
    return request.app.state.config_store


def get_logger(request: Request) -> Logger:
    return request.app.state.logger


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

class UpdateUrlRequest(BaseModel):
    newUrl: Optional[str] = None


# ---------------------------------------------------------------------------
# JSON API
# ---------------------------------------------------------------------------

@router.get("/current-url")
async def current_url(
    resolver: IframeResolver = Depends(get_resolver),
    config: ConfigStore = Depends(get_config_store),
    logger: Logger = Depends(get_logger),
):
    """Resolve the iframe URL of the tracked page."""
    tracked_url = config.get_tracked_url()
    if not tracked_url:
        raise NotConfiguredError("defaultVideoUrl not found")

    try:
        iframe_url = await resolver.resolve(tracked_url)
    except ExtractionError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error resolving {tracked_url}")
        raise ExtractionError(str(e), page_url=tracked_url) from e
    return {"iframeUrl": iframe_url}


@router.post("/update-url")
async def update_url(
    req: UpdateUrlRequest,
    config: ConfigStore = Depends(get_config_store),
):
    """Replace the tracked page URL."""
    url = config.set_tracked_url(req.newUrl)
    return {"message": "URL updated", "url": url}


# ---------------------------------------------------------------------------
# Viewer page
# ---------------------------------------------------------------------------

@router.get("/", response_class=HTMLResponse)
async def viewer_page(
    resolver: IframeResolver = Depends(get_resolver),
    config: ConfigStore = Depends(get_config_store),
    logger: Logger = Depends(get_logger),
):
    """Render the tracked video in an iframe, or an error fragment."""
    tracked_url = config.get_tracked_url()
    try:
        iframe_url = await resolver.resolve(tracked_url)
    except Exception as e:
        logger.error(f"Failed to render viewer page: {e}")
        return HTMLResponse(render_error(str(e)), status_code=500)
    return HTMLResponse(render_viewer(iframe_url, tracked_url))


@router.get("/favicon.ico")
async def favicon():
    """Return an empty favicon to avoid 404 in browser console."""
    return Response(content=b"", media_type="image/x-icon")
