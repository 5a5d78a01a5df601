"""Browse endpoint.

Lists a directory and returns it as an HTML page. Failures are returned
as plain text with a matching status code.
"""

import asyncio
import logging

from aiohttp import web

from dirview.app_keys import lister_key, renderer_key, translator_key
from dirview.core.errors import BrowseError, RenderError
from dirview.core.types import URLPath

logger = logging.getLogger(__name__)


def create_browse_routes(prefix: str) -> list[web.RouteDef]:
    return [
        web.get(prefix, browse),
        web.get(prefix + "/{path:.*}", browse),
    ]


async def browse(request: web.Request) -> web.Response:
    # Raw path keeps %2F and "+" intact for query-style unescaping
    request_path = URLPath(request.rel_url.raw_path)
    translator = request.app[translator_key]
    lister = request.app[lister_key]
    renderer = request.app[renderer_key]

    try:
        fs_path = translator.to_filesystem(request_path)
        # Listing may block on slow filesystems; keep it off the event loop
        entries = await asyncio.to_thread(lister.list_directory, fs_path)
        model = renderer.build_page_model(request_path, fs_path, entries)
        body = renderer.render_html(model)
    except RenderError as e:
        # Already logged with traceback by the renderer
        return _error_response(e)
    except BrowseError as e:
        logger.warning(e.message)
        return _error_response(e)

    logger.debug(f"Listed {fs_path} ({len(entries)} entries)")
    return web.Response(body=body, content_type="text/html", charset="utf-8")


def _error_response(error: BrowseError) -> web.Response:
    return web.Response(text=error.message, status=error.status, content_type="text/plain")
