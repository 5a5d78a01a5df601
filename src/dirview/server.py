"""aiohttp server for Dirview.

Application factory and route registration.
"""

from aiohttp import web

from dirview.api.browse import create_browse_routes
from dirview.app_keys import lister_key, renderer_key, translator_key
from dirview.config import Config
from dirview.core.listing import DirectoryLister, LocalDirectoryLister
from dirview.core.paths import PathTranslator, select_convention
from dirview.core.renderer import ListingRenderer


def create_app(
    config: Config,
    *,
    lister: DirectoryLister | None = None,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        lister: Directory lister (default: local filesystem)

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    convention = select_convention(config.browse.path_style, tuple(config.browse.drives))
    root = str(config.browse.root) if config.browse.root is not None else None
    translator = PathTranslator(convention, prefix=config.browse.prefix, root=root)

    app[translator_key] = translator
    app[lister_key] = lister if lister is not None else LocalDirectoryLister()
    app[renderer_key] = ListingRenderer(translator)

    app.router.add_routes(create_browse_routes(config.browse.prefix))
    app.router.add_get("/", _redirect_to_root)

    return app


async def _redirect_to_root(request: web.Request) -> web.Response:
    """Redirect to the listing of the served root."""
    translator = request.app[translator_key]
    if translator.root is None:
        raise web.HTTPFound(translator.prefix + "/")
    raise web.HTTPFound(translator.link_for(translator.root))


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
