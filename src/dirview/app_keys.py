"""Application keys for type-safe app configuration access."""

from aiohttp import web

from dirview.core.listing import DirectoryLister
from dirview.core.paths import PathTranslator
from dirview.core.renderer import ListingRenderer

translator_key = web.AppKey("translator", PathTranslator)
lister_key = web.AppKey("lister", DirectoryLister)
renderer_key = web.AppKey("renderer", ListingRenderer)
