"""Directory listing page rendering.

Builds a PageModel from directory entries and renders it to HTML.
"""

import logging
from dataclasses import dataclass, field
from html import escape
from urllib.parse import quote_plus

from dirview.core.errors import RenderError
from dirview.core.listing import DirectoryEntry
from dirview.core.paths import PathTranslator

logger = logging.getLogger(__name__)

GO_UP_LABEL = ".. Go Up"

PAGE_HEAD = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Remote file explorer</title>
<style>
a {
    text-decoration: none;
}
body {
    font-family: verdana;
    font-size: 14px;
    padding-left: 10px;
}
</style>
</head>
<body>
"""

PAGE_TAIL = """</body>
</html>
"""

EMPTY_BLOCK = "<div>\n<span>No items found.</span>\n</div>\n"


@dataclass(frozen=True)
class ListItem:
    """Single row of the listing page."""

    name: str
    target_url: str
    is_directory: bool


@dataclass
class PageModel:
    """Ordered rows of the listing page."""

    items: list[ListItem] = field(default_factory=list)


class ListingRenderer:
    """Renders directory listings as navigable HTML pages."""

    def __init__(self, translator: PathTranslator) -> None:
        """Initialize renderer.

        Args:
            translator: Translator used to build the parent directory link
        """
        self._translator = translator

    def build_page_model(
        self,
        request_path: str,
        fs_path: str,
        entries: list[DirectoryEntry],
    ) -> PageModel:
        """Build the view model for a directory.

        Entry links extend the request path as received; only the parent
        link is rebuilt from the filesystem path.

        Args:
            request_path: Raw request path (e.g., "/browse/%2Fhome%2Fuser")
            fs_path: Native path of the listed directory
            entries: Directory entries in listing order

        Returns:
            PageModel with the parent link first (if any) and entries in order

        Raises:
            RenderError: If an entry name cannot be encoded into a link
        """
        model = PageModel()

        parent = self._translator.parent_of(fs_path)
        if parent is not None:
            model.items.append(
                ListItem(
                    name=GO_UP_LABEL,
                    target_url=self._translator.link_for(parent),
                    is_directory=True,
                ),
            )

        base = request_path[:-1] if request_path.endswith("/") else request_path
        for entry in entries:
            try:
                escaped = quote_plus(entry.name, safe="", errors="surrogateescape")
            except UnicodeError as e:
                logger.exception(f"Failed to build link for {entry.name!r}: {e}")
                raise RenderError() from e
            href = f"{base}/{escaped}"
            model.items.append(
                ListItem(name=entry.name, target_url=href, is_directory=entry.is_dir),
            )

        return model

    def render_html(self, model: PageModel) -> bytes:
        """Render a page model to a UTF-8 HTML document.

        Args:
            model: Page model to render

        Returns:
            Encoded HTML document

        Raises:
            RenderError: If markup generation fails
        """
        try:
            blocks = [_render_item(item) for item in model.items] or [EMPTY_BLOCK]
            return (PAGE_HEAD + "".join(blocks) + PAGE_TAIL).encode("utf-8")
        except (UnicodeError, ValueError, TypeError) as e:
            logger.exception(f"Failed to render listing: {e}")
            raise RenderError() from e


def _render_item(item: ListItem) -> str:
    label = escape(_display_name(item.name))
    if item.is_directory:
        href = escape(item.target_url, quote=True)
        return f'<div class="directory">\n<a href="{href}">{label}</a>\n</div>\n'
    return f'<div class="file">\n<span>{label}</span>\n</div>\n'


def _display_name(name: str) -> str:
    # Undecodable filename bytes arrive as lone surrogates
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
