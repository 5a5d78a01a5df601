"""Errors raised while serving a directory listing.

Each error carries the HTTP status and the plain-text message written
back to the client.
"""


class BrowseError(Exception):
    """Base class for listing request failures."""

    status = 500

    @property
    def message(self) -> str:
        """Plain-text message for the response body."""
        return str(self)


class InvalidPathError(BrowseError):
    """Request path cannot be mapped to a served filesystem path."""

    status = 400

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid Path : {detail}")
        self.detail = detail


class NotFoundError(BrowseError):
    """Directory is missing, not a directory, or not accessible."""

    status = 404

    def __init__(self, path: str) -> None:
        super().__init__(f"Not Found : {path}")
        self.path = path


class RenderError(BrowseError):
    """Page markup could not be generated."""

    status = 500

    def __init__(self) -> None:
        super().__init__("Internal Error")
