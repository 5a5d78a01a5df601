"""Mapping between browse URLs and filesystem paths.

Platform path syntax lives behind PathConvention so the translator and the
renderer never branch on the host OS. A convention is selected once at
startup with select_convention().
"""

import logging
import ntpath
import os
import posixpath
import re
from typing import Protocol
from urllib.parse import quote_plus, unquote_plus

from dirview.core.errors import InvalidPathError
from dirview.core.types import FilesystemPath

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "/browse"
DEFAULT_DRIVES = ("c", "d", "e", "f")
PATH_STYLES = ("auto", "posix", "drive-letter")

# "%" not followed by two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# "/c", "/c/...", "/c:" or "/c:\..." at the start of a URL path
_DRIVE_PREFIX = re.compile(r"^/([A-Za-z]):?(?=[/\\]|$)")

_DRIVE_COLON = re.compile(r"^([A-Za-z]):")


class PathConvention(Protocol):
    """Native path syntax of the served filesystem."""

    name: str

    def to_native(self, url_path: str) -> str:
        """Convert a "/"-separated path starting with "/" to a native path."""
        ...

    def to_url_path(self, native: str) -> str:
        """Convert a native path to "/"-separated text."""
        ...

    def parent(self, native: str) -> str:
        """Return the containing directory. The root is its own parent."""
        ...

    def normalize(self, native: str) -> str:
        """Collapse "." and ".." segments and repeated separators."""
        ...

    def is_within(self, native: str, root: str) -> bool:
        """Check whether native is root or one of its descendants."""
        ...

    def is_absolute(self, native: str) -> bool:
        """Check whether native is an absolute path."""
        ...


class PosixConvention:
    """Forward-slash rooted paths. URL and native forms are identical."""

    name = "posix"

    def to_native(self, url_path: str) -> str:
        return url_path

    def to_url_path(self, native: str) -> str:
        return native

    def parent(self, native: str) -> str:
        return posixpath.dirname(native)

    def normalize(self, native: str) -> str:
        return posixpath.normpath(native)

    def is_within(self, native: str, root: str) -> bool:
        try:
            return posixpath.commonpath([native, root]) == root
        except ValueError:
            return False

    def is_absolute(self, native: str) -> bool:
        return posixpath.isabs(native)


class DriveLetterConvention:
    """Drive letter, colon and backslash paths (e.g., "c:\\Users").

    Only drives in a closed set are recognised. The URL form drops the
    colon and uses forward slashes: "c:\\Users" <-> "/c/Users".
    """

    name = "drive-letter"

    def __init__(self, drives: tuple[str, ...] = DEFAULT_DRIVES) -> None:
        """Initialize convention.

        Args:
            drives: Single-letter drive names to recognise (case-insensitive)
        """
        self._drives = frozenset(drive.lower() for drive in drives)

    @property
    def drives(self) -> frozenset[str]:
        """Recognised drive letters, lowercase."""
        return self._drives

    def to_native(self, url_path: str) -> str:
        path = url_path
        match = _DRIVE_PREFIX.match(path)
        if match and match.group(1).lower() in self._drives:
            rest = path[match.end():] or "/"
            path = f"{match.group(1)}:{rest}"
        return path.replace("/", "\\")

    def to_url_path(self, native: str) -> str:
        path = _DRIVE_COLON.sub(r"\1", native, count=1)
        return path.replace("\\", "/")

    def parent(self, native: str) -> str:
        return ntpath.dirname(native)

    def normalize(self, native: str) -> str:
        return ntpath.normpath(native)

    def is_within(self, native: str, root: str) -> bool:
        native_case = ntpath.normcase(native)
        root_case = ntpath.normcase(root)
        try:
            return ntpath.commonpath([native_case, root_case]) == root_case
        except ValueError:
            # Different drives
            return False

    def is_absolute(self, native: str) -> bool:
        return ntpath.isabs(native)


def select_convention(
    style: str = "auto",
    drives: tuple[str, ...] = DEFAULT_DRIVES,
) -> PathConvention:
    """Pick the path convention for the served filesystem.

    Args:
        style: "posix", "drive-letter", or "auto" to follow the host OS
        drives: Drive letters recognised by the drive-letter convention

    Returns:
        PathConvention instance

    Raises:
        ValueError: If style is unknown
    """
    if style not in PATH_STYLES:
        raise ValueError(f"Unknown path style: {style}")
    if style == "auto":
        style = "drive-letter" if os.name == "nt" else "posix"
    if style == "drive-letter":
        return DriveLetterConvention(drives)
    return PosixConvention()


class PathTranslator:
    """Translates browse request paths to filesystem paths and back.

    Translation is purely lexical and never touches the filesystem. When a
    root is configured, every translated path must stay inside it.
    """

    def __init__(
        self,
        convention: PathConvention,
        *,
        prefix: str = DEFAULT_PREFIX,
        root: str | None = None,
    ) -> None:
        """Initialize translator.

        Args:
            convention: Native path syntax of the served filesystem
            prefix: Route prefix that dispatches to the browser (e.g., "/browse")
            root: Native path of the served root. If None, the whole
                  filesystem is browsable.

        Raises:
            ValueError: If root is not an absolute path
        """
        self._convention = convention
        self._prefix = prefix
        self._root = convention.normalize(root) if root else None
        if self._root is not None and not convention.is_absolute(self._root):
            raise ValueError(f"Served root must be an absolute path: {root}")

    @property
    def convention(self) -> PathConvention:
        """Native path syntax in use."""
        return self._convention

    @property
    def prefix(self) -> str:
        """Route prefix."""
        return self._prefix

    @property
    def root(self) -> FilesystemPath | None:
        """Served root, or None when unrestricted."""
        return FilesystemPath(self._root) if self._root is not None else None

    def to_filesystem(self, request_path: str) -> FilesystemPath:
        """Convert a raw request path to a native filesystem path.

        Args:
            request_path: Percent-encoded URL path including the route prefix
                          (e.g., "/browse/%2Fhome%2Fuser")

        Returns:
            Normalized native path

        Raises:
            InvalidPathError: If the prefix is missing or the path leaves
                              the served root
        """
        if request_path != self._prefix and not request_path.startswith(
            self._prefix + "/",
        ):
            raise InvalidPathError(request_path)

        decoded = _unescape(request_path[len(self._prefix):])

        # "/browse/%2Fhome" decodes to "//home"
        url_path = "/" + decoded.lstrip("/")
        if len(url_path) > 1 and url_path.endswith("/"):
            url_path = url_path[:-1]

        native = self._convention.normalize(self._convention.to_native(url_path))

        if self._root is not None and not self._convention.is_within(native, self._root):
            logger.warning(f"Rejected path outside served root: {native}")
            raise InvalidPathError(request_path)

        return FilesystemPath(native)

    def to_url(self, fs_path: str) -> str:
        """Encode a native path as a single query-escaped URL segment.

        Args:
            fs_path: Native path

        Returns:
            Escaped segment (e.g., "%2Fhome%2Fuser")
        """
        url_path = self._convention.to_url_path(fs_path)
        return quote_plus(url_path, safe="", errors="surrogateescape")

    def link_for(self, fs_path: str) -> str:
        """Build the browse URL that lists fs_path."""
        return f"{self._prefix}/{self.to_url(fs_path)}"

    def parent_of(self, fs_path: str) -> FilesystemPath | None:
        """Get the parent directory worth linking to.

        Args:
            fs_path: Native path

        Returns:
            Parent path, or None at the filesystem root or the served root
        """
        parent = self._convention.parent(fs_path)
        if parent == fs_path:
            return None
        if self._root is not None and not self._convention.is_within(parent, self._root):
            return None
        return FilesystemPath(parent)


def _unescape(text: str) -> str:
    """Query-unescape text, falling back to the raw text on malformed input."""
    if _MALFORMED_ESCAPE.search(text):
        logger.debug(f"Malformed percent-encoding, using path as received: {text}")
        return text
    return unquote_plus(text, errors="surrogateescape")
