"""Directory listing.

The renderer only sees DirectoryEntry records, so tests and alternative
backends can supply their own DirectoryLister.
"""

import os
from dataclasses import dataclass
from typing import Protocol

from dirview.core.errors import NotFoundError


@dataclass(frozen=True)
class DirectoryEntry:
    """One child of a listed directory."""

    name: str
    is_dir: bool


class DirectoryLister(Protocol):
    """Lists the children of a directory."""

    def list_directory(self, path: str) -> list[DirectoryEntry]: ...


class LocalDirectoryLister:
    """Lists directories on the local filesystem.

    Entries are sorted by name. Symlinks to directories count as directories.
    """

    def list_directory(self, path: str) -> list[DirectoryEntry]:
        """List a directory.

        Args:
            path: Native directory path

        Returns:
            Entries sorted by name

        Raises:
            NotFoundError: If the path is missing, not a directory, or unreadable
        """
        try:
            with os.scandir(path) as it:
                entries = [DirectoryEntry(entry.name, _is_dir(entry)) for entry in it]
        except (OSError, ValueError) as e:
            # ValueError: embedded null byte
            raise NotFoundError(path) from e

        entries.sort(key=lambda entry: entry.name)
        return entries


def _is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        # Dangling or unreadable link
        return False
