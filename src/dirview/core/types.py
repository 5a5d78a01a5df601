"""Core type definitions."""

from typing import NewType

# Raw URL path as received (e.g., "/browse/%2Fhome%2Fuser"), still percent-encoded
URLPath = NewType("URLPath", str)

# Native absolute path (e.g., "/home/user" or "c:\\Users")
# Distinct from URLPath to catch type mismatches
FilesystemPath = NewType("FilesystemPath", str)
