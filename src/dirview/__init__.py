"""Dirview - browse a local directory tree over HTTP."""
