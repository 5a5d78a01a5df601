"""Core path translation, listing and rendering."""
