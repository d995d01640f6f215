"""Vehicle registry HTTP service."""
