"""Text presentation adapter."""
