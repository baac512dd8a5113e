"""Computer-side move selection."""
