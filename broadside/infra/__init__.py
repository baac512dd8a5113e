"""Process-level configuration, paths and logging setup."""
