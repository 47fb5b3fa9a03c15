"""Command line tools for zplgfa."""
