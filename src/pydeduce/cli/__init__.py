"""Command-line interface for pydeduce."""
