"""Command-line interface for frontvars."""
