"""Frontmatter variable templating: resolve {{placeholders}} from YAML frontmatter on demand."""

__version__ = "1.0.0"
