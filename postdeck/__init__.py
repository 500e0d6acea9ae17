"""Front-matter parsing and post index tooling for static-site blogs."""

from postdeck.frontmatter import Document, parse_front_matter

__all__ = ["Document", "parse_front_matter"]
