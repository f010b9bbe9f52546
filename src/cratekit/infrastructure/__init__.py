"""Infrastructure layer: external commands and packaged templates.

This layer depends on stdlib and third-party libs (Jinja2, structlog).
It must never import from services, commands, or output.
"""
