"""Domain layer — crate identities, dependencies, and the dependency graph.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
