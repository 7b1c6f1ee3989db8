"""Domain layer — front matter, changelog entries, and doc pages.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
