"""Domain layer — markdown parsing, mode definitions, lint rules.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
