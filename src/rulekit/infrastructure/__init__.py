"""Infrastructure layer — filesystem, template loading, config file rendering.

This layer depends on stdlib and third-party libs (Jinja2, ruamel.yaml).
It must never import from services, commands, or output.
"""
