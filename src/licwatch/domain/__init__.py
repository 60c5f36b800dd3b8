"""Domain layer — typed item wrappers, registry, fixed paths.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
