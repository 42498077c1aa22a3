"""Domain layer — content entries, task definitions, errors, ordering.

This layer depends only on stdlib and pyuca.
It must never import from services, infrastructure, commands, or config.
"""
