"""Domain layer: calendar values, zone rules, and formatting.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
