"""Domain layer — calendar dates, reconciliation rules, front matter records.

This layer depends only on stdlib and tomlkit.
It must never import from services, infrastructure, commands, or config.
"""
