"""
Domain layer - Core business logic and entities.

This layer contains pure business logic independent of frameworks,
databases, or external services.
"""
