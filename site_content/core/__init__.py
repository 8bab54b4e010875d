"""Core: configuration, constants, application lifespan and exception handlers."""
