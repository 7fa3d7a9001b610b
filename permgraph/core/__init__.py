"""Core: configuration, constants, exception handlers, and lifespan wiring."""
