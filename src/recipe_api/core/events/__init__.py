"""Application lifecycle events."""

from recipe_api.core.events.lifespan import lifespan


__all__ = ["lifespan"]
