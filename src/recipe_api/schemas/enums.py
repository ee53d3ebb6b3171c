"""Enumerations shared by schemas and repositories."""

from __future__ import annotations

from enum import StrEnum


class Difficulty(StrEnum):
    """How demanding a recipe is to cook."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
