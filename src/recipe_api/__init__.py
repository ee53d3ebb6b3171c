"""Recipe API: recipes, ingredients and users over PostgreSQL."""

__version__ = "0.1.0"
