"""A seeded 2D space simulation where programmed automats control ships through device registers."""

__version__ = "0.1.0"