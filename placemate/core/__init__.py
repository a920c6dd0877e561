"""Core module for the placemate application."""

from .types import FirestoreDocument

__all__ = ["FirestoreDocument"]
