"""Core data types for the placemate application."""

from typing import TypedDict


class _FirestoreDocumentBase(TypedDict):
    id: str
    createdAt: int


class FirestoreDocument(_FirestoreDocumentBase, total=False):
    """Generic Firestore document structure."""

    updatedAt: int
