"""Domain layer - documents, query specifications and evaluation services."""
