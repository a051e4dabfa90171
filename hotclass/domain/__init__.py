"""Domain layer: ports and value objects."""
