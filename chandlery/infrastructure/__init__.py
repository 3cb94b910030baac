"""Infrastructure layer: adapters for the core storage ports."""
