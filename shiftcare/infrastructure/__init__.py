"""Infrastructure adapters (repositories, challenge stores, services)."""
