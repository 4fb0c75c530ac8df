"""Infrastructure adapters: database access and observability."""
