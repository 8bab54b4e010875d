"""Infrastructure: adapters to external systems (content REST backend)."""
