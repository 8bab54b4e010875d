"""API schemas (pydantic request/response models)."""
