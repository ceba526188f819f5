"""Pydantic request/response schemas (JSON uses camelCase field names)."""
