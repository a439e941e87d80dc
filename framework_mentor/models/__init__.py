"""Pydantic models for catalog metadata and selection requests/results."""
