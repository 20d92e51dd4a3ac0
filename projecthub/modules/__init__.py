"""Domain modules (models, schemas and services grouped per feature)."""
