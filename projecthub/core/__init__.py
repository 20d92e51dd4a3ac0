"""Cross-cutting infrastructure: configuration, database, logging, errors, middleware."""
