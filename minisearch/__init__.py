"""minisearch: single-term full-text search over a static document collection."""
