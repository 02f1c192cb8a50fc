"""In-memory loader."""
