"""Application layer: the loader port and the chain resolution policy."""
