"""Domain layer: error taxonomy and payload binding (no I/O)."""
