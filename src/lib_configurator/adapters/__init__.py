"""Adapters: concrete loaders and format decoders."""
