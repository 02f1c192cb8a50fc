"""Structured document decoders (JSON, XML, TOML, YAML)."""
