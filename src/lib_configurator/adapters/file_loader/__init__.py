"""Filesystem-backed loader."""
