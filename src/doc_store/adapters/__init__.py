"""Adapters layer - implementations of the store's outward-facing conventions."""
