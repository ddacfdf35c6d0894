"""Operating system helpers."""
