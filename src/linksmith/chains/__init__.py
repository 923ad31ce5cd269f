"""Batch orchestration over the filesystem core."""
