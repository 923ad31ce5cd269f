"""Core models, configuration and conflict detection for linksmith."""
