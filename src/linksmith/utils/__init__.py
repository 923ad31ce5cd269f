"""Shared utilities for linksmith."""
