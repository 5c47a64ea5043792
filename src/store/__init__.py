"""Storage layer.

This module persists the repository state document and version blobs.
Every write goes through a temporary file and an atomic rename.
"""
