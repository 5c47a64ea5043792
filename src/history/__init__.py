"""History and branch-graph rendering.

This module turns repository data into aligned, annotated text rows.
It only reads repository data and never mutates it.
"""
