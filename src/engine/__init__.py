"""Repository state machine.

This module decides and applies commits, checkouts, and discards.
It is the only layer that mutates repository data.
"""
