"""Cancellation primitives split one class per file."""
