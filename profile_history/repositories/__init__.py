"""
Repository layer - Data access abstractions.

Key-value store backends plus typed repositories that read and write
JSON-serialized record lists under fixed storage keys.
"""
