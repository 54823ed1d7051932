"""
Shared utilities for ajweave.

Common functionality used across contexts:
- Logger configuration
"""
