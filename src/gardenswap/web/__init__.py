"""Web layer for the swap form and order history.

This layer never touches keys: quotes and orders go through the swap SDK,
order history through the read-only Garden REST API.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
