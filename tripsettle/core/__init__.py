"""
Core domain models, money primitives, and contracts.

This module contains the foundational building blocks that are independent
of external systems (HTTP layer, databases, etc.).
"""
