"""
Test suite for tripsettle

Contains:
- tests/unit/          : Unit tests for individual modules
"""
