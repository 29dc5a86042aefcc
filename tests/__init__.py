"""
Test suite for tabular-matrix

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/property/      : Hypothesis property tests for invariants
"""
