"""
Property-based tests for matrix arithmetic and CSV ingestion.

Hypothesis-based tests that verify invariants across random shapes and data:
- Row-major round-trip of flat data
- Add/subtract inverse, multiply shape rule
- Shape and idempotence of the data read
"""
