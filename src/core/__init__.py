"""
Core numeric structures, domain models, contracts, and the error taxonomy.

This package is independent of any data source: the ingestion layer builds
on top of it.
"""
