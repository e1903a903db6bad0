"""
Test suite for the DPC rankings service.

Layout:
- unit/: extraction, lookup, fetcher and CLI tests (no network)
"""
