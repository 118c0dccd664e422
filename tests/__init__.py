"""
Test suite for the MTG Synergy Analyzer backend.

Running Tests:
- All tests: pytest
- API only: pytest -m api
- Relational store only: pytest -m relational
"""
