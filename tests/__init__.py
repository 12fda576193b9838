"""
RMF Assessment Test Suite
=========================

Test organization:
- tests/unit/                     - Shared library tests (auth)
- tests/services/rmf_assessment/  - Aggregator, scoring, reports, routes

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
"""
