"""
RMF Services
============

Services of the AI risk management compliance platform.

Services:
- rmf_assessment: NIST AI RMF assessments, scoring and reports
"""

__all__ = [
    "rmf_assessment",
]
