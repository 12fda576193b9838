"""
RMF Assessment Service
======================

NIST AI Risk Management Framework compliance assessments.

Features:
- Questionnaire catalog for the Govern/Map/Measure/Manage functions
- Derivation of implementation levels from questionnaire answers
- Risk scoring and organization dashboard aggregates
- Risk register export
- PDF, Excel and JSON compliance reports

Port: 8010
"""

__version__ = "0.1.0"
