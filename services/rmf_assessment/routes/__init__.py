"""
RMF Assessment Routes
=====================

API route handlers for the RMF Assessment Service.
"""

from services.rmf_assessment.routes import assessments, reports


__all__ = ["assessments", "reports"]
