"""Bundled reference data."""

from services.rmf_assessment.data.nist_ai_rmf import NIST_AI_RMF_TEMPLATES

__all__ = ["NIST_AI_RMF_TEMPLATES"]
