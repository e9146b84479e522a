# =============================================================================
# services/medical_intelligence/__init__.py
# =============================================================================

"""
Medical Intelligence Services

Clinical vocabulary applied to recognized speech before translation
"""

from .terminology import MEDICAL_TERMS, MedicalTermEnhancer, enhance_medical_terms

__all__ = [
    "MEDICAL_TERMS",
    "MedicalTermEnhancer",
    "enhance_medical_terms"
]
