# =============================================================================
# services/text/__init__.py
# =============================================================================

"""
Text Safety Services

Sanitization applied wherever text crosses a trust boundary:
recognized speech and remote translation responses
"""

from .sanitizer import sanitize

__all__ = ["sanitize"]
