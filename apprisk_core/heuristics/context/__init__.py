"""
Context evaluators: app category, trust and install provenance.
"""

from .category_classifier import DEFAULT_CATEGORY_KEYWORDS, CategoryClassifier
from .trust import TrustEvaluator
from .provenance import ProvenanceEvaluator

__all__ = [
    'DEFAULT_CATEGORY_KEYWORDS',
    'CategoryClassifier',
    'TrustEvaluator',
    'ProvenanceEvaluator',
]
