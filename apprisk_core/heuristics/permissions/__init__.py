"""
Permission analysis: catalog, contextual appropriateness and combo detection.
"""

from .permission_catalog import (
    DEFAULT_PERMISSION_CATALOG,
    PermissionCatalog,
    PermissionDetail,
    PermissionInfo,
)
from .contextual_appropriateness import DEFAULT_APPROPRIATENESS_TABLE, ContextualAppropriatenessEvaluator
from .combo_detector import (
    DEFAULT_COMBO_RULES,
    ComboDetection,
    ComboRule,
    SuspiciousComboDetector,
    match_combo_rules,
)

__all__ = [
    'DEFAULT_PERMISSION_CATALOG',
    'PermissionCatalog',
    'PermissionDetail',
    'PermissionInfo',
    'DEFAULT_APPROPRIATENESS_TABLE',
    'ContextualAppropriatenessEvaluator',
    'DEFAULT_COMBO_RULES',
    'ComboDetection',
    'ComboRule',
    'SuspiciousComboDetector',
    'match_combo_rules',
]
