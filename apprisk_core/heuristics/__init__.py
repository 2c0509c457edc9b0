"""
Evaluators of the primary scoring pipeline and the two sibling analyzers.
"""

from .base import BaseEvaluator, EvaluationResult
from .permissions import (
    ComboDetection,
    ComboRule,
    ContextualAppropriatenessEvaluator,
    PermissionCatalog,
    PermissionDetail,
    PermissionInfo,
    SuspiciousComboDetector,
    match_combo_rules,
)
from .context import CategoryClassifier, ProvenanceEvaluator, TrustEvaluator
from .build import BuildFlagEvaluator
from .platform import PlatformFreshnessEvaluator
from .behavior import RuntimeBehaviorEvaluator
from .network import NetworkRiskAnalyzer
from .malware import MalwareIndicatorAnalyzer

__all__ = [
    'BaseEvaluator',
    'EvaluationResult',
    'ComboDetection',
    'ComboRule',
    'ContextualAppropriatenessEvaluator',
    'PermissionCatalog',
    'PermissionDetail',
    'PermissionInfo',
    'SuspiciousComboDetector',
    'match_combo_rules',
    'CategoryClassifier',
    'ProvenanceEvaluator',
    'TrustEvaluator',
    'BuildFlagEvaluator',
    'PlatformFreshnessEvaluator',
    'RuntimeBehaviorEvaluator',
    'NetworkRiskAnalyzer',
    'MalwareIndicatorAnalyzer',
]
