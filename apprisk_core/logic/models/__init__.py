"""
Domain models for the app risk engine.

This module contains the core data structures used throughout the system.
These models represent the business domain and are independent of any external concerns.
"""

from .app_metadata import (
    AppCategory,
    AppMetadata,
    InstallSource,
    as_permission_set,
    format_file_size,
    permission_short_name,
)
from .risk_assessment import (
    AssessmentStatus,
    BatchSummary,
    PermissionTier,
    RecommendedAction,
    RiskAssessment,
    RiskFactor,
    RiskLevel,
)
from .sibling_results import MalwareIndicatorResult, NetworkRiskResult
from .configuration import (
    BatchConfig,
    BuildConfig,
    EngineConfig,
    FreshnessConfig,
    MalwareIndicatorConfig,
    NetworkConfig,
    ProvenanceConfig,
    RuntimeConfig,
    ScoringConfig,
    TrustConfig,
)

__all__ = [
    'AppMetadata',
    'AppCategory',
    'InstallSource',
    'format_file_size',
    'permission_short_name',
    'as_permission_set',
    'AssessmentStatus',
    'BatchSummary',
    'PermissionTier',
    'RecommendedAction',
    'RiskAssessment',
    'RiskFactor',
    'RiskLevel',
    'MalwareIndicatorResult',
    'NetworkRiskResult',
    'BatchConfig',
    'BuildConfig',
    'EngineConfig',
    'FreshnessConfig',
    'MalwareIndicatorConfig',
    'NetworkConfig',
    'ProvenanceConfig',
    'RuntimeConfig',
    'ScoringConfig',
    'TrustConfig',
]
