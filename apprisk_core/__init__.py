"""
Risk-scoring engine for installed mobile apps.

Turns static app facts (permissions, install provenance, build flags,
platform targeting) into an explainable risk verdict.
"""

from apprisk_core.application import AnalyzeInstalledAppsUseCase
from apprisk_core.infrastructure.providers import (
    AppMetadataProvider,
    FileMetadataProvider,
    InMemoryMetadataProvider,
)
from apprisk_core.infrastructure.shared import (
    AppRiskError,
    ConfigurationError,
    MalformedInputError,
    MissingMetadataError,
)
from apprisk_core.logic.models import (
    AppMetadata,
    EngineConfig,
    MalwareIndicatorResult,
    NetworkRiskResult,
    RecommendedAction,
    RiskAssessment,
    RiskFactor,
    RiskLevel,
)
from apprisk_core.logic.services import AnalysisService, ScoreAggregator

__version__ = "1.0.0"

__all__ = [
    'AnalyzeInstalledAppsUseCase',
    'AppMetadataProvider',
    'FileMetadataProvider',
    'InMemoryMetadataProvider',
    'AppRiskError',
    'ConfigurationError',
    'MalformedInputError',
    'MissingMetadataError',
    'AppMetadata',
    'EngineConfig',
    'MalwareIndicatorResult',
    'NetworkRiskResult',
    'RecommendedAction',
    'RiskAssessment',
    'RiskFactor',
    'RiskLevel',
    'AnalysisService',
    'ScoreAggregator',
]
