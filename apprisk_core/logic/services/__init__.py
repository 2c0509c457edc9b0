"""
Services that orchestrate the evaluators.
"""

from .scoring_service import ScoreAggregator
from .analysis_service import AnalysisService

__all__ = [
    'ScoreAggregator',
    'AnalysisService',
]
