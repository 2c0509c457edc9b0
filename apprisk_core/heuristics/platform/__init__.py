"""
Platform targeting and maintenance evaluators.
"""

from .freshness import PlatformFreshnessEvaluator

__all__ = ['PlatformFreshnessEvaluator']
