"""
Build flag evaluators.
"""

from .build_flags import BuildFlagEvaluator

__all__ = ['BuildFlagEvaluator']
