"""
Runtime behavior evaluators.
"""

from .runtime_behavior import RuntimeBehaviorEvaluator

__all__ = ['RuntimeBehaviorEvaluator']
