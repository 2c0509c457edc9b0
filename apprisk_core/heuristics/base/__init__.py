"""
Base evaluator interfaces.

This module provides the foundation for all evaluator implementations.
"""

from .base_evaluator import BaseEvaluator, EvaluationResult

__all__ = [
    'BaseEvaluator',
    'EvaluationResult',
]
