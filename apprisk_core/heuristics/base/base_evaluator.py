"""
Base evaluator interface.

Defines the contract shared by the evaluators that contribute points and
explainable factors to an assessment.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List
import logging

from apprisk_core.logic.models import RiskFactor


@dataclass
class EvaluationResult:
    """Points and factors contributed by one evaluator."""
    points: int = 0
    factors: List[RiskFactor] = field(default_factory=list)
    # Final level becomes HIGH regardless of the accumulated score
    force_high: bool = False

    def add(self, category: str, description: str, points: int) -> None:
        """Append a factor and accumulate its points."""
        self.factors.append(RiskFactor(category=category, description=description, points=points))
        self.points += points

    def merge(self, other: 'EvaluationResult') -> None:
        """Fold another result into this one, preserving factor order."""
        self.points += other.points
        self.factors.extend(other.factors)
        self.force_high = self.force_high or other.force_high


class BaseEvaluator(ABC):
    """
    Base class for all evaluator implementations.

    Evaluators are pure functions of their inputs: they hold only immutable
    reference data and configuration, so one instance may be shared across
    worker threads.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"heuristic.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the name of this evaluator."""
        pass

    @property
    @abstractmethod
    def category(self) -> str:
        """Factor category this evaluator reports under (e.g. 'Runtime')."""
        pass

    @property
    def description(self) -> str:
        return f"Evaluator: {self.name}"
