"""
Build flag evaluation.

Release builds should never ship debuggable or test-only. A debuggable app
that was also sideloaded or matched a suspicious combo is forced to HIGH.
"""

from typing import Optional

from apprisk_core.heuristics.base import BaseEvaluator, EvaluationResult
from apprisk_core.logic.models import BuildConfig


class BuildFlagEvaluator(BaseEvaluator):
    """Scores debuggable and test-only build flags."""

    def __init__(self, config: Optional[BuildConfig] = None):
        super().__init__()
        self.config = config or BuildConfig()

    @property
    def name(self) -> str:
        return "build_flags"

    @property
    def category(self) -> str:
        return "Build"

    def evaluate(self, is_debuggable: bool, is_test_only: bool,
                 is_sideloaded: bool = False, combo_triggered: bool = False) -> EvaluationResult:
        """
        Evaluate build flags.

        Args:
            is_debuggable: Whether the app is built debuggable
            is_test_only: Whether the app is a test-only build
            is_sideloaded: Whether the app was installed without an installer
            combo_triggered: Whether a suspicious combo already matched

        Returns:
            EvaluationResult, with force_high set for a debuggable app that is
            sideloaded or combo-flagged
        """
        result = EvaluationResult()

        if is_debuggable:
            result.add(self.category, "App is debuggable (security vulnerability)", self.config.debuggable_points)
            if is_sideloaded or combo_triggered:
                result.force_high = True

        if is_test_only:
            result.add(self.category, "Test-only build", self.config.test_only_points)

        return result
