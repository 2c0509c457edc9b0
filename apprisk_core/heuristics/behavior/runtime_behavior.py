"""
Runtime Behavior Evaluator - capability permissions that enable abuse at runtime.

Looks for:
- Accessibility service binding (can read and drive the screen)
- Overlay drawing (tapjacking and phishing overlays)
- Boot persistence combined with network access
- An excessive number of background services
"""

from typing import Iterable, Optional

from apprisk_core.heuristics.base import BaseEvaluator, EvaluationResult
from apprisk_core.logic.models import RuntimeConfig


ACCESSIBILITY_PERMISSION = "android.permission.BIND_ACCESSIBILITY_SERVICE"
OVERLAY_PERMISSION = "android.permission.SYSTEM_ALERT_WINDOW"
BOOT_PERMISSION = "android.permission.RECEIVE_BOOT_COMPLETED"
INTERNET_PERMISSION = "android.permission.INTERNET"


class RuntimeBehaviorEvaluator(BaseEvaluator):
    """Scores runtime-capability permissions and background service count."""

    def __init__(self, config: Optional[RuntimeConfig] = None):
        super().__init__()
        self.config = config or RuntimeConfig()

    @property
    def name(self) -> str:
        return "runtime_behavior"

    @property
    def category(self) -> str:
        return "Runtime"

    def evaluate(self, permissions: Iterable[str], background_service_count: int) -> EvaluationResult:
        """
        Evaluate runtime capabilities.

        Args:
            permissions: Requested permission identifiers
            background_service_count: Number of declared background services

        Returns:
            EvaluationResult with one factor per capability found
        """
        permissions = frozenset(permissions)
        result = EvaluationResult()

        if ACCESSIBILITY_PERMISSION in permissions:
            result.add(self.category, "Uses Accessibility Service (can read screen)",
                       self.config.accessibility_points)

        if OVERLAY_PERMISSION in permissions:
            result.add(self.category, "Can draw over other apps (overlay attacks)", self.config.overlay_points)

        if BOOT_PERMISSION in permissions and INTERNET_PERMISSION in permissions:
            result.add(self.category, "Auto-starts on boot with internet access", self.config.boot_internet_points)

        if background_service_count > self.config.max_background_services:
            result.add(self.category, f"Excessive background services ({background_service_count})",
                       self.config.excessive_services_points)

        return result
