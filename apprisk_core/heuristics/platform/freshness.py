"""
Platform freshness evaluation.

Flags apps that target an SDK below the current security baseline and apps
that have not been updated for longer than the staleness window.
"""

from typing import Optional

from apprisk_core.heuristics.base import BaseEvaluator, EvaluationResult
from apprisk_core.logic.models import FreshnessConfig


YEAR_MS = 365 * 24 * 3600 * 1000


class PlatformFreshnessEvaluator(BaseEvaluator):

    def __init__(self, config: Optional[FreshnessConfig] = None):
        super().__init__()
        self.config = config or FreshnessConfig()

    @property
    def name(self) -> str:
        return "platform_freshness"

    @property
    def category(self) -> str:
        return "Platform"

    def is_outdated_target(self, target_sdk_version: int) -> bool:
        return 0 < target_sdk_version < self.config.min_target_sdk

    def is_stale(self, last_update_timestamp: int, now: int) -> bool:
        return last_update_timestamp > 0 and (now - last_update_timestamp) > self.config.stale_after_ms

    def evaluate(self, target_sdk_version: int, last_update_timestamp: int, now: int) -> EvaluationResult:
        """Score outdated targeting and stale maintenance; now is epoch millis."""
        result = EvaluationResult()

        if self.is_outdated_target(target_sdk_version):
            result.add(
                self.category,
                f"Targets outdated Android (SDK {target_sdk_version} < {self.config.min_target_sdk})",
                self.config.outdated_target_points
            )

        if self.is_stale(last_update_timestamp, now):
            years = self.config.stale_after_ms / YEAR_MS
            result.add("Maintenance", f"Not updated in over {years:g} years", self.config.stale_points)

        return result
