"""
Trust evaluation.

System apps, apps on a privileged partition and apps published under a
trusted vendor prefix are trusted outright; the aggregator skips all other
scoring for them.
"""

from typing import Optional

from apprisk_core.heuristics.base import BaseEvaluator, EvaluationResult
from apprisk_core.logic.models import AppMetadata, TrustConfig


TRUSTED_DESCRIPTION = "System or verified publisher app"


class TrustEvaluator(BaseEvaluator):
    """Decides whether an app is axiomatically trusted."""

    def __init__(self, config: Optional[TrustConfig] = None):
        super().__init__()
        self.config = config or TrustConfig()

    @property
    def name(self) -> str:
        return "trust"

    @property
    def category(self) -> str:
        return "Trusted"

    def has_trusted_prefix(self, package_identifier: str) -> bool:
        return package_identifier.startswith(self.config.trusted_prefixes)

    def is_trusted(self, metadata: AppMetadata) -> bool:
        return (
            metadata.is_system_app
            or metadata.is_privileged_partition
            or self.has_trusted_prefix(metadata.package_identifier)
        )

    def trusted_result(self) -> EvaluationResult:
        """The single zero-point factor reported for trusted apps."""
        result = EvaluationResult()
        result.add(self.category, TRUSTED_DESCRIPTION, 0)
        return result
