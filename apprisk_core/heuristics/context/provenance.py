"""
Provenance Evaluator - install origin classification and scoring.

Apps installed outside the first-party store skipped its review, so they
start from a higher baseline. Sideloaded apps that also hold a HIGH-tier
permission are weighted further.
"""

from typing import Optional

from apprisk_core.heuristics.base import BaseEvaluator, EvaluationResult
from apprisk_core.logic.models import AppMetadata, InstallSource, ProvenanceConfig


class ProvenanceEvaluator(BaseEvaluator):
    """Classifies and scores the installation channel of an app."""

    def __init__(self, config: Optional[ProvenanceConfig] = None):
        super().__init__()
        self.config = config or ProvenanceConfig()

    @property
    def name(self) -> str:
        return "provenance"

    @property
    def category(self) -> str:
        return "Installation"

    def classify(self, installer_identifier: Optional[str]) -> InstallSource:
        """
        Classify an installer package identifier.

        Args:
            installer_identifier: Package that installed the app, if known

        Returns:
            SIDELOADED when absent or empty, STORE for the first-party store,
            THIRD_PARTY_STORE otherwise
        """
        if not installer_identifier or not installer_identifier.strip():
            return InstallSource.SIDELOADED
        if installer_identifier.strip() == self.config.store_installer:
            return InstallSource.STORE
        return InstallSource.THIRD_PARTY_STORE

    def evaluate(self, metadata: AppMetadata, has_high_risk_permission: bool) -> EvaluationResult:
        result = EvaluationResult()
        source = self.classify(metadata.installer_identifier)

        if source is InstallSource.SIDELOADED:
            if has_high_risk_permission:
                result.add(self.category, "Sideloaded (not from Play Store) with high-risk permissions",
                           self.config.sideloaded_high_risk_points)
            else:
                result.add(self.category, "Sideloaded (not from Play Store)", self.config.sideloaded_points)
        elif source is InstallSource.THIRD_PARTY_STORE:
            result.add(self.category, "Installed from third-party store", self.config.third_party_store_points)

        return result
