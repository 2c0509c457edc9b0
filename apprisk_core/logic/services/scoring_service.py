"""
Scoring service for per-app risk assessment.

ScoreAggregator runs the evaluators in a fixed order and folds their points
and factors into one RiskAssessment:

1. Trust short-circuits everything else (score 0, LOW)
2. Per-permission tier points, weighted up when contextually inappropriate
3. Suspicious combos (any match forces HIGH)
4. Provenance, build flags (may force HIGH), platform freshness, runtime
5. Clamp to [0, 100], map to level and action, compute confidence
"""

from typing import Optional, Union
import logging
import time

from apprisk_core.heuristics.base import EvaluationResult
from apprisk_core.heuristics.behavior import RuntimeBehaviorEvaluator
from apprisk_core.heuristics.build import BuildFlagEvaluator
from apprisk_core.heuristics.context import CategoryClassifier, ProvenanceEvaluator, TrustEvaluator
from apprisk_core.heuristics.permissions import (
    ContextualAppropriatenessEvaluator,
    PermissionCatalog,
    SuspiciousComboDetector,
)
from apprisk_core.heuristics.platform import PlatformFreshnessEvaluator
from apprisk_core.logic.models import (
    AppCategory,
    AppMetadata,
    AssessmentStatus,
    EngineConfig,
    InstallSource,
    PermissionTier,
    RiskAssessment,
    RiskLevel,
    permission_short_name,
)


def current_time_millis() -> int:
    return int(time.time() * 1000)


class ScoreAggregator:
    """
    Combines all evaluator contributions into a RiskAssessment.

    Stateless between calls; one instance can score apps from several
    threads at once. Every collaborator can be substituted, which is how
    tests run the pipeline against smaller reference tables.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        catalog: Optional[PermissionCatalog] = None,
        classifier: Optional[CategoryClassifier] = None,
        appropriateness: Optional[ContextualAppropriatenessEvaluator] = None,
        combo_detector: Optional[SuspiciousComboDetector] = None,
        trust: Optional[TrustEvaluator] = None,
        provenance: Optional[ProvenanceEvaluator] = None,
        build_flags: Optional[BuildFlagEvaluator] = None,
        freshness: Optional[PlatformFreshnessEvaluator] = None,
        runtime: Optional[RuntimeBehaviorEvaluator] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            config: Engine configuration, built-in defaults when omitted
            catalog, classifier, ...: Optional replacements for the evaluators
        """
        self.config = config or EngineConfig()
        self.scoring = self.config.scoring
        self.logger = logging.getLogger("scoring.service")

        self.catalog = catalog or PermissionCatalog()
        self.classifier = classifier or CategoryClassifier()
        self.appropriateness = appropriateness or ContextualAppropriatenessEvaluator()
        self.combo_detector = combo_detector or SuspiciousComboDetector(combo_points=self.scoring.combo_points)
        self.trust = trust or TrustEvaluator(self.config.trust)
        self.provenance = provenance or ProvenanceEvaluator(self.config.provenance)
        self.build_flags = build_flags or BuildFlagEvaluator(self.config.build)
        self.freshness = freshness or PlatformFreshnessEvaluator(self.config.freshness)
        self.runtime = runtime or RuntimeBehaviorEvaluator(self.config.runtime)

    def score(self, metadata: AppMetadata, now: Optional[int] = None) -> RiskAssessment:
        """
        Score one app.

        Args:
            metadata: App facts
            now: Reference time in epoch millis for the staleness check,
                 current time when omitted

        Returns:
            A fresh RiskAssessment
        """
        if now is None:
            now = current_time_millis()

        permissions = metadata.requested_permissions
        category = self.classifier.classify(metadata.package_identifier, metadata.display_name)
        tier_counts = self.catalog.count_by_tier(permissions)
        install_source = self.provenance.classify(metadata.installer_identifier)

        if self.trust.is_trusted(metadata):
            self.logger.debug(f"{metadata.package_identifier}: trusted, skipping analysis")
            return self._build_assessment(
                metadata, self.trust.trusted_result(), RiskLevel.LOW, 0, category, True,
                install_source, tier_counts, now
            )

        result = EvaluationResult()
        result.merge(self._score_permissions(permissions, category))

        combos = self.combo_detector.detect(permissions, category)
        result.factors.extend(combos.factors)
        result.points += combos.points
        result.force_high = result.force_high or combos.triggered

        has_high_risk = tier_counts[PermissionTier.HIGH] > 0
        result.merge(self.provenance.evaluate(metadata, has_high_risk))
        result.merge(self.build_flags.evaluate(
            metadata.is_debuggable,
            metadata.is_test_only,
            is_sideloaded=install_source is InstallSource.SIDELOADED,
            combo_triggered=combos.triggered,
        ))
        result.merge(self.freshness.evaluate(metadata.target_sdk_version, metadata.last_update_timestamp, now))
        result.merge(self.runtime.evaluate(permissions, metadata.background_service_count))

        score = max(0, min(100, result.points))
        level = self.determine_risk_level(score, result.force_high)

        self.logger.debug(
            f"{metadata.package_identifier}: raw={result.points}, final={score}, level={level.value}, "
            f"force_high={result.force_high}, category={category}"
        )

        return self._build_assessment(
            metadata, result, level, score, category, False, install_source, tier_counts, now
        )

    def _score_permissions(self, permissions, category: str) -> EvaluationResult:
        """Tier points per permission; only inappropriate ones become factors."""
        result = EvaluationResult()
        tier_points = {
            PermissionTier.HIGH: self.scoring.high_tier_points,
            PermissionTier.MEDIUM: self.scoring.medium_tier_points,
        }

        # Sorted so the factor order is stable across processes
        for permission_id in sorted(permissions):
            base_points = tier_points.get(self.catalog.tier_of(permission_id))
            if base_points is None:
                continue

            if self.appropriateness.is_appropriate(permission_id, category):
                result.points += base_points
            else:
                points = int(round(base_points * self.scoring.inappropriate_multiplier))
                result.add(
                    "Permission",
                    f"{permission_short_name(permission_id)} (unusual for {category} app)",
                    points
                )

        return result

    def determine_risk_level(self, score: int, force_high: bool = False) -> RiskLevel:
        """Map a clamped score to a risk level."""
        if force_high or score >= self.scoring.high_threshold:
            return RiskLevel.HIGH
        if score >= self.scoring.medium_threshold:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def calculate_confidence(self, metadata: AppMetadata) -> float:
        """
        Completeness proxy: more permissions and more known signals mean more
        to reason over. Not a probability.
        """
        signals = sum([
            metadata.has_installer,
            metadata.target_sdk_version > 0,
            metadata.last_update_timestamp > 0,
        ])
        confidence = (
            self.scoring.confidence_base
            + self.scoring.confidence_per_permission * len(metadata.requested_permissions)
            + self.scoring.confidence_per_signal * signals
        )
        return round(min(self.scoring.confidence_cap, confidence), 2)

    def _build_assessment(self, metadata: AppMetadata, result: EvaluationResult, level: RiskLevel,
                          score: int, category: str, trusted: bool, install_source: InstallSource,
                          tier_counts, now: int) -> RiskAssessment:
        return RiskAssessment(
            package_identifier=metadata.package_identifier,
            risk_level=level,
            risk_score=score,
            confidence=self.calculate_confidence(metadata),
            action=level.action,
            app_category=category,
            is_trusted=trusted,
            factors=list(result.factors),
            display_name=metadata.label,
            formatted_size=metadata.formatted_size,
            install_source=install_source,
            is_debuggable=metadata.is_debuggable,
            is_test_only=metadata.is_test_only,
            target_sdk_version=metadata.target_sdk_version,
            has_outdated_target=self.freshness.is_outdated_target(metadata.target_sdk_version),
            is_stale=self.freshness.is_stale(metadata.last_update_timestamp, now),
            permission_count=len(metadata.requested_permissions),
            high_risk_permission_count=tier_counts[PermissionTier.HIGH],
            medium_risk_permission_count=tier_counts[PermissionTier.MEDIUM],
        )

    def default_assessment(self, metadata_or_identifier: Union[AppMetadata, str, None],
                           error: Union[BaseException, str, None] = None) -> RiskAssessment:
        """
        Conservative placeholder for an app whose analysis failed.

        Args:
            metadata_or_identifier: The metadata if it was obtained, else the
                                    package identifier
            error: What went wrong

        Returns:
            LOW / SAFE assessment with the defaulted confidence and status DEFAULTED
        """
        if isinstance(metadata_or_identifier, AppMetadata):
            package_identifier = metadata_or_identifier.package_identifier
            display_name = metadata_or_identifier.label
        else:
            package_identifier = str(metadata_or_identifier or "unknown")
            display_name = package_identifier

        return RiskAssessment(
            package_identifier=package_identifier,
            risk_level=RiskLevel.LOW,
            risk_score=0,
            confidence=self.scoring.default_confidence,
            action=RiskLevel.LOW.action,
            app_category=AppCategory.UNKNOWN,
            is_trusted=False,
            display_name=display_name,
            status=AssessmentStatus.DEFAULTED,
            error=str(error) if error is not None else "analysis failed",
        )
