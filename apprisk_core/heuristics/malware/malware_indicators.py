"""
Malware Indicator Analyzer - name patterns and malware-specific permission combos.

Produces a threat score from three additive signals:
- the app name or package matches a known suspicious-name pattern
- the permission set matches rules from a malware combo table
- the app requests permissions commonly abused by malware families

All tables and weights come from MalwareIndicatorConfig.
"""

from typing import List, Optional, Tuple

from apprisk_core.heuristics.base import BaseEvaluator
from apprisk_core.heuristics.permissions.combo_detector import ComboRule, match_combo_rules
from apprisk_core.logic.models import (
    AppMetadata,
    MalwareIndicatorConfig,
    MalwareIndicatorResult,
    RiskLevel,
    permission_short_name,
)


class MalwareIndicatorAnalyzer(BaseEvaluator):
    """Configuration-driven malware indicator scoring."""

    def __init__(self, config: Optional[MalwareIndicatorConfig] = None):
        super().__init__()
        self.config = config or MalwareIndicatorConfig()
        self.combo_rules: Tuple[ComboRule, ...] = tuple(ComboRule.from_dict(c) for c in self.config.combos)
        self.suspicious_permissions = frozenset(self.config.suspicious_permissions)

    @property
    def name(self) -> str:
        return "malware_indicators"

    @property
    def category(self) -> str:
        return "Malware"

    def _match_name(self, metadata: AppMetadata) -> List[str]:
        """Indicators for every name pattern found in the display name or package."""
        haystacks = (metadata.display_name.lower(), metadata.package_identifier.lower())
        return [
            f"Suspicious name pattern '{pattern}': {description}"
            for pattern, description in self.config.name_patterns.items()
            if any(pattern in h for h in haystacks)
        ]

    def _level_for(self, score: int) -> RiskLevel:
        if score >= self.config.high_threshold:
            return RiskLevel.HIGH
        if score >= self.config.medium_threshold:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def analyze(self, metadata: AppMetadata) -> MalwareIndicatorResult:
        """
        Compute the malware threat verdict for one app.

        Args:
            metadata: App to analyze

        Returns:
            MalwareIndicatorResult with one indicator per matched signal
        """
        indicators: List[str] = []
        score = 0

        name_indicators = self._match_name(metadata)
        if name_indicators:
            indicators.extend(name_indicators)
            score += self.config.name_match_points

        matched = match_combo_rules(self.combo_rules, metadata.requested_permissions)
        for rule in matched:
            indicators.append(f"Permission combo: {rule.description}")
        score += self.config.combo_points * len(matched)

        suspicious = metadata.requested_permissions & self.suspicious_permissions
        for permission in sorted(suspicious):
            indicators.append(f"Suspicious permission: {permission_short_name(permission)}")
        score += min(self.config.suspicious_permission_cap,
                     self.config.suspicious_permission_points * len(suspicious))

        score = max(0, min(100, score))
        level = self._level_for(score)

        if indicators:
            self.logger.debug(f"{metadata.package_identifier}: threat score {score} from {len(indicators)} indicators")

        return MalwareIndicatorResult(
            package_identifier=metadata.package_identifier,
            display_name=metadata.label,
            threat_score=score,
            threat_level=level,
            is_safe=score < self.config.safe_threshold,
            suspicious_name_match=bool(name_indicators),
            matched_combo_count=len(matched),
            indicators=indicators,
            suspicious_permissions=suspicious,
        )
