"""
Risk assessment domain models.

Contains the output records of the primary engine: the risk level and action
enums, the explainable RiskFactor, and the RiskAssessment produced per app.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .app_metadata import InstallSource


class RiskLevel(Enum):
    """Risk levels for an assessment."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    def __lt__(self, other):
        """Enable comparison between risk levels."""
        if not isinstance(other, RiskLevel):
            return NotImplemented

        risk_order = {
            RiskLevel.LOW: 1,
            RiskLevel.MEDIUM: 2,
            RiskLevel.HIGH: 3
        }
        return risk_order[self] < risk_order[other]

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self < other or self == other

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return not self <= other

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return not self < other

    @property
    def action(self) -> 'RecommendedAction':
        """Recommended action for this level."""
        return _LEVEL_ACTIONS[self]


class RecommendedAction(Enum):
    """Action recommended to the user for an assessed app."""
    SAFE = "SAFE"
    MONITOR = "MONITOR"
    REVIEW = "REVIEW"


_LEVEL_ACTIONS = {
    RiskLevel.HIGH: RecommendedAction.REVIEW,
    RiskLevel.MEDIUM: RecommendedAction.MONITOR,
    RiskLevel.LOW: RecommendedAction.SAFE,
}


class PermissionTier(Enum):
    """Sensitivity tier of a single permission."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class AssessmentStatus(Enum):
    """Whether an assessment was computed or substituted after an error."""
    ANALYZED = "analyzed"
    DEFAULTED = "defaulted"


@dataclass(frozen=True)
class RiskFactor:
    """One explainable contribution to a risk score."""
    category: str
    description: str
    points: int

    def __str__(self) -> str:
        return f"{self.category}: {self.description} (+{self.points})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'category': self.category,
            'description': self.description,
            'points': self.points
        }


@dataclass
class RiskAssessment:
    """
    Risk verdict for one app.

    Produced fresh per call. The factors list is in evaluation order
    (trust, permissions, combos, provenance, build, platform, runtime).
    """

    package_identifier: str
    risk_level: RiskLevel
    risk_score: int
    confidence: float
    action: RecommendedAction
    app_category: str
    is_trusted: bool
    factors: List[RiskFactor] = field(default_factory=list)

    display_name: str = ""
    formatted_size: str = "Unknown"

    # Provenance/build/platform echoes for display
    install_source: Optional[InstallSource] = None
    is_debuggable: bool = False
    is_test_only: bool = False
    target_sdk_version: int = 0
    has_outdated_target: bool = False
    is_stale: bool = False

    permission_count: int = 0
    high_risk_permission_count: int = 0
    medium_risk_permission_count: int = 0

    status: AssessmentStatus = AssessmentStatus.ANALYZED
    error: Optional[str] = None

    def __post_init__(self):
        """Validate assessment after initialization."""
        if not 0 <= self.risk_score <= 100:
            raise ValueError(f"Risk score must be between 0 and 100, got {self.risk_score}")

        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be between 0.0 and 1.0, got {self.confidence}")

        if self.action is not self.risk_level.action:
            raise ValueError(f"Action {self.action.value} does not match risk level {self.risk_level.value}")

    @property
    def is_from_store(self) -> bool:
        return self.install_source is InstallSource.STORE

    @property
    def is_sideloaded(self) -> bool:
        return self.install_source is InstallSource.SIDELOADED

    @property
    def is_third_party_store(self) -> bool:
        return self.install_source is InstallSource.THIRD_PARTY_STORE

    @property
    def is_defaulted(self) -> bool:
        return self.status is AssessmentStatus.DEFAULTED

    @property
    def risk_indicators(self) -> List[str]:
        """Factors rendered as "<category>: <description> (+<points>)"."""
        return [str(factor) for factor in self.factors]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase shape consumed by the UI bridge."""
        return {
            'id': self.package_identifier,
            'packageName': self.package_identifier,
            'fileName': self.display_name or self.package_identifier,
            'fileSize': self.formatted_size,
            'risk': self.risk_level.value,
            'riskScore': self.risk_score,
            'confidence': self.confidence,
            'action': self.action.value,
            'appCategory': self.app_category,
            'isTrusted': self.is_trusted,
            'permissionCount': self.permission_count,
            'highRiskPerms': self.high_risk_permission_count,
            'mediumRiskPerms': self.medium_risk_permission_count,
            'isFromPlayStore': self.is_from_store,
            'isSideloaded': self.is_sideloaded,
            'isThirdPartyStore': self.is_third_party_store,
            'isDebuggable': self.is_debuggable,
            'isTestOnly': self.is_test_only,
            'targetSdk': self.target_sdk_version,
            'hasOutdatedTarget': self.has_outdated_target,
            'isOutdated': self.is_stale,
            'riskIndicators': self.risk_indicators,
            'riskBreakdown': [factor.to_dict() for factor in self.factors],
            'status': self.status.value,
            'error': self.error,
        }


@dataclass
class BatchSummary:
    """Counts over a batch of assessments."""
    total: int = 0
    analyzed: int = 0
    defaulted: int = 0
    trusted: int = 0
    by_level: Dict[str, int] = field(default_factory=lambda: {level.value: 0 for level in RiskLevel})
    by_action: Dict[str, int] = field(default_factory=lambda: {action.value: 0 for action in RecommendedAction})

    @property
    def high_risk_count(self) -> int:
        return self.by_level[RiskLevel.HIGH.value]

    @classmethod
    def from_assessments(cls, assessments: List[RiskAssessment]) -> 'BatchSummary':
        summary = cls(total=len(assessments))
        for assessment in assessments:
            if assessment.is_defaulted:
                summary.defaulted += 1
            else:
                summary.analyzed += 1
            if assessment.is_trusted:
                summary.trusted += 1
            summary.by_level[assessment.risk_level.value] += 1
            summary.by_action[assessment.action.value] += 1
        return summary

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'analyzed': self.analyzed,
            'defaulted': self.defaulted,
            'trusted': self.trusted,
            'highRisk': self.high_risk_count,
            'byLevel': dict(self.by_level),
            'byAction': dict(self.by_action),
        }
