"""
Suspicious permission combination detection.

Individual permission scoring misses attack patterns that only emerge when
several permissions co-occur (an app that can read SMS *and* reach the
network can exfiltrate one-time codes). Rules name permission families that
are matched by substring against the requested identifiers, so READ_SMS,
SEND_SMS and RECEIVE_SMS all satisfy the "SMS" family.

The rule matcher is shared with the malware indicator analyzer, which runs
it against its own, broader table.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence

from apprisk_core.heuristics.base import BaseEvaluator
from apprisk_core.infrastructure.shared.error_handling import ConfigurationError
from apprisk_core.logic.models import AppCategory, RiskFactor


@dataclass(frozen=True)
class ComboRule:
    """A multi-permission pattern, optionally exempted for some categories."""
    name: str
    requires: FrozenSet[str]
    description: str
    excluded_categories: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if not self.requires:
            raise ConfigurationError(f"Combo rule '{self.name}' requires no permissions")
        object.__setattr__(self, 'requires', frozenset(self.requires))
        object.__setattr__(self, 'excluded_categories', frozenset(self.excluded_categories))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComboRule':
        try:
            return cls(
                name=data.get("name") or "+".join(data["requires"]),
                requires=frozenset(data["requires"]),
                description=data.get("description", ""),
                excluded_categories=frozenset(data.get("excluded_categories", ())),
            )
        except (KeyError, TypeError) as e:
            raise ConfigurationError(f"Invalid combo rule {data!r}: {e}") from e

    def matches(self, permissions: Iterable[str], category: Optional[str] = None) -> bool:
        if category is not None and category in self.excluded_categories:
            return False
        permissions = list(permissions)
        return all(any(family in p for p in permissions) for family in self.requires)


def match_combo_rules(rules: Sequence[ComboRule], permissions: Iterable[str],
                      category: Optional[str] = None) -> List[ComboRule]:
    """Return the rules satisfied by a permission set, in table order."""
    permissions = frozenset(permissions)
    return [rule for rule in rules if rule.matches(permissions, category)]


DEFAULT_COMBO_RULES: Sequence[ComboRule] = (
    ComboRule(
        name="sms_internet",
        requires=frozenset({"SMS", "INTERNET"}),
        description="SMS + Internet access (not a messaging app)",
        excluded_categories=frozenset({AppCategory.MESSAGING}),
    ),
    ComboRule(
        name="contacts_sms_internet",
        requires=frozenset({"CONTACTS", "SMS", "INTERNET"}),
        description="Contacts + SMS + Internet (data exfiltration pattern)",
        excluded_categories=frozenset({AppCategory.MESSAGING, AppCategory.SOCIAL}),
    ),
    ComboRule(
        name="call_log_sms_internet",
        requires=frozenset({"CALL_LOG", "SMS", "INTERNET"}),
        description="Call Log + SMS + Internet (spyware pattern)",
        excluded_categories=frozenset({AppCategory.COMMUNICATION}),
    ),
    ComboRule(
        name="surveillance",
        requires=frozenset({"CAMERA", "RECORD_AUDIO", "LOCATION", "CONTACTS"}),
        description="Camera + Microphone + Location + Contacts (surveillance pattern)",
        excluded_categories=frozenset({AppCategory.SOCIAL, AppCategory.COMMUNICATION}),
    ),
)


@dataclass
class ComboDetection:
    """Outcome of a combo scan."""
    triggered: bool = False
    factors: List[RiskFactor] = field(default_factory=list)
    points: int = 0
    matched_rules: List[ComboRule] = field(default_factory=list)


class SuspiciousComboDetector(BaseEvaluator):
    """
    Scans a permission set for known multi-permission attack patterns.

    Every matching rule adds combo_points and one factor. Any match forces the
    final risk level to HIGH.
    """

    def __init__(self, rules: Optional[Sequence[ComboRule]] = None, combo_points: int = 35):
        super().__init__()
        self.rules = tuple(DEFAULT_COMBO_RULES if rules is None else rules)
        if not self.rules:
            raise ConfigurationError("Suspicious combo table is empty")
        self.combo_points = combo_points

    @property
    def name(self) -> str:
        return "suspicious_combo"

    @property
    def category(self) -> str:
        return "Suspicious Combo"

    def detect(self, permissions: Iterable[str], category: str) -> ComboDetection:
        """
        Evaluate every rule independently against the permission set.

        Args:
            permissions: Requested permission identifiers
            category: Inferred app category, used for rule exemptions

        Returns:
            ComboDetection with one factor per matched rule
        """
        detection = ComboDetection()

        for rule in match_combo_rules(self.rules, permissions, category):
            detection.matched_rules.append(rule)
            detection.factors.append(RiskFactor(self.category, rule.description, self.combo_points))
            detection.points += self.combo_points

        detection.triggered = bool(detection.matched_rules)
        if detection.triggered:
            self.logger.debug(f"Matched combos: {', '.join(r.name for r in detection.matched_rules)}")

        return detection
