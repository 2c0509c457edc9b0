"""
Configuration domain models.

Centralizes every point weight, threshold and policy constant of the engine
instead of scattering magic numbers through the evaluators. Defaults reproduce
the reference scoring policy; deployments can override any value from YAML.
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union
import json
import logging

import yaml

from apprisk_core.infrastructure.shared.error_handling import ConfigurationError

T = TypeVar('T')

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config.yaml"

TWO_YEARS_MS = 2 * 365 * 24 * 3600 * 1000


def _non_negative(section: str, values: Dict[str, Union[int, float]]) -> None:
    for name, value in values.items():
        if value < 0:
            raise ConfigurationError(f"{section}.{name} cannot be negative, got {value}")


def _string_tuple(section: str, name: str, value: Any) -> Tuple[str, ...]:
    """Validate a list of identifiers; a bare string would match character by character."""
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigurationError(f"{section}.{name} must be a list of strings, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, str):
            raise ConfigurationError(f"{section}.{name} entries must be strings, got {item!r}")
    return tuple(item for item in value if item)


@dataclass
class ScoringConfig:
    """Permission weights, combo weight, level thresholds and confidence model."""
    high_tier_points: int = 10
    medium_tier_points: int = 4
    # Applied when a permission is unusual for the app's category
    inappropriate_multiplier: float = 1.5
    combo_points: int = 35

    high_threshold: int = 45
    medium_threshold: int = 20

    confidence_base: float = 0.70
    confidence_per_permission: float = 0.01
    confidence_per_signal: float = 0.05
    confidence_cap: float = 0.99
    # Used for assessments substituted after an error
    default_confidence: float = 0.5

    def __post_init__(self):
        """Validate scoring configuration."""
        _non_negative("scoring", {
            'high_tier_points': self.high_tier_points,
            'medium_tier_points': self.medium_tier_points,
            'combo_points': self.combo_points,
            'confidence_per_permission': self.confidence_per_permission,
            'confidence_per_signal': self.confidence_per_signal,
        })

        if self.inappropriate_multiplier < 1.0:
            raise ConfigurationError("scoring.inappropriate_multiplier must be at least 1.0")

        if not 0 <= self.medium_threshold <= self.high_threshold <= 100:
            raise ConfigurationError(
                f"Risk thresholds must satisfy 0 <= medium ({self.medium_threshold}) "
                f"<= high ({self.high_threshold}) <= 100"
            )

        if not 0.0 <= self.confidence_base <= self.confidence_cap <= 1.0:
            raise ConfigurationError("Confidence must satisfy 0 <= base <= cap <= 1")

        if not 0.0 <= self.default_confidence <= 1.0:
            raise ConfigurationError("scoring.default_confidence must be between 0 and 1")


@dataclass
class TrustConfig:
    """Package prefixes of trusted platform, OS and device vendors."""
    trusted_prefixes: Tuple[str, ...] = (
        "com.google.",
        "com.android.",
        "com.samsung.",
        "com.sec.",
        "com.miui.",
        "com.huawei.",
    )

    def __post_init__(self):
        self.trusted_prefixes = _string_tuple("trust", "trusted_prefixes", self.trusted_prefixes)


@dataclass
class ProvenanceConfig:
    """Install-origin classification and weights."""
    store_installer: str = "com.android.vending"
    sideloaded_points: int = 20
    sideloaded_high_risk_points: int = 30
    third_party_store_points: int = 15

    def __post_init__(self):
        if not self.store_installer:
            raise ConfigurationError("provenance.store_installer cannot be empty")
        _non_negative("provenance", {
            'sideloaded_points': self.sideloaded_points,
            'sideloaded_high_risk_points': self.sideloaded_high_risk_points,
            'third_party_store_points': self.third_party_store_points,
        })


@dataclass
class BuildConfig:
    """Build flag weights."""
    debuggable_points: int = 30
    test_only_points: int = 25

    def __post_init__(self):
        _non_negative("build", {
            'debuggable_points': self.debuggable_points,
            'test_only_points': self.test_only_points,
        })


@dataclass
class FreshnessConfig:
    """Platform targeting and maintenance policy."""
    min_target_sdk: int = 29
    outdated_target_points: int = 15
    # Leap-year drift is accepted
    stale_after_ms: int = TWO_YEARS_MS
    stale_points: int = 10

    def __post_init__(self):
        _non_negative("freshness", {
            'min_target_sdk': self.min_target_sdk,
            'outdated_target_points': self.outdated_target_points,
            'stale_after_ms': self.stale_after_ms,
            'stale_points': self.stale_points,
        })


@dataclass
class RuntimeConfig:
    """Runtime capability weights."""
    accessibility_points: int = 40
    overlay_points: int = 25
    boot_internet_points: int = 15
    excessive_services_points: int = 10
    max_background_services: int = 5

    def __post_init__(self):
        _non_negative("runtime", {
            'accessibility_points': self.accessibility_points,
            'overlay_points': self.overlay_points,
            'boot_internet_points': self.boot_internet_points,
            'excessive_services_points': self.excessive_services_points,
            'max_background_services': self.max_background_services,
        })


@dataclass
class NetworkConfig:
    """Network exfiltration scoring."""
    points_per_exfil_permission: int = 20
    high_threshold: int = 60
    medium_threshold: int = 30
    # Apps targeting below this SDK allow cleartext traffic by default
    cleartext_sdk_cutoff: int = 28

    def __post_init__(self):
        _non_negative("network", {'points_per_exfil_permission': self.points_per_exfil_permission})
        if not 0 <= self.medium_threshold <= self.high_threshold <= 100:
            raise ConfigurationError("network thresholds must satisfy 0 <= medium <= high <= 100")


DEFAULT_MALWARE_NAME_PATTERNS: Dict[str, str] = {
    "spy": "Name suggests spying capability",
    "keylog": "Name suggests keylogging",
    "stealth": "Name suggests hidden operation",
    "hidden": "Name suggests hidden operation",
    "hack": "Name suggests hacking tool",
    "crack": "Name suggests cracked software",
    "cheat": "Name suggests cheating tool",
    "phish": "Name suggests phishing",
    "trojan": "Name references a trojan",
    "steal": "Name suggests data theft",
    "free recharge": "Name matches recharge scam lure",
    "mod apk": "Name suggests repackaged app",
    "bypass": "Name suggests security bypass",
}

DEFAULT_MALWARE_COMBOS: List[Dict[str, Any]] = [
    {
        "name": "sms_interception",
        "requires": ["RECEIVE_SMS", "READ_SMS", "INTERNET"],
        "description": "Can intercept and exfiltrate SMS (including one-time codes)",
    },
    {
        "name": "premium_sms",
        "requires": ["SEND_SMS", "RECEIVE_BOOT_COMPLETED"],
        "description": "Can send SMS silently from boot (premium SMS fraud)",
    },
    {
        "name": "audio_exfiltration",
        "requires": ["RECORD_AUDIO", "INTERNET"],
        "description": "Can record and exfiltrate audio",
    },
    {
        "name": "camera_exfiltration",
        "requires": ["CAMERA", "INTERNET"],
        "description": "Can capture and exfiltrate photos or video",
    },
    {
        "name": "communication_surveillance",
        "requires": ["READ_CALL_LOG", "READ_SMS", "READ_CONTACTS"],
        "description": "Full communication surveillance capability",
    },
    {
        "name": "overlay_takeover",
        "requires": ["SYSTEM_ALERT_WINDOW", "BIND_ACCESSIBILITY_SERVICE"],
        "description": "Overlay plus accessibility (device takeover / banking trojan pattern)",
    },
    {
        "name": "overlay_phishing",
        "requires": ["SYSTEM_ALERT_WINDOW", "RECORD_AUDIO"],
        "description": "Can overlay UI and record audio (phishing and spying)",
    },
    {
        "name": "dropper",
        "requires": ["REQUEST_INSTALL_PACKAGES", "RECEIVE_BOOT_COMPLETED", "INTERNET"],
        "description": "Can download and install further payloads (dropper pattern)",
    },
    {
        "name": "location_tracking",
        "requires": ["ACCESS_BACKGROUND_LOCATION", "INTERNET"],
        "description": "Can track location in the background and upload it",
    },
]

DEFAULT_MALWARE_SUSPICIOUS_PERMISSIONS: Tuple[str, ...] = (
    "android.permission.SEND_SMS",
    "android.permission.RECEIVE_SMS",
    "android.permission.READ_SMS",
    "android.permission.READ_CALL_LOG",
    "android.permission.PROCESS_OUTGOING_CALLS",
    "android.permission.BIND_ACCESSIBILITY_SERVICE",
    "android.permission.BIND_DEVICE_ADMIN",
    "android.permission.BIND_NOTIFICATION_LISTENER_SERVICE",
    "android.permission.SYSTEM_ALERT_WINDOW",
    "android.permission.REQUEST_INSTALL_PACKAGES",
    "android.permission.INSTALL_PACKAGES",
    "android.permission.QUERY_ALL_PACKAGES",
    "android.permission.WRITE_SECURE_SETTINGS",
    "android.permission.RECEIVE_BOOT_COMPLETED",
)


@dataclass
class MalwareIndicatorConfig:
    """Tables and weights for the malware indicator analyzer."""
    name_patterns: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MALWARE_NAME_PATTERNS))
    combos: List[Dict[str, Any]] = field(default_factory=lambda: [dict(c) for c in DEFAULT_MALWARE_COMBOS])
    suspicious_permissions: Tuple[str, ...] = DEFAULT_MALWARE_SUSPICIOUS_PERMISSIONS

    name_match_points: int = 25
    combo_points: int = 20
    suspicious_permission_points: int = 5
    suspicious_permission_cap: int = 30

    high_threshold: int = 60
    medium_threshold: int = 30
    # Scores strictly below this are considered safe
    safe_threshold: int = 30

    def __post_init__(self):
        """Validate malware indicator configuration."""
        if not isinstance(self.name_patterns, dict) or not self.name_patterns:
            raise ConfigurationError("malware.name_patterns must be a non-empty mapping")
        if not isinstance(self.combos, list) or not self.combos:
            raise ConfigurationError("malware.combos must be a non-empty list")

        checked = []
        for combo in self.combos:
            if not isinstance(combo, dict) or not combo.get("requires"):
                raise ConfigurationError(f"Malware combo entry needs a non-empty 'requires' list: {combo!r}")
            requires = _string_tuple("malware", "combos.requires", combo["requires"])
            checked.append(dict(combo, requires=list(requires)))
        self.combos = checked

        self.name_patterns = {str(k).lower(): str(v) for k, v in self.name_patterns.items()}
        self.suspicious_permissions = _string_tuple("malware", "suspicious_permissions", self.suspicious_permissions)
        if not self.suspicious_permissions:
            raise ConfigurationError("malware.suspicious_permissions cannot be empty")

        _non_negative("malware", {
            'name_match_points': self.name_match_points,
            'combo_points': self.combo_points,
            'suspicious_permission_points': self.suspicious_permission_points,
            'suspicious_permission_cap': self.suspicious_permission_cap,
        })
        if not 0 <= self.medium_threshold <= self.high_threshold <= 100:
            raise ConfigurationError("malware thresholds must satisfy 0 <= medium <= high <= 100")


@dataclass
class BatchConfig:
    """Batch analysis settings."""
    max_workers: int = 4

    def __post_init__(self):
        if self.max_workers < 1:
            raise ConfigurationError("batch.max_workers must be at least 1")


def _build_section(section_cls: Type[T], name: str, data: Optional[Dict[str, Any]]) -> T:
    """Instantiate a config section from a mapping, ignoring unknown keys."""
    if data is None:
        return section_cls()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration section '{name}' must be a mapping")

    known = {f.name for f in fields(section_cls)}
    unknown = set(data) - known
    if unknown:
        logging.getLogger("engine.config").warning(
            f"Ignoring unknown keys in section '{name}': {', '.join(sorted(unknown))}"
        )

    try:
        return section_cls(**{k: v for k, v in data.items() if k in known})
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration section '{name}': {e}") from e


@dataclass
class EngineConfig:
    """
    Main configuration for the risk engine.

    Reference tables (permission catalog, keywords, combo rules) live with the
    evaluators that own them; this holds the tunable policy.
    """

    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    trust: TrustConfig = field(default_factory=TrustConfig)
    provenance: ProvenanceConfig = field(default_factory=ProvenanceConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    freshness: FreshnessConfig = field(default_factory=FreshnessConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    malware: MalwareIndicatorConfig = field(default_factory=MalwareIndicatorConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)

    _SECTIONS = {
        'scoring': ScoringConfig,
        'trust': TrustConfig,
        'provenance': ProvenanceConfig,
        'build': BuildConfig,
        'freshness': FreshnessConfig,
        'runtime': RuntimeConfig,
        'network': NetworkConfig,
        'malware': MalwareIndicatorConfig,
        'batch': BatchConfig,
    }

    @classmethod
    def default(cls) -> 'EngineConfig':
        """Load the packaged config.yaml, or built-in defaults if it is absent."""
        if DEFAULT_CONFIG_PATH.exists():
            return cls.from_file(DEFAULT_CONFIG_PATH)
        return cls()

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'EngineConfig':
        """Load configuration from a file (JSON or YAML)."""
        path = Path(file_path)

        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {file_path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix.lower() in ['.yml', '.yaml']:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not load configuration from {file_path}: {e}") from e

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EngineConfig':
        """Create configuration from dictionary."""
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration root must be a mapping")

        return cls(**{
            name: _build_section(section_cls, name, data.get(name))
            for name, section_cls in cls._SECTIONS.items()
        })

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        result = {}
        for name in self._SECTIONS:
            section = asdict(getattr(self, name))
            result[name] = {k: list(v) if isinstance(v, tuple) else v for k, v in section.items()}
        return result

    def save_to_file(self, file_path: Union[str, Path]):
        """Save configuration to a file."""
        path = Path(file_path)

        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yml', '.yaml']:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, indent=2, sort_keys=False)
            else:
                json.dump(self.to_dict(), f, indent=2)
