"""
Core analysis service.

Entry points used by the host:
1. analyze / analyze_all: primary risk assessments, one per app
2. analyze_network: data exfiltration risk (sibling)
3. analyze_malware_indicators: name and combo based threat verdict (sibling)
4. summarize: counts over a batch

A failure for one app never aborts a batch: it is recorded through the error
handling service and replaced by a defaulted assessment. ConfigurationError
is the exception; the engine cannot score anything without its reference data.
"""

import concurrent.futures
import time
from typing import Any, Dict, List, Optional, Sequence, Union
import logging

from apprisk_core.heuristics.malware import MalwareIndicatorAnalyzer
from apprisk_core.heuristics.network import NetworkRiskAnalyzer
from apprisk_core.infrastructure.logging import enhanced_logger
from apprisk_core.infrastructure.shared.error_handling import (
    ConfigurationError,
    ErrorHandlingService,
    ErrorSeverity,
    get_error_service,
)
from apprisk_core.logic.models import (
    AppMetadata,
    AssessmentStatus,
    BatchSummary,
    EngineConfig,
    MalwareIndicatorResult,
    NetworkRiskResult,
    RiskAssessment,
    RiskLevel,
)
from .scoring_service import ScoreAggregator, current_time_millis

MetadataInput = Union[AppMetadata, Dict[str, Any]]


class AnalysisService:
    """
    Orchestrates the primary pipeline and the sibling analyzers.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 aggregator: Optional[ScoreAggregator] = None,
                 error_service: Optional[ErrorHandlingService] = None):
        """
        Initialize the analysis service.

        Args:
            config: Engine configuration, built-in defaults when omitted
            aggregator: Optional pre-built aggregator
            error_service: Where per-app failures are recorded
        """
        self.config = config or EngineConfig()
        self.logger = logging.getLogger("analysis.service")
        self.error_service = error_service or get_error_service()

        self.aggregator = aggregator or ScoreAggregator(self.config)
        self.network_analyzer = NetworkRiskAnalyzer(self.config.network)
        self.malware_analyzer = MalwareIndicatorAnalyzer(self.config.malware)

    @staticmethod
    def _identify(item: Any, index: Optional[int] = None) -> str:
        """Best-effort package identifier for logging and defaulted results."""
        if isinstance(item, AppMetadata):
            return item.package_identifier
        if isinstance(item, dict):
            for key in ('package_identifier', 'packageIdentifier', 'packageName'):
                if item.get(key):
                    return str(item[key])
        return f"item[{index}]" if index is not None else "unknown"

    @staticmethod
    def _coerce(item: MetadataInput) -> AppMetadata:
        if isinstance(item, AppMetadata):
            return item
        return AppMetadata.from_dict(item)

    def _record_failure(self, error: Exception, operation: str, package_identifier: str) -> None:
        self.error_service.record(
            error,
            operation=operation,
            component="analysis.service",
            severity=ErrorSeverity.WARNING,
            package=package_identifier,
            error_type=type(error).__name__,
        )

    def analyze(self, metadata: MetadataInput, now: Optional[int] = None) -> RiskAssessment:
        """
        Assess one app, degrading to a defaulted assessment on failure.

        Raises:
            ConfigurationError: if the engine's reference data is unusable
        """
        return self._score_or_default(metadata, now, "analyze")

    def analyze_all(self, metadata_list: Sequence[Optional[MetadataInput]],
                    now: Optional[int] = None) -> List[RiskAssessment]:
        """
        Assess a batch of apps in parallel.

        Args:
            metadata_list: App records; None entries and malformed records are
                           defaulted in place
            now: Reference time shared by the whole batch

        Returns:
            Assessments with index correspondence to the input
        """
        start_time = time.time()
        if now is None:
            now = current_time_millis()

        results: List[Optional[RiskAssessment]] = [None] * len(metadata_list)
        if not metadata_list:
            return []

        max_workers = min(self.config.batch.max_workers, len(metadata_list))
        self.logger.info(f"Analyzing {len(metadata_list)} apps with {max_workers} workers")

        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_index = {
                executor.submit(self._analyze_indexed, item, index, now): index
                for index, item in enumerate(metadata_list)
            }

            for future in concurrent.futures.as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except ConfigurationError:
                    for pending in future_to_index:
                        pending.cancel()
                    raise
                except Exception as e:
                    package_identifier = self._identify(metadata_list[index], index)
                    self._record_failure(e, "analyze_all", package_identifier)
                    results[index] = self.aggregator.default_assessment(package_identifier, e)

        summary = self.summarize(results)
        enhanced_logger.log_batch_summary(
            summary.total, summary.analyzed, summary.defaulted, time.time() - start_time
        )
        return results

    def _analyze_indexed(self, item: Optional[MetadataInput], index: int, now: int) -> RiskAssessment:
        if item is None:
            error = ValueError("no metadata supplied")
            self._record_failure(error, "analyze_all", f"item[{index}]")
            return self.aggregator.default_assessment(f"item[{index}]", error)

        return self._score_or_default(item, now, "analyze_all", index)

    def _score_or_default(self, item: MetadataInput, now: Optional[int], operation: str,
                          index: Optional[int] = None) -> RiskAssessment:
        package_identifier = self._identify(item, index)
        try:
            return self.aggregator.score(self._coerce(item), now=now)
        except ConfigurationError:
            raise
        except Exception as e:
            self._record_failure(e, operation, package_identifier)
            return self.aggregator.default_assessment(
                item if isinstance(item, AppMetadata) else package_identifier, e
            )

    def analyze_network(self, metadata: MetadataInput) -> NetworkRiskResult:
        """Network exfiltration risk for one app; LOW/DEFAULTED on failure."""
        try:
            app = self._coerce(metadata)
            return self.network_analyzer.analyze(app.requested_permissions, app.target_sdk_version)
        except ConfigurationError:
            raise
        except Exception as e:
            self._record_failure(e, "analyze_network", self._identify(metadata))
            return NetworkRiskResult(
                has_internet=False,
                exfil_risk_score=0,
                risk_level=RiskLevel.LOW,
                status=AssessmentStatus.DEFAULTED,
                error=str(e),
            )

    def analyze_malware_indicators(self, metadata: MetadataInput) -> MalwareIndicatorResult:
        """Malware indicator verdict for one app; safe/DEFAULTED on failure."""
        try:
            return self.malware_analyzer.analyze(self._coerce(metadata))
        except ConfigurationError:
            raise
        except Exception as e:
            package_identifier = self._identify(metadata)
            self._record_failure(e, "analyze_malware_indicators", package_identifier)
            return MalwareIndicatorResult(
                package_identifier=package_identifier,
                display_name=package_identifier,
                threat_score=0,
                threat_level=RiskLevel.LOW,
                is_safe=True,
                status=AssessmentStatus.DEFAULTED,
                error=str(e),
            )

    def summarize(self, assessments: Sequence[RiskAssessment]) -> BatchSummary:
        """Counts per level, per action, analyzed vs defaulted."""
        return BatchSummary.from_assessments(list(assessments))
