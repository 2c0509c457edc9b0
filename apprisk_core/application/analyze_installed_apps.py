"""
Main use case for assessing the apps installed on a device.

Fetches each package's metadata from a provider and hands the records to the
analysis service. A lookup that fails for one package (uninstalled between
enumeration and analysis, unreadable record) becomes a defaulted assessment
for that package only.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union
import logging

from apprisk_core.infrastructure.providers import AppMetadataProvider
from apprisk_core.infrastructure.shared.error_handling import ConfigurationError, error_context
from apprisk_core.logic.models import AppMetadata, EngineConfig, RiskAssessment
from apprisk_core.logic.services import AnalysisService


class AnalyzeInstalledAppsUseCase:
    """
    Use case for scoring installed apps supplied by an AppMetadataProvider.
    """

    def __init__(self, provider: AppMetadataProvider,
                 config: Union[EngineConfig, str, Path, None] = None):
        """
        Initialize the use case.

        Args:
            provider: Source of package identifiers and metadata
            config: EngineConfig, path to a YAML/JSON config file, or None for
                    the packaged defaults
        """
        self.logger = logging.getLogger("analyze.apps")
        self.provider = provider

        if isinstance(config, EngineConfig):
            self.config = config
        elif config is not None:
            self.config = EngineConfig.from_file(config)
        else:
            self.config = EngineConfig.default()

        self.analysis_service = AnalysisService(self.config)

    def execute(self, package_ids: Optional[Sequence[str]] = None,
                now: Optional[int] = None) -> List[RiskAssessment]:
        """
        Assess packages.

        Args:
            package_ids: Packages to assess, every installed package when None
            now: Reference time in epoch millis shared by the batch

        Returns:
            Assessments with index correspondence to the package list
        """
        with error_context("execute", "analyze.apps"):
            if package_ids is None:
                package_ids = self.provider.list_packages()
            package_ids = list(package_ids)

            self.logger.info(f"Assessing {len(package_ids)} packages")

            assessments: List[Optional[RiskAssessment]] = [None] * len(package_ids)
            fetched: List[AppMetadata] = []
            fetched_indices: List[int] = []

            for index, package_id in enumerate(package_ids):
                try:
                    fetched.append(self.provider.get_metadata(package_id))
                    fetched_indices.append(index)
                except ConfigurationError:
                    raise
                except Exception as e:
                    self.analysis_service.error_service.record(
                        e, operation="get_metadata", component="analyze.apps", package=package_id
                    )
                    assessments[index] = self.analysis_service.aggregator.default_assessment(package_id, e)

            for index, assessment in zip(fetched_indices, self.analysis_service.analyze_all(fetched, now=now)):
                assessments[index] = assessment

            summary = self.analysis_service.summarize(assessments)
            self.logger.info(
                f"Assessed {summary.total} packages: {summary.analyzed} analyzed, "
                f"{summary.defaulted} defaulted, {summary.high_risk_count} high risk"
            )
            return assessments
