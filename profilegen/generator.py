# ==============================================
# CodeGenerator - Orchestrator
# ==============================================
#
# PURPOSE:
#   Ties the three topics together into a single pass. Users
#   interact with this class (or the CLI on top of it) only.
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                     CodeGenerator                        │
#   │                                                          │
#   │  TOPIC 1: PROFILING                                      │
#   │   ProfileResolver / SampleProfiler / fetch_sample_records│
#   │                 │ Profile (FieldStatistics per field)    │
#   │                 ▼                                        │
#   │  TOPIC 2: CLASSIFICATION                                 │
#   │   FieldClassifier → ClassificationReport                 │
#   │                 │                                        │
#   │                 ▼                                        │
#   │  TOPIC 3: EMITTERS                                       │
#   │   columns, index settings, result-card config            │
#   └──────────────────────────────────────────────────────────┘
#
#   Public Methods:
#   ---------------
#   - generate(path, primary_key=None, unique_fields=None, heuristic=None)
#   - generate_from_records(records, ...)
#   - generate_from_url(url=None, count=None, ...)
#   - generate_from_profile(profile, ...)
#       All return a GenerationResult.
#
#   Primary-key inputs are combined as: the explicit primary_key,
#   else the caller's unique_fields, else the profile's declared
#   pk/uniqueFields, else the heuristic if enabled.
#
# ==============================================

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from profilegen.analysis.classifier import FieldClassifier
from profilegen.analysis.decision import ClassificationReport
from profilegen.config import AppConfig, get_config
from profilegen.emitters.card_config import CardConfig, build_card_config
from profilegen.emitters.doctrine import ColumnDefinition, build_columns
from profilegen.emitters.meilisearch import IndexSettings, build_index_settings
from profilegen.emitters.naming import FieldNameFormatter
from profilegen.exceptions import SampleFetchError
from profilegen.logger import configure_logging, get_logger
from profilegen.profiling.profile_loader import Profile, ProfileResolver
from profilegen.profiling.sample_fetcher import fetch_sample_records
from profilegen.profiling.sample_profiler import SampleProfiler
from profilegen.profiling.type_detector import TypeDetector

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Everything one generation pass produced."""

    profile: Profile
    report: ClassificationReport
    columns: List[ColumnDefinition]
    index_settings: IndexSettings
    card_config: CardConfig

    @property
    def primary_key(self) -> str:
        return self.report.primary_key

    def summary(self) -> Dict[str, Any]:
        """Counts of what the classification decided."""
        types: Dict[str, int] = {}
        for result in self.report.results.values():
            key = result.resolved_type.value
            types[key] = types.get(key, 0) + 1
        return {
            "input": self.profile.input,
            "fields": len(self.report.results),
            "primary_key": self.report.primary_key,
            "types": types,
            "filterable": len(self.report.filterable),
            "sortable": len(self.report.sortable),
            "searchable": len(self.report.searchable),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary(),
            "classification": self.report.to_dict(),
            "columns": [c.to_dict() for c in self.columns],
            "indexSettings": self.index_settings.to_dict(),
            "cardConfig": self.card_config.to_dict(),
        }


class CodeGenerator:
    """
    Runs profile → classification → emitters for one dataset.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Args:
            config: Application configuration. If None, loads from environment.
        """
        self._config = config or get_config()
        configure_logging(self._config.log_level)

        thresholds = self._config.thresholds

        # TOPIC 1: Profiling
        self._profiler = SampleProfiler(thresholds, TypeDetector())
        self._resolver = ProfileResolver(thresholds, self._profiler)

        # TOPIC 2: Classification
        self._classifier = FieldClassifier(thresholds)

        # TOPIC 3: Emitters share one formatter so names line up
        self._formatter = FieldNameFormatter()

    @property
    def config(self) -> AppConfig:
        return self._config

    def generate(
        self,
        path: Union[str, Path],
        primary_key: Optional[str] = None,
        unique_fields: Optional[Iterable[str]] = None,
        heuristic: Optional[bool] = None,
    ) -> GenerationResult:
        """
        Resolve the profile at `path` and run the full pass.
        """
        logger.info("Resolving profile from %s", path)
        profile = self._resolver.resolve(path)
        return self.generate_from_profile(profile, primary_key, unique_fields, heuristic)

    def generate_from_records(
        self,
        records: List[Dict[str, Any]],
        primary_key: Optional[str] = None,
        unique_fields: Optional[Iterable[str]] = None,
        heuristic: Optional[bool] = None,
        source: str = "<sample>",
    ) -> GenerationResult:
        """Profile raw sample records, then run the full pass."""
        profile = self._resolver.profile_records(records, source=source)
        return self.generate_from_profile(profile, primary_key, unique_fields, heuristic)

    def generate_from_url(
        self,
        url: Optional[str] = None,
        count: Optional[int] = None,
        primary_key: Optional[str] = None,
        unique_fields: Optional[Iterable[str]] = None,
        heuristic: Optional[bool] = None,
    ) -> GenerationResult:
        """Fetch sample records over HTTP, then run the full pass."""
        sample = self._config.sample
        url = url or sample.sample_url
        if not url:
            raise SampleFetchError("No sample URL given and PROFILEGEN_SAMPLE_URL is not set")

        records = fetch_sample_records(
            url,
            count=count or sample.sample_count,
            timeout=sample.request_timeout,
        )
        return self.generate_from_records(
            records, primary_key, unique_fields, heuristic, source=url
        )

    def generate_from_profile(
        self,
        profile: Profile,
        primary_key: Optional[str] = None,
        unique_fields: Optional[Iterable[str]] = None,
        heuristic: Optional[bool] = None,
    ) -> GenerationResult:
        """
        Classify a resolved profile and build every emitter output.

        Raises:
            ProfileGenError: any classification failure, unchanged
        """
        if heuristic is None:
            heuristic = self._config.heuristic_primary_key

        hints = list(unique_fields) if unique_fields else list(profile.unique_fields)

        report = self._classifier.classify_all(
            profile.fields,
            primary_key=primary_key,
            unique_fields=hints,
            heuristic=heuristic,
        )

        settings = build_index_settings(report, self._formatter)
        result = GenerationResult(
            profile=profile,
            report=report,
            columns=build_columns(report, self._formatter),
            index_settings=settings,
            card_config=build_card_config(profile.fields, report, settings, self._formatter),
        )

        logger.info(
            "Classified %d fields from %s (primary key '%s')",
            len(report.results), profile.input, report.primary_key,
        )
        return result
