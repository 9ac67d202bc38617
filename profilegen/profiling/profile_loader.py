# ==============================================
# ProfileResolver
# ==============================================
#
# PURPOSE:
#   Turn an input path into a Profile: the dataset's field
#   statistics plus what the profile declares about keys.
#
# ACCEPTED INPUTS:
# ----------------
#   - *.profile.json  → precomputed profile, loaded as-is
#   - *.jsonl         → one record per line, profiled here
#   - *.json          → one sample record or a list of records,
#                       profiled here
#
#   A profile file looks like:
#     {
#       "input": "data/movies.jsonl",
#       "recordCount": 200,
#       "tags": [],
#       "pk": "id",                    (optional)
#       "uniqueFields": ["id", "imdb"], (optional)
#       "fields": {"id": {"storageHint": "int", "total": 200, ...}, ...}
#     }
#
# ==============================================

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from profilegen.analysis.decision import ClassificationThresholds
from profilegen.analysis.field_stats import FieldStatistics
from profilegen.exceptions import (
    MalformedInputError,
    ProfileNotFoundError,
    UnsupportedInputError,
)
from profilegen.logger import get_logger
from profilegen.profiling.sample_profiler import SampleProfiler

logger = get_logger(__name__)


@dataclass
class Profile:
    """Field statistics for one dataset and where they came from."""

    input: str
    fields: Dict[str, FieldStatistics]
    record_count: int = 0
    output: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    unique_fields: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input": self.input,
            "output": self.output,
            "recordCount": self.record_count,
            "tags": list(self.tags),
            "uniqueFields": list(self.unique_fields),
            "fields": {name: stats.to_dict() for name, stats in self.fields.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "<memory>") -> "Profile":
        """
        Build a Profile from a decoded *.profile.json document.

        Raises:
            MalformedInputError: "fields" is missing or a field is invalid
        """
        raw_fields = data.get("fields")
        if not isinstance(raw_fields, dict):
            raise MalformedInputError(f"Profile '{source}' is invalid or missing \"fields\"")
        if not raw_fields:
            raise MalformedInputError(f"Profile '{source}' has no fields")

        fields = {
            str(name): FieldStatistics.from_dict(str(name), stats)
            for name, stats in raw_fields.items()
        }

        # A declared "pk" is the strongest unique-field hint
        unique_fields: List[str] = []
        if data.get("pk"):
            unique_fields.append(str(data["pk"]))
        for name in data.get("uniqueFields") or []:
            if name and str(name) not in unique_fields:
                unique_fields.append(str(name))

        return cls(
            input=data.get("input") or source,
            output=data.get("output"),
            record_count=int(data.get("recordCount") or 0),
            tags=list(data.get("tags") or []),
            unique_fields=unique_fields,
            fields=fields,
        )


class ProfileResolver:
    """
    Resolves a profile from a precomputed *.profile.json, or by
    profiling *.jsonl / *.json sample records.
    """

    def __init__(
        self,
        thresholds: Optional[ClassificationThresholds] = None,
        profiler: Optional[SampleProfiler] = None,
    ):
        self.thresholds = thresholds or ClassificationThresholds()
        self.profiler = profiler or SampleProfiler(self.thresholds)

    def resolve(self, path: Union[str, Path]) -> Profile:
        """
        Load or compute the profile for a path.

        Args:
            path: Input file

        Returns:
            Profile

        Raises:
            ProfileNotFoundError: the file does not exist
            UnsupportedInputError: the extension is not supported
            MalformedInputError: the content cannot be used
        """
        path = Path(path)
        if not path.is_file():
            raise ProfileNotFoundError(f"Input file '{path}' does not exist.")

        name = path.name.lower()
        if name.endswith(".profile.json"):
            return self.load_profile(path)
        if name.endswith(".jsonl"):
            return self.profile_records(list(self._read_jsonl(path)), source=str(path))
        if name.endswith(".json"):
            return self.profile_records(self._read_sample_json(path), source=str(path))

        raise UnsupportedInputError(
            f"Unsupported file '{path}'. Expected a .profile.json (pre-analyzed), "
            f".jsonl or .json sample."
        )

    def load_profile(self, path: Union[str, Path]) -> Profile:
        path = Path(path)
        data = self._read_json(path)
        if not isinstance(data, dict):
            raise MalformedInputError(f"Profile file '{path}' does not contain a JSON object.")
        profile = Profile.from_dict(data, source=str(path))
        logger.info("Loaded profile %s (%d fields)", path, len(profile.fields))
        return profile

    def profile_records(self, records: List[Dict[str, Any]], source: str = "<sample>") -> Profile:
        """Profile raw sample records into a Profile."""
        fields = self.profiler.profile(records)
        return Profile(input=source, fields=fields, record_count=len(records))

    # ======================================
    # File readers
    # ======================================
    def _read_text(self, path: Path) -> str:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"File '{path}' is not valid UTF-8: {e}") from e
        except OSError as e:
            raise MalformedInputError(f"File '{path}' cannot be read: {e}") from e

    def _read_json(self, path: Path) -> Any:
        try:
            return json.loads(self._read_text(path))
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"File '{path}' is not valid JSON: {e}") from e

    def _read_sample_json(self, path: Path) -> List[Dict[str, Any]]:
        data = self._read_json(path)
        if isinstance(data, dict):
            return [data]
        if isinstance(data, list):
            return data
        raise MalformedInputError(
            f"Sample file '{path}' must hold a record or a list of records."
        )

    def _read_jsonl(self, path: Path) -> Iterator[Dict[str, Any]]:
        for line_no, line in enumerate(self._read_text(path).split("\n"), start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                raise MalformedInputError(
                    f"Line {line_no} of '{path}' is not valid JSON: {e}"
                ) from e
