# ==============================================
# TOPIC 1: PROFILING
# ==============================================
#
# This package produces the FieldStatistics the classifier
# consumes, from whichever input is at hand.
#
# Modules:
# --------
# - type_detector.py    → Detect value types (numeric strings, URLs, JSON, prose)
# - sample_profiler.py  → Observe raw records, build FieldStatistics
# - profile_loader.py   → Load *.profile.json, or profile *.jsonl / *.json
# - sample_fetcher.py   → Pull sample records from an HTTP API
#
# ==============================================

from .type_detector import TypeDetector
from .sample_profiler import FieldObserver, SampleProfiler
from .profile_loader import Profile, ProfileResolver
from .sample_fetcher import fetch_sample_records

__all__ = [
    "TypeDetector",
    "FieldObserver",
    "SampleProfiler",
    "Profile",
    "ProfileResolver",
    "fetch_sample_records",
]
