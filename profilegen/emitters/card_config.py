# ==============================================
# Result-card configuration
# ==============================================
#
# PURPOSE:
#   Pick which fields a search-result card shows, so template
#   generators only have to lay them out.
#
# SELECTION RULES:
# ----------------
#   title        → first string field named title / original_title /
#                  name / label / heading, else the first string field,
#                  else the primary key
#   description  → description / overview / summary / abstract / notes,
#                  else the first other string field longer than 40 chars
#   image        → string field whose name mentions image, thumb,
#                  poster or cover
#   scalars      → up to 3 filterable numeric or boolean-like fields
#   tags         → up to 2 filterable array / facet / tag-named fields,
#                  skipping fields that only ever hold one value
#   labels       → human label for every field
#
#   Id-like fields never show up as scalars or tags.
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from profilegen.analysis.classifier import FieldClassifier
from profilegen.analysis.decision import ClassificationReport, ResolvedType
from profilegen.analysis.field_stats import FieldStatistics
from profilegen.emitters.meilisearch import IndexSettings, build_index_settings
from profilegen.emitters.naming import FieldNameFormatter

TITLE_CANDIDATES = ("title", "original_title", "name", "label", "heading")
DESCRIPTION_CANDIDATES = ("description", "overview", "summary", "abstract", "notes")
IMAGE_NAME_PATTERNS = ("image", "thumb", "poster", "cover")

DESCRIPTION_MIN_LENGTH = 40
MAX_SCALAR_FIELDS = 3
MAX_TAG_FIELDS = 2


@dataclass(frozen=True)
class CardConfig:
    primary_key: str
    title_field: str
    description_field: Optional[str] = None
    image_field: Optional[str] = None
    scalar_fields: List[str] = field(default_factory=list)
    tag_fields: List[str] = field(default_factory=list)
    filterable_fields: List[str] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    max_len: int = 100
    max_list: int = 3

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primaryKey": self.primary_key,
            "titleField": self.title_field,
            "descriptionField": self.description_field,
            "imageField": self.image_field,
            "scalarFields": list(self.scalar_fields),
            "tagFields": list(self.tag_fields),
            "filterableFields": list(self.filterable_fields),
            "labels": dict(self.labels),
            "maxLen": self.max_len,
            "maxList": self.max_list,
        }


def _is_string_field(stats: FieldStatistics) -> bool:
    return stats.storage_hint in ("string", "text") or "string" in stats.observed_types


def build_card_config(
    statistics: Mapping[str, FieldStatistics],
    report: ClassificationReport,
    settings: Optional[IndexSettings] = None,
    formatter: Optional[FieldNameFormatter] = None,
) -> CardConfig:
    """
    Choose the fields a result card renders.

    Args:
        statistics: The profile's field statistics
        report: The classification of those fields
        settings: Index settings (built from the report when omitted)
        formatter: Name formatter shared with the other emitters

    Returns:
        CardConfig, with attribute names in index (camelCase) spelling
    """
    formatter = formatter or FieldNameFormatter()
    settings = settings or build_index_settings(report, formatter)
    to_attr = formatter.to_camel

    attr_to_field = settings.source_fields
    string_fields = [name for name, stats in statistics.items() if _is_string_field(stats)]

    filterable = [f for f in settings.filterable if not formatter.is_id_like(f)]

    # Title
    title_source = next((f for f in string_fields if f in TITLE_CANDIDATES), None)
    if title_source is None and string_fields:
        title_source = string_fields[0]
    title_field = to_attr(title_source) if title_source else settings.primary_key

    # Description
    description_field = None
    for candidate in DESCRIPTION_CANDIDATES:
        if candidate in statistics and candidate != title_source:
            description_field = to_attr(candidate)
            break
    if description_field is None:
        for name in string_fields:
            if name == title_source:
                continue
            if (statistics[name].max_length or 0) > DESCRIPTION_MIN_LENGTH:
                description_field = to_attr(name)
                break

    # Image
    image_field = None
    for name, stats in statistics.items():
        lower = name.lower()
        if any(p in lower for p in IMAGE_NAME_PATTERNS) and stats.storage_hint == "string":
            image_field = to_attr(name)
            break

    # Scalars
    scalar_fields: List[str] = []
    for attr in filterable:
        name = attr_to_field.get(attr)
        if name is None:
            continue
        stats = statistics[name]
        if stats.storage_hint in ("int", "float") or stats.boolean_like:
            scalar_fields.append(attr)
        if len(scalar_fields) >= MAX_SCALAR_FIELDS:
            break

    # Tags
    tag_fields: List[str] = []
    for attr in filterable:
        name = attr_to_field.get(attr)
        if name is None:
            continue
        stats = statistics[name]

        # One value across every record says nothing
        if stats.distinct_count == 1 and stats.nulls == 0 and stats.total > 0:
            continue

        result = report.results.get(name)
        is_arrayish = result is not None and result.resolved_type == ResolvedType.ARRAY
        is_string_facet = _is_string_field(stats) and stats.facet_candidate
        is_name_hint = attr.lower() in FieldClassifier.TAG_NAME_HINTS

        if is_arrayish or is_string_facet or is_name_hint:
            tag_fields.append(attr)
        if len(tag_fields) >= MAX_TAG_FIELDS:
            break

    labels = {to_attr(name): formatter.humanize(name) for name in statistics}

    return CardConfig(
        primary_key=settings.primary_key,
        title_field=title_field,
        description_field=description_field,
        image_field=image_field,
        scalar_fields=scalar_fields,
        tag_fields=tag_fields,
        filterable_fields=filterable,
        labels=labels,
    )
