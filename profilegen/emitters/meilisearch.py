from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from profilegen.analysis.decision import ClassificationReport
from profilegen.emitters.naming import FieldNameFormatter


@dataclass(frozen=True)
class IndexSettings:
    """
    Search-index settings derived from a classification.

    Attribute names are the camelCase spelling of the profile fields.
    """

    primary_key: str
    filterable: List[str] = field(default_factory=list)
    sortable: List[str] = field(default_factory=list)
    searchable: List[str] = field(default_factory=list)
    # camelCase attribute → original profile field
    source_fields: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primaryKey": self.primary_key,
            "filterableAttributes": list(self.filterable),
            "sortableAttributes": list(self.sortable),
            "searchableAttributes": list(self.searchable),
        }


def build_index_settings(
    report: ClassificationReport,
    formatter: Optional[FieldNameFormatter] = None,
) -> IndexSettings:
    """
    Translate facet roles into index settings, keeping field order.

    Raises:
        NameCollisionError: two fields would become the same attribute
    """
    formatter = formatter or FieldNameFormatter()
    attrs = formatter.attribute_names(report.results)

    return IndexSettings(
        primary_key=attrs[report.primary_key],
        filterable=[attrs[name] for name in report.filterable],
        sortable=[attrs[name] for name in report.sortable],
        searchable=[attrs[name] for name in report.searchable],
        source_fields={attr: name for name, attr in attrs.items()},
    )
