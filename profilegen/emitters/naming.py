# ==============================================
# FieldNameFormatter
# ==============================================
#
# PURPOSE:
#   Convert raw profile field names into the spellings the
#   generated code needs:
#     - snake_case         (imageUrl → image_url)
#     - camelCase          (original_title → originalTitle)
#     - human label        (releaseDate → Release Date)
#
#   The camelCase spelling is what index attributes and entity
#   properties use, so every emitter goes through the same
#   formatter to keep names consistent between outputs.
#
# RULES:
# ------
#   1. Non-alphanumeric characters become underscores
#   2. camelCase / PascalCase boundaries become underscores
#   3. Runs of capitals stay together (XMLParser → xml_parser)
#   4. Multiple underscores collapse, leading/trailing are stripped
#   5. Two fields may not share a camelCase spelling (movie_id, movieId)
#
# ==============================================

import re
from typing import Dict, Iterable

from profilegen.exceptions import NameCollisionError


class FieldNameFormatter:
    """
    Converts field names between snake_case, camelCase and labels.
    Caches every conversion it has made.
    """

    def __init__(self):
        self._camel_cache: Dict[str, str] = {}

    def to_snake(self, name: str) -> str:
        """
        Convert camelCase/PascalCase/kebab names to snake_case.

        Args:
            name: Input field name

        Returns:
            snake_case version of the name
        """
        name = re.sub(r'[^a-zA-Z0-9_]', '_', name)

        # "XMLParser" -> "XML_Parser"
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)

        # "userName" -> "user_Name"
        name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)

        name = name.lower()
        name = re.sub(r'_+', '_', name)
        return name.strip('_')

    def to_camel(self, name: str) -> str:
        """
        Convert a field name to lowerCamelCase.

        Args:
            name: Raw field name (e.g., "original_title", "ImageURL")

        Returns:
            camelCase name (e.g., "originalTitle", "imageUrl")
        """
        if not name:
            return name

        if name in self._camel_cache:
            return self._camel_cache[name]

        parts = [p for p in self.to_snake(name).split('_') if p]
        if not parts:
            camel = name
        else:
            camel = parts[0] + ''.join(p[:1].upper() + p[1:] for p in parts[1:])

        self._camel_cache[name] = camel
        return camel

    def attribute_names(self, names: Iterable[str]) -> Dict[str, str]:
        """
        camelCase spelling for every field, in field order.

        Args:
            names: Field names of one dataset

        Returns:
            field name → camelCase name

        Raises:
            NameCollisionError: two fields share a camelCase spelling
        """
        mapping: Dict[str, str] = {}
        taken: Dict[str, str] = {}
        for name in names:
            camel = self.to_camel(name)
            if camel in taken:
                raise NameCollisionError(
                    f"Fields '{taken[camel]}' and '{name}' both map to '{camel}'",
                    field_name=name,
                )
            taken[camel] = name
            mapping[name] = camel
        return mapping

    def humanize(self, name: str) -> str:
        """releaseDate -> "Release Date"."""
        words = self.to_snake(name).split('_')
        return ' '.join(w.capitalize() for w in words if w)

    @staticmethod
    def is_id_like(name: str) -> bool:
        """
        True for identifier-ish names: "id", "movie_id", "imdbId".

        Names that merely end in "grid" are not identifiers.
        """
        lower = name.lower()
        if re.search(r'(^|_)id$', lower):
            return True
        return lower.endswith('id') and not lower.endswith('grid')
