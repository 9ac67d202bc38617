import json
import re
from typing import Any
from urllib.parse import urlparse


class TypeDetector:
    NULL_VARIANTS = {"null", "none", "nil", ""}
    BOOL_TRUE_VARIANTS = {"true", "yes"}
    BOOL_FALSE_VARIANTS = {"false", "no"}

    # Values a 0/1 or yes/no column takes
    BOOLEAN_LIKE_VALUES = {"0", "1", "true", "false", "yes", "no", "y", "n", "t", "f"}

    INT_PATTERN = re.compile(r'^[+-]?\d+$')
    FLOAT_PATTERN = re.compile(r'^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$')

    IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".avif", ".bmp")

    @classmethod
    def detect(cls, value: Any) -> str:
        """
        Type of a raw value as the profiler counts it:
        null, bool, int, float, array, object or string.

        Numeric and boolean strings count as their coerced type.
        """
        if value is None:
            return "null"

        if isinstance(value, bool):
            return "bool"

        if isinstance(value, int):
            return "int"

        if isinstance(value, float):
            return "float"

        if isinstance(value, list):
            return "array"

        if isinstance(value, dict):
            return "object"

        if isinstance(value, str):
            value_stripped = value.strip()
            lower = value_stripped.lower()

            if lower in cls.NULL_VARIANTS:
                return "null"

            if lower in cls.BOOL_TRUE_VARIANTS or lower in cls.BOOL_FALSE_VARIANTS:
                return "bool"

            if cls.INT_PATTERN.match(value_stripped):
                return "int"

            if cls.FLOAT_PATTERN.match(value_stripped):
                return "float"

            return "string"

        return "string"

    @classmethod
    def is_url(cls, value: str) -> bool:
        try:
            parsed = urlparse(value.strip())
        except ValueError:
            return False
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

    @classmethod
    def is_image_url(cls, value: str) -> bool:
        stripped = value.strip()
        if stripped.startswith("data:image/"):
            return True
        if not cls.is_url(stripped):
            return False
        path = urlparse(stripped).path.lower()
        return path.endswith(cls.IMAGE_EXTENSIONS)

    @classmethod
    def is_json_string(cls, value: str) -> bool:
        stripped = value.strip()
        if not stripped or stripped[0] not in "[{":
            return False
        try:
            decoded = json.loads(stripped)
        except ValueError:
            return False
        return isinstance(decoded, (dict, list))

    @classmethod
    def word_count(cls, value: str) -> int:
        return len(value.split())

    @classmethod
    def is_boolean_like(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return True
        if isinstance(value, int):
            return value in (0, 1)
        if isinstance(value, str):
            return value.strip().lower() in cls.BOOLEAN_LIKE_VALUES
        return False
