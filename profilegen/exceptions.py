# ==============================================
# Exceptions
# ==============================================
#
# Every failure raised by profilegen derives from ProfileGenError
# and names the offending field (when there is one) and the rule
# that failed, so the caller can fix the profile or the override
# and re-run.
#
#   ProfileGenError
#   ├── InputError
#   │   ├── MalformedInputError
#   │   ├── ProfileNotFoundError
#   │   ├── UnsupportedInputError
#   │   └── SampleFetchError
#   ├── ConfigurationError
#   │   ├── FieldNotFoundError
#   │   ├── InconsistentHintError
#   │   ├── NameCollisionError
#   │   ├── InvalidClassNameError
#   │   └── InvalidSettingError
#   └── AmbiguousPrimaryKeyError
#
# ==============================================

from typing import Any, Dict, Optional


class ProfileGenError(Exception):
    """
    Base exception for all profilegen errors.

    Attributes:
        message: Human-readable error message
        field_name: Field the error is about, if any
        rule: Short identifier of the rule that failed
    """

    rule = "error"

    def __init__(self, message: str, field_name: Optional[str] = None, rule: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field_name = field_name
        if rule is not None:
            self.rule = rule

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "field": self.field_name,
            "rule": self.rule,
        }


class InputError(ProfileGenError):
    """Statistics or input files are missing or unusable."""
    rule = "input"


class MalformedInputError(InputError):
    """Statistics are missing required attributes or hold impossible values."""
    rule = "malformed_input"


class ProfileNotFoundError(InputError):
    rule = "profile_not_found"


class UnsupportedInputError(InputError):
    rule = "unsupported_input"


class SampleFetchError(InputError):
    rule = "sample_fetch"


class ConfigurationError(ProfileGenError):
    """The caller's primary-key configuration contradicts the statistics."""
    rule = "configuration"


class FieldNotFoundError(ConfigurationError):
    rule = "field_not_found"


class InconsistentHintError(ConfigurationError):
    rule = "inconsistent_unique_hint"


class NameCollisionError(ConfigurationError):
    """Two fields map to the same generated property or attribute name."""
    rule = "name_collision"


class InvalidClassNameError(ConfigurationError):
    rule = "invalid_class_name"


class InvalidSettingError(ConfigurationError):
    """A PROFILEGEN_* setting cannot be parsed."""
    rule = "invalid_setting"


class AmbiguousPrimaryKeyError(ProfileGenError):
    """No rule could determine a primary key."""
    rule = "no_primary_key"
