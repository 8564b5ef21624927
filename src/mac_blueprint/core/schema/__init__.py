from mac_blueprint.core.schema.compat import is_compatible, major_of
from mac_blueprint.core.schema.factory import create_empty_blueprint
from mac_blueprint.core.schema.validator import ValidationResult, validate_blueprint

__all__ = [
    "ValidationResult",
    "create_empty_blueprint",
    "is_compatible",
    "major_of",
    "validate_blueprint",
]
