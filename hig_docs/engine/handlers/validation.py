"""Input validation for tool handlers.

Every check raises ``InvalidInputError`` with a message naming the
offending field and the violated constraint. Values are never silently
corrected.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ...models.enums import Category, Platform, WildcardSearchType

M = TypeVar("M", bound=BaseModel)


class InvalidInputError(ValueError):
    """A tool was called with invalid parameters."""


def parse_params(model: type[M], params: dict[str, Any] | None) -> M:
    """Validate raw tool params into a params model.

    Raises:
        InvalidInputError: On a missing or malformed parameter.
    """
    if params is not None and not isinstance(params, dict):
        raise InvalidInputError("Invalid arguments: expected object")
    try:
        return model.model_validate(params or {})
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "params"
        raise InvalidInputError(f"Invalid parameter '{field}': {error['msg']}") from None


def validate_query(query: str, max_length: int = 100) -> str:
    """Return the trimmed query, rejecting over-long input."""
    if len(query) > max_length:
        raise InvalidInputError(f"Query too long: maximum {max_length} characters allowed")
    return query.strip()


def validate_required_text(value: str, field: str, label: str, max_length: int = 100) -> str:
    """Return the trimmed value, rejecting blank or over-long input.

    Args:
        value: Raw parameter value.
        field: Parameter name used in the blank-value message.
        label: Capitalized noun used in the length message.
        max_length: Maximum raw length.
    """
    if len(value) > max_length:
        raise InvalidInputError(f"{label} too long: maximum {max_length} characters allowed")
    if not value.strip():
        raise InvalidInputError(f"Invalid {field}: must be a non-empty string")
    return value.strip()


def validate_platform(platform: str | None) -> Platform | None:
    if platform is None or platform == "":
        return None
    try:
        return Platform(platform)
    except ValueError:
        allowed = ", ".join(p.value for p in Platform)
        raise InvalidInputError(f"Invalid platform: {platform}. Must be one of: {allowed}") from None


def validate_category(category: str | None) -> Category | None:
    if category is None or category == "":
        return None
    try:
        return Category(category)
    except ValueError:
        allowed = ", ".join(c.value for c in Category)
        raise InvalidInputError(f"Invalid category: {category}. Must be one of: {allowed}") from None


def validate_search_type(value: str) -> WildcardSearchType:
    try:
        return WildcardSearchType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in WildcardSearchType)
        raise InvalidInputError(f"Invalid searchType: {value}. Must be one of: {allowed}") from None


def validate_limit(limit: Any, maximum: int = 50, field: str = "limit") -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= maximum:
        raise InvalidInputError(f"Invalid {field}: must be a number between 1 and {maximum}")
    return limit


def validate_component_name(name: Any, max_length: int = 50, field: str = "componentName") -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidInputError(f"Invalid {field}: must be a non-empty string")
    if len(name) > max_length:
        raise InvalidInputError(f"Component name too long: maximum {max_length} characters allowed")
    return name.strip()


def validate_platforms(platforms: list[str], maximum: int = 6) -> list[Platform]:
    """Validate a comparison platform list, dropping duplicates in order."""
    if not platforms:
        raise InvalidInputError("Invalid platforms: at least one platform is required for comparison")
    if len(platforms) > maximum:
        raise InvalidInputError(f"Too many platforms: maximum {maximum} platforms allowed")

    unique: list[Platform] = []
    for value in platforms:
        platform = validate_platform(value)
        if platform is None:
            raise InvalidInputError("Invalid platforms: entries must be non-empty")
        if platform not in unique:
            unique.append(platform)
    return unique
