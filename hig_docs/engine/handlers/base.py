"""Base infrastructure for tool handlers.

This module provides the common types used by all handler modules.
Each handler receives a HandlerContext with shared state and returns a
pydantic result model; ``HIGEngine.execute`` adds token accounting.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Coroutine

from pydantic import BaseModel

if TYPE_CHECKING:
    from ...cache import HIGCache
    from ...config import Settings
    from ..indexer import SearchIndexer
    from ..processing.quality_validator import QualityValidator
    from ..scoring.fusion import UnifiedQueryFuser


@dataclass
class HandlerContext:
    """Context object passed to all handlers.

    Contains shared state and dependencies that handlers need to operate.
    This decouples handlers from the HIGEngine class.
    """

    # Search
    indexer: "SearchIndexer"
    fuser: "UnifiedQueryFuser"

    # Response cache
    cache: "HIGCache"

    # Limits and feature flags
    settings: "Settings"

    # Ingestion statistics (None when the index was loaded from disk)
    validator: "QualityValidator | None" = None


# Type alias for handler functions
HandlerFunc = Callable[
    [dict[str, Any], HandlerContext],
    Coroutine[Any, Any, BaseModel],
]
