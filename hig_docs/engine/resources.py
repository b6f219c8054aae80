"""``hig://`` resources over the indexed sections.

URIs:
- ``hig://<platform>``: every section for one platform
- ``hig://<platform>/<category>``: one category on one platform
- ``hig://universal``: cross-platform sections
"""

import logging

from ..models import HIGResource
from ..models.enums import Category, Platform
from ..models.index import IndexEntry
from .handlers.validation import InvalidInputError
from .indexer import SearchIndexer

logger = logging.getLogger(__name__)

URI_SCHEME = "hig://"

_PLATFORMS_BY_SLUG = {p.value.lower(): p for p in Platform}


def platform_uri(platform: Platform, category: Category | None = None) -> str:
    uri = f"{URI_SCHEME}{platform.value.lower()}"
    return f"{uri}/{category.value}" if category else uri


def list_resources(indexer: SearchIndexer) -> list[HIGResource]:
    """One resource per platform and per platform/category pair with content."""
    grouped: dict[Platform, set[Category]] = {}
    counts: dict[Platform, int] = {}
    for entry in indexer.entries:
        grouped.setdefault(entry.platform, set()).add(entry.category)
        counts[entry.platform] = counts.get(entry.platform, 0) + 1

    resources: list[HIGResource] = []
    for platform in Platform:
        if platform not in grouped:
            continue
        resources.append(
            HIGResource(
                uri=platform_uri(platform),
                name=f"{platform.value} Human Interface Guidelines",
                description=f"{counts[platform]} sections of {platform.value} design guidance",
            )
        )
        if platform == Platform.UNIVERSAL:
            continue
        for category in sorted(grouped[platform], key=lambda c: list(Category).index(c)):
            resources.append(
                HIGResource(
                    uri=platform_uri(platform, category),
                    name=f"{platform.value} {_category_label(category)}",
                    description=f"{_category_label(category)} guidance for {platform.value}",
                )
            )
    return resources


def parse_uri(uri: str) -> tuple[Platform, Category | None]:
    """Split a resource URI into platform and optional category.

    Raises:
        InvalidInputError: If the URI is malformed or names an unknown
            platform or category.
    """
    if not uri.startswith(URI_SCHEME):
        raise InvalidInputError(f"Invalid resource URI: {uri}")
    parts = uri[len(URI_SCHEME) :].strip("/").split("/")
    if not parts[0] or len(parts) > 2:
        raise InvalidInputError(f"Invalid resource URI: {uri}")

    platform = _PLATFORMS_BY_SLUG.get(parts[0].lower())
    if platform is None:
        raise InvalidInputError(f"Unknown platform in resource URI: {parts[0]}")
    if len(parts) == 1:
        return platform, None
    try:
        return platform, Category(parts[1].lower())
    except ValueError:
        raise InvalidInputError(f"Unknown category in resource URI: {parts[1]}") from None


def read_resource(indexer: SearchIndexer, uri: str) -> HIGResource | None:
    """Render the sections behind a URI as markdown; None when it has no sections."""
    platform, category = parse_uri(uri)
    entries = [
        e
        for e in indexer.entries
        if e.platform == platform and (category is None or e.category == category)
    ]
    if not entries:
        logger.debug(f"No sections for resource {uri}")
        return None

    title = f"{platform.value} {_category_label(category)}" if category else platform.value
    body = "\n\n".join(_render_entry(e) for e in entries)
    return HIGResource(
        uri=platform_uri(platform, category),
        name=f"{title} Human Interface Guidelines",
        description=f"{len(entries)} sections",
        content=f"# {title} Human Interface Guidelines\n\n{body}\n",
    )


def _render_entry(entry: IndexEntry) -> str:
    lines = [f"## {entry.title}"]
    if entry.url:
        lines.append(f"Source: {entry.url}")
    lines.append("")
    lines.append(entry.content or entry.snippet)
    return "\n".join(lines)


def _category_label(category: Category) -> str:
    return category.value.replace("-", " ").title()
