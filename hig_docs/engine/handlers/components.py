"""Component tool handlers.

Handles:
- get_component_spec: Component specification lookup
- get_accessibility_requirements: Accessibility requirement tables
- compare_platforms: Per-platform comparison of a component
"""

import logging
from typing import Any

from ...models import (
    AccessibilityParams,
    AccessibilityRequirements,
    AccessibilityRequirementsResult,
    ComparePlatformsParams,
    ComponentSpec,
    ComponentSpecParams,
    ComponentSpecResult,
    PlatformComparison,
    PlatformComparisonResult,
    SemanticInsights,
)
from ...models.enums import Platform
from ..core.catalog import KNOWN_COMPONENTS, PLATFORM_NOTES, accessibility_requirements_for
from ..processing.content_processor import (
    extract_examples,
    extract_guidelines,
    extract_specifications,
)
from ..scoring.constants import MINIMUM_RELEVANCE_SCORE
from ..scoring.query import normalize_title_tokens
from .base import HandlerContext
from .validation import (
    parse_params,
    validate_component_name,
    validate_platform,
    validate_platforms,
)

logger = logging.getLogger(__name__)

MAX_RELATED_COMPONENTS = 5
MAX_DIFFERENCES_PER_PLATFORM = 3


async def handle_get_component_spec(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ComponentSpecResult:
    """Get the specification of a UI component.

    Args:
        params: Dict containing:
            - component_name: Component name (max 50 characters)
            - platform: Optional platform scope

    Returns:
        ComponentSpecResult (component is None when nothing matches)
    """
    p = parse_params(ComponentSpecParams, params)
    name = validate_component_name(p.component_name, ctx.settings.max_component_name_length)
    platform = validate_platform(p.platform)

    component = find_component_spec(ctx, name, platform)
    return ComponentSpecResult(
        component=component,
        related_components=find_related_components(ctx, name, component, platform),
        platforms=list(component.platforms) if component else [],
    )


async def handle_get_accessibility_requirements(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> AccessibilityRequirementsResult:
    """Get accessibility requirements for a component family."""
    p = parse_params(AccessibilityParams, params)
    component = validate_component_name(
        p.component, ctx.settings.max_component_name_length, field="component"
    )
    platform = validate_platform(p.platform) or Platform.IOS

    return AccessibilityRequirementsResult(
        component=component,
        platform=platform,
        requirements=AccessibilityRequirements(**accessibility_requirements_for(component)),
    )


async def handle_compare_platforms(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> PlatformComparisonResult:
    """Compare a component across platforms.

    Args:
        params: Dict containing:
            - component_name: Component to compare
            - platforms: 1-6 platform names (duplicates dropped)

    Returns:
        PlatformComparisonResult with common guidelines and differences
    """
    p = parse_params(ComparePlatformsParams, params)
    name = validate_component_name(p.component_name, ctx.settings.max_component_name_length)
    platforms = validate_platforms(p.platforms, ctx.settings.max_compare_platforms)

    comparison: list[PlatformComparison] = []
    for platform in platforms:
        spec = find_component_spec(ctx, name, platform)
        comparison.append(
            PlatformComparison(
                platform=platform,
                available=spec is not None,
                guidelines=list(spec.guidelines) if spec else [],
                specifications=dict(spec.specifications) if spec else {},
                platform_specific_notes=list(PLATFORM_NOTES.get(platform, [])),
            )
        )

    available = [c for c in comparison if c.available]
    common = common_guidelines(available)
    unique = unique_guidelines(available) if len(available) > 1 else {}

    key_differences = [
        f"{platform} has unique guidelines: "
        f"{', '.join(guidelines[:MAX_DIFFERENCES_PER_PLATFORM])}"
        for platform, guidelines in unique.items()
        if guidelines
    ]

    insights = None
    if ctx.indexer.semantic_enabled:
        distinct = {g for c in available for g in c.guidelines}
        insights = SemanticInsights(
            cross_platform_consistency=len(common) / len(distinct) if distinct else 0.0,
            platform_specific_features=[
                f"{platform}: {g}" for platform, guidelines in unique.items() for g in guidelines
            ],
        )

    return PlatformComparisonResult(
        component_name=name,
        platforms=platforms,
        comparison=comparison,
        common_guidelines=common,
        key_differences=key_differences,
        semantic_insights=insights,
    )


# ============ LOOKUP HELPERS ============


def find_component_spec(
    ctx: HandlerContext,
    name: str,
    platform: Platform | None = None,
) -> ComponentSpec | None:
    """Look a component up in the index, then among the known components.

    The best index match must clear the relevance threshold and share a
    title token with the component name.
    """
    name_tokens = normalize_title_tokens(name)
    try:
        results = ctx.indexer.search(name, platform=platform, limit=3)
    except Exception as e:
        logger.warning(f"Component search failed for '{name}': {e}")
        results = []

    best = next(
        (
            r for r in results
            if r.relevance_score >= MINIMUM_RELEVANCE_SCORE
            and name_tokens & normalize_title_tokens(r.title)
        ),
        None,
    )
    if best is None:
        return known_component(name, platform)

    entry = ctx.indexer.get_entry(best.id)
    content = entry.content if entry else best.snippet
    return ComponentSpec(
        id=best.id,
        title=best.title,
        description=best.snippet or f"{best.title} component specifications and guidelines.",
        platforms=[best.platform],
        url=best.url,
        specifications=(entry.specifications if entry else {}) or extract_specifications(content),
        guidelines=(entry.guidelines if entry else []) or extract_guidelines(content),
        examples=(entry.examples if entry else []) or extract_examples(content),
    )


def known_component(name: str, platform: Platform | None = None) -> ComponentSpec | None:
    """Match a built-in component: exactly first, then partially."""
    key = " ".join(name.lower().split())

    def allowed(data: dict) -> bool:
        return platform is None or platform == Platform.UNIVERSAL or platform in data["platforms"]

    if key in KNOWN_COMPONENTS:
        data = KNOWN_COMPONENTS[key]
        return ComponentSpec(**data) if allowed(data) else None

    for known, data in KNOWN_COMPONENTS.items():
        if (known in key or key in known) and allowed(data):
            return ComponentSpec(**data)
    return None


def find_related_components(
    ctx: HandlerContext,
    name: str,
    component: ComponentSpec | None,
    platform: Platform | None = None,
) -> list[str]:
    """Titles of other indexed sections sharing a title token with the name."""
    tokens = normalize_title_tokens(name)
    if component is not None:
        tokens |= normalize_title_tokens(component.title)
    exclude = component.title if component else None

    related: list[str] = []
    for entry in ctx.indexer.entries:
        if entry.title == exclude or entry.title in related:
            continue
        if platform is not None and entry.platform not in (platform, Platform.UNIVERSAL):
            continue
        if tokens & normalize_title_tokens(entry.title):
            related.append(entry.title)
        if len(related) >= MAX_RELATED_COMPONENTS:
            break
    return related


def common_guidelines(columns: list[PlatformComparison]) -> list[str]:
    """Guidelines present on every column, in first-seen order."""
    if not columns:
        return []
    common: list[str] = []
    for guideline in columns[0].guidelines:
        if guideline in common:
            continue
        if all(guideline in c.guidelines for c in columns[1:]):
            common.append(guideline)
    return common


def unique_guidelines(columns: list[PlatformComparison]) -> dict[Platform, list[str]]:
    """Per platform, the guidelines no other column has."""
    unique: dict[Platform, list[str]] = {}
    for column in columns:
        others = [c for c in columns if c is not column]
        unique[column.platform] = [
            g for g in column.guidelines if not any(g in o.guidelines for o in others)
        ]
    return unique
