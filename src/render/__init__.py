"""Render module for separation report display."""

from render.renderers import (
    BaseRenderer,
    SummaryRenderer,
    SeveranceRenderer,
    RetirementRenderer,
    HealthRenderer,
    RENDERER_REGISTRY,
    format_currency,
    format_date,
    format_duration,
    format_service_duration,
)

__all__ = [
    'BaseRenderer',
    'SummaryRenderer',
    'SeveranceRenderer',
    'RetirementRenderer',
    'HealthRenderer',
    'RENDERER_REGISTRY',
    'format_currency',
    'format_date',
    'format_duration',
    'format_service_duration',
]
