"""Configuration models for the weighted distribution engine."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SamplerConfig(BaseModel):
    """Defaults for weighted sampling."""

    max_roll: int = Field(
        default=1,
        ge=0,
        description="Number of independent draws produced by a bounded draw sequence.",
    )


class AllocatorConfig(BaseModel):
    """Defaults for budget-constrained allocation."""

    budget: float = Field(
        default=0.0,
        description="Starting budget that chosen candidates are deducted from.",
    )
    no_duplicate: bool = Field(
        default=False,
        description="Remove value-equal candidates from consideration once one is chosen.",
    )
    max_roll: int = Field(
        default=100,
        ge=0,
        description="Upper bound on allocation rounds.",
    )


class ClusterConfig(BaseModel):
    """Defaults for proximity clustering."""

    max_distance: float = Field(
        default=1.0,
        ge=0.0,
        description="Largest distance between two points that links them.",
    )


class TelemetryConfig(BaseModel):
    """Controls event publishing."""

    enabled: bool = False
    sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Fraction of events forwarded to sinks.",
    )


class DistributionConfig(BaseModel):
    """Top-level configuration object for the package."""

    sampler: SamplerConfig = Field(default_factory=SamplerConfig)
    allocator: AllocatorConfig = Field(default_factory=AllocatorConfig)
    clustering: ClusterConfig = Field(default_factory=ClusterConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)


__all__ = [
    "AllocatorConfig",
    "ClusterConfig",
    "DistributionConfig",
    "SamplerConfig",
    "TelemetryConfig",
]
