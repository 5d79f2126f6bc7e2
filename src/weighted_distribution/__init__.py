"""Public package interface for weighted_distribution."""

from .allocator import BudgetedAllocator, distribute_points
from .clustering import ProximityClusterer, cluster_points, squared_distance
from .config import (
    AllocatorConfig,
    ClusterConfig,
    DistributionConfig,
    SamplerConfig,
    TelemetryConfig,
)
from .engine import DistributionEngine
from .random_source import resolve_random, seeded_random
from .sampler import WeightedSampler, weighted_draw, weighted_draws
from .selection import random_int, random_item, random_pop
from .sequences import SinglePassSequence
from .telemetry import InMemoryTelemetrySink, LoggingTelemetrySink, TelemetryPublisher
from .types import AllocationStep, Cluster, Draw, TelemetryEvent

__all__ = [
    "AllocationStep",
    "AllocatorConfig",
    "BudgetedAllocator",
    "Cluster",
    "ClusterConfig",
    "DistributionConfig",
    "DistributionEngine",
    "Draw",
    "InMemoryTelemetrySink",
    "LoggingTelemetrySink",
    "ProximityClusterer",
    "SamplerConfig",
    "SinglePassSequence",
    "TelemetryConfig",
    "TelemetryEvent",
    "TelemetryPublisher",
    "WeightedSampler",
    "cluster_points",
    "distribute_points",
    "random_int",
    "random_item",
    "random_pop",
    "resolve_random",
    "seeded_random",
    "squared_distance",
    "weighted_draw",
    "weighted_draws",
]
