from weighted_distribution import (
    AllocatorConfig,
    ClusterConfig,
    DistributionConfig,
    DistributionEngine,
    InMemoryTelemetrySink,
    TelemetryConfig,
)


def _config(**allocator) -> DistributionConfig:
    return DistributionConfig(
        allocator=AllocatorConfig(**allocator),
        clustering=ClusterConfig(max_distance=1.0),
    )


def test_seeded_engines_are_reproducible():
    config = _config(budget=25.0, max_roll=20)
    items = list(range(1, 8))

    first = list(DistributionEngine.seeded(11, config=config).allocate(items, float))
    second = list(DistributionEngine.seeded(11, config=config).allocate(items, float))

    assert first == second
    assert sum(first) <= 25.0


def test_engine_shares_random_source_between_components():
    engine = DistributionEngine(config=_config(budget=10, no_duplicate=True), random_fn=lambda: 0.0)

    assert engine.sampler.draw(["a", "b"], lambda item: 1.0).item == "a"
    assert list(engine.allocate(["x", "x"], lambda item: 3.0, lambda item: 1.0)) == ["x"]
    assert [draw.item for draw in engine.draws(["a"], lambda item: 1.0, max_roll=2)] == ["a", "a"]
    assert engine.draw([], lambda item: 1.0) is None


def test_engine_clusters_with_configured_threshold():
    engine = DistributionEngine(config=_config())
    points = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (5.0, 0.0, 0.0)]

    clusters = engine.cluster(points)

    assert [cluster.indices for cluster in clusters] == [(0, 1), (2,)]


def test_engine_builds_publisher_when_telemetry_enabled():
    config = DistributionConfig(telemetry=TelemetryConfig(enabled=True, sample_rate=1.0))
    engine = DistributionEngine(config=config, random_fn=lambda: 0.0)
    sink = InMemoryTelemetrySink()
    engine.telemetry.subscribe(sink)

    engine.cluster([(0.0, 0.0, 0.0)])

    assert sink.names() == ["cluster.finished"]


def test_engine_without_telemetry_has_no_publisher():
    assert DistributionEngine().telemetry is None
