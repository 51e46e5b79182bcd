from __future__ import annotations

import httpx

from creatorsync.adapters.http_resilience import RateLimit, ResilienceConfig, ResilientClient


def test_clients_with_the_same_name_share_one_rate_limiter() -> None:
    config = ResilienceConfig(name="limited", ratelimit=RateLimit(max_calls=2, per_seconds=1.0))

    first = ResilientClient(config)
    second = ResilientClient(config)

    assert first._limiter is not None  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    assert first._limiter is second._limiter  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_clients_with_different_names_are_limited_separately() -> None:
    ratelimit = RateLimit(max_calls=2, per_seconds=1.0)

    first = ResilientClient(ResilienceConfig(name="one", ratelimit=ratelimit))
    second = ResilientClient(ResilienceConfig(name="two", ratelimit=ratelimit))

    assert first._limiter is not second._limiter  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_cache_is_off_unless_configured() -> None:
    client = ResilientClient(ResilienceConfig(name="plain"))

    assert type(client._client) is httpx.AsyncClient  # noqa: SLF001  # type: ignore[reportPrivateUsage]
