"""
Mirror racing against in-process Overpass mirrors served by httpx.MockTransport.
"""
import asyncio
import time
from urllib.parse import parse_qs

import httpx
import pytest

from cityexplore.config.settings import get_settings
from cityexplore.core.dependencies import ServiceContainer
from cityexplore.core.exceptions import UpstreamUnavailableError
from cityexplore.core.metrics_explore import snapshot_metrics
from cityexplore.services.mirror_racer import MirrorQueryRacer

from conftest import node

FAST = "https://fast.example/api/interpreter"
SLOW = "https://slow.example/api/interpreter"
BROKEN = "https://broken.example/api/interpreter"

CAFE = node(1, 35.001, 135.001, "Corner Cafe", amenity="cafe")


class Mirrors:
    """Routes requests by host to per-mirror behaviours."""

    def __init__(self, behaviours):
        self.behaviours = behaviours
        self.requests = []
        self.finished = set()
        self.cancelled = set()

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        kind, payload = self.behaviours[host]
        try:
            if kind == "slow":
                await asyncio.sleep(payload)
                response = httpx.Response(200, json={"elements": [CAFE]})
            elif kind == "ok":
                response = httpx.Response(200, json={"elements": payload})
            elif kind == "status":
                response = httpx.Response(payload, text="Too Many Requests")
            elif kind == "text":
                response = httpx.Response(200, text=payload)
            else:
                response = httpx.Response(200, json=payload)
        except asyncio.CancelledError:
            self.cancelled.add(host)
            raise
        self.finished.add(host)
        return response


def racer_for(mirrors, urls, per_request_timeout=2.0):
    client = httpx.AsyncClient(transport=httpx.MockTransport(mirrors))
    racer = MirrorQueryRacer(urls, http_client=client, per_request_timeout=per_request_timeout)
    return racer, client


def test_requires_a_mirror():
    with pytest.raises(ValueError):
        MirrorQueryRacer([])


@pytest.mark.asyncio
async def test_fast_mirror_wins_and_slow_one_is_cancelled(origin):
    mirrors = Mirrors({"slow.example": ("slow", 5.0), "fast.example": ("ok", [CAFE])})
    racer, client = racer_for(mirrors, [SLOW, FAST])
    async with client:
        start = time.perf_counter()
        elements = await racer.race(origin, 3000, ["amenity=cafe"])
        elapsed = time.perf_counter() - start

    assert elapsed < 2.0
    assert [e.name for e in elements] == ["Corner Cafe"]
    assert "slow.example" in mirrors.cancelled
    assert "slow.example" not in mirrors.finished
    assert snapshot_metrics()["mirrors"]["wins"] == {"fast.example": 1}


@pytest.mark.asyncio
async def test_falls_back_when_earlier_mirror_fails(origin):
    mirrors = Mirrors({"broken.example": ("status", 429), "slow.example": ("slow", 0.05)})
    racer, client = racer_for(mirrors, [BROKEN, SLOW])
    async with client:
        elements = await racer.race(origin, 3000, ["amenity=cafe"])

    assert len(elements) == 1
    metrics = snapshot_metrics()["mirrors"]
    assert metrics["failures"] == {"broken.example": 1}
    assert metrics["wins"] == {"slow.example": 1}


@pytest.mark.asyncio
async def test_payload_without_elements_counts_as_failure(origin):
    mirrors = Mirrors({
        "broken.example": ("json", {"remark": "runtime error"}),
        "slow.example": ("slow", 0.05),
    })
    racer, client = racer_for(mirrors, [BROKEN, SLOW])
    async with client:
        elements = await racer.race(origin, 3000, ["amenity=cafe"])

    assert [e.id for e in elements] == [1]


@pytest.mark.asyncio
async def test_empty_element_list_is_a_valid_answer(origin):
    mirrors = Mirrors({"fast.example": ("ok", [])})
    racer, client = racer_for(mirrors, [FAST])
    async with client:
        assert await racer.race(origin, 3000, ["amenity=cafe"]) == []


@pytest.mark.asyncio
async def test_all_mirrors_failing_raises(origin):
    mirrors = Mirrors({
        "broken.example": ("status", 503),
        "fast.example": ("text", "<html>rate limited</html>"),
    })
    racer, client = racer_for(mirrors, [BROKEN, FAST])
    async with client:
        with pytest.raises(UpstreamUnavailableError) as exc:
            await racer.race(origin, 4000, ["amenity=cafe"])

    assert exc.value.status_code == 502
    assert exc.value.radius_m == 4000
    failures = dict(f.split(": ", 1) for f in exc.value.failures)
    assert set(failures) == {BROKEN, FAST}
    assert failures[BROKEN].startswith("status 503")
    assert failures[FAST].startswith("invalid JSON")
    assert snapshot_metrics()["mirrors"]["outages"] == 1


@pytest.mark.asyncio
async def test_per_request_timeout(origin):
    mirrors = Mirrors({"slow.example": ("slow", 5.0)})
    racer, client = racer_for(mirrors, [SLOW], per_request_timeout=0.1)
    async with client:
        start = time.perf_counter()
        with pytest.raises(UpstreamUnavailableError) as exc:
            await racer.race(origin, 3000, ["amenity=cafe"])

    assert time.perf_counter() - start < 2.0
    assert "timed out after 0.1s" in exc.value.failures[0]


@pytest.mark.asyncio
async def test_posts_form_encoded_query_with_user_agent(origin):
    mirrors = Mirrors({"fast.example": ("ok", [])})
    racer, client = racer_for(mirrors, [FAST])
    async with client:
        await racer.race(origin, 2500, ["amenity=cafe", "shop=books"])

    request = mirrors.requests[0]
    assert request.method == "POST"
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert request.headers["user-agent"] == "CityExplorationHackathonApp/1.0"
    query = parse_qs(request.content.decode())["data"][0]
    assert query.startswith("[out:json][timeout:20];")
    assert 'nwr["amenity"="cafe"](around:2500,35.0,135.0);' in query
    assert 'nwr["shop"="books"](around:2500,35.0,135.0);' in query
    assert query.rstrip().endswith("out center tags;")


@pytest.mark.asyncio
async def test_requests_carry_the_per_mirror_timeout(origin):
    mirrors = Mirrors({"fast.example": ("ok", [])})
    racer, client = racer_for(mirrors, [FAST], per_request_timeout=7.5)
    async with client:
        await racer.race(origin, 3000, ["amenity=cafe"])

    timeout = mirrors.requests[0].extensions["timeout"]
    assert timeout["connect"] == 7.5
    assert timeout["read"] == 7.5


@pytest.mark.asyncio
async def test_shared_client_timeout_matches_settings():
    container = ServiceContainer()
    await container.initialize_services()
    try:
        expected = get_settings().overpass.per_request_timeout_seconds
        assert container._http_client.timeout.read == expected
        assert container._http_client.timeout.connect == expected
    finally:
        await container.cleanup_services()
