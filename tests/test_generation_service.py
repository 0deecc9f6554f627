import asyncio
import json

import httpx

from conftest import DAY_MS, FakeClock, StubGenerator, make_set
from repositories.memory_rate_limiter import InMemoryRateLimiter
from schemas.rate_limit import RateLimitExceeded, RateLimitOk
from services.generation_service import GenerationService, HttpFlashcardGenerator


def run(coro):
    return asyncio.run(coro)


def make_http_generator(handler, api_key="secret"):
    return HttpFlashcardGenerator(
        "http://generator.test/",
        api_key=api_key,
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


def test_http_generator_parses_raw_set():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"topic": "Spanish", "flashcards": [{"front": "hola", "back": "hello"}, {"front": "gato", "back": "cat"}]},
        )

    flashcard_set = run(make_http_generator(handler).generate("Spanish", 2, "animals"))

    assert seen["url"] == "http://generator.test/generate"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"] == {"topic": "Spanish", "count": 2, "user_query": "animals"}
    assert flashcard_set.topic == "Spanish"
    assert [c.front for c in flashcard_set.flashcards] == ["hola", "gato"]
    assert all(c.set_id == flashcard_set.id for c in flashcard_set.flashcards)
    assert flashcard_set.user_id is None


def test_http_generator_regenerate_sends_existing_cards():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"topic": "Spanish", "flashcards": [{"front": "perro", "back": "dog"}]})

    existing = make_set(user_id="u1", cards=[("hola", "hello")])
    flashcard_set = run(make_http_generator(handler, api_key=None).regenerate(existing, "harder"))

    assert seen["path"] == "/regenerate"
    assert seen["body"] == {
        "flashcard_set": {"topic": "Spanish", "flashcards": [{"front": "hola", "back": "hello"}]},
        "regeneration_prompt": "harder",
    }
    assert flashcard_set.flashcards[0].front == "perro"
    assert flashcard_set.id != existing.id


def test_http_generator_failures_return_none():
    def server_error(request):
        return httpx.Response(502, text="upstream down")

    def bad_payload(request):
        return httpx.Response(200, json={"topic": "x", "flashcards": [{"front": "", "back": "y"}]})

    def not_json(request):
        return httpx.Response(200, text="<html>")

    def unreachable(request):
        raise httpx.ConnectError("refused", request=request)

    for handler in (server_error, bad_payload, not_json, unreachable):
        assert run(make_http_generator(handler).generate("x", 1)) is None


def test_successful_generation_is_recorded_and_owned():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(default_limit=1, window_ms=DAY_MS, clock=clock)
    svc = GenerationService(StubGenerator(), limiter)

    assert svc.available
    assert svc.check("u1") == RateLimitOk()

    flashcard_set = run(svc.generate("u1", "Spanish", 3))

    assert flashcard_set.user_id == "u1"
    assert flashcard_set.card_count == 3
    result = svc.check("u1")
    assert isinstance(result, RateLimitExceeded)
    assert result.try_again_at == clock.now + DAY_MS


def test_failed_generation_is_not_recorded():
    limiter = InMemoryRateLimiter(default_limit=1, window_ms=DAY_MS, clock=FakeClock())
    generator = StubGenerator()
    generator.fail = True
    svc = GenerationService(generator, limiter)

    assert run(svc.generate("u1", "Spanish", 3)) is None
    assert run(svc.regenerate("u1", make_set(user_id="u1"), "")) is None
    assert svc.check("u1") == RateLimitOk()


def test_service_without_generator_is_unavailable():
    svc = GenerationService(None, InMemoryRateLimiter())
    assert not svc.available
