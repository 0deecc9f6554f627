import logging
from typing import Protocol

import httpx
from pydantic import ValidationError

from repositories.rate_limiter import RateLimiter
from schemas.flashcard import FlashcardSet, FlashcardSetRaw
from schemas.rate_limit import RateLimitExceeded, RateLimitResult

logger = logging.getLogger(__name__)


class FlashcardGenerator(Protocol):
    """Produces flashcard sets; ``None`` means the generation failed."""

    async def generate(self, topic: str, count: int, user_query: str = "") -> FlashcardSet | None:
        ...

    async def regenerate(self, existing_set: FlashcardSet, regeneration_prompt: str = "") -> FlashcardSet | None:
        ...


class HttpFlashcardGenerator:
    """Calls an external generation service over HTTP.

    The service answers ``POST /generate`` and ``POST /regenerate`` with a raw
    set ``{"topic": ..., "flashcards": [{"front": ..., "back": ...}]}``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _post(self, path: str, payload: dict) -> FlashcardSet | None:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                r = await client.post(f"{self.base_url}{path}", headers=self._headers(), json=payload)
                r.raise_for_status()
                raw = FlashcardSetRaw.model_validate(r.json())
            except (httpx.HTTPError, ValueError, ValidationError) as exc:
                logger.error(f"Generator request to {path} failed: {exc}")
                return None
        return raw.to_flashcard_set()

    async def generate(self, topic: str, count: int, user_query: str = "") -> FlashcardSet | None:
        return await self._post("/generate", {"topic": topic, "count": count, "user_query": user_query})

    async def regenerate(self, existing_set: FlashcardSet, regeneration_prompt: str = "") -> FlashcardSet | None:
        existing = {
            "topic": existing_set.topic,
            "flashcards": [{"front": c.front, "back": c.back} for c in existing_set.flashcards],
        }
        return await self._post(
            "/regenerate",
            {"flashcard_set": existing, "regeneration_prompt": regeneration_prompt},
        )


class GenerationService:
    def __init__(self, generator: FlashcardGenerator | None, rate_limiter: RateLimiter):
        self.generator = generator
        self.rate_limiter = rate_limiter

    @property
    def available(self) -> bool:
        return self.generator is not None

    def check(self, user_id: str) -> RateLimitResult:
        result = self.rate_limiter.check_rate_limit(user_id)
        if isinstance(result, RateLimitExceeded):
            logger.warning(f"Rate limit exceeded for user {user_id} ({result.count} generations)")
        return result

    async def generate(self, user_id: str, topic: str, count: int, user_query: str = "") -> FlashcardSet | None:
        flashcard_set = await self.generator.generate(topic, count, user_query)
        return self._accept(user_id, flashcard_set)

    async def regenerate(
        self, user_id: str, existing_set: FlashcardSet, regeneration_prompt: str = ""
    ) -> FlashcardSet | None:
        flashcard_set = await self.generator.regenerate(existing_set, regeneration_prompt)
        return self._accept(user_id, flashcard_set)

    def _accept(self, user_id: str, flashcard_set: FlashcardSet | None) -> FlashcardSet | None:
        if flashcard_set is None:
            return None
        flashcard_set.user_id = user_id
        self.rate_limiter.record_attempt(user_id)
        return flashcard_set
