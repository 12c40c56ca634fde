"""Ability Description Cache — cached English ability text from the upstream API.

Invariants:
    - Every read and write of the cache map happens under one threading.Lock,
      held only for the map operation and never across the network call
    - Only successful resolutions are cached; failures leave the key unfetched
    - Every upstream failure (timeout, transport error, non-2xx status, bad body,
      no English entry) returns None; the LookupFailure kind is logged only
    - Entries never expire and are never evicted (growth bounded by the number
      of distinct abilities requested)

Design Decisions:
    - Concurrent misses for the same URL may both fetch; last writer wins.
      No request de-duplication
    - httpx.AsyncClient injected: lifespan owns it, tests pass a MockTransport
    - The timeout bounds the whole request (asyncio.wait_for), not only each
      connect/read phase; redirects are followed and the result is cached
      under the requested URL
    - Internal AbilityLookupError keeps failure kinds apart for logs while the
      outward result stays a plain None
"""

import asyncio
import logging
import threading

import httpx
from pydantic import ValidationError

from pokedex.core.domain_types import LookupFailure
from pokedex.core.errors import AbilityLookupError
from pokedex.schemas.ability import AbilityDescription, AbilityDetail

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class AbilityDescriptionCache:
    """URL → AbilityDescription cache in front of an HTTP GET."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._client = client
        self._timeout = timeout_seconds
        self._cache: dict[str, AbilityDescription] = {}
        self._lock = threading.Lock()

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    def peek(self, url: str) -> AbilityDescription | None:
        """Cached description for url, without fetching."""
        with self._lock:
            return self._cache.get(url)

    def cached_count(self) -> int:
        with self._lock:
            return len(self._cache)

    async def describe(self, url: str) -> AbilityDescription | None:
        """Resolve the English description of the ability at url, or None."""
        if not url or not url.strip():
            logger.warning(
                "Ability URL is blank",
                extra={"failure": LookupFailure.BLANK_KEY.value},
            )
            return None

        cached = self.peek(url)
        if cached is not None:
            logger.debug(
                "Ability description found in cache",
                extra={"ability_url": url},
            )
            return cached

        try:
            description = await self._fetch(url)
        except AbilityLookupError as e:
            logger.warning(
                e.message,
                extra={
                    "ability_url": url,
                    "failure": e.failure.value,
                    "error_code": e.code,
                },
            )
            return None

        with self._lock:
            self._cache[url] = description
        logger.debug(
            f"Cached ability description for: {description.name}",
            extra={"ability_url": url},
        )
        return description

    async def _fetch(self, url: str) -> AbilityDescription:
        logger.debug("Fetching ability description", extra={"ability_url": url})
        try:
            response = await asyncio.wait_for(
                self._client.get(
                    url, timeout=self._timeout, follow_redirects=True,
                ),
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            raise AbilityLookupError(url, LookupFailure.TIMEOUT, str(e)) from e
        except asyncio.TimeoutError as e:
            raise AbilityLookupError(
                url, LookupFailure.TIMEOUT,
                f"no complete response within {self._timeout}s",
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AbilityLookupError(url, LookupFailure.TRANSPORT, str(e)) from e

        if not response.is_success:
            raise AbilityLookupError(
                url, LookupFailure.HTTP_STATUS, f"status {response.status_code}",
            )

        try:
            detail = AbilityDetail.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(
                "Ability body could not be parsed",
                extra={"ability_url": url, "failure": LookupFailure.PARSE.value},
            )
            raise AbilityLookupError(
                url, LookupFailure.PARSE, f"{e.error_count()} error(s)",
            ) from e

        english = detail.english_entry()
        if english is None:
            raise AbilityLookupError(
                url, LookupFailure.NO_ENGLISH_ENTRY,
                f"no English description for {detail.name}",
            )
        return AbilityDescription(name=detail.name, effect=english.effect)


# Singleton (initialized on startup)
ability_cache: AbilityDescriptionCache | None = None


def init_ability_cache(
    client: httpx.AsyncClient, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> AbilityDescriptionCache:
    global ability_cache
    ability_cache = AbilityDescriptionCache(client, timeout_seconds)
    return ability_cache


def get_ability_cache() -> AbilityDescriptionCache:
    """FastAPI dependency for the ability description cache."""
    if not ability_cache:
        raise RuntimeError("Ability cache not initialized")
    return ability_cache
