"""
Shared fixtures: fake clock for the rate limiter, envelope builders, and a
stand-in search client so agent tests never touch GitHub.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from app.schemas.envelope import Envelope
from app.schemas.search import Repository, SearchResult

AGENT_SPEAKER_URI = "tag:test,2025:github-agent"
AGENT_SERVICE_URL = "http://agent.test"
USER_SPEAKER_URI = "tag:test,2025:user"
FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Monotonic clock whose sleep just moves time forward."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


class FakeSearchClient:
    """Records search terms; returns a canned result or raises a canned error."""

    def __init__(self, result: SearchResult | None = None, error: Exception | None = None) -> None:
        self.result = result or SearchResult()
        self.error = error
        self.calls: list[str] = []

    async def search(self, term: str, max_results: int = 5) -> SearchResult:
        self.calls.append(term)
        if self.error is not None:
            raise self.error
        return self.result


def repo(
    name: str = "repo",
    stars: int = 100,
    forks: int = 10,
    language: str | None = "Python",
    days_ago: int | None = 1,
    description: str | None = "A repository",
) -> Repository:
    return Repository(
        name=name,
        description=description,
        stargazers_count=stars,
        forks_count=forks,
        language=language,
        updated_at=FIXED_NOW - timedelta(days=days_ago) if days_ago is not None else None,
        html_url=f"https://github.com/example/{name}",
    )


def utterance(text_tokens: Any, to: dict | None = None) -> dict:
    event: dict[str, Any] = {
        "eventType": "utterance",
        "parameters": {
            "dialogEvent": {
                "speakerUri": USER_SPEAKER_URI,
                "features": {"text": {"mimeType": "text/plain", "tokens": text_tokens}},
            }
        },
    }
    if to is not None:
        event["to"] = to
    return event


def tokens(*values: str) -> list[dict]:
    return [{"value": v} for v in values]


def envelope_dict(*events: dict, conversation_id: str = "conv-1", version: str = "1.0.0") -> dict:
    return {
        "schema": {"version": version},
        "conversation": {"id": conversation_id},
        "sender": {"speakerUri": USER_SPEAKER_URI, "serviceUrl": "http://floor.test"},
        "events": list(events),
    }


def make_envelope(*events: dict, **kwargs: Any) -> Envelope:
    return Envelope.model_validate(envelope_dict(*events, **kwargs))


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
