"""
Agent: route envelope events, research technologies, and build the reply envelope.

Responsibility: Decide which events need an answer, run the query pipeline
(classify → search → analyze → render) for utterances, and answer capability
discovery with the manifest. Called by the API; no HTTP here.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Protocol

from app.core.config import SEARCH_MAX_RESULTS, SEARCH_MIN_INTERVAL_SECONDS
from app.core.errors import (
    MalformedQueryError,
    OutOfScopeQueryError,
    SearchTimeoutError,
    SearchTransportError,
)
from app.core.rate_limiter import RateLimiter
from app.schemas.envelope import (
    Envelope,
    Event,
    GetManifestsEvent,
    PublishManifestsEvent,
    Sender,
    To,
    UtteranceEvent,
    text_utterance,
    utterance_text,
)
from app.schemas.manifest import Capability, Identification, Manifest
from app.schemas.search import SearchResult
from app.services.github_client import GitHubSearchClient
from app.services.query_classifier import is_in_scope
from app.services.trend_analyzer import analyze, render_report, render_timeout_notice

logger = logging.getLogger(__name__)

NEED_TECHNOLOGY_MESSAGE = "🔧 I need a technology or framework name to research on GitHub!"
OUT_OF_SCOPE_MESSAGE = (
    "🔧 I specialize in technology trends. Try queries about programming frameworks, "
    "libraries, tools, or development technologies."
)
APOLOGY_MESSAGE = (
    "🔧 I encountered an error while searching GitHub. "
    "Please try again with a different technology name."
)


class BotAgent(Protocol):
    """Anything that can answer an Open Floor envelope."""

    async def process_envelope(self, envelope: Envelope) -> Envelope: ...


class SearchClient(Protocol):
    """Repository search backend; GitHubSearchClient in production."""

    async def search(self, term: str, max_results: int = SEARCH_MAX_RESULTS) -> SearchResult: ...


class TechTrendsAgent:
    """Technology trends and adoption research agent backed by GitHub search."""

    def __init__(
        self,
        manifest: Manifest,
        search_client: SearchClient,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.manifest = manifest
        self.search_client = search_client
        self._now = now

    @property
    def speaker_uri(self) -> str:
        return self.manifest.identification.speaker_uri

    @property
    def service_url(self) -> str:
        return self.manifest.identification.service_url

    def is_addressed_to_me(self, event: Event) -> bool:
        """Broadcast events (no "to") are for everyone."""
        if event.to is None:
            return True
        return event.to.speaker_uri == self.speaker_uri or event.to.service_url == self.service_url

    async def process_envelope(self, envelope: Envelope) -> Envelope:
        """Answer every event addressed to us, in order. Always returns an envelope, maybe with no events."""
        sender = envelope.sender.speaker_uri
        logger.info(
            "[agent:process_envelope] IN  conversation=%s sender=%s events=%d",
            envelope.conversation.id, sender, len(envelope.events),
        )
        replies: list[Event] = []
        for event in envelope.events:
            if not self.is_addressed_to_me(event):
                continue
            if isinstance(event, UtteranceEvent):
                replies.append(await self._handle_utterance(event, sender))
            elif isinstance(event, GetManifestsEvent):
                replies.append(self._publish_manifest(sender))

        logger.info("[agent:process_envelope] OUT replies=%d", len(replies))
        return Envelope(
            schema=envelope.schema_,
            conversation=envelope.conversation,
            sender=Sender(speaker_uri=self.speaker_uri, service_url=self.service_url),
            events=replies,
        )

    def _publish_manifest(self, recipient: str) -> PublishManifestsEvent:
        return PublishManifestsEvent(
            to=To(speaker_uri=recipient),
            parameters={"servicingManifests": [self.manifest.to_wire()]},
        )

    async def _handle_utterance(self, event: UtteranceEvent, recipient: str) -> UtteranceEvent:
        """Every outcome, including failures, becomes exactly one reply utterance."""
        try:
            text = await self.answer(event)
        except MalformedQueryError:
            text = NEED_TECHNOLOGY_MESSAGE
        except OutOfScopeQueryError as e:
            logger.info("[agent:handle_utterance] out of scope: %r", e.text)
            text = OUT_OF_SCOPE_MESSAGE
        except SearchTransportError as e:
            logger.warning("[agent:handle_utterance] search failed status=%s: %s", e.status, e.message)
            text = APOLOGY_MESSAGE
        except Exception:
            logger.exception("Error in GitHub research")
            text = APOLOGY_MESSAGE
        return text_utterance(self.speaker_uri, text, to=To(speaker_uri=recipient))

    async def answer(self, event: UtteranceEvent) -> str:
        """Return the reply text for one utterance; raises the domain errors the caller maps to messages."""
        technology = utterance_text(event)
        if technology is None:
            raise MalformedQueryError("utterance has no text tokens")
        if not is_in_scope(technology):
            raise OutOfScopeQueryError(technology)
        return await self.research(technology)

    async def research(self, technology: str) -> str:
        try:
            result = await self.search_client.search(technology)
        except SearchTimeoutError:
            return render_timeout_notice(technology)
        return render_report(analyze(result, technology, now=self._now()))


def build_manifest(speaker_uri: str, service_url: str, name: str, organization: str) -> Manifest:
    return Manifest(
        identification=Identification(
            speaker_uri=speaker_uri,
            service_url=service_url,
            organization=organization,
            conversational_name=name,
            synopsis="Technology trends specialist for analyzing GitHub repositories and development adoption",
        ),
        capabilities=[
            Capability(
                keyphrases=[
                    "technology", "github", "framework", "library", "programming",
                    "development", "trends", "adoption", "repositories", "open source",
                ],
                descriptions=[
                    "Analyze GitHub repositories for technology adoption trends",
                    "Research programming frameworks and library popularity",
                    "Assess development activity and community engagement metrics",
                ],
            )
        ],
    )


def create_agent(
    speaker_uri: str,
    service_url: str,
    name: str = "GitHub Technology Agent",
    organization: str = "OpenFloor Research",
    search_client: SearchClient | None = None,
) -> TechTrendsAgent:
    """Build the agent with its manifest and a rate-limited GitHub client."""
    if search_client is None:
        search_client = GitHubSearchClient(RateLimiter(SEARCH_MIN_INTERVAL_SECONDS))
    manifest = build_manifest(speaker_uri, service_url, name, organization)
    return TechTrendsAgent(manifest, search_client)
