"""
Schemas for the Open Floor envelope: only the parts this agent reads or writes.

Events form a closed set of kinds. Anything that is not an utterance or a
manifest exchange is kept as OtherEvent so the agent can skip it.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

UTTERANCE = "utterance"
GET_MANIFESTS = "getManifests"
PUBLISH_MANIFESTS = "publishManifests"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class To(_Frozen):
    """Addressee of an event. Missing on broadcast events."""

    speaker_uri: str | None = Field(None, alias="speakerUri")
    service_url: str | None = Field(None, alias="serviceUrl")


class Sender(_Frozen):
    speaker_uri: str = Field(..., alias="speakerUri")
    service_url: str | None = Field(None, alias="serviceUrl")


class Schema(_Frozen):
    version: str = Field(..., description="Open Floor schema version, echoed back unchanged.")
    url: str | None = None


class Conversation(_Frozen):
    id: str = Field(..., description="Conversation id, echoed back unchanged.")


class UtteranceEvent(_Frozen):
    """A natural-language turn. Text lives in parameters.dialogEvent.features.text.tokens."""

    event_type: Literal["utterance"] = Field(UTTERANCE, alias="eventType")
    to: To | None = None
    parameters: Any = Field(default_factory=dict)


class GetManifestsEvent(_Frozen):
    """Capability discovery request."""

    event_type: Literal["getManifests"] = Field(GET_MANIFESTS, alias="eventType")
    to: To | None = None
    parameters: Any = Field(default_factory=dict)


class PublishManifestsEvent(_Frozen):
    """Answer to getManifests: parameters.servicingManifests holds our manifest."""

    event_type: Literal["publishManifests"] = Field(PUBLISH_MANIFESTS, alias="eventType")
    to: To | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)


class OtherEvent(_Frozen):
    """Any event kind this agent does not handle (invite, bye, context, ...)."""

    event_type: str | None = Field(None, alias="eventType")
    to: To | None = None
    parameters: Any = Field(default_factory=dict)


_KNOWN_EVENT_TYPES = frozenset({UTTERANCE, GET_MANIFESTS, PUBLISH_MANIFESTS})


def _event_kind(value: Any) -> str:
    if isinstance(value, dict):
        event_type = value.get("eventType", value.get("event_type"))
    else:
        event_type = getattr(value, "event_type", None)
    return event_type if event_type in _KNOWN_EVENT_TYPES else "other"


Event = Annotated[
    Union[
        Annotated[UtteranceEvent, Tag(UTTERANCE)],
        Annotated[GetManifestsEvent, Tag(GET_MANIFESTS)],
        Annotated[PublishManifestsEvent, Tag(PUBLISH_MANIFESTS)],
        Annotated[OtherEvent, Tag("other")],
    ],
    Discriminator(_event_kind),
]


class Envelope(_Frozen):
    """One Open Floor message: who sent it, in which conversation, and its events."""

    schema_: Schema = Field(..., alias="schema")
    conversation: Conversation
    sender: Sender
    events: list[Event] = Field(default_factory=list)


class Payload(_Frozen):
    """Wire wrapper: {"openFloor": {...envelope...}}."""

    open_floor: Envelope = Field(..., alias="openFloor")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def text_utterance(speaker_uri: str, text: str, to: To | None = None) -> UtteranceEvent:
    """Build a plain-text utterance event from this speaker."""
    return UtteranceEvent(
        to=to,
        parameters={
            "dialogEvent": {
                "speakerUri": speaker_uri,
                "features": {
                    "text": {
                        "mimeType": "text/plain",
                        "tokens": [{"value": text}],
                    }
                },
            }
        },
    )


def utterance_payload(
    text: str,
    conversation_id: str,
    speaker_uri: str,
    to: To | None = None,
    version: str = "1.0.0",
) -> dict[str, Any]:
    """Wire payload carrying a single utterance, as a client of the agent would send it."""
    envelope = Envelope(
        schema=Schema(version=version),
        conversation=Conversation(id=conversation_id),
        sender=Sender(speaker_uri=speaker_uri),
        events=[text_utterance(speaker_uri, text, to=to)],
    )
    return Payload(open_floor=envelope).to_wire()


def utterance_text(event: UtteranceEvent) -> str | None:
    """
    Concatenate the token values of an utterance.

    Returns None when the utterance has no tokens; tokens with empty values
    give "". Raises ValueError when parameters or features are present but not
    shaped like Open Floor text features.
    """
    if not isinstance(event.parameters, dict):
        raise ValueError("utterance parameters must be an object")
    dialog_event = event.parameters.get("dialogEvent") or {}
    if not isinstance(dialog_event, dict):
        raise ValueError("dialogEvent must be an object")
    features = dialog_event.get("features") or {}
    if not isinstance(features, dict):
        raise ValueError("dialogEvent.features must be an object")
    text_feature = features.get("text") or {}
    if not isinstance(text_feature, dict):
        raise ValueError("features.text must be an object")
    tokens = text_feature.get("tokens") or []
    if not isinstance(tokens, list):
        raise ValueError("features.text.tokens must be a list")
    if not tokens:
        return None
    values = []
    for token in tokens:
        value = token.get("value") if isinstance(token, dict) else None
        if not isinstance(value, str):
            raise ValueError(f"token without a text value: {token!r}")
        values.append(value)
    return "".join(values)
