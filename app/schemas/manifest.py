"""Schemas for the agent manifest returned on getManifests."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Identification(BaseModel):
    """Who the agent is."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    speaker_uri: str = Field(..., alias="speakerUri")
    service_url: str = Field(..., alias="serviceUrl")
    organization: str | None = None
    conversational_name: str | None = Field(None, alias="conversationalName")
    synopsis: str | None = None


class Capability(BaseModel):
    """What the agent can help with."""

    model_config = ConfigDict(frozen=True)

    keyphrases: list[str] = Field(default_factory=list)
    descriptions: list[str] = Field(default_factory=list)


class Manifest(BaseModel):
    """Static self-description, returned verbatim on capability discovery."""

    model_config = ConfigDict(frozen=True)

    identification: Identification
    capabilities: list[Capability] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
