"""Pydantic models for tracking plan, event and property documents."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from trackplan.domain.model import EventType, PropertyType  # noqa: TC001


class DocumentModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class PropertyDocument(DocumentModel):
    name: str = Field(min_length=1)
    type: PropertyType
    description: str
    validation_rules: dict[str, Any] | None = None


class PlanPropertyDocument(PropertyDocument):
    required: bool = False


class EventDocument(DocumentModel):
    name: str = Field(min_length=1)
    type: EventType
    description: str


class PlanEventDocument(EventDocument):
    additional_properties: bool = Field(default=False, alias="additionalProperties")
    properties: list[PlanPropertyDocument] = Field(
        default_factory=list["PlanPropertyDocument"]
    )


class TrackingPlanDocument(DocumentModel):
    name: str = Field(min_length=1)
    description: str
    create_time: datetime | None = None
    events: list[PlanEventDocument] = Field(default_factory=list["PlanEventDocument"])


class TrackingPlanUpdateDocument(DocumentModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    events: list[PlanEventDocument] | None = None


class EventCreateDocument(EventDocument):
    create_time: datetime | None = None


class EventUpdateDocument(DocumentModel):
    name: str | None = Field(default=None, min_length=1)
    type: EventType | None = None
    description: str | None = None


class PropertyCreateDocument(PropertyDocument):
    create_time: datetime | None = None


class PropertyUpdateDocument(DocumentModel):
    name: str | None = Field(default=None, min_length=1)
    type: PropertyType | None = None
    description: str | None = None
    validation_rules: dict[str, Any] | None = None
