from __future__ import annotations

import json
import logging
from datetime import time
from pathlib import Path
from types import MappingProxyType
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from app.application.exceptions import ClientConfigError
from app.application.ports.client_registry import ClientRegistryPort
from app.domain.entities.client_config import ClientConfig, WorkingHours


class ClientConfigModel(BaseModel):
    phone_number_id: str
    name: str = ""
    timezone: str = "Europe/Belgrade"
    slot_minutes: int = Field(default=30, gt=0)
    working_hours: dict[int, tuple[time, time]] = Field(default_factory=dict)
    services: list[str] = Field(min_length=1)
    calendar_ids: list[str] = Field(min_length=1)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {value!r}") from e
        return value

    @field_validator("working_hours")
    @classmethod
    def _valid_hours(cls, value: dict[int, tuple[time, time]]) -> dict[int, tuple[time, time]]:
        for weekday, (opens_at, closes_at) in value.items():
            if not 1 <= weekday <= 7:
                raise ValueError(f"weekday must be 1-7, got {weekday}")
            if opens_at >= closes_at:
                raise ValueError(f"weekday {weekday}: opening {opens_at} is not before closing {closes_at}")
        return value

    @model_validator(mode="after")
    def _strip_names(self) -> "ClientConfigModel":
        self.services = [s.strip() for s in self.services if s.strip()]
        if not self.services:
            raise ValueError("at least one non-empty service is required")
        return self

    def to_entity(self) -> ClientConfig:
        return ClientConfig(
            routing_key=self.phone_number_id,
            name=self.name,
            timezone=self.timezone,
            slot_minutes=self.slot_minutes,
            working_hours=MappingProxyType(
                {
                    weekday: WorkingHours(opens_at=opens_at, closes_at=closes_at)
                    for weekday, (opens_at, closes_at) in self.working_hours.items()
                }
            ),
            services=tuple(self.services),
            calendar_ids=tuple(self.calendar_ids),
        )


class JsonClientRegistry(ClientRegistryPort):
    def __init__(self, clients: list[ClientConfig]) -> None:
        self._clients: dict[str, ClientConfig] = {}
        for client in clients:
            if client.routing_key in self._clients:
                raise ClientConfigError(f"Duplicate phone_number_id {client.routing_key!r}")
            self._clients[client.routing_key] = client

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> "JsonClientRegistry":
        try:
            models = [ClientConfigModel.model_validate(record) for record in records]
        except ValidationError as e:
            raise ClientConfigError(f"Invalid client configuration: {e}") from e
        return cls([model.to_entity() for model in models])

    @classmethod
    def from_file(cls, path: str | Path) -> "JsonClientRegistry":
        logger = logging.getLogger(__name__)
        try:
            records = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ClientConfigError(f"Cannot read client configuration from {path}: {e}") from e
        if not isinstance(records, list):
            raise ClientConfigError("Client configuration must be a JSON list")

        registry = cls.from_records(records)
        logger.info("Loaded client configuration", extra={"path": str(path), "clients": len(registry.all())})
        return registry

    def get(self, routing_key: str) -> ClientConfig | None:
        return self._clients.get(routing_key)

    def all(self) -> list[ClientConfig]:
        return list(self._clients.values())
