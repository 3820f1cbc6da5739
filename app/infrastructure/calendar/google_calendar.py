from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Sequence

import google.auth
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.application.exceptions import CalendarUpstreamError
from app.application.ports.calendar import CalendarPort
from app.domain.entities.slot import BusyInterval

SCOPES = ("https://www.googleapis.com/auth/calendar",)


class GoogleCalendar(CalendarPort):
    def __init__(self, credentials_file: str | None = None, service: Any | None = None) -> None:
        self._logger = logging.getLogger(__name__)
        self._service = service or self._build_service(credentials_file)

    @staticmethod
    def _build_service(credentials_file: str | None) -> Any:
        if credentials_file:
            credentials = service_account.Credentials.from_service_account_file(credentials_file, scopes=SCOPES)
        else:
            credentials, _ = google.auth.default(scopes=SCOPES)
        return build("calendar", "v3", credentials=credentials, cache_discovery=False)

    def query_free_busy(
        self,
        calendar_ids: Sequence[str],
        start: datetime,
        end: datetime,
    ) -> dict[str, list[BusyInterval] | None]:
        body = {
            "timeMin": start.isoformat(),
            "timeMax": end.isoformat(),
            "items": [{"id": calendar_id} for calendar_id in calendar_ids],
        }
        try:
            response = self._service.freebusy().query(body=body).execute()
        except HttpError as e:
            self._logger.error("Free/busy query failed", extra={"status": e.resp.status, "error": str(e)})
            raise CalendarUpstreamError("Google free/busy query failed") from e

        result: dict[str, list[BusyInterval] | None] = {}
        calendars = response.get("calendars") or {}
        for calendar_id in calendar_ids:
            data = calendars.get(calendar_id)
            if not data or data.get("errors"):
                result[calendar_id] = None
                continue
            result[calendar_id] = [
                BusyInterval(start=_parse_rfc3339(item["start"]), end=_parse_rfc3339(item["end"]))
                for item in data.get("busy") or []
            ]
        return result

    def create_event(
        self,
        calendar_id: str,
        start: datetime,
        end: datetime,
        timezone: str,
        summary: str,
        description: str,
    ) -> str:
        body = {
            "summary": summary,
            "description": description,
            "start": {"dateTime": start.isoformat(), "timeZone": timezone},
            "end": {"dateTime": end.isoformat(), "timeZone": timezone},
        }
        try:
            event = self._service.events().insert(calendarId=calendar_id, body=body).execute()
        except HttpError as e:
            self._logger.error(
                "Event insert failed",
                extra={"calendar_id": calendar_id, "status": e.resp.status, "error": str(e)},
            )
            raise CalendarUpstreamError("Google event insert failed") from e

        event_id = event.get("id")
        if not event_id:
            raise CalendarUpstreamError("No event ID returned from Google Calendar API")
        self._logger.info("Calendar event created", extra={"calendar_id": calendar_id})
        return str(event_id)


def _parse_rfc3339(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
