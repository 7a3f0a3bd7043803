"""Date-scoped user-collection queries (sleep, activity, readiness, ...)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import TypeVar

from pydantic import BaseModel

from oura_cli.client import OuraClient
from oura_cli.models.reports import EndpointResult, EndpointsReport
from oura_cli.models.usercollection import DocumentPage
from oura_cli.utils.dates import DATE_FORMAT, padded_range

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class DateCommand:
    """Endpoints a date command reads and how far its range is padded."""
    name: str
    endpoints: tuple[str, ...]
    pad_days: int


ALL_ENDPOINTS = (
    "/sleep",
    "/daily_sleep",
    "/daily_activity",
    "/daily_readiness",
    "/heartrate",
    "/daily_stress",
    "/daily_spo2",
    "/daily_resilience",
    "/vO2_max",
    "/workout",
)

DATE_COMMANDS: dict[str, DateCommand] = {
    cmd.name: cmd
    for cmd in (
        DateCommand("sleep", ("/sleep", "/daily_sleep"), 1),
        DateCommand("activity", ("/daily_activity",), 1),
        DateCommand("readiness", ("/daily_readiness",), 1),
        DateCommand("heartrate", ("/heartrate",), 0),
        DateCommand("hrv", ("/sleep", "/daily_sleep", "/daily_readiness"), 1),
        DateCommand("stress", ("/daily_stress",), 0),
        DateCommand("spo2", ("/daily_spo2",), 0),
        DateCommand("resilience", ("/daily_resilience",), 0),
        DateCommand("vo2", ("/vO2_max",), 0),
        DateCommand("workout", ("/workout",), 0),
        DateCommand("all", ALL_ENDPOINTS, 1),
    )
}
# `today` is `all` for the current date
DATE_COMMANDS["today"] = DATE_COMMANDS["all"]


class DailyService:
    """Fetches date-range documents for the date commands."""

    def __init__(self, client: OuraClient) -> None:
        self._client = client

    def report(self, command: str, day: date) -> EndpointsReport:
        """Query every endpoint of a date command, keeping raw bodies.

        A failing endpoint, or one whose body is not JSON, records an error
        and the remaining endpoints are still queried, in order.
        """
        entry = DATE_COMMANDS[command]
        start_date, end_date = padded_range(day, entry.pad_days, entry.pad_days)
        query = {"start_date": start_date, "end_date": end_date}

        report = EndpointsReport(
            command=entry.name,
            date=day.strftime(DATE_FORMAT),
            start_date=start_date,
            end_date=end_date,
        )
        for path in entry.endpoints:
            name = path.lstrip("/")
            try:
                body = self._client.api_get(path, query)
            except RuntimeError as e:
                logger.info(f"{path} failed: {e}")
                report.endpoints[name] = EndpointResult(error=str(e))
                continue
            if body.strip():
                try:
                    json.loads(body.decode("utf-8"))
                except ValueError as e:
                    # Bodies are spliced into the envelope verbatim
                    report.endpoints[name] = EndpointResult(error=f"invalid JSON from {path}: {e}")
                    continue
            report.endpoints[name] = EndpointResult(data=body)
        return report

    def fetch(self, path: str, model: type[M], start_date: str, end_date: str) -> DocumentPage[M]:
        """GET a multi-document endpoint for a date range and parse it."""
        body = self._client.api_get(path, {"start_date": start_date, "end_date": end_date})
        return DocumentPage[model].model_validate_json(body)

    def fetch_day(self, path: str, model: type[M], day: date, pad_days: int) -> list[M]:
        """Documents from a padded range whose `day` equals the requested date."""
        start_date, end_date = padded_range(day, pad_days, pad_days)
        page = self.fetch(path, model, start_date, end_date)
        wanted = day.strftime(DATE_FORMAT)
        return [doc for doc in page.data if getattr(doc, "day", wanted) == wanted]
