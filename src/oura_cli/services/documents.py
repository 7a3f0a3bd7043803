"""List/get access to tag, enhanced_tag and session documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import quote

from pydantic import BaseModel

from oura_cli.client import OuraClient
from oura_cli.models.usercollection import DocumentPage, EnhancedTag, Session, Tag
from oura_cli.utils.output import truncate

LABEL_WIDTH = 60


@dataclass(frozen=True)
class DocumentKind:
    """What differs between the listable document types."""
    name: str
    title: str
    singular: str
    path: str
    model: type[BaseModel]
    columns: list[str]
    row: Callable[[Any], dict[str, str]]
    fields: Callable[[Any], list[tuple[str, Any]]]


def _first_non_empty(*values: str | None) -> str:
    for value in values:
        if value:
            return value
    return ""


def _tag_row(tag: Tag) -> dict[str, str]:
    label = tag.text or ",".join(tag.tags)
    return {"id": tag.id, "day": tag.day, "label": truncate(label, LABEL_WIDTH)}


def _tag_fields(tag: Tag) -> list[tuple[str, Any]]:
    return [
        ("ID", tag.id),
        ("Day", tag.day),
        ("Timestamp", tag.timestamp),
        ("Text", tag.text),
        ("Tags", ", ".join(tag.tags)),
    ]


def _enhanced_tag_row(tag: EnhancedTag) -> dict[str, str]:
    days = tag.start_day or ""
    if tag.end_day and tag.end_day != tag.start_day:
        days = f"{days}..{tag.end_day}"
    label = _first_non_empty(tag.custom_name, tag.comment, tag.tag_type_code)
    return {"id": tag.id, "day": days, "label": truncate(label, LABEL_WIDTH)}


def _enhanced_tag_fields(tag: EnhancedTag) -> list[tuple[str, Any]]:
    return [
        ("ID", tag.id),
        ("Type", tag.tag_type_code),
        ("Start day", tag.start_day),
        ("End day", tag.end_day),
        ("Start", tag.start_time),
        ("End", tag.end_time),
        ("Name", tag.custom_name),
        ("Comment", tag.comment),
    ]


def _session_row(session: Session) -> dict[str, str]:
    label = _first_non_empty(session.type, session.mood)
    return {"id": session.id, "day": session.day, "label": truncate(label, LABEL_WIDTH)}


def _session_fields(session: Session) -> list[tuple[str, Any]]:
    return [
        ("ID", session.id),
        ("Day", session.day),
        ("Type", session.type),
        ("Mood", session.mood),
        ("Start", session.start_datetime),
        ("End", session.end_datetime),
    ]


_COLUMNS = ["id", "day", "label"]

TAG = DocumentKind("tag", "Tags", "Tag", "/tag", Tag, _COLUMNS, _tag_row, _tag_fields)
ENHANCED_TAG = DocumentKind(
    "enhanced_tag", "Enhanced tags", "Enhanced tag", "/enhanced_tag", EnhancedTag, _COLUMNS,
    _enhanced_tag_row, _enhanced_tag_fields,
)
SESSION = DocumentKind("session", "Sessions", "Session", "/session", Session, _COLUMNS, _session_row, _session_fields)

DOCUMENT_KINDS: dict[str, DocumentKind] = {kind.name: kind for kind in (TAG, ENHANCED_TAG, SESSION)}


class DocumentService:
    """List and get documents of one kind."""

    def __init__(self, client: OuraClient, kind: DocumentKind) -> None:
        self._client = client
        self.kind = kind

    def list_raw(self, query: dict[str, str] | None = None) -> bytes:
        return self._client.api_get(self.kind.path, query)

    def get_raw(self, document_id: str) -> bytes:
        return self._client.api_get(f"{self.kind.path}/{quote(document_id, safe='')}")

    def parse_page(self, body: bytes) -> DocumentPage:
        return DocumentPage[self.kind.model].model_validate_json(body)

    def parse_document(self, body: bytes) -> BaseModel:
        return self.kind.model.model_validate_json(body)
