"""Flatten nested payloads into multipart form fields for upload links."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import IO, Any, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel

FormPayload = Union[Mapping[str, Any], BaseModel]


@dataclass(frozen=True)
class FileInfo:
    """A file part. ``data`` is raw bytes or an open binary file."""

    file_name: str
    data: Union[bytes, IO[bytes]]
    content_type: Optional[str] = None


class FormData:
    """Ordered multipart fields; repeated names are allowed."""

    def __init__(self) -> None:
        self._fields: List[Tuple[str, Any]] = []

    def append(self, name: str, value: Any) -> None:
        self._fields.append((name, value))

    @property
    def fields(self) -> List[Tuple[str, Any]]:
        return list(self._fields)

    def has_files(self) -> bool:
        return any(isinstance(v, FileInfo) for _, v in self._fields)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def to_httpx_files(self) -> List[Tuple[str, Tuple[Any, ...]]]:
        """
        Render as an httpx ``files`` list.
        Plain fields get a None filename so they are sent as form values.
        """
        parts = []
        for name, value in self._fields:
            if isinstance(value, FileInfo):
                parts.append((name, (value.file_name, value.data, value.content_type)))
            else:
                parts.append((name, (None, field_text(value))))
        return parts


def field_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(field_text(v) for v in value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _is_record(value: Any) -> bool:
    # Only mappings are recursed; sequences, dates and files are leaf values.
    return isinstance(value, Mapping)


def json_to_form_data(
    payload: FormPayload,
    form_data: Optional[FormData] = None,
    parent_key: Optional[str] = None,
) -> FormData:
    """
    Flatten ``payload`` into ``form_data``.

    Nested mappings produce dotted names (``{"a": {"b": 1}}`` -> ``a.b``).
    Everything else, lists included, is appended under its own name as a
    single value.
    """
    form = form_data if form_data is not None else FormData()
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True)

    for key, value in payload.items():
        name = f"{parent_key}.{key}" if parent_key else key
        if _is_record(value):
            json_to_form_data(value, form, name)
        else:
            form.append(name, value)
    return form


__all__ = ["FileInfo", "FormData", "FormPayload", "field_text", "json_to_form_data"]
