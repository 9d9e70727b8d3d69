"""Resource store boundary and a JSON-directory implementation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

from models import Resource
from services.normalizer import normalize_resource
from services.observability import LogContext, get_logger
from services.schemas import RESOURCE_SCHEMA
from services.validator import ContentValidationError, validate_json_payload


class ResourceStore(Protocol):
    """Anything that can look a resource up by id."""

    def get_resource_by_id(self, resource_id: str) -> Resource | None: ...


class JsonResourceStore:
    """Read resources from ``<directory>/<resource_id>.json`` records."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory
        self._logger = get_logger()

    def get_resource_by_id(self, resource_id: str) -> Resource | None:
        """Return the normalized resource, or ``None`` when no record exists."""
        path = self._record_path(resource_id)
        context = LogContext(resource_id=resource_id)
        if not path.is_file():
            self._logger.info("resource_missing", context=context, path=str(path))
            return None

        try:
            payload: Any = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, RecursionError) as exc:
            self._logger.error("resource_invalid", context=context, error=str(exc))
            raise ContentValidationError(f"Resource {resource_id} is not valid JSON") from exc

        if not isinstance(payload, dict):
            self._logger.error("resource_invalid", context=context, error="not an object")
            raise ContentValidationError(f"Resource {resource_id} must be a JSON object")

        try:
            validate_json_payload(payload, RESOURCE_SCHEMA)
        except ContentValidationError as exc:
            self._logger.error("resource_invalid", context=context, error=str(exc))
            raise

        resource = normalize_resource(payload)
        tab_count = len(resource.content.tabs) if resource.content else 0
        self._logger.info("resource_loaded", context=context, tab_count=tab_count)
        return resource

    def _record_path(self, resource_id: str) -> Path:
        if not resource_id or "/" in resource_id or "\\" in resource_id or resource_id in {".", ".."}:
            raise ContentValidationError(f"Invalid resource id: {resource_id!r}")
        return self._directory / f"{resource_id}.json"
