from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..error_mapper import map_error
from ..exceptions import ApiError, LocalValidationError, NotFound, PermissionDenied, ServerError
from ..http_client import ApiResponse, HttpClient, build_query, parse_error
from ..models import Page, WireModel, diff_changes
from ..pagination import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=WireModel)

SUCCESS_STATUSES = frozenset({200, 201})
DELETE_STATUSES = frozenset({200, 201, 204})


@dataclass
class BaseClient:
    http: HttpClient

    def _request(self, method: str, path: str, body: Mapping[str, Any] | None = None) -> ApiResponse:
        return self.http.request(method, path, json_body=body, include_auth=True)

    @staticmethod
    def _payload(response: ApiResponse) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise ServerError(
                message=f"Invalid response from server (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise ServerError(
                message="Invalid response format: expected a JSON object",
                status_code=response.status_code,
            )
        return payload


class ResourceClient(BaseClient, Generic[T]):
    """CRUD and paginated listing for one backend collection.

    Subclasses set the collection ``path``, the envelope keys and the model.
    ``query_model`` declares the accepted list filters.
    """

    path: ClassVar[str]
    create_path: ClassVar[str | None] = None
    list_key: ClassVar[str]
    item_key: ClassVar[str]
    model: ClassVar[type[WireModel]]
    query_model: ClassVar[type[BaseModel]]
    noun: ClassVar[str]

    @property
    def _plural(self) -> str:
        return self.list_key

    def _fail(self, response: ApiResponse, verb: str) -> ApiError:
        status = response.status_code
        message = parse_error(response)
        logger.warning(
            "resource_request_failed",
            extra={"resource": self.list_key, "verb": verb, "status_code": status, "reason": message},
        )
        if status == 403:
            return PermissionDenied(
                message=f"You do not have permission to {verb} {self._plural}",
                status_code=403,
                code="PERMISSION_DENIED",
                details=message,
            )
        if status == 404:
            return NotFound(
                message=f"{self.noun} not found",
                status_code=404,
                code="NOT_FOUND",
                details=message,
            )
        return map_error(status, message)

    def _parse_item(self, data: Any) -> T:
        try:
            return self.model.from_wire(data)  # type: ignore[return-value]
        except (PydanticValidationError, TypeError) as exc:
            raise ServerError(message=f"Invalid {self.item_key} data from server: {exc}") from exc

    def _item_from(self, response: ApiResponse) -> T:
        payload = self._payload(response)
        data = payload.get(self.item_key)
        if not isinstance(data, Mapping):
            raise ServerError(
                message=f"Invalid response format: missing {self.item_key}",
                status_code=response.status_code,
            )
        return self._parse_item(data)

    def _filters(self, filters: BaseModel | Mapping[str, Any] | None) -> dict[str, Any]:
        if filters is None:
            return {}
        if not isinstance(filters, self.query_model):
            try:
                filters = self.query_model.model_validate(dict(filters))
            except PydanticValidationError as exc:
                error = exc.errors()[0]
                field = ".".join(str(part) for part in error["loc"]) or None
                raise LocalValidationError(f"Invalid filter {field}: {error['msg']}", field=field) from exc
        return filters.model_dump(exclude_none=True)

    def _parse_page(self, payload: Mapping[str, Any]) -> Page[T]:
        raw_items = payload.get(self.list_key)
        if raw_items is None:
            logger.warning("resource_list_key_missing", extra={"resource": self.list_key})
            return Page(items=[], metadata={})
        if not isinstance(raw_items, list):
            raise ServerError(message=f"Invalid response format: {self.list_key} field is not a list")
        items: list[T] = []
        for index, raw in enumerate(raw_items):
            if not isinstance(raw, Mapping):
                logger.warning("resource_item_skipped", extra={"resource": self.list_key, "index": index})
                continue
            try:
                items.append(self._parse_item(raw))
            except ServerError as exc:
                logger.error(
                    "resource_item_parse_failed",
                    extra={"resource": self.list_key, "index": index, "reason": exc.message},
                )
        metadata = payload.get("metadata")
        return Page(items=items, metadata=dict(metadata) if isinstance(metadata, Mapping) else {})

    def list(
        self,
        filters: BaseModel | Mapping[str, Any] | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort: str = "id",
    ) -> Page[T]:
        params = {**self._filters(filters), "page": page, "page_size": page_size, "sort": sort}
        endpoint = build_query(self.path, params)
        logger.info("resource_list", extra={"resource": self.list_key, "page": page, "page_size": page_size})
        response = self._request("GET", endpoint)
        if response.status_code != 200:
            raise self._fail(response, "view")
        result = self._parse_page(self._payload(response))
        logger.info(
            "resource_list_success",
            extra={"resource": self.list_key, "count": len(result.items), "metadata": result.metadata},
        )
        return result

    def get(self, item_id: int) -> T:
        response = self._request("GET", f"{self.path}/{item_id}")
        if response.status_code != 200:
            raise self._fail(response, "view")
        return self._item_from(response)

    def create(self, fields: Mapping[str, Any]) -> T:
        logger.info("resource_create", extra={"resource": self.list_key, "fields": sorted(fields)})
        response = self._request("POST", self.create_path or self.path, dict(fields))
        if response.status_code not in SUCCESS_STATUSES:
            raise self._fail(response, "create")
        return self._item_from(response)

    def update(self, item_id: int, changes: Mapping[str, Any], current: T | None = None) -> T | None:
        """Send only the fields that differ from ``current``.

        With nothing to change no request is made and ``current`` is returned.
        """
        diff = diff_changes(current, changes)
        if not diff:
            logger.info("resource_update_skipped", extra={"resource": self.list_key, "id": item_id})
            return current
        logger.info("resource_update", extra={"resource": self.list_key, "id": item_id, "fields": sorted(diff)})
        response = self._request("PUT", f"{self.path}/{item_id}", diff)
        if response.status_code not in SUCCESS_STATUSES:
            raise self._fail(response, "update")
        return self._item_from(response)

    def delete(self, item_id: int) -> None:
        logger.info("resource_delete", extra={"resource": self.list_key, "id": item_id})
        response = self._request("DELETE", f"{self.path}/{item_id}")
        if response.status_code not in DELETE_STATUSES:
            raise self._fail(response, "delete")
