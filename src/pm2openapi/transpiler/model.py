"""Postman collection (v2.x) model parsed from JSON text."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional


class TransformError(ValueError):
    """Raised when source text is not a usable Postman collection."""


@dataclass
class Variable:
    key: Optional[str] = None
    value: Any = None
    description: Optional[str] = None


@dataclass
class QueryParam:
    key: Optional[str] = None
    value: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Header:
    key: str
    value: str


@dataclass
class Url:
    protocol: Optional[str] = None
    host: Optional[List[str]] = None
    port: Optional[str] = None
    path: Optional[List[str]] = None
    query: List[QueryParam] = field(default_factory=list)
    variables: List[Variable] = field(default_factory=list)


@dataclass
class Body:
    mode: Optional[str] = None
    raw: Optional[str] = None
    urlencoded: List[Variable] = field(default_factory=list)


@dataclass
class Request:
    method: Optional[str] = None
    url: Optional[Url] = None
    headers: List[Header] = field(default_factory=list)
    body: Optional[Body] = None
    description: Optional[str] = None


@dataclass
class Response:
    name: Optional[str] = None
    code: Optional[int] = None
    body: Optional[str] = None


@dataclass
class Item:
    name: Optional[str] = None
    description: Optional[str] = None
    items: Optional[List["Item"]] = None
    request: Optional[Request] = None
    responses: List[Response] = field(default_factory=list)

    @property
    def is_folder(self) -> bool:
        return self.items is not None


@dataclass
class Collection:
    name: str
    description: Optional[str]
    items: List[Item]
    variables: List[Variable] = field(default_factory=list)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON constant '{token}'")


def parse_json(text: str) -> Any:
    """Strict JSON decoding: ``NaN`` and ``Infinity`` are rejected like any other bad token."""

    return json.loads(text, parse_constant=_reject_constant)


def load_collection(text: str) -> Collection:
    """Parse collection JSON text, raising :class:`TransformError` on bad input."""

    try:
        data = parse_json(text)
    except RecursionError as exc:
        raise TransformError("Unable to parse collection JSON: nesting too deep") from exc
    except (TypeError, ValueError) as exc:
        raise TransformError(f"Unable to parse collection JSON: {exc}") from exc
    return parse_collection(data)


def parse_collection(data: Any) -> Collection:
    if not isinstance(data, Mapping):
        raise TransformError("Collection must be a JSON object.")
    info = data.get("info")
    if not isinstance(info, Mapping):
        raise TransformError("Collection is missing the required 'info' object.")
    name = info.get("name")
    if not isinstance(name, str):
        raise TransformError("Collection 'info.name' must be a string.")
    items = data.get("item")
    if not isinstance(items, list):
        raise TransformError("Collection is missing the required 'item' array.")
    return Collection(
        name=name,
        description=_description(info.get("description"), "info.description"),
        items=[_parse_item(entry, f"item[{idx}]") for idx, entry in enumerate(items)],
        variables=_parse_variables(data.get("variable"), "variable"),
    )


def _expect_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TransformError(f"'{where}' must be an object.")
    return value


def _expect_list(value: Any, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TransformError(f"'{where}' must be an array.")
    return value


def _optional_str(value: Any, where: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return json.dumps(value)
    raise TransformError(f"'{where}' must be a string.")


def _description(value: Any, where: str) -> Optional[str]:
    # Descriptions are either a bare string or an object carrying `content`.
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return _optional_str(value.get("content"), f"{where}.content")
    raise TransformError(f"'{where}' must be a string or a description object.")


def _parse_variables(value: Any, where: str) -> List[Variable]:
    variables: List[Variable] = []
    for idx, entry in enumerate(_expect_list(value, where)):
        entry = _expect_mapping(entry, f"{where}[{idx}]")
        variables.append(
            Variable(
                key=_optional_str(entry.get("key"), f"{where}[{idx}].key"),
                value=entry.get("value"),
                description=_description(entry.get("description"), f"{where}[{idx}].description"),
            )
        )
    return variables


def _parse_item(value: Any, where: str) -> Item:
    entry = _expect_mapping(value, where)
    item = Item(
        name=_optional_str(entry.get("name"), f"{where}.name"),
        description=_description(entry.get("description"), f"{where}.description"),
    )
    if "item" in entry and entry["item"] is not None:
        children = _expect_list(entry["item"], f"{where}.item")
        item.items = [_parse_item(child, f"{where}.item[{idx}]") for idx, child in enumerate(children)]
        return item
    request = entry.get("request")
    if isinstance(request, Mapping):
        item.request = _parse_request(request, f"{where}.request")
    elif request is not None and not isinstance(request, str):
        raise TransformError(f"'{where}.request' must be an object or a URL string.")
    item.responses = [
        _parse_response(resp, f"{where}.response[{idx}]")
        for idx, resp in enumerate(_expect_list(entry.get("response"), f"{where}.response"))
        if resp is not None
    ]
    return item


def _parse_request(data: Mapping[str, Any], where: str) -> Request:
    url = data.get("url")
    parsed_url: Optional[Url] = None
    if isinstance(url, Mapping):
        parsed_url = _parse_url(url, f"{where}.url")
    elif url is not None and not isinstance(url, str):
        raise TransformError(f"'{where}.url' must be an object or a string.")
    headers: List[Header] = []
    raw_headers = data.get("header")
    if isinstance(raw_headers, list):
        for idx, header in enumerate(raw_headers):
            header = _expect_mapping(header, f"{where}.header[{idx}]")
            headers.append(
                Header(
                    key=str(header.get("key", "")),
                    value=str(header.get("value", "")),
                )
            )
    body = data.get("body")
    return Request(
        method=_optional_str(data.get("method"), f"{where}.method"),
        url=parsed_url,
        headers=headers,
        body=_parse_body(body, f"{where}.body") if body is not None else None,
        description=_description(data.get("description"), f"{where}.description"),
    )


def _parse_url(data: Mapping[str, Any], where: str) -> Url:
    host = data.get("host")
    if isinstance(host, str):
        host_parts: Optional[List[str]] = [host]
    elif isinstance(host, list):
        host_parts = [str(part) for part in host]
    elif host is None:
        host_parts = None
    else:
        raise TransformError(f"'{where}.host' must be a string or an array.")
    path = data.get("path")
    if isinstance(path, str):
        path_parts: Optional[List[str]] = [segment for segment in path.split("/") if segment]
    elif isinstance(path, list):
        path_parts = []
        for idx, segment in enumerate(path):
            if isinstance(segment, Mapping):
                path_parts.append(str(segment.get("value") or ""))
            elif isinstance(segment, str):
                path_parts.append(segment)
            else:
                raise TransformError(f"'{where}.path[{idx}]' must be a string or an object.")
    elif path is None:
        path_parts = None
    else:
        raise TransformError(f"'{where}.path' must be a string or an array.")
    query: List[QueryParam] = []
    for idx, entry in enumerate(_expect_list(data.get("query"), f"{where}.query")):
        entry = _expect_mapping(entry, f"{where}.query[{idx}]")
        query.append(
            QueryParam(
                key=_optional_str(entry.get("key"), f"{where}.query[{idx}].key"),
                value=_optional_str(entry.get("value"), f"{where}.query[{idx}].value"),
                description=_description(entry.get("description"), f"{where}.query[{idx}].description"),
            )
        )
    port = data.get("port")
    return Url(
        protocol=_optional_str(data.get("protocol"), f"{where}.protocol"),
        host=host_parts,
        port=str(port) if port not in (None, "") else None,
        path=path_parts,
        query=query,
        variables=_parse_variables(data.get("variable"), f"{where}.variable"),
    )


def _parse_body(data: Any, where: str) -> Body:
    data = _expect_mapping(data, where)
    urlencoded: List[Variable] = []
    for idx, entry in enumerate(_expect_list(data.get("urlencoded"), f"{where}.urlencoded")):
        entry = _expect_mapping(entry, f"{where}.urlencoded[{idx}]")
        urlencoded.append(
            Variable(
                key=str(entry.get("key", "")),
                value=_optional_str(entry.get("value"), f"{where}.urlencoded[{idx}].value"),
            )
        )
    return Body(
        mode=_optional_str(data.get("mode"), f"{where}.mode"),
        raw=_optional_str(data.get("raw"), f"{where}.raw"),
        urlencoded=urlencoded,
    )


def _parse_response(data: Any, where: str) -> Response:
    data = _expect_mapping(data, where)
    code = data.get("code")
    if code is not None and not isinstance(code, int):
        try:
            code = int(code)
        except (TypeError, ValueError) as exc:
            raise TransformError(f"'{where}.code' must be an integer status code.") from exc
    return Response(
        name=_optional_str(data.get("name"), f"{where}.name"),
        code=code,
        body=_optional_str(data.get("body"), f"{where}.body"),
    )


__all__ = [
    "Body",
    "Collection",
    "Header",
    "Item",
    "QueryParam",
    "Request",
    "Response",
    "TransformError",
    "Url",
    "Variable",
    "load_collection",
    "parse_json",
    "parse_collection",
]
