"""Postman collection → OpenAPI 3.0.3 translation."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from .formats import OutputFormat, emit
from .model import (
    Collection,
    Item,
    QueryParam,
    Request,
    TransformError,
    Variable,
    load_collection,
    parse_json,
)
from .schema import generate_schema
from .variables import (
    URI_TEMPLATE_VARIABLE_RE,
    VariableResolver,
    build_variable_map,
    to_uri_template,
)

OPENAPI_VERSION = "3.0.3"
DEFAULT_API_VERSION = "1.0.0"

# Field order of an OpenAPI path item.
PATH_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
SUCCESS_CODES = frozenset({"200", "201", "202", "203", "204", "205", "206", "207", "208", "226"})

OCTET_STREAM = "application/octet-stream"
FORM_URLENCODED = "application/x-www-form-urlencoded"

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")

LOGGER = logging.getLogger(__name__)


def camel_case(text: str) -> str:
    words: List[str] = []
    for chunk in re.split(r"[^0-9A-Za-z]+", text):
        words.extend(_WORD_RE.findall(chunk))
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in tail)


class Transpiler:
    """Walks a parsed collection and accumulates the OpenAPI document."""

    def __init__(self, collection: Collection):
        self.collection = collection
        self.resolver = VariableResolver(build_variable_map(collection.variables))
        self._operation_ids: Dict[str, int] = {}
        self._servers: List[Dict[str, Any]] = []
        self._tags: List[Dict[str, Any]] = []
        self._paths: Dict[str, Dict[str, Any]] = {}

    def build(self) -> Dict[str, Any]:
        self._walk(self.collection.items, [])
        info: Dict[str, Any] = {"title": self.collection.name}
        if self.collection.description is not None:
            info["description"] = self.collection.description
        info["contact"] = {}
        info["version"] = DEFAULT_API_VERSION
        return {
            "openapi": OPENAPI_VERSION,
            "info": info,
            "servers": self._servers,
            "paths": {key: self._paths[key] for key in sorted(self._paths)},
            "tags": self._tags,
        }

    def _walk(self, items: List[Item], hierarchy: List[str]) -> None:
        for item in items:
            if item.is_folder:
                name = item.name if item.name is not None else "<folder>"
                tag: Dict[str, Any] = {"name": name}
                if item.description is not None:
                    tag["description"] = item.description
                self._tags.append(tag)
                hierarchy.append(name)
                self._walk(item.items or [], hierarchy)
                hierarchy.pop()
            else:
                self._transform_request(item, hierarchy)

    def _transform_request(self, item: Item, hierarchy: List[str]) -> None:
        request = item.request
        if request is None or request.url is None:
            return
        url = request.url
        name = item.name if item.name is not None else "<request>"
        if url.host is not None:
            self._add_server(url.protocol, url.host, url.port)
        if url.path is None:
            return

        segments = [self._resolve_segment(segment) for segment in url.path]
        path_key = "/" + "/".join(segments)
        path_item = self._paths.setdefault(path_key, {})
        path_params = self._path_parameters(segments, url.variables)
        if path_params:
            path_item["parameters"] = path_params
        else:
            path_item.pop("parameters", None)

        method = (request.method or "").lower()
        if not method:
            return
        operation: Dict[str, Any] = {}
        if hierarchy:
            operation["tags"] = list(hierarchy)
        operation["summary"] = name
        operation["description"] = request.description if request.description is not None else name
        operation["operationId"] = self._operation_id(name)
        query_params = self._query_parameters(url.query)
        if query_params:
            operation["parameters"] = query_params
        request_body = self._request_body(request)
        if request_body is not None:
            operation["requestBody"] = request_body
        operation["responses"] = self._responses(item)

        if method not in PATH_METHODS:
            LOGGER.debug("Dropping request %r with unsupported method %s", name, method)
            return
        path_item[method] = operation
        # OpenAPI field order, independent of request order
        self._paths[path_key] = {key: path_item[key] for key in (*PATH_METHODS, "parameters") if key in path_item}

    def _add_server(self, protocol: Optional[str], host: List[str], port: Optional[str]) -> None:
        url = ".".join(host)
        if protocol:
            url = f"{protocol}://{url}"
        if port:
            url = f"{url}:{port}"
        url = self.resolver.resolve(url)
        if not any(server["url"] == url for server in self._servers):
            self._servers.append({"url": url})

    def _resolve_segment(self, segment: str) -> str:
        resolved = self.resolver.resolve(segment, to_uri_template)
        if resolved.startswith(":"):
            return "{" + resolved[1:] + "}"
        return resolved

    def _path_parameters(self, segments: List[str], variables: List[Variable]) -> List[Dict[str, Any]]:
        params: List[Dict[str, Any]] = []
        for segment in segments:
            for match in URI_TEMPLATE_VARIABLE_RE.finditer(segment):
                var = match.group(1)
                param: Dict[str, Any] = {"name": var, "in": "path"}
                schema: Dict[str, Any] = {"type": "string"}
                known = next((entry for entry in variables if entry.key == var), None)
                if known is not None:
                    if known.description is not None:
                        param["description"] = known.description
                    if isinstance(known.value, str):
                        schema["example"] = self.resolver.resolve(known.value)
                param["required"] = True
                param["schema"] = schema
                params.append(param)
        return params

    def _query_parameters(self, query: List[QueryParam]) -> List[Dict[str, Any]]:
        params: List[Dict[str, Any]] = []
        for qp in query:
            param: Dict[str, Any] = {"name": qp.key or "", "in": "query"}
            if qp.description is not None:
                param["description"] = qp.description
            schema: Dict[str, Any] = {"type": "string"}
            if qp.value is not None:
                schema["example"] = self.resolver.resolve(qp.value)
            param["schema"] = schema
            params.append(param)
        return params

    def _request_body(self, request: Request) -> Optional[Dict[str, Any]]:
        if request.body is None:
            return None
        content_type = _header_content_type(request)
        media: Dict[str, Any] = {}
        body = request.body
        if body.mode == "raw":
            content_type = OCTET_STREAM
            if body.raw is not None:
                content_type, schema, example = self._infer_payload(body.raw)
                if schema is not None:
                    media["schema"] = schema
                media["example"] = example
        elif body.mode == "urlencoded":
            content_type = FORM_URLENCODED
            fields = {entry.key: entry.value for entry in body.urlencoded if entry.value is not None}
            media["schema"] = generate_schema(fields)
            media["example"] = fields
        return {"content": {content_type or OCTET_STREAM: media}}

    def _responses(self, item: Item) -> Dict[str, Any]:
        responses: Dict[str, Dict[str, Any]] = {}
        for res in item.responses:
            response: Dict[str, Any] = {}
            if res.name is not None:
                response["description"] = res.name
            if res.body is not None:
                content_type, schema, example = self._infer_payload(res.body)
                media: Dict[str, Any] = {}
                if schema is not None:
                    media["schema"] = schema
                media["examples"] = {res.name or "": {"value": example}}
                response["content"] = {content_type: media}
            if res.code is not None:
                responses[str(res.code)] = response
        if not SUCCESS_CODES.intersection(responses):
            responses["200"] = {"description": ""}
        return {code: responses[code] for code in sorted(responses)}

    def _infer_payload(self, raw: str) -> tuple[str, Optional[Dict[str, Any]], Any]:
        resolved = self.resolver.resolve(raw)
        try:
            value = parse_json(resolved)
            schema = generate_schema(value) if isinstance(value, (dict, list)) else None
        except (RecursionError, ValueError):
            return "text/plain", None, resolved
        if isinstance(value, (dict, list)):
            return "application/json", schema, value
        return OCTET_STREAM, None, resolved

    def _operation_id(self, name: str) -> str:
        operation_id = camel_case(name)
        if operation_id in self._operation_ids:
            self._operation_ids[operation_id] += 1
            return f"{operation_id}{self._operation_ids[operation_id]}"
        self._operation_ids[operation_id] = 0
        return operation_id


def _header_content_type(request: Request) -> Optional[str]:
    for header in request.headers:
        if header.key.lower() == "content-type":
            return header.value.split(";")[0].strip() or None
    return None


def build_document(source_text: str) -> Dict[str, Any]:
    """Parse ``source_text`` and return the OpenAPI document as plain data."""

    collection = load_collection(source_text)
    return Transpiler(collection).build()


def transpile(source_text: str, output_format: OutputFormat | str = OutputFormat.YAML) -> str:
    """Translate Postman collection JSON into OpenAPI text.

    Raises :class:`~pm2openapi.transpiler.model.TransformError` when the text
    is not a collection or the format selector is unknown.
    """

    fmt = OutputFormat.coerce(output_format)
    try:
        document = build_document(source_text)
    except RecursionError as exc:
        raise TransformError("Collection nesting too deep to translate.") from exc
    LOGGER.debug(
        "transpile format=%s paths=%d servers=%d tags=%d",
        fmt.value,
        len(document["paths"]),
        len(document["servers"]),
        len(document["tags"]),
    )
    try:
        return emit(document, fmt)
    except RecursionError as exc:
        raise TransformError("Collection nesting too deep to emit.") from exc


__all__ = ["Transpiler", "build_document", "camel_case", "transpile"]
