from __future__ import annotations

import json
import re

import pytest
import yaml

from pm2openapi.samples import sample_collection
from pm2openapi.transpiler import OutputFormat, TransformError, build_document, camel_case, transpile


def _request(name, method, path, **extra):
    request = {"method": method, "url": {"host": ["api", "example", "com"], "path": path}}
    request.update(extra)
    return {"name": name, "request": request}


def _collection(items, variables=None):
    payload = {"info": {"name": "Test API"}, "item": items}
    if variables is not None:
        payload["variable"] = variables
    return json.dumps(payload)


def test_minimal_collection_yaml() -> None:
    text = transpile(json.dumps({"info": {"name": "demo"}, "item": []}), "yaml")
    assert text.startswith("openapi: 3.0.3\n")
    assert yaml.safe_load(text) == {
        "openapi": "3.0.3",
        "info": {"title": "demo", "contact": {}, "version": "1.0.0"},
        "servers": [],
        "paths": {},
        "tags": [],
    }


def test_json_output_matches_document() -> None:
    source = json.dumps(sample_collection())
    assert json.loads(transpile(source, OutputFormat.JSON)) == build_document(source)


def test_yaml_and_json_carry_the_same_document() -> None:
    source = json.dumps(sample_collection())
    assert yaml.safe_load(transpile(source, "yaml")) == json.loads(transpile(source, "json"))


def test_sample_servers_paths_and_tags() -> None:
    doc = build_document(json.dumps(sample_collection()))
    assert doc["info"]["title"] == "Bookshelf API"
    assert doc["info"]["description"] == "Sample collection for a small bookshelf service."
    assert doc["servers"] == [{"url": "https://api.example.com/v1"}, {"url": "https://auth.example.com"}]
    assert list(doc["paths"]) == ["/books", "/books/{bookId}", "/login"]
    assert list(doc["paths"]["/books"]) == ["get", "post"]
    assert doc["tags"] == [{"name": "Books", "description": "Catalogue operations."}]


def test_sample_list_operation() -> None:
    op = build_document(json.dumps(sample_collection()))["paths"]["/books"]["get"]
    assert op["tags"] == ["Books"]
    assert op["summary"] == "List books"
    assert op["description"] == "List books"
    assert op["operationId"] == "listBooks"
    assert op["parameters"] == [
        {"name": "limit", "in": "query", "description": "Page size.", "schema": {"type": "string", "example": "20"}},
        {"name": "author", "in": "query", "schema": {"type": "string", "example": "Frank Herbert"}},
    ]
    media = op["responses"]["200"]["content"]["application/json"]
    assert op["responses"]["200"]["description"] == "Book page"
    items = media["schema"]["items"]
    assert items["type"] == "object"
    assert items["properties"]["id"] == {"type": "number", "example": 1}
    assert items["properties"]["tags"] == {"type": "array", "items": {"type": "string", "example": "sf"}}
    assert items["properties"]["isbn"] == {"type": "string", "nullable": True, "example": None}
    assert media["examples"]["Book page"]["value"][1]["title"] == "Emma"


def test_sample_path_parameters_and_error_response() -> None:
    path_item = build_document(json.dumps(sample_collection()))["paths"]["/books/{bookId}"]
    assert path_item["parameters"] == [
        {
            "name": "bookId",
            "in": "path",
            "description": "Book identifier.",
            "required": True,
            "schema": {"type": "string", "example": "1"},
        }
    ]
    responses = path_item["get"]["responses"]
    assert list(responses) == ["200", "404"]
    found = responses["200"]["content"]["application/json"]["schema"]["properties"]
    assert found["available"] == {"type": "boolean", "example": True}
    assert found["rating"] == {"type": "number", "example": 4.5}
    missing = responses["404"]
    assert missing["description"] == "Missing"
    assert missing["content"] == {"text/plain": {"examples": {"Missing": {"value": "Book not found"}}}}


def test_sample_request_bodies() -> None:
    paths = build_document(json.dumps(sample_collection()))["paths"]
    create = paths["/books"]["post"]
    assert create["operationId"] == "createBook"
    media = create["requestBody"]["content"]["application/json"]
    assert media["example"] == {"title": "Dune", "author": "Frank Herbert"}
    assert media["schema"]["properties"]["author"] == {"type": "string", "example": "Frank Herbert"}
    assert create["responses"] == {"200": {"description": ""}}

    login = paths["/login"]["post"]
    assert "tags" not in login
    assert login["description"] == "Exchange credentials for a session token."
    form = login["requestBody"]["content"]["application/x-www-form-urlencoded"]
    assert form["example"] == {"username": "reader", "password": "secret"}
    assert set(form["schema"]["properties"]) == {"username", "password"}


def test_operation_ids_are_deduplicated() -> None:
    items = [
        _request("Get user", "GET", ["users", "a"]),
        _request("Get user", "GET", ["users", "b"]),
        _request("Get user", "GET", ["users", "c"]),
    ]
    paths = build_document(_collection(items))["paths"]
    ids = [paths[f"/users/{key}"]["get"]["operationId"] for key in "abc"]
    assert ids == ["getUser", "getUser1", "getUser2"]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("List books", "listBooks"),
        ("get-user_by ID", "getUserById"),
        ("HTTPServer status", "httpServerStatus"),
        ("<request>", "request"),
    ],
)
def test_camel_case(name: str, expected: str) -> None:
    assert camel_case(name) == expected


def test_path_templates_from_colons_and_unresolved_variables() -> None:
    items = [_request("Tenant user", "GET", ["{{tenant}}", "users", ":id"])]
    path_item = build_document(_collection(items))["paths"]["/{tenant}/users/{id}"]
    assert [param["name"] for param in path_item["parameters"]] == ["tenant", "id"]
    assert all(param["required"] for param in path_item["parameters"])


def test_variables_resolve_servers_and_segments() -> None:
    items = [
        {
            "name": "Ping",
            "request": {
                "method": "GET",
                "url": {"protocol": "http", "host": ["{{host}}"], "port": "8080", "path": ["{{version}}", "ping"]},
            },
        }
    ]
    doc = build_document(_collection(items, [{"key": "host", "value": "localhost"}, {"key": "version", "value": "v2"}]))
    assert doc["servers"] == [{"url": "http://localhost:8080"}]
    assert list(doc["paths"]) == ["/v2/ping"]


def test_folder_hierarchy_becomes_tags() -> None:
    items = [
        {
            "name": "Admin",
            "item": [{"name": "Users", "item": [_request("Delete user", "DELETE", ["users", ":id"])]}],
        }
    ]
    doc = build_document(_collection(items))
    assert doc["tags"] == [{"name": "Admin"}, {"name": "Users"}]
    assert doc["paths"]["/users/{id}"]["delete"]["tags"] == ["Admin", "Users"]


def test_body_content_types() -> None:
    items = [
        _request("Plain", "POST", ["plain"], body={"mode": "raw", "raw": "hello"}),
        _request("Scalar", "POST", ["scalar"], body={"mode": "raw", "raw": "42"}),
        _request(
            "Upload",
            "POST",
            ["upload"],
            header=[{"key": "content-type", "value": "multipart/form-data; boundary=x"}],
            body={"mode": "formdata", "formdata": []},
        ),
    ]
    paths = build_document(_collection(items))["paths"]
    assert paths["/plain"]["post"]["requestBody"]["content"] == {"text/plain": {"example": "hello"}}
    assert paths["/scalar"]["post"]["requestBody"]["content"] == {"application/octet-stream": {"example": "42"}}
    assert paths["/upload"]["post"]["requestBody"]["content"] == {"multipart/form-data": {}}


def test_unsupported_methods_and_string_urls_are_skipped() -> None:
    items = [
        _request("Copy", "COPY", ["files"]),
        {"name": "Shortcut", "request": "https://api.example.com/shortcut"},
        {"name": "Empty"},
    ]
    doc = build_document(_collection(items))
    assert doc["paths"] == {"/files": {}}


@pytest.mark.parametrize(
    "text, message",
    [
        ("not-json", "Unable to parse collection JSON"),
        ('{"name": "demo"}', "info"),
        ('[1, 2]', "JSON object"),
        ('{"info": {"name": "x"}, "item": {}}', "item"),
        ('{"info": {"name": 3}, "item": []}', "info.name"),
        ('{"info": {"name": "x"}, "item": [{"request": {"url": 5}}]}', "item[0].request.url"),
    ],
)
def test_malformed_collections_raise(text: str, message: str) -> None:
    with pytest.raises(TransformError, match=re.escape(message)):
        transpile(text, "yaml")


def test_unknown_format_raises() -> None:
    with pytest.raises(TransformError, match="Unsupported output format"):
        transpile(json.dumps(sample_collection()), "xml")


def test_transform_error_is_value_error() -> None:
    assert issubclass(TransformError, ValueError)


def _strict_loads(text: str):
    def _reject(token):
        raise ValueError(token)

    return json.loads(text, parse_constant=_reject)


def test_deeply_nested_body_falls_back_to_text() -> None:
    raw = "[" * 5000 + "]" * 5000
    items = [_request("Deep", "POST", ["deep"], body={"mode": "raw", "raw": raw})]
    paths = build_document(_collection(items))["paths"]
    assert paths["/deep"]["post"]["requestBody"]["content"] == {"text/plain": {"example": raw}}


@pytest.mark.parametrize("body", ["[NaN, 1]", '{"ratio": Infinity}', "-Infinity"])
def test_non_finite_json_bodies_are_plain_text(body: str) -> None:
    item = _request("Stats", "GET", ["stats"])
    item["response"] = [{"name": "Stats", "code": 200, "body": body}]
    text = transpile(_collection([item]), "json")
    doc = _strict_loads(text)
    content = doc["paths"]["/stats"]["get"]["responses"]["200"]["content"]
    assert content == {"text/plain": {"examples": {"Stats": {"value": body}}}}


@pytest.mark.parametrize(
    "text",
    [
        '{"info": {"name": "x"}, "item": [], "variable": [{"key": "n", "value": NaN}]}',
        "[" * 100000 + "]" * 100000,
        '{"info": {"name": "x"}, "item": ' + '[{"item": ' * 3000 + "[]" + "}]" * 3000 + "}",
    ],
)
def test_pathological_collections_raise_transform_error(text: str) -> None:
    with pytest.raises(TransformError, match="Unable to parse collection JSON"):
        transpile(text, "yaml")
