"""Built-in Postman collection shown when the studio starts."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict

_SAMPLE_COLLECTION: Dict[str, Any] = {
    "info": {
        "_postman_id": "6f1c2a52-0d8e-4c8e-9a55-2b8c6f0f2d11",
        "name": "Bookshelf API",
        "description": "Sample collection for a small bookshelf service.",
        "schema": "https://schema.getpostman.com/json/collection/v2.1.0/collection.json",
    },
    "item": [
        {
            "name": "Books",
            "description": "Catalogue operations.",
            "item": [
                {
                    "name": "List books",
                    "request": {
                        "method": "GET",
                        "header": [],
                        "url": {
                            "raw": "{{baseUrl}}/books?limit=20&author={{author}}",
                            "host": ["{{baseUrl}}"],
                            "path": ["books"],
                            "query": [
                                {"key": "limit", "value": "20", "description": "Page size."},
                                {"key": "author", "value": "{{author}}"},
                            ],
                        },
                    },
                    "response": [
                        {
                            "name": "Book page",
                            "code": 200,
                            "status": "OK",
                            "body": '[{"id": 1, "title": "Dune", "tags": ["sf"], "isbn": null}, '
                            '{"id": 2, "title": "Emma", "tags": [], "isbn": "9780141439587"}]',
                        }
                    ],
                },
                {
                    "name": "Get book",
                    "request": {
                        "method": "GET",
                        "header": [],
                        "url": {
                            "raw": "{{baseUrl}}/books/:bookId",
                            "host": ["{{baseUrl}}"],
                            "path": ["books", ":bookId"],
                            "variable": [
                                {"key": "bookId", "value": "1", "description": "Book identifier."}
                            ],
                        },
                    },
                    "response": [
                        {
                            "name": "Found",
                            "code": 200,
                            "body": '{"id": 1, "title": "Dune", "available": true, "rating": 4.5}',
                        },
                        {"name": "Missing", "code": 404, "body": "Book not found"},
                    ],
                },
                {
                    "name": "Create book",
                    "request": {
                        "method": "POST",
                        "header": [{"key": "Content-Type", "value": "application/json"}],
                        "body": {
                            "mode": "raw",
                            "raw": '{"title": "Dune", "author": "{{author}}"}',
                        },
                        "url": {
                            "raw": "{{baseUrl}}/books",
                            "host": ["{{baseUrl}}"],
                            "path": ["books"],
                        },
                    },
                    "response": [],
                },
            ],
        },
        {
            "name": "Login",
            "request": {
                "method": "POST",
                "description": "Exchange credentials for a session token.",
                "header": [],
                "body": {
                    "mode": "urlencoded",
                    "urlencoded": [
                        {"key": "username", "value": "reader"},
                        {"key": "password", "value": "secret"},
                    ],
                },
                "url": {
                    "raw": "https://auth.example.com/login",
                    "protocol": "https",
                    "host": ["auth", "example", "com"],
                    "path": ["login"],
                },
            },
            "response": [],
        },
    ],
    "variable": [
        {"key": "baseUrl", "value": "https://api.example.com/v1"},
        {"key": "author", "value": "Frank Herbert"},
        {"key": "unused", "value": ""},
    ],
}


def sample_collection() -> Dict[str, Any]:
    """Return a fresh copy of the sample collection."""

    return deepcopy(_SAMPLE_COLLECTION)


__all__ = ["sample_collection"]
