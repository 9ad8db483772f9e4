"""Postman collection → OpenAPI transform collaborator."""

from .core import Transpiler, build_document, camel_case, transpile
from .formats import OutputFormat, emit
from .model import TransformError, load_collection

__all__ = [
    "OutputFormat",
    "TransformError",
    "Transpiler",
    "build_document",
    "camel_case",
    "emit",
    "load_collection",
    "transpile",
]
