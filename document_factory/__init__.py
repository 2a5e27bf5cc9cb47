"""Document Factory - templated legal documents with optional AI enhancement.

This module provides the building blocks of the document pipeline:
- A registry of document types (schema, template, instruction per type)
- Deterministic rendering of templates from form values
- A single-call enhancement client over any completion backend

Usage:
    from document_factory import EnhancementClient, render

    base = render("police-complaint", values)
    client = EnhancementClient(backend)
    text = await client.enhance("police-complaint", values, base)
"""

from document_factory.enhancer import CompletionBackend, EnhancementClient
from document_factory.registry import (
    CAPABILITIES,
    DOCUMENT_TYPES,
    PLANNED_DOCUMENT_TYPES,
    DocumentCategory,
    DocumentType,
    FormField,
    PlannedDocumentType,
    get_document_type,
    get_required_fields,
    get_template,
    list_document_types,
)
from document_factory.renderer import render

__all__ = [
    # Enhancement
    "CompletionBackend",
    "EnhancementClient",
    # Rendering
    "render",
    # Registry
    "CAPABILITIES",
    "DOCUMENT_TYPES",
    "PLANNED_DOCUMENT_TYPES",
    "DocumentCategory",
    "DocumentType",
    "FormField",
    "PlannedDocumentType",
    "get_document_type",
    "get_required_fields",
    "get_template",
    "list_document_types",
]
