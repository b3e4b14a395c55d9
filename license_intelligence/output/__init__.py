"""Output formatters for license-intelligence."""

from license_intelligence.output.document_html import HtmlDocumentFormatter
from license_intelligence.output.document_json import JsonDocumentFormatter
from license_intelligence.output.document_markdown import MarkdownDocumentFormatter
from license_intelligence.output.document_text import TextDocumentFormatter
from license_intelligence.output.documents import (
    DOCUMENT_FORMATTERS,
    render_document,
    resolve_document_format,
)
from license_intelligence.output.terminal import TerminalFormatter

__all__ = [
    "DOCUMENT_FORMATTERS",
    "HtmlDocumentFormatter",
    "JsonDocumentFormatter",
    "MarkdownDocumentFormatter",
    "TerminalFormatter",
    "TextDocumentFormatter",
    "render_document",
    "resolve_document_format",
]
