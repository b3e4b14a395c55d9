"""Compliance document rendering dispatch."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Protocol, Union

from license_intelligence.exceptions import UnsupportedFormatError
from license_intelligence.models.document import (
    ComplianceDocumentOptions,
    DocumentFormat,
)
from license_intelligence.models.license import LicenseAnalysis
from license_intelligence.output.document_html import HtmlDocumentFormatter
from license_intelligence.output.document_json import JsonDocumentFormatter
from license_intelligence.output.document_markdown import MarkdownDocumentFormatter
from license_intelligence.output.document_text import TextDocumentFormatter


class DocumentFormatter(Protocol):
    """Renders analyses into a single compliance document string."""

    def format_document(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> str:
        ...


DOCUMENT_FORMATTERS: Mapping[DocumentFormat, DocumentFormatter] = MappingProxyType(
    {
        DocumentFormat.TEXT: TextDocumentFormatter(),
        DocumentFormat.HTML: HtmlDocumentFormatter(),
        DocumentFormat.MARKDOWN: MarkdownDocumentFormatter(),
        DocumentFormat.JSON: JsonDocumentFormatter(),
    }
)


def resolve_document_format(value: Union[str, DocumentFormat]) -> DocumentFormat:
    """Resolve a format name to a DocumentFormat.

    Args:
        value: Format name such as ``"markdown"``, or a DocumentFormat.

    Returns:
        The matching DocumentFormat.

    Raises:
        UnsupportedFormatError: If the name is not a supported format.
    """
    if isinstance(value, DocumentFormat):
        return value
    try:
        return DocumentFormat(value)
    except ValueError:
        raise UnsupportedFormatError(str(value)) from None


def render_document(
    analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
) -> str:
    """Render analyses as a compliance document in ``options.format``.

    Args:
        analyses: Per-package license analyses.
        options: Document options, including the format name.

    Returns:
        The complete document.

    Raises:
        UnsupportedFormatError: If ``options.format`` is not supported.
    """
    document_format = resolve_document_format(options.format)
    return DOCUMENT_FORMATTERS[document_format].format_document(analyses, options)
