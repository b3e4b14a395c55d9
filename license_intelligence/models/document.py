"""Compliance document models for license-intelligence."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DocumentFormat(str, Enum):
    """Supported compliance document formats."""

    TEXT = "text"
    HTML = "html"
    MARKDOWN = "markdown"
    JSON = "json"


class ComplianceDocumentOptions(BaseModel):
    """Options for rendering a compliance document.

    ``format`` is kept as a plain string and resolved at render time so an
    unsupported value surfaces as ``UnsupportedFormatError`` from the
    render call itself.
    """

    model_config = {"extra": "forbid"}

    format: str = Field(
        default=DocumentFormat.TEXT.value, description="Output document format"
    )
    group_by_license: bool = Field(
        default=False, description="Group packages by their primary license"
    )
    include_license_texts: bool = Field(
        default=False,
        description="Embed full license texts when the license store carries them. "
        "The bundled store has texts for MIT, BSD-2-Clause, BSD-3-Clause, ISC, "
        "0BSD and Unlicense.",
    )
    include_copyright_notices: bool = Field(
        default=False, description="Include copyright statements"
    )
    custom_header: Optional[str] = Field(
        default=None, description="Text placed before the report"
    )
    custom_footer: Optional[str] = Field(
        default=None, description="Text placed after the report"
    )
