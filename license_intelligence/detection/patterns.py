"""Static detection tables.

Filename candidates, license text fingerprints, the copyright pattern and
the obligation detail table. All are built once at import time and treated
as read-only.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, NamedTuple

from license_intelligence.models.license import ObligationType

# Files probed under a package root, in order
LICENSE_FILE_CANDIDATES: tuple[str, ...] = (
    "LICENSE",
    "LICENSE.txt",
    "LICENSE.md",
    "LICENCE",
    "LICENCE.txt",
    "LICENCE.md",
    "COPYING",
    "COPYING.txt",
    "COPYRIGHT",
    "COPYRIGHT.txt",
    "NOTICE",
    "NOTICE.txt",
)


class LicenseFingerprint(NamedTuple):
    """A text pattern identifying a license, with its confidence.

    Attributes:
        pattern: Compiled pattern matched against whitespace-normalized text.
        spdx_id: License the pattern identifies.
        confidence: Confidence assigned to a match.
    """

    pattern: re.Pattern[str]
    spdx_id: str
    confidence: float


def _fingerprint(pattern: str, spdx_id: str, confidence: float) -> LicenseFingerprint:
    return LicenseFingerprint(re.compile(pattern, re.IGNORECASE), spdx_id, confidence)


# Evaluated in order; the first match for a file wins
LICENSE_FINGERPRINTS: tuple[LicenseFingerprint, ...] = (
    _fingerprint(r"MIT License|Permission is hereby granted, free of charge", "MIT", 0.9),
    _fingerprint(r"Apache License.*Version 2\.0", "Apache-2.0", 0.9),
    _fingerprint(r"GNU GENERAL PUBLIC LICENSE.*Version 3", "GPL-3.0-only", 0.9),
    _fingerprint(r"GNU GENERAL PUBLIC LICENSE.*Version 2", "GPL-2.0-only", 0.9),
    _fingerprint(
        r"GNU LESSER GENERAL PUBLIC LICENSE.*Version 3", "LGPL-3.0-only", 0.9
    ),
    _fingerprint(
        r"GNU LESSER GENERAL PUBLIC LICENSE.*Version 2\.1", "LGPL-2.1-only", 0.9
    ),
    _fingerprint(r"Mozilla Public License.*Version 2\.0", "MPL-2.0", 0.9),
    _fingerprint(
        r"BSD.*3.*Clause|Redistribution and use in source and binary forms"
        r".*with or without modification",
        "BSD-3-Clause",
        0.8,
    ),
    _fingerprint(r"BSD.*2.*Clause", "BSD-2-Clause", 0.8),
    _fingerprint(
        r"ISC License|Permission to use, copy, modify.*is hereby granted", "ISC", 0.8
    ),
    _fingerprint(r"Creative Commons Zero.*Universal|CC0", "CC0-1.0", 0.8),
    _fingerprint(
        r"This is free and unencumbered software released into the public domain",
        "Unlicense",
        0.9,
    ),
)

COPYRIGHT_PATTERN = re.compile(
    r"Copyright\s+(?:\(c\)\s*)?(?:(?:19|20)\d{2}(?:\s*[-–]\s*(?:19|20)\d{2})?\s+)?(.+)",
    re.IGNORECASE,
)

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


class ObligationDetail(NamedTuple):
    """Static description of an obligation type."""

    description: str
    severity: str
    scope: str


OBLIGATION_DETAILS: Mapping[ObligationType, ObligationDetail] = MappingProxyType(
    {
        ObligationType.ATTRIBUTION: ObligationDetail(
            "Must include attribution to original authors", "medium", "distribution"
        ),
        ObligationType.COPYLEFT: ObligationDetail(
            "Must release derivative works under same license", "high", "project"
        ),
        ObligationType.DISCLOSE_SOURCE: ObligationDetail(
            "Must make source code available", "high", "distribution"
        ),
        ObligationType.SAME_LICENSE: ObligationDetail(
            "Must use same license for derivative works", "high", "project"
        ),
        ObligationType.PATENT_GRANT: ObligationDetail(
            "Includes patent grant and termination clauses", "medium", "component"
        ),
        ObligationType.NO_COMMERCIAL_USE: ObligationDetail(
            "Prohibits commercial use", "critical", "project"
        ),
        ObligationType.SHARE_ALIKE: ObligationDetail(
            "Must share adaptations under same license", "high", "project"
        ),
        ObligationType.NOTICE_PRESERVATION: ObligationDetail(
            "Must preserve copyright and license notices", "medium", "file"
        ),
    }
)

