"""Static license metadata.

Each entry is the canonical record for one SPDX license. Records are loaded
into ``License`` models once when the store is built and never modified.
"""

from __future__ import annotations

from typing import Any

_ATTRIBUTION = "attribution"
_COPYLEFT = "copyleft"
_DISCLOSE = "disclose_source"
_SAME = "same_license"
_PATENT = "patent_grant"
_NO_COMMERCIAL = "no_commercial_use"
_SHARE_ALIKE = "share_alike"
_NOTICE = "notice_preservation"

_GPL_OBLIGATIONS = [_ATTRIBUTION, _COPYLEFT, _DISCLOSE, _SAME, _NOTICE]
_GPL3_OBLIGATIONS = [_ATTRIBUTION, _COPYLEFT, _DISCLOSE, _SAME, _PATENT, _NOTICE]


def _spdx_url(spdx_id: str) -> str:
    return f"https://spdx.org/licenses/{spdx_id}.html"


LICENSE_DATA: list[dict[str, Any]] = [
    # Permissive
    {
        "spdx_id": "MIT",
        "name": "MIT License",
        "category": "permissive",
        "obligations": [_ATTRIBUTION, _NOTICE],
    },
    {
        "spdx_id": "Apache-2.0",
        "name": "Apache License 2.0",
        "category": "permissive",
        "obligations": [_ATTRIBUTION, _NOTICE, _PATENT],
    },
    {
        "spdx_id": "BSD-2-Clause",
        "name": 'BSD 2-Clause "Simplified" License',
        "category": "permissive",
        "obligations": [_ATTRIBUTION, _NOTICE],
    },
    {
        "spdx_id": "BSD-3-Clause",
        "name": 'BSD 3-Clause "New" or "Revised" License',
        "category": "permissive",
        "obligations": [_ATTRIBUTION, _NOTICE],
    },
    {
        "spdx_id": "ISC",
        "name": "ISC License",
        "category": "permissive",
        "obligations": [_ATTRIBUTION, _NOTICE],
    },
    {
        "spdx_id": "0BSD",
        "name": "BSD Zero Clause License",
        "category": "permissive",
        "obligations": [],
    },
    {
        "spdx_id": "Zlib",
        "name": "zlib License",
        "category": "permissive",
        "obligations": [_NOTICE],
    },
    {
        "spdx_id": "CC-BY-4.0",
        "name": "Creative Commons Attribution 4.0 International",
        "category": "permissive",
        "obligations": [_ATTRIBUTION],
    },
    # Public domain dedications
    {
        "spdx_id": "Unlicense",
        "name": "The Unlicense",
        "category": "public_domain",
        "obligations": [],
    },
    {
        "spdx_id": "CC0-1.0",
        "name": "Creative Commons Zero v1.0 Universal",
        "category": "public_domain",
        "obligations": [],
    },
    # Weak copyleft
    {
        "spdx_id": "LGPL-2.1-only",
        "name": "GNU Lesser General Public License v2.1 only",
        "category": "weak_copyleft",
        "obligations": [_ATTRIBUTION, _DISCLOSE, _NOTICE],
        "deprecated_ids": ["LGPL-2.1"],
    },
    {
        "spdx_id": "LGPL-2.1-or-later",
        "name": "GNU Lesser General Public License v2.1 or later",
        "category": "weak_copyleft",
        "obligations": [_ATTRIBUTION, _DISCLOSE, _NOTICE],
        "deprecated_ids": ["LGPL-2.1+"],
    },
    {
        "spdx_id": "LGPL-3.0-only",
        "name": "GNU Lesser General Public License v3.0 only",
        "category": "weak_copyleft",
        "obligations": [_ATTRIBUTION, _DISCLOSE, _PATENT, _NOTICE],
        "deprecated_ids": ["LGPL-3.0"],
    },
    {
        "spdx_id": "LGPL-3.0-or-later",
        "name": "GNU Lesser General Public License v3.0 or later",
        "category": "weak_copyleft",
        "obligations": [_ATTRIBUTION, _DISCLOSE, _PATENT, _NOTICE],
        "deprecated_ids": ["LGPL-3.0+"],
    },
    {
        "spdx_id": "MPL-2.0",
        "name": "Mozilla Public License 2.0",
        "category": "weak_copyleft",
        "obligations": [_DISCLOSE, _NOTICE, _PATENT],
    },
    {
        "spdx_id": "EPL-2.0",
        "name": "Eclipse Public License 2.0",
        "category": "weak_copyleft",
        "obligations": [_DISCLOSE, _NOTICE, _PATENT],
    },
    # Strong copyleft
    {
        "spdx_id": "GPL-2.0-only",
        "name": "GNU General Public License v2.0 only",
        "category": "copyleft",
        "obligations": _GPL_OBLIGATIONS,
        "deprecated_ids": ["GPL-2.0"],
    },
    {
        "spdx_id": "GPL-2.0-or-later",
        "name": "GNU General Public License v2.0 or later",
        "category": "copyleft",
        "obligations": _GPL_OBLIGATIONS,
        "deprecated_ids": ["GPL-2.0+"],
    },
    {
        "spdx_id": "GPL-3.0-only",
        "name": "GNU General Public License v3.0 only",
        "category": "copyleft",
        "obligations": _GPL3_OBLIGATIONS,
        "deprecated_ids": ["GPL-3.0"],
    },
    {
        "spdx_id": "GPL-3.0-or-later",
        "name": "GNU General Public License v3.0 or later",
        "category": "copyleft",
        "obligations": _GPL3_OBLIGATIONS,
        "deprecated_ids": ["GPL-3.0+"],
    },
    {
        "spdx_id": "AGPL-3.0-only",
        "name": "GNU Affero General Public License v3.0 only",
        "category": "copyleft",
        "obligations": _GPL3_OBLIGATIONS,
        "deprecated_ids": ["AGPL-3.0"],
    },
    {
        "spdx_id": "AGPL-3.0-or-later",
        "name": "GNU Affero General Public License v3.0 or later",
        "category": "copyleft",
        "obligations": _GPL3_OBLIGATIONS,
    },
    {
        "spdx_id": "CC-BY-SA-4.0",
        "name": "Creative Commons Attribution Share Alike 4.0 International",
        "category": "copyleft",
        "obligations": [_ATTRIBUTION, _SHARE_ALIKE],
    },
    # Source-available and non-commercial
    {
        "spdx_id": "SSPL-1.0",
        "name": "Server Side Public License, v 1",
        "category": "proprietary",
        "obligations": [_COPYLEFT, _DISCLOSE, _SAME],
    },
    {
        "spdx_id": "BUSL-1.1",
        "name": "Business Source License 1.1",
        "category": "proprietary",
        "obligations": [_NOTICE],
    },
    {
        "spdx_id": "CC-BY-NC-4.0",
        "name": "Creative Commons Attribution Non Commercial 4.0 International",
        "category": "custom",
        "obligations": [_ATTRIBUTION, _NO_COMMERCIAL],
    },
]

for _record in LICENSE_DATA:
    _record.setdefault("url", _spdx_url(_record["spdx_id"]))

# Canonical texts for the short permissive licenses, with the SPDX template
# placeholders left in place.
_MIT_TEXT = """\
MIT License

Copyright (c) <year> <copyright holders>

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""

_BSD_DISCLAIMER = """\
THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""

_BSD_2_CLAUSES = """\
Copyright (c) <year> <owner>

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this
   list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.
"""

_BSD_3_CLAUSE = """
3. Neither the name of the copyright holder nor the names of its
   contributors may be used to endorse or promote products derived from
   this software without specific prior written permission.
"""

_ISC_TEXT = """\
ISC License

Copyright (c) <year> <copyright holders>

Permission to use, copy, modify, and/or distribute this software for any
purpose with or without fee is hereby granted, provided that the above
copyright notice and this permission notice appear in all copies.

THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN
ACTION OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF
OR IN CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.
"""

_0BSD_TEXT = """\
Copyright (C) <year> by <copyright holders>

Permission to use, copy, modify, and/or distribute this software for any
purpose with or without fee is hereby granted.

THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN
ACTION OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF
OR IN CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.
"""

_UNLICENSE_TEXT = """\
This is free and unencumbered software released into the public domain.

Anyone is free to copy, modify, publish, use, compile, sell, or
distribute this software, either in source code form or as a compiled
binary, for any purpose, commercial or non-commercial, and by any
means.

In jurisdictions that recognize copyright laws, the author or authors
of this software dedicate any and all copyright interest in the
software to the public domain. We make this dedication for the benefit
of the public at large and to the detriment of our heirs and
successors. We intend this dedication to be an overt act of
relinquishment in perpetuity of all present and future rights to this
software under copyright law.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
IN NO EVENT SHALL THE AUTHORS BE LIABLE FOR ANY CLAIM, DAMAGES OR
OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE,
ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR
OTHER DEALINGS IN THE SOFTWARE.

For more information, please refer to <https://unlicense.org>
"""

LICENSE_TEXTS: dict[str, str] = {
    "MIT": _MIT_TEXT,
    "BSD-2-Clause": _BSD_2_CLAUSES + "\n" + _BSD_DISCLAIMER,
    "BSD-3-Clause": _BSD_2_CLAUSES + _BSD_3_CLAUSE + "\n" + _BSD_DISCLAIMER,
    "ISC": _ISC_TEXT,
    "0BSD": _0BSD_TEXT,
    "Unlicense": _UNLICENSE_TEXT,
}

for _record in LICENSE_DATA:
    if _record["spdx_id"] in LICENSE_TEXTS:
        _record.setdefault("full_text", LICENSE_TEXTS[_record["spdx_id"]])
