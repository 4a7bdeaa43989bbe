"""IBGE municipality code parsing for SIH/SUS row labels.

Row labels look like ``"260170 - Petrolina"`` or ``"260170 Petrolina"``; the
first two digits of the 6-digit code identify the state (UF).
"""

from __future__ import annotations

import re

from sus_choropleth.common.constants import REGION_CODE_BY_PREFIX

_ADMIN_CODE_RE = re.compile(r"^(\d{6})")
_CODE_PREFIX_RE = re.compile(r"^\s*\d{6}\s*-\s*|^\s*\d{6}\s+")


def extract_admin_code(raw: object) -> str | None:
    if raw is None:
        return None
    match = _ADMIN_CODE_RE.match(str(raw).strip())
    if match is None:
        return None
    return match.group(1)


def resolve_region(raw: object) -> str | None:
    code = extract_admin_code(raw)
    if code is None:
        return None
    return REGION_CODE_BY_PREFIX.get(int(code) // 10000)


def clean_display_name(raw: object) -> str:
    text = "" if raw is None else str(raw)
    return _CODE_PREFIX_RE.sub("", text, count=1).strip()
