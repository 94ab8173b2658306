# schemas/_lookups.py
"""Select options that come from other resources (class, section and exam names)."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from core.api import ApiClient, ApiError
from core.form_schema import FormSchema
from core.resources import load_options
from schemas._choices import CLASS_NAMES, EXAM_NAMES, SECTION_NAMES
from schemas.classes_schema import CLASSES
from schemas.exam_names_schema import EXAM_NAMES as EXAM_NAME_SPEC
from schemas.sections_schema import SECTIONS

log = logging.getLogger(__name__)

LOOKUPS = {
    CLASS_NAMES: (CLASSES, "className"),
    SECTION_NAMES: (SECTIONS, "sectionName"),
    EXAM_NAMES: (EXAM_NAME_SPEC, "name"),
}


def lookup_keys(schemas: Iterable[Optional[FormSchema]]) -> List[str]:
    keys: List[str] = []
    for schema in schemas:
        for f in schema or ():
            if f.options_key in LOOKUPS and f.options_key not in keys:
                keys.append(f.options_key)
    return keys


def load_lookups(
    client: ApiClient,
    keys: Iterable[str],
    on_error: Optional[Callable[[str, ApiError], None]] = None,
) -> Dict[str, List[str]]:
    """Fetch each lookup once; a failing lookup yields an empty option list."""
    out: Dict[str, List[str]] = {}
    for key in keys:
        spec, field_name = LOOKUPS[key]
        try:
            out[key] = load_options(client, spec, field_name)
        except ApiError as e:
            log.warning("Could not load %s: %s", key, e.message)
            out[key] = []
            if on_error:
                on_error(key, e)
    return out
