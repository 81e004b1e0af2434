from __future__ import annotations

import re
from enum import Enum
from typing import List

from .ids import IdFactory
from .registry import Participant

_FIELD_SEPARATORS = re.compile(r"[,\t]")


class ImportFormat(str, Enum):
    NAMES_ONLY = "names"
    NAME_AND_CONTACT = "name-email"


def split_contact_line(line: str) -> tuple[str, str | None]:
    """
    Split ``name<comma-or-tab>email``.
    Fields past the second are ignored; a missing or blank email gives None.
    """
    parts = [part.strip() for part in _FIELD_SEPARATORS.split(line)]
    name = parts[0]
    email = parts[1] if len(parts) > 1 and parts[1] else None
    return name, email


def parse_import_text(
    text: str,
    fmt: ImportFormat,
    ids: IdFactory,
) -> List[Participant]:
    """
    Turn pasted or uploaded text into import candidates, one per non-blank line.

    Does not touch the registry, so it can be re-run whenever the text or the
    format changes. Every call draws fresh ids from ``ids``.
    """
    fmt = ImportFormat(fmt)
    out: List[Participant] = []
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue

        if fmt is ImportFormat.NAMES_ONLY:
            out.append(Participant(ids.batch(), line))
            continue

        name, email = split_contact_line(line)
        # ",x@y.z" leaves nothing to call the participant by
        if not name:
            continue
        out.append(Participant(ids.batch(), name, email))
    return out
