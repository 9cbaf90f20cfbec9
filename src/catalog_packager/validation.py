"""SKU naming checks, duplicate detection, and track/release classification."""

import re
from typing import Iterable

from loguru import logger

log = logger.bind(stage="validate")

_VALID_NAME = re.compile(r"[a-zA-Z0-9_-]+")


def find_invalid_names(names: Iterable[str]) -> list[str]:
    """Return the names that break the SKU naming convention.

    A valid name is ``base`` or ``base_track``: at most two underscore
    segments, built only from ASCII letters, digits, hyphens and underscores.
    """
    invalid = [
        name
        for name in names
        if len(name.split("_")) > 2 or not _VALID_NAME.fullmatch(name)
    ]
    if invalid:
        log.debug(f"Invalid names: {invalid}")
    return invalid


def find_duplicates(values: Iterable[str]) -> list[str]:
    """Return values seen more than once, in order of their second occurrence."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for value in values:
        if value in seen:
            if value not in duplicates:
                duplicates.append(value)
        else:
            seen.add(value)
    return duplicates


def split_track_sku(sku: str) -> tuple[bool, str]:
    """Classify a SKU as track or release and derive its EP SKU.

    A SKU is a track when its last underscore segment is a single character
    (``SKU1_2``). The EP SKU is the SKU minus its last segment, or the SKU
    itself when it has only one segment.

    >>> split_track_sku("SKU1_2")
    (True, 'SKU1')
    >>> split_track_sku("SKU1_99")
    (False, 'SKU1')
    """
    # TODO: releases with ten or more tracks (SKU1_10) classify as releases;
    # switch to a numeric check once the catalog SKUs are migrated.
    segments = sku.split("_")
    is_track = len(segments[-1]) == 1
    if len(segments) > 1:
        segments = segments[:-1]
    return is_track, "_".join(segments)
