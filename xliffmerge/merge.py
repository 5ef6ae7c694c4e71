#!/usr/bin/env python3
"""
Catalog merge.

Propagates the authoritative (source language) catalog to one target locale:
every authoritative unit appears exactly once, in order, and each unit's
target comes from, in order of precedence:

1. the previous target catalog, kept verbatim together with its state
2. the translator, marked 'not-checked' (skipped for sources containing '{',
   which hold interpolations or ICU expressions)
3. the source text itself, marked 'initial'
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .format_handlers.base import (
    STATE_INITIAL,
    STATE_NOT_CHECKED,
    Catalog,
    Unit,
)
from .format_handlers.xliff2 import is_well_formed
from .translator import Translator


logger = logging.getLogger(__name__)

# Sources containing this character are never machine translated
PLACEHOLDER_MARKER = "{"


@dataclass
class MergeStats:
    """Where the targets of a merged catalog came from."""
    retained: int = 0
    translated: int = 0
    initial: int = 0

    @property
    def total(self) -> int:
        return self.retained + self.translated + self.initial

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "retained": self.retained,
            "translated": self.translated,
            "initial": self.initial,
        }


def build_index(catalog: Optional[Catalog]) -> dict[str, Unit]:
    """Map unit id -> unit. The last unit wins when an id repeats."""
    if catalog is None:
        return {}
    return {unit.id: unit for unit in catalog.units}


def merge_catalog(
    authoritative: Catalog,
    previous: Optional[Catalog],
    target_lang: str,
    translator: Optional[Translator] = None,
    stats: Optional[MergeStats] = None,
) -> Catalog:
    """
    Build the complete target catalog for one locale.

    Args:
        authoritative: Source language catalog, defines which units exist
        previous: Existing catalog of the target locale (None if there is none)
        target_lang: Target locale identifier
        translator: Optional machine translation provider
        stats: Optional counter filled with the origin of every target

    Returns:
        New catalog; neither input is modified
    """
    if target_lang == authoritative.src_lang:
        if stats is not None:
            stats.retained += len(authoritative.units)
        return authoritative.with_target_lang(target_lang)

    index = build_index(previous)
    units = tuple(
        _merge_unit(unit, index.get(unit.id), target_lang, translator, stats)
        for unit in authoritative.units
    )

    return Catalog(
        src_lang=authoritative.src_lang,
        trg_lang=target_lang,
        file_original=authoritative.file_original,
        file_id=authoritative.file_id,
        units=units,
        version=authoritative.version,
    )


def _merge_unit(
    unit: Unit,
    previous: Optional[Unit],
    target_lang: str,
    translator: Optional[Translator],
    stats: Optional[MergeStats],
) -> Unit:
    target = None
    state = None
    origin = "initial"

    if previous is not None and previous.target is not None:
        target = previous.target
        # XLIFF 2.0 defaults a missing state to 'initial'
        state = previous.state if previous.state is not None else STATE_INITIAL
        origin = "retained"
    elif translator is not None and PLACEHOLDER_MARKER not in unit.source:
        target = _try_translate(translator, unit, target_lang)
        state = STATE_NOT_CHECKED
        origin = "translated"

    if not target:
        target = unit.source
        state = STATE_INITIAL
        origin = "initial"

    if stats is not None:
        setattr(stats, origin, getattr(stats, origin) + 1)

    return Unit(
        id=unit.id,
        source=unit.source,
        target=target,
        state=state,
        notes=unit.notes,
    )


def _try_translate(translator: Translator, unit: Unit, target_lang: str) -> Optional[str]:
    try:
        translated = translator.translate(unit.source, target_lang)
    except Exception as e:
        # Any provider failure only costs this unit its translation
        logger.debug("Translation of unit %s into %s failed: %s", unit.id, target_lang, e)
        return None

    if translated and not is_well_formed(translated):
        logger.debug("Discarding malformed translation of unit %s into %s: %r",
                     unit.id, target_lang, translated)
        return None
    return translated
