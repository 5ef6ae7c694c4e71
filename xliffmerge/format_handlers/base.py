#!/usr/bin/env python3
"""
Base classes for catalog format handlers.

Catalog and Unit are the in-memory form of one locale's localization file.
FormatHandler is the abstract base class a file format implements to load
and persist them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Optional


# Translation state markers
STATE_FINAL = "final"
STATE_NOT_CHECKED = "not-checked"  # machine translated
STATE_INITIAL = "initial"          # source text used as placeholder


@dataclass(frozen=True)
class Note:
    """A translator note attached to a unit (location, meaning, description)."""
    text: str
    category: Optional[str] = None


@dataclass(frozen=True)
class Unit:
    """
    One translatable segment.

    Attributes:
        id: Stable identifier, the correlation key across locales
        source: Source markup, kept verbatim
        target: Target markup, None when the file has no <target>
        state: Translation state marker, None when the file has none
        notes: Translator notes carried along with the unit
    """
    id: str
    source: str
    target: Optional[str] = None
    state: Optional[str] = None
    notes: tuple[Note, ...] = ()


@dataclass(frozen=True)
class Catalog:
    """
    All units of one locale.

    Attributes:
        src_lang: Source language identifier
        trg_lang: Target language identifier, None for the authoritative catalog
        file_original: Opaque `original` attribute of the file group
        file_id: Opaque `id` attribute of the file group
        units: Units in document order
        version: Format version
    """
    src_lang: str
    trg_lang: Optional[str] = None
    file_original: Optional[str] = None
    file_id: Optional[str] = None
    units: tuple[Unit, ...] = ()
    version: str = "2.0"

    def with_target_lang(self, lang: str) -> "Catalog":
        """Return a copy of this catalog with the target language set."""
        return replace(self, trg_lang=lang)

    @property
    def unit_ids(self) -> list[str]:
        return [unit.id for unit in self.units]


class FormatHandler(ABC):
    """
    Abstract base class for catalog file formats.

    A handler converts between the file content and a Catalog. It never
    touches the filesystem; LocaleDirectory does the reading and writing.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """List of file extensions this handler supports (without dot)."""
        pass

    @abstractmethod
    def parse(self, content: str) -> Catalog:
        """
        Parse file content into a catalog.

        Args:
            content: Raw file content as string

        Returns:
            Catalog with units in document order
        """
        pass

    @abstractmethod
    def serialize(self, catalog: Catalog) -> str:
        """
        Serialize a catalog to file content.

        Args:
            catalog: Catalog to write

        Returns:
            Complete file content as string
        """
        pass

    def validate_content(self, content: str) -> list[str]:
        """
        Validate that content is properly formatted for this handler.

        Args:
            content: Raw file content

        Returns:
            List of validation error messages (empty if valid)
        """
        return []
