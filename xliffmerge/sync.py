#!/usr/bin/env python3
"""
Locale directory synchronization.

Finds every locale file next to the source catalog, merges each one against
the source catalog and writes it back. Produces a JSON-ready report of what
happened to every locale.
"""

import logging
from pathlib import Path
from typing import Optional

from .format_handlers import Catalog, FormatHandler, Xliff2Handler
from .merge import MergeStats, merge_catalog
from .translator import Translator


logger = logging.getLogger(__name__)

DEFAULT_PATH = "angular/src/locale"
DEFAULT_PREFIX = "messages"
DEFAULT_EXTENSION = "xlf"


class LocaleDirectory:
    """
    A directory holding one catalog file per locale.

    Files are named `<prefix>.<locale>.<extension>`, e.g. `messages.fr.xlf`.
    The locale segment starts right after `<prefix>.` and runs up to the
    extension.
    """

    def __init__(
        self,
        path: str,
        prefix: str = DEFAULT_PREFIX,
        extension: str = DEFAULT_EXTENSION,
        handler: Optional[FormatHandler] = None,
    ):
        self.path = Path(path)
        self.prefix = prefix
        self.extension = extension.lstrip('.')
        self.handler = handler or Xliff2Handler()

    def discover(self) -> list[str]:
        """
        List the locales that have a file in this directory.

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        if not self.path.is_dir():
            raise FileNotFoundError(f"Locale directory not found: {self.path}")

        offset = len(self.prefix) + 1
        suffix = f".{self.extension}"
        locales = []
        for file in self.path.iterdir():
            name = file.name
            if not file.is_file() or not name.startswith(f"{self.prefix}.") or not name.endswith(suffix):
                continue
            locale = name[offset:-len(suffix)]
            if len(locale) >= 2 and '.' not in locale:
                locales.append(locale)
        return sorted(locales)

    def path_for(self, locale: str) -> Path:
        return self.path / f"{self.prefix}.{locale}.{self.extension}"

    def exists(self, locale: str) -> bool:
        return self.path_for(locale).is_file()

    def read(self, locale: str) -> Catalog:
        """
        Load the catalog of a locale.

        Raises:
            OSError: If the file cannot be read
            CatalogError: If the file is not a valid catalog
        """
        content = self.path_for(locale).read_text(encoding="utf-8")
        return self.handler.parse(content)

    def write(self, locale: str, catalog: Catalog) -> Path:
        """Serialize and save the catalog of a locale."""
        path = self.path_for(locale)
        path.write_text(self.handler.serialize(catalog), encoding="utf-8")
        return path


class LocaleSync:
    """
    Runs the merge for every locale of a directory.

    Handles:
    - Loading the authoritative catalog once
    - Merging and writing each locale in turn
    - Reporting per-locale failures without stopping the run
      (or stopping on the first load failure with fail_fast)
    """

    def __init__(
        self,
        directory: LocaleDirectory,
        source_lang: str = "en",
        translator: Optional[Translator] = None,
        fail_fast: bool = False,
        locales: Optional[list[str]] = None,
    ):
        """
        Initialize a synchronization run.

        Args:
            directory: Directory holding the locale files
            source_lang: Locale of the authoritative catalog
            translator: Optional machine translation provider
            fail_fast: Re-raise the first locale load failure instead of reporting it
            locales: Extra locales to create even if they have no file yet
        """
        self.directory = directory
        self.source_lang = source_lang
        self.translator = translator
        self.fail_fast = fail_fast
        self.extra_locales = locales or []

    def load_source(self) -> Catalog:
        """Load the authoritative catalog. Failures are fatal for the run."""
        return self.directory.read(self.source_lang)

    def target_locales(self) -> list[str]:
        locales = self.directory.discover()
        for locale in self.extra_locales:
            if locale not in locales:
                locales.append(locale)
        return locales

    def run(self) -> dict:
        """
        Synchronize all locales.

        Returns:
            Report dictionary with per-locale results and a summary

        Raises:
            FileNotFoundError: If the directory does not exist
            OSError, CatalogError: If the authoritative catalog cannot be loaded,
                or a locale cannot be loaded and fail_fast is set
        """
        locales = self.target_locales()
        source = self.load_source()

        results = [self.sync_locale(source, locale) for locale in locales]
        failed = [r["locale"] for r in results if r["status"] == "failed"]

        if failed:
            summary = f"{len(results) - len(failed)}/{len(results)} locales saved. Failed: {', '.join(failed)}"
        else:
            summary = f"{len(results)} locales saved from {len(source.units)} source units."

        return {
            "status": "partial" if failed else "ok",
            "source_lang": self.source_lang,
            "directory": str(self.directory.path),
            "translation": self.translator is not None,
            "locales": results,
            "summary": summary,
        }

    def sync_locale(self, source: Catalog, locale: str) -> dict:
        """Merge and write one locale, returning its report entry."""
        path = self.directory.path_for(locale)
        result = {"locale": locale, "file": str(path)}

        previous = None
        if locale != self.source_lang and self.directory.exists(locale):
            try:
                previous = self.directory.read(locale)
            except (OSError, ValueError) as e:
                if self.fail_fast:
                    raise
                logger.warning("Skipping %s: cannot load %s: %s", locale, path, e)
                result.update(status="failed", error=f"load: {e}", error_type=type(e).__name__)
                return result

        stats = MergeStats()
        merged = merge_catalog(source, previous, locale, self.translator, stats)

        try:
            self.directory.write(locale, merged)
        except (OSError, ValueError) as e:
            logger.error("Error on saving %s: %s", path, e)
            result.update(status="failed", error=f"save: {e}", error_type=type(e).__name__)
            return result

        logger.info("%s saved.", locale)
        result.update(status="saved", stats=stats.to_dict())
        return result
