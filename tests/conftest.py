"""Shared fixtures for xliffmerge tests."""

import pytest

from xliffmerge.format_handlers import Catalog, Unit
from xliffmerge.translator import TranslationError, Translator


SOURCE_XLF = """<?xml version="1.0" encoding="UTF-8"?>
<xliff version="2.0" xmlns="urn:oasis:names:tc:xliff:document:2.0" srcLang="en">
  <file original="ng.template" id="ngi18n">
    <unit id="greeting">
      <notes>
        <note category="location">src/app/app.component.html:3</note>
      </notes>
      <segment>
        <source>Hello</source>
      </segment>
    </unit>
    <unit id="farewell">
      <segment>
        <source>Bye {name}</source>
      </segment>
    </unit>
    <unit id="submit">
      <segment>
        <source>Submit</source>
      </segment>
    </unit>
  </file>
</xliff>
"""

FR_XLF = """<?xml version="1.0" encoding="UTF-8"?>
<xliff version="2.0" xmlns="urn:oasis:names:tc:xliff:document:2.0" srcLang="en" trgLang="fr">
  <file original="ng.template" id="ngi18n">
    <unit id="greeting">
      <segment state="final">
        <source>Hello</source>
        <target>Bonjour</target>
      </segment>
    </unit>
    <unit id="obsolete">
      <segment state="final">
        <source>Gone</source>
        <target>Parti</target>
      </segment>
    </unit>
  </file>
</xliff>
"""


class FakeTranslator(Translator):
    """Translator returning canned answers and recording every call."""

    def __init__(self, answers=None, fail=False):
        self.answers = answers or {}
        self.fail = fail
        self.calls = []

    def translate(self, text, target_lang):
        self.calls.append((text, target_lang))
        if self.fail or text not in self.answers:
            raise TranslationError(f"no translation for {text!r}")
        return self.answers[text]


@pytest.fixture
def source_catalog():
    return Catalog(
        src_lang="en",
        file_original="ng.template",
        file_id="ngi18n",
        units=(
            Unit(id="a", source="Hello"),
            Unit(id="b", source="Bye {name}"),
        ),
    )


@pytest.fixture
def fr_catalog():
    return Catalog(
        src_lang="en",
        trg_lang="fr",
        file_original="ng.template",
        file_id="ngi18n",
        units=(Unit(id="a", source="Hello", target="Bonjour", state="final"),),
    )


@pytest.fixture
def locale_dir(tmp_path):
    """Locale directory with an English source and a French translation."""
    (tmp_path / "messages.en.xlf").write_text(SOURCE_XLF, encoding="utf-8")
    (tmp_path / "messages.fr.xlf").write_text(FR_XLF, encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_translator():
    """Factory for FakeTranslator instances."""
    return FakeTranslator
