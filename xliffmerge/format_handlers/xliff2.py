#!/usr/bin/env python3
"""
XLIFF 2.0 format handler.

Handles parsing and serialization of the XLIFF 2.0 files produced by
`ng extract-i18n --format xlf2` and friends.
"""

from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape
from typing import Optional

from .base import Catalog, FormatHandler, Note, Unit


XLIFF_NS = "urn:oasis:names:tc:xliff:document:2.0"
NS = {'x': XLIFF_NS}

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'
INDENT = '  '


class CatalogError(ValueError):
    """Raised when catalog content is not a usable XLIFF 2.0 document."""
    pass


def is_well_formed(markup: str) -> bool:
    """Check that markup can be embedded as <source>/<target> content."""
    try:
        ET.fromstring(f'<m xmlns="{XLIFF_NS}">{markup}</m>')
    except ET.ParseError:
        return False
    return True


class Xliff2Handler(FormatHandler):
    """
    Handler for XLIFF 2.0 localization files.

    XLIFF 2.0 structure:
    ```xml
    <?xml version="1.0" encoding="UTF-8"?>
    <xliff version="2.0" xmlns="urn:oasis:names:tc:xliff:document:2.0" srcLang="en" trgLang="fr">
      <file original="ng.template" id="ngi18n">
        <unit id="greeting">
          <notes>
            <note category="location">src/app/app.component.html:3</note>
          </notes>
          <segment state="final">
            <source>Hello <ph id="0" equiv="INTERPOLATION" disp="{{ name }}"/></source>
            <target>Bonjour <ph id="0" equiv="INTERPOLATION" disp="{{ name }}"/></target>
          </segment>
        </unit>
      </file>
    </xliff>
    ```

    Source and target keep their inline markup verbatim. The segment state
    is read from the `state` attribute, or from a `<state>` child element
    as written by older tools, and always written back as the attribute.
    """

    @property
    def name(self) -> str:
        return "xliff2"

    @property
    def file_extensions(self) -> list[str]:
        return ["xlf", "xliff"]

    def parse(self, content: str) -> Catalog:
        """
        Parse XLIFF 2.0 content into a catalog.

        Args:
            content: Raw XML file content

        Returns:
            Catalog with units in document order

        Raises:
            CatalogError: If the content is not well-formed XLIFF 2.0
        """
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise CatalogError(f"Invalid XML: {e}")

        errors = self._validate_root(root)
        if errors:
            raise CatalogError(errors[0])

        file_elem = root.find('x:file', NS)
        units = []
        for unit_elem in file_elem.findall('x:unit', NS):
            units.append(self._parse_unit(unit_elem))

        return Catalog(
            src_lang=root.get('srcLang', ''),
            trg_lang=root.get('trgLang') or None,
            file_original=file_elem.get('original'),
            file_id=file_elem.get('id'),
            units=tuple(units),
            version=root.get('version', '2.0'),
        )

    def _parse_unit(self, unit_elem: ET.Element) -> Unit:
        unit_id = unit_elem.get('id')
        if not unit_id:
            raise CatalogError("Found <unit> without id attribute")

        segments = unit_elem.findall('x:segment', NS)
        if not segments:
            raise CatalogError(f"Unit '{unit_id}' has no <segment>")
        # Only single-segment units can be merged without losing content
        if len(segments) > 1:
            raise CatalogError(f"Unit '{unit_id}' has {len(segments)} <segment> elements, expected one")
        if unit_elem.find('x:ignorable', NS) is not None:
            raise CatalogError(f"Unit '{unit_id}' has <ignorable> content, which is not supported")
        segment = segments[0]

        source_elem = segment.find('x:source', NS)
        if source_elem is None:
            raise CatalogError(f"Unit '{unit_id}' has no <source>")

        target_elem = segment.find('x:target', NS)
        target = self._inner_markup(target_elem) if target_elem is not None else None

        return Unit(
            id=unit_id,
            source=self._inner_markup(source_elem),
            target=target,
            state=self._get_state(segment),
            notes=self._parse_notes(unit_elem),
        )

    def _get_state(self, segment: ET.Element) -> Optional[str]:
        state = segment.get('state')
        if state is not None:
            return state
        state_elem = segment.find('x:state', NS)
        if state_elem is not None:
            return (state_elem.text or '').strip()
        return None

    def _parse_notes(self, unit_elem: ET.Element) -> tuple[Note, ...]:
        notes_elem = unit_elem.find('x:notes', NS)
        if notes_elem is None:
            return ()
        return tuple(
            Note(text=note.text or '', category=note.get('category'))
            for note in notes_elem.findall('x:note', NS)
        )

    def _inner_markup(self, elem: ET.Element) -> str:
        """Return the element's content as markup, inline elements included."""
        parts = [escape(elem.text or '')]
        for child in elem:
            # tostring() includes the child's tail and redeclares the
            # default namespace on every top-level element it writes
            markup = ET.tostring(child, encoding='unicode', default_namespace=XLIFF_NS)
            parts.append(markup.replace(f' xmlns="{XLIFF_NS}"', '', 1))
        return ''.join(parts)

    def serialize(self, catalog: Catalog) -> str:
        """
        Serialize a catalog to XLIFF 2.0 with 2-space indentation.

        Args:
            catalog: Catalog to write

        Returns:
            Complete XML file content

        Raises:
            CatalogError: If a source or target is not well-formed markup
        """
        root_attrs = [
            ('version', catalog.version),
            ('xmlns', XLIFF_NS),
            ('srcLang', catalog.src_lang),
        ]
        if catalog.trg_lang:
            root_attrs.append(('trgLang', catalog.trg_lang))

        file_attrs = [
            (key, value)
            for key, value in (('original', catalog.file_original), ('id', catalog.file_id))
            if value is not None
        ]

        lines = [XML_HEADER, f'<xliff{self._format_attrs(root_attrs)}>']
        lines.append(f'{INDENT}<file{self._format_attrs(file_attrs)}>')
        for unit in catalog.units:
            lines.extend(self._serialize_unit(unit, depth=2))
        lines.append(f'{INDENT}</file>')
        lines.append('</xliff>')
        return '\n'.join(lines) + '\n'

    def _serialize_unit(self, unit: Unit, depth: int) -> list[str]:
        pad = INDENT * depth
        inner = INDENT * (depth + 1)
        leaf = INDENT * (depth + 2)

        for label, markup in (('source', unit.source), ('target', unit.target)):
            if markup is not None and not self.is_well_formed(markup):
                raise CatalogError(f"Unit '{unit.id}' has malformed {label} markup: {markup!r}")

        lines = [f'{pad}<unit{self._format_attrs([("id", unit.id)])}>']

        if unit.notes:
            lines.append(f'{inner}<notes>')
            for note in unit.notes:
                attrs = [('category', note.category)] if note.category else []
                lines.append(f'{leaf}<note{self._format_attrs(attrs)}>{escape(note.text)}</note>')
            lines.append(f'{inner}</notes>')

        segment_attrs = [('state', unit.state)] if unit.state is not None else []
        lines.append(f'{inner}<segment{self._format_attrs(segment_attrs)}>')
        lines.append(f'{leaf}<source>{unit.source}</source>')
        if unit.target is not None:
            lines.append(f'{leaf}<target>{unit.target}</target>')
        lines.append(f'{inner}</segment>')
        lines.append(f'{pad}</unit>')
        return lines

    def _format_attrs(self, attrs: list[tuple[str, str]]) -> str:
        return ''.join(f' {key}={self._quote(value)}' for key, value in attrs)

    def _quote(self, value: str) -> str:
        return '"' + escape(value, {'"': '&quot;'}) + '"'

    def is_well_formed(self, markup: str) -> bool:
        return is_well_formed(markup)

    def validate_content(self, content: str) -> list[str]:
        """Validate XLIFF 2.0 format."""
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            return [f"Invalid XML syntax: {e}"]
        return self._validate_root(root)

    def _validate_root(self, root: ET.Element) -> list[str]:
        errors = []
        if root.tag != f'{{{XLIFF_NS}}}xliff':
            errors.append(f"Root element must be 'xliff' in namespace {XLIFF_NS}, found '{root.tag}'")
            return errors

        version = root.get('version')
        if version and not version.startswith('2.'):
            errors.append(f"Unsupported XLIFF version: {version}")

        files = root.findall('x:file', NS)
        if len(files) != 1:
            errors.append(f"Expected exactly one <file> element, found {len(files)}")

        return errors
