"""Writes simple structured content into a Google Document.

The Docs API addresses everything by UTF-16 index, so the writer keeps a
cursor and inserts each block at it. Plain paragraphs are batched; a table
forces a flush and a re-read of the document to learn where its cells are.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Tuple, Union

from certificate_mailer.services.docs_api import DocsService
from certificate_mailer.services.drive_api import DriveService
from certificate_mailer.utils.logger import get_logger
from certificate_mailer.utils.error_handler import APIError, DocumentError

logger = get_logger()

# First writable index in a new document body (index 0 is the section break)
BODY_START_INDEX = 1

RULE_BORDER = {
    'color': {'color': {'rgbColor': {'red': 0.6, 'green': 0.6, 'blue': 0.6}}},
    'width': {'magnitude': 1, 'unit': 'PT'},
    'padding': {'magnitude': 1, 'unit': 'PT'},
    'dashStyle': 'SOLID',
}


@dataclass(frozen=True)
class Paragraph:
    text: str
    style: str = "NORMAL_TEXT"


@dataclass(frozen=True)
class HorizontalRule:
    pass


@dataclass(frozen=True)
class Table:
    rows: Tuple[Tuple[str, ...], ...]
    column_widths: Tuple[float, ...] = ()


Block = Union[Paragraph, HorizontalRule, Table]


def utf16_length(text: str) -> int:
    """Length of text in UTF-16 code units, the unit Docs indices count in."""
    return len(text.encode('utf-16-le')) // 2


def paragraph_requests(index: int, text: str, style: str, border: Dict[str, Any] | None = None) -> List[Dict[str, Any]]:
    """Requests that insert one paragraph at `index` and style it.

    The border field is always in the mask so a paragraph never inherits the
    rule line of its neighbour.
    """
    text = text + "\n"
    paragraph_style: Dict[str, Any] = {'namedStyleType': style}
    if border:
        paragraph_style['borderBottom'] = border
    return [
        {'insertText': {'location': {'index': index}, 'text': text}},
        {'updateParagraphStyle': {
            'range': {'startIndex': index, 'endIndex': index + utf16_length(text)},
            'paragraphStyle': paragraph_style,
            'fields': 'namedStyleType,borderBottom',
        }},
    ]


def find_table(document: Dict[str, Any], min_index: int) -> Dict[str, Any]:
    """Returns the first table structural element starting at or after min_index."""
    for element in document.get('body', {}).get('content', []):
        if 'table' in element and element.get('startIndex', 0) >= min_index:
            return element
    raise DocumentError(f"Inserted table not found after index {min_index}")


def table_cell_indices(table_element: Dict[str, Any]) -> List[List[int]]:
    """Start index of the first paragraph in every cell, row by row."""
    return [
        [cell['content'][0]['startIndex'] for cell in row.get('tableCells', [])]
        for row in table_element['table'].get('tableRows', [])
    ]


class DocumentWriter:
    """Appends blocks to an empty Google Document."""

    def __init__(self, docs_service: DocsService, document_id: str):
        self.docs_service = docs_service
        self.document_id = document_id
        self.cursor = BODY_START_INDEX
        self._pending: List[Dict[str, Any]] = []
        # (start index, style, border) of the paragraph right before the cursor
        self._last_paragraph: Tuple[int, str, Dict[str, Any] | None] | None = None

    def write(self, blocks: Iterable[Block]) -> None:
        for block in blocks:
            if isinstance(block, Paragraph):
                self._add_paragraph(block.text, block.style)
            elif isinstance(block, HorizontalRule):
                # The Docs API cannot insert rules; an empty bordered paragraph looks the same
                self._add_paragraph("", "NORMAL_TEXT", border=RULE_BORDER)
            elif isinstance(block, Table):
                self._add_table(block)
            else:
                raise TypeError(f"Unsupported block type: {type(block).__name__}")
        self.flush()

    def flush(self) -> None:
        if self._pending:
            self.docs_service.batch_update(self.document_id, self._pending)
            self._pending = []

    def _add_paragraph(self, text: str, style: str, border: Dict[str, Any] | None = None) -> None:
        self._pending.extend(paragraph_requests(self.cursor, text, style, border))
        self._last_paragraph = (self.cursor, style, border)
        self.cursor += utf16_length(text) + 1

    def _add_table(self, table: Table) -> None:
        rows = len(table.rows)
        columns = max((len(row) for row in table.rows), default=0)
        if not rows or not columns:
            return

        self._pending.append({'insertTable': {
            'rows': rows,
            'columns': columns,
            'location': {'index': self.cursor},
        }})
        if self._last_paragraph:
            self._join_preceding_paragraph()
        self.flush()

        element = find_table(self.docs_service.get_document(self.document_id), self.cursor)
        table_start = element['startIndex']
        cell_indices = table_cell_indices(element)

        for column, width in enumerate(table.column_widths):
            self._pending.append({'updateTableColumnProperties': {
                'tableStartLocation': {'index': table_start},
                'columnIndices': [column],
                'tableColumnProperties': {'widthType': 'FIXED_WIDTH', 'width': {'magnitude': width, 'unit': 'PT'}},
                'fields': 'widthType,width',
            }})

        # Fill from the last cell backwards so earlier indices stay valid
        inserted = 0
        cells: List[Tuple[int, str]] = []
        for r, row in enumerate(table.rows):
            for c, value in enumerate(row):
                if value:
                    cells.append((cell_indices[r][c], value))
        for index, value in sorted(cells, reverse=True):
            self._pending.append({'insertText': {'location': {'index': index}, 'text': value}})
            inserted += utf16_length(value)

        self.flush()
        self.cursor = element['endIndex'] + inserted
        self._last_paragraph = None

    def _join_preceding_paragraph(self) -> None:
        """Removes the empty paragraph insertTable leaves in front of the table.

        The newline before a table cannot be deleted, so the previous
        paragraph gives up its own newline instead and takes that one over.
        Its style is reapplied because the surviving newline carries the
        style of the empty paragraph.
        """
        start, style, border = self._last_paragraph
        newline = self.cursor - 1
        self._pending.append({'deleteContentRange': {
            'range': {'startIndex': newline, 'endIndex': self.cursor},
        }})
        paragraph_style: Dict[str, Any] = {'namedStyleType': style}
        if border:
            paragraph_style['borderBottom'] = border
        self._pending.append({'updateParagraphStyle': {
            'range': {'startIndex': start, 'endIndex': self.cursor},
            'paragraphStyle': paragraph_style,
            'fields': 'namedStyleType,borderBottom',
        }})
        self.cursor = newline


@contextmanager
def temporary_document(docs_service: DocsService, drive_service: DriveService, title: str) -> Iterator[str]:
    """Creates a Google Document that is trashed when the block exits.

    A failure to trash is logged; it never replaces the error raised inside
    the block.
    """
    document_id = docs_service.create_document(title)
    try:
        yield document_id
    finally:
        try:
            drive_service.trash_file(document_id)
            logger.debug(f"Trashed temporary document {document_id}")
        except APIError as e:
            logger.warning(f"Could not trash temporary document {document_id} ('{title}'): {e}")
