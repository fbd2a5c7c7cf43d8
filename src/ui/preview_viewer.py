"""
Preview Viewer
Renders a single bibliography entry as HTML for read-only display.
"""

import html
from typing import Optional

from PySide6.QtWidgets import QTextBrowser, QWidget

from src.core.settings_manager import AppSettings
from src.models.bib_models import BibDatabaseContext, BibEntry
from src.utils.locale_manager import tr

# Fields shown first, in this order; the rest follow alphabetically
_LEADING_FIELDS = ("author", "editor", "title", "journal", "booktitle", "publisher", "year")


class PreviewViewer:
    """
    Builds entry previews bound to one library.

    @string references used as bare field values are shown expanded, which is
    why the viewer needs the database context.
    """

    def __init__(self, preferences: AppSettings):
        self._preferences = preferences
        self._database_context: Optional[BibDatabaseContext] = None

    def set_database_context(self, database_context: BibDatabaseContext) -> None:
        self._database_context = database_context

    def _display_value(self, value: str) -> str:
        if self._database_context is not None:
            value = self._database_context.database.resolve_string_reference(value) or ""
        return value

    def _ordered_fields(self, entry: BibEntry) -> list:
        names = entry.field_names
        leading = [name for name in _LEADING_FIELDS if name in names]
        rest = sorted(name for name in names if name not in _LEADING_FIELDS)
        return leading + rest

    def render_entry(self, entry: Optional[BibEntry]) -> str:
        """Return the HTML preview of ``entry`` (a placeholder for ``None``)."""
        font_size = self._preferences.preview_font_size
        if entry is None:
            return f"<p style='font-size:{font_size}pt; color:gray;'>{html.escape(tr('preview.no_entry'))}</p>"

        rows = []
        for name in self._ordered_fields(entry):
            value = self._display_value(entry.get_field(name) or "")
            rows.append(
                f"<tr><td style='color:gray; padding-right:12px;'>{html.escape(name)}</td>"
                f"<td>{html.escape(value)}</td></tr>"
            )

        return (
            f"<div style='font-size:{font_size}pt;'>"
            f"<b>{html.escape(entry.entry_type)}</b> "
            f"<span style='color:#2196f3;'>{html.escape(entry.display_key)}</span>"
            f"<table>{''.join(rows)}</table>"
            f"</div>"
        )

    def create_widget(self, entry: Optional[BibEntry], parent: Optional[QWidget] = None) -> QTextBrowser:
        browser = QTextBrowser(parent)
        browser.setOpenExternalLinks(False)
        browser.setHtml(self.render_entry(entry))
        return browser
