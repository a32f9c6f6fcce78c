# src/a11y_auditor/dom/builder.py
import logging
from typing import Optional, Union

from bs4 import BeautifulSoup

from a11y_auditor.model import AuditSettings
from .models import DocumentSnapshot
from .styles import StyleResolver

logger = logging.getLogger(__name__)

DocumentSource = Union[str, bytes, BeautifulSoup]


class DOMBuilder:
    """
    Builder responsible for turning a document source into a DocumentSnapshot.
    A raw HTML string is parsed; an existing BeautifulSoup tree is used as-is
    (the caller's live tree), and is only ever read.
    """

    def __init__(self, parser: str = 'html.parser'):
        self.parser = parser

    def parse_html(self, html: Union[str, bytes]) -> BeautifulSoup:
        if isinstance(html, bytes):
            html = html.decode('utf-8', errors='replace')
        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = (html or "").replace('\ufeff', '').strip()
        return BeautifulSoup(clean_html, self.parser)

    def build(self, source: DocumentSource, settings: Optional[AuditSettings] = None) -> DocumentSnapshot:
        """
        Creates a fresh snapshot for one audit run.

        Args:
            source: Raw HTML or a BeautifulSoup tree.
            settings: Engine settings; defaults are used when omitted.

        Returns:
            DocumentSnapshot: Read-only view with per-run query and style caches.
        """
        settings = settings or AuditSettings()
        root = source if isinstance(source, BeautifulSoup) else self.parse_html(source)

        styles = StyleResolver(
            root,
            default_background=settings.default_background,
            default_color=settings.default_color,
        )
        logger.debug("Snapshot built (%d elements)", len(root.find_all(True)))
        return DocumentSnapshot(root, settings, styles)
