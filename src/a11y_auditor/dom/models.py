# src/a11y_auditor/dom/models.py
import logging
from typing import Dict, Optional, Tuple

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel, ConfigDict
from soupsieve import SelectorSyntaxError

from a11y_auditor.model import AuditSettings
from .styles import StyleResolver

logger = logging.getLogger(__name__)


class ResolvedStyle(BaseModel):
    """Effective colors of a node, as serialized CSS strings."""
    model_config = ConfigDict(frozen=True)

    background: str
    color: str


class DocumentSnapshot:
    """
    Read-only view over a parsed document for the duration of one audit run.

    Selector queries and resolved styles are cached here, so every rule
    collects its nodes once per run. Nothing in this class mutates the tree;
    a new snapshot is built for every orchestrator invocation.
    """

    def __init__(self, root: BeautifulSoup, settings: AuditSettings, styles: StyleResolver):
        self.root = root
        self.settings = settings
        self._styles = styles
        self._query_cache: Dict[str, Tuple[Tag, ...]] = {}
        self._style_cache: Dict[int, ResolvedStyle] = {}

    def query(self, selector: str) -> Tuple[Tag, ...]:
        """Returns all nodes matching a CSS selector, in document order."""
        cached = self._query_cache.get(selector)
        if cached is not None:
            return cached

        try:
            nodes = tuple(self.root.select(selector))
        except (SelectorSyntaxError, NotImplementedError) as e:
            logger.warning("Invalid selector '%s' ignored: %s", selector, e)
            nodes = ()

        self._query_cache[selector] = nodes
        return nodes

    def style(self, node: Tag) -> ResolvedStyle:
        """Resolved background and text color for a node (the hot path)."""
        key = id(node)
        cached = self._style_cache.get(key)
        if cached is None:
            cached = ResolvedStyle(
                background=self._styles.background_of(node),
                color=self._styles.color_of(node),
            )
            self._style_cache[key] = cached
        return cached

    @staticmethod
    def attr(node: Tag, name: str) -> Optional[str]:
        value = node.get(name)
        if isinstance(value, list):
            # bs4 splits multi-valued attributes such as class
            return " ".join(value)
        return value

    @staticmethod
    def has_attr(node: Tag, name: str) -> bool:
        return node.has_attr(name)

    @staticmethod
    def text(node: Tag) -> str:
        return node.get_text()
