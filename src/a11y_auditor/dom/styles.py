# src/a11y_auditor/dom/styles.py
import logging
import re
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r'/\*.*?\*/', re.DOTALL)
# Statement at-rules such as '@import url(x.css);' carry no declarations
_AT_STATEMENT_RE = re.compile(r'@[^{};]*;')
# Innermost 'selector { declarations }' blocks; @media wrappers are flattened
_RULE_RE = re.compile(r'([^{}]+)\{([^{}]*)\}')
_IMPORTANT_RE = re.compile(r'\s*!\s*important\s*$', re.IGNORECASE)
_FUNCTIONAL_RE = re.compile(r"^rgba?\((.*)\)$")
_ARG_SPLIT_RE = re.compile(r"[,\s/]+")
# A background shorthand we can use: a single hex or functional rgb() color
_COLOR_TOKEN_RE = re.compile(r'^(#[0-9a-fA-F]{3,8}|rgba?\([^)]*\)|[a-zA-Z]+)$')

Declarations = Dict[str, str]


def parse_declarations(text: str) -> Declarations:
    """Parses 'prop: value; prop2: value2' into a lowercase-keyed dict."""
    declarations: Declarations = {}
    for chunk in (text or "").split(';'):
        if ':' not in chunk:
            continue
        prop, value = chunk.split(':', 1)
        prop = prop.strip().lower()
        value = _IMPORTANT_RE.sub('', value.strip())
        if prop and value:
            declarations[prop] = value
    return declarations


def is_transparent(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized == 'transparent':
        return True

    match = _FUNCTIONAL_RE.match(normalized)
    if not match:
        return False
    args = [a for a in _ARG_SPLIT_RE.split(match.group(1)) if a]
    if len(args) < 4:
        return False
    alpha = args[3]
    try:
        return float(alpha[:-1] if alpha.endswith('%') else alpha) == 0
    except ValueError:
        return False


class StyleResolver:
    """
    Approximates the browser's computed colors for a static document.

    Declarations come from <style> blocks (source order, later wins,
    specificity not computed) and from inline style attributes (always win).
    'color' inherits; 'background-color' resolves to the nearest non-transparent
    ancestor-or-self background, falling back to the configured defaults.
    """

    def __init__(self, root: BeautifulSoup, default_background: str = "#ffffff", default_color: str = "#000000"):
        self.root = root
        self.default_background = default_background
        self.default_color = default_color
        self._sheet: Dict[int, Declarations] = {}
        self._inline: Dict[int, Declarations] = {}
        self._load_stylesheets()

    def _load_stylesheets(self) -> None:
        rules: List[Tuple[str, Declarations]] = []
        for style_tag in self.root.find_all('style'):
            css = _AT_STATEMENT_RE.sub('', _COMMENT_RE.sub('', style_tag.get_text()))
            for selector_group, body in _RULE_RE.findall(css):
                declarations = parse_declarations(body)
                if not declarations:
                    continue
                for selector in selector_group.split(','):
                    selector = selector.strip()
                    if selector and not selector.startswith('@'):
                        rules.append((selector, declarations))

        for selector, declarations in rules:
            try:
                matched = self.root.select(selector)
            except (SelectorSyntaxError, NotImplementedError) as e:
                logger.debug("Skipping unsupported stylesheet selector '%s': %s", selector, e)
                continue
            for node in matched:
                self._sheet.setdefault(id(node), {}).update(declarations)

        logger.debug("Loaded %d stylesheet rules onto %d nodes", len(rules), len(self._sheet))

    def declared(self, node: Tag, prop: str) -> Optional[str]:
        """The value a node itself declares for a property (inline beats stylesheet)."""
        key = id(node)
        inline = self._inline.get(key)
        if inline is None:
            inline = self._inline[key] = parse_declarations(node.get('style', ''))
        if prop in inline:
            return inline[prop]
        return self._sheet.get(key, {}).get(prop)

    def _declared_background(self, node: Tag) -> Optional[str]:
        value = self.declared(node, 'background-color')
        if value is None:
            shorthand = self.declared(node, 'background')
            # 'background: none' resets the image and leaves the color transparent
            if shorthand and shorthand.strip().lower() != 'none' and _COLOR_TOKEN_RE.match(shorthand.strip()):
                value = shorthand.strip()
        return value

    def _lineage(self, node: Tag):
        yield node
        for parent in node.parents:
            if isinstance(parent, Tag) and not isinstance(parent, BeautifulSoup):
                yield parent

    def color_of(self, node: Tag) -> str:
        for current in self._lineage(node):
            value = self.declared(current, 'color')
            if value and value.lower() not in ('inherit', 'unset', 'initial'):
                return value
        return self.default_color

    def background_of(self, node: Tag) -> str:
        for current in self._lineage(node):
            value = self._declared_background(current)
            if value and value.lower() not in ('inherit', 'unset', 'initial') and not is_transparent(value):
                return value
        return self.default_background
