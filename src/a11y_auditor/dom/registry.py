# src/a11y_auditor/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, List, Optional

from a11y_auditor.model import Category
from .core import AuditRule, RuleDefinition

logger = logging.getLogger(__name__)


class RuleRegistry:
    """
    Central registry for audit rule definitions.

    Dynamically discovers and loads RuleDefinition modules from the
    'a11y_auditor.dom.rules' package and groups their rules per report category.
    """

    _definitions: Dict[Category, List[RuleDefinition]] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Discovers and registers all rule definitions found in the 'a11y_auditor.dom.rules' package.

        Every module exposing a `DEFINITION` attribute (instance of `RuleDefinition`)
        is registered under its category. Definitions are kept sorted by their
        `order`, which fixes the issue order inside a category bucket.
        """
        if cls._loaded:
            return

        definitions: Dict[Category, List[RuleDefinition]] = {cat: [] for cat in Category}

        try:
            # Import the rules package to iterate over its modules
            import a11y_auditor.dom.rules as rules_pkg

            for _, name, _ in pkgutil.iter_modules(rules_pkg.__path__):
                full_name = f"a11y_auditor.dom.rules.{name}"
                try:
                    module = importlib.import_module(full_name)
                    defn = getattr(module, "DEFINITION", None)
                    if isinstance(defn, RuleDefinition):
                        definitions[defn.category].append(defn)
                        logger.debug(f"Rule module loaded: {defn.name} ({defn.category.value})")
                except Exception as e:
                    logger.error(f"Error loading rule module {name}: {e}")

        except ImportError as e:
            logger.error(f"Could not find rules package: {e}")
            return

        for defs in definitions.values():
            defs.sort(key=lambda d: (d.order, d.name))

        cls._definitions = definitions
        cls._loaded = True

    @classmethod
    def get_definitions(cls, category: Optional[Category] = None) -> List[RuleDefinition]:
        """Returns the registered definitions, optionally limited to one category."""
        cls.discover()
        if category is not None:
            return list(cls._definitions.get(category, []))
        return [defn for cat in Category for defn in cls._definitions.get(cat, [])]

    @classmethod
    def get_rules(cls, category: Category) -> List[AuditRule]:
        """Returns the rule functions of a category in execution order."""
        return [rule for defn in cls.get_definitions(category) for rule in defn.audit_rules]

    @classmethod
    def get_codes_by_category(cls) -> Dict[Category, List[str]]:
        """
        Returns every issue code the rules can emit, grouped per category.
        Used by the CLI 'codes' command and for validating ignore lists.
        """
        return {
            cat: sorted({code for defn in cls.get_definitions(cat) for code in defn.codes})
            for cat in Category
        }

    @classmethod
    def get_all_possible_codes(cls) -> List[str]:
        return sorted({code for codes in cls.get_codes_by_category().values() for code in codes})
