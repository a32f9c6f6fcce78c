# src/a11y_auditor/model.py
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """Report bucket an issue lands in; also selects which rules run."""
    ARIA = "aria"
    STRUCTURE = "structure"
    CONTRAST = "contrast"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class WCAGLevel(str, Enum):
    AAA = "AAA"
    AA = "AA"
    FAIL = "Fail"


class Issue(BaseModel):
    """
    Data model representing a single accessibility violation.
    Immutable once produced by a rule.
    """
    model_config = ConfigDict(frozen=True)

    # Classification
    category: Category
    code: str  # e.g., 'MISSING_ALT', 'LOW_CONTRAST', 'SKIPPED_HEADING_LEVEL'
    severity: Severity

    # Content
    message: str  # Human-readable summary
    element: str  # Tag-level descriptor, e.g. '<button>'
    snippet: Optional[str] = None  # Serialized markup of the offending node
    impact: str
    help: str


class CategoryResult(BaseModel):
    """
    Tagged result for one category: either NotRun or Ran(issues).
    An empty tuple on a 'ran' result means the rules found nothing.
    """
    model_config = ConfigDict(frozen=True)

    status: Literal["not_run", "ran"] = "not_run"
    issues: Tuple[Issue, ...] = ()

    @classmethod
    def not_run(cls) -> "CategoryResult":
        return cls(status="not_run")

    @classmethod
    def ran(cls, issues: List[Issue]) -> "CategoryResult":
        return cls(status="ran", issues=tuple(issues))

    @property
    def has_run(self) -> bool:
        return self.status == "ran"


class AccessibilityReport(BaseModel):
    """
    The categorized audit result. All three buckets are always present.
    """
    model_config = ConfigDict(frozen=True)

    aria: CategoryResult = Field(default_factory=CategoryResult.not_run)
    structure: CategoryResult = Field(default_factory=CategoryResult.not_run)
    contrast: CategoryResult = Field(default_factory=CategoryResult.not_run)

    def result(self, category: Union[Category, str]) -> CategoryResult:
        return getattr(self, Category(category).value)

    def issues(self, category: Union[Category, str]) -> Tuple[Issue, ...]:
        """Issues of a category; empty for categories that were not run."""
        return self.result(category).issues

    def has_run(self, category: Union[Category, str]) -> bool:
        return self.result(category).has_run

    @property
    def total_issues(self) -> int:
        return sum(len(self.issues(cat)) for cat in Category)

    def as_mapping(self) -> Dict[str, List[Issue]]:
        """Plain category -> issue list view, as consumed by renderers."""
        return {cat.value: list(self.issues(cat)) for cat in Category}


class RGBColor(BaseModel):
    """An sRGB color with integer channels in [0, 255]."""
    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b


class ContrastResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ratio: float = Field(gt=0)
    rounded_ratio: float
    level: WCAGLevel

    @property
    def not_applicable(self) -> bool:
        """Identical (or indistinguishable) colors; never reported."""
        return self.rounded_ratio == 1.0

    @property
    def is_violation(self) -> bool:
        return self.level is WCAGLevel.FAIL and not self.not_applicable


class AuditSettings(BaseModel):
    """
    Engine settings for one orchestrator. Built from settings.json by default,
    overridable per call.
    """
    model_config = ConfigDict(frozen=True)

    panel_selector: Optional[str] = "#accessibility-sidebar"
    image_alt_severity: Severity = Severity.ERROR
    ignored_codes: Tuple[str, ...] = ()
    default_background: str = "#ffffff"
    default_color: str = "#000000"

    @field_validator('ignored_codes', mode='before')
    @classmethod
    def parse_ignored_codes(cls, v):
        """Accepts a list or a comma-separated string of issue codes."""
        if v is None:
            return ()
        if isinstance(v, str):
            return tuple(c.strip().upper() for c in v.split(',') if c.strip())
        return tuple(str(c).strip().upper() for c in v)
