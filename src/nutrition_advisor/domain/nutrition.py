"""Nutrition domain models."""

from dataclasses import asdict, dataclass, field

NUTRIENT_FIELDS = (
    "calories",
    "protein_g",
    "carbs_g",
    "fat_g",
    "sugar_g",
    "sodium_mg",
    "fiber_g",
)

SOURCE_IMAGE = "image"
SOURCE_TEXT = "text"


@dataclass(frozen=True)
class NutritionItem:
    """One normalized food analysis result."""

    food_name: str
    is_non_food: bool
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    sugar_g: float
    sodium_mg: float
    fiber_g: float
    top_benefits: list[str] = field(default_factory=list)
    health_warnings: list[str] = field(default_factory=list)
    dietary_advice: str = ""
    source: str = SOURCE_IMAGE

    def to_dict(self) -> dict[str, object]:
        """Return the canonical JSON shape."""
        return asdict(self)


@dataclass(frozen=True)
class PersistedRecord:
    """A stored nutrition item with its id and local timestamp."""

    id: int
    created_at: str
    item: NutritionItem

    def to_dict(self) -> dict[str, object]:
        """Return the item fields plus id and created_at."""
        return {"id": self.id, **self.item.to_dict(), "created_at": self.created_at}


@dataclass(frozen=True)
class DailySummary:
    """Summed nutrition fields for a day or a set of records."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0
    fiber_g: float = 0.0
    day: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {}
        if self.day is not None:
            payload["day"] = self.day
        for name in NUTRIENT_FIELDS:
            payload[name] = getattr(self, name)
        return payload


@dataclass(frozen=True)
class WeeklyAdherence:
    """Counts of days meeting, exceeding or falling short of the goal band."""

    total_days: int
    days_met: int = 0
    days_over: int = 0
    days_under: int = 0


@dataclass(frozen=True)
class DailyAdvice:
    """AI-written advice for today."""

    advice: str


@dataclass(frozen=True)
class WeeklyReport:
    """AI-written weekly report with adherence counts."""

    summary: str
    highlights: list[str]
    total_days: int
    days_met: int
    days_over: int
    days_under: int

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
