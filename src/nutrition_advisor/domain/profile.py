"""User profile domain model."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields


@dataclass(frozen=True)
class UserProfile:
    """Singleton user profile. Every field is nullable."""

    weight: float | None = None
    height: float | None = None
    activity_level: str | None = None
    ai_provider: str | None = None
    openai_key: str | None = None
    gemini_key: str | None = None
    theme_mode: str | None = None
    font_scale: float | None = None
    target_type: str | None = None
    daily_calorie_goal: float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> "UserProfile":
        """Build a profile from a row or payload, ignoring unknown keys."""
        if not data:
            return cls()
        names = {item.name for item in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in names})

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
