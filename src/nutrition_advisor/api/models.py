"""Request bodies accepted by the HTTP API."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class AnalyzeImageRequest(BaseModel):
    """Photo analysis request with a base64 data URI."""

    image: str | None = None


class AnalyzeTextRequest(BaseModel):
    """Free-text meal description."""

    text: str | None = None


class SaveRecordsRequest(BaseModel):
    """One analyzed item or a list of them, optionally backdated."""

    record: dict[str, Any] | list[dict[str, Any]] | None = None
    record_date: str | None = None

    def items(self) -> list[dict[str, Any]]:
        if self.record is None:
            return []
        return self.record if isinstance(self.record, list) else [self.record]


class ProfileUpdateRequest(BaseModel):
    """Full profile replacement; omitted fields are stored as null."""

    model_config = ConfigDict(extra="ignore")

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
