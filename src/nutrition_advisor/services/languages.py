"""Per-language prompt text and non-food vocabulary."""

from dataclasses import dataclass

DEFAULT_LANGUAGE = "en"

ENGLISH_NON_FOOD_KEYWORDS = ("not food", "non-food", "no food", "not edible")

_REQUIRED_KEYS = (
    "food_name, calories, protein_g, carbs_g, fat_g, sugar_g, sodium_mg, "
    "fiber_g, top_benefits, health_warnings, dietary_advice"
)


@dataclass(frozen=True)
class LanguagePack:
    """Prompt text and keyword lists for one response language."""

    code: str
    reply_language: str
    system_prompt: str
    text_notes: tuple[str, ...]
    non_food_keywords: tuple[str, ...]
    non_food_message: str

    @property
    def all_non_food_keywords(self) -> tuple[str, ...]:
        """English keywords plus this language's own, without duplicates."""
        merged = list(ENGLISH_NON_FOOD_KEYWORDS)
        for keyword in self.non_food_keywords:
            if keyword not in merged:
                merged.append(keyword)
        return tuple(merged)


LANGUAGES: dict[str, LanguagePack] = {
    "en": LanguagePack(
        code="en",
        reply_language="English",
        system_prompt="\n".join(
            [
                "Role: You are a professional nutritionist.",
                "Task: Identify the food in the image or description, "
                "estimate nutrition, and provide advice.",
                "Rules:",
                "1. Return strict JSON only.",
                "2. If the input is not food, mention that in food_name.",
                "3. Advice should be concise and actionable.",
                f"4. Must include keys: {_REQUIRED_KEYS}.",
                "5. top_benefits and health_warnings must be arrays of strings.",
            ]
        ),
        text_notes=(
            "Note: The user input is a text description, not an image.",
            "If multiple foods are mentioned, return an items array with one "
            "record per food.",
            "If only one food is mentioned, still return an items array with "
            "1 record.",
        ),
        non_food_keywords=ENGLISH_NON_FOOD_KEYWORDS,
        non_food_message="No food detected. Please retake the photo.",
    ),
    "zh": LanguagePack(
        code="zh",
        reply_language="Simplified Chinese",
        system_prompt="\n".join(
            [
                "角色：你是一名专业营养师。",
                "任务：识别图片或描述中的食物，估算营养成分，并给出饮食建议。",
                "规则：",
                "1. 只返回严格的 JSON。",
                "2. 如果输入不是食物，请在 food_name 中注明“非食物”。",
                "3. 建议要简洁、可执行。",
                f"4. 必须包含以下键：{_REQUIRED_KEYS}。",
                "5. top_benefits 和 health_warnings 必须是字符串数组。",
                "6. 所有文字内容使用简体中文。",
            ]
        ),
        text_notes=(
            "注意：用户输入的是文字描述，不是图片。",
            "如果提到多种食物，返回 items 数组，每种食物一条记录。",
            "如果只提到一种食物，也返回只含 1 条记录的 items 数组。",
        ),
        non_food_keywords=("非食物", "不是食物", "没有食物", "无食物", "不可食用"),
        non_food_message="未检测到食物，请重新拍摄。",
    ),
}


def get_language(code: str | None) -> LanguagePack:
    """Return the pack for code, falling back to English."""
    if code:
        pack = LANGUAGES.get(code.strip().lower())
        if pack is not None:
            return pack
    return LANGUAGES[DEFAULT_LANGUAGE]
