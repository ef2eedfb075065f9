"""Supabase repository for nutrition records."""

import json
from dataclasses import dataclass

from supabase import Client

from nutrition_advisor.domain.nutrition import (
    NUTRIENT_FIELDS,
    NutritionItem,
    PersistedRecord,
)
from nutrition_advisor.services.coercion import (
    to_number,
    to_string_array,
    to_trimmed_string,
)
from nutrition_advisor.services.records import RecordRepository

_COLUMNS = (
    "id, food_name, is_non_food, calories, protein_g, carbs_g, fat_g, sugar_g, "
    "sodium_mg, fiber_g, top_benefits, health_warnings, dietary_advice, source, "
    "created_at"
)


@dataclass
class SupabaseRecordRepository(RecordRepository):
    """Supabase implementation backed by the records table.

    Ids come from the table's identity column, so concurrent inserts never
    share an id.
    """

    client: Client

    def insert_record(self, item: NutritionItem, created_at: str) -> int:
        """Insert a record row and return its id."""
        response = (
            self.client.table("records")
            .insert({**item.to_dict(), "created_at": created_at})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to insert nutrition record")
        return int(response.data[0]["id"])

    def list_by_date(self, day: str) -> list[PersistedRecord]:
        """Return records created on day, newest first."""
        response = (
            self.client.table("records")
            .select(_COLUMNS)
            .gte("created_at", f"{day} 00:00:00")
            .lte("created_at", f"{day} 23:59:59")
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_range(self, start: str, end: str) -> list[PersistedRecord]:
        """Return records created between start and end days, oldest first."""
        response = (
            self.client.table("records")
            .select(_COLUMNS)
            .gte("created_at", f"{start} 00:00:00")
            .lte("created_at", f"{end} 23:59:59")
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> PersistedRecord:
    numbers = {name: to_number(row.get(name)) for name in NUTRIENT_FIELDS}
    item = NutritionItem(
        food_name=to_trimmed_string(row.get("food_name")),
        is_non_food=bool(row.get("is_non_food")),
        top_benefits=to_string_array(_decode_list(row.get("top_benefits"))),
        health_warnings=to_string_array(_decode_list(row.get("health_warnings"))),
        dietary_advice=to_trimmed_string(row.get("dietary_advice")),
        source="text" if row.get("source") == "text" else "image",
        **numbers,
    )
    return PersistedRecord(
        id=int(row["id"]),
        created_at=str(row.get("created_at") or "")[:19].replace("T", " "),
        item=item,
    )


def _decode_list(value: object) -> object:
    """Accept json/jsonb columns as well as JSON text columns."""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value
