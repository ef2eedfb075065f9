"""Supabase repository for the user profile row."""

from dataclasses import dataclass

from supabase import Client

from nutrition_advisor.domain.profile import UserProfile
from nutrition_advisor.services.profile import ProfileRepository

PROFILE_ROW_ID = 1


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation storing the profile as row id 1."""

    client: Client

    def get_profile(self) -> UserProfile:
        response = (
            self.client.table("user_profile")
            .select("*")
            .order("id", desc=False)
            .limit(1)
            .execute()
        )
        if not response.data:
            return UserProfile()
        return UserProfile.from_mapping(response.data[0])

    def upsert_profile(self, profile: UserProfile) -> None:
        self.client.table("user_profile").upsert(
            {"id": PROFILE_ROW_ID, **profile.to_dict()}
        ).execute()
