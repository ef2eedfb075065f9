"""User profile service."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from nutrition_advisor.domain.profile import UserProfile


class ProfileRepository(Protocol):
    """Persistence interface for the singleton profile row."""

    def get_profile(self) -> UserProfile:
        """Return the stored profile, or an all-null profile."""

    def upsert_profile(self, profile: UserProfile) -> None:
        """Create or replace the profile row."""


@dataclass
class ProfileService:
    """Service for reading and replacing the user profile."""

    repository: ProfileRepository

    def get_profile(self) -> UserProfile:
        return self.repository.get_profile()

    def update_profile(self, payload: Mapping[str, object]) -> UserProfile:
        """Replace the profile. Keys missing from payload are stored as null."""
        profile = UserProfile.from_mapping(payload)
        self.repository.upsert_profile(profile)
        return profile
