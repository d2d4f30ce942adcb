"""
Profile service for the single student profile.

Every call reads and writes through the shared storage backend, so all
consumers see the same profile without holding their own copies.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from app.models.profile import ProfileCreate, StudentProfile
from app.storage import JsonDocumentStore, StorageService

logger = logging.getLogger(__name__)

PROFILE_KEY = "profiles/student_profile_v1.json"

# Fields managed by the service rather than the caller
_PROTECTED_FIELDS = {"id", "created_at", "last_updated"}


class ProfileNotFoundError(LookupError):
    """Raised when an operation needs a profile and none has been created."""


class ProfileService:
    """Create, read, update and reset the student profile."""

    def __init__(self, storage: StorageService):
        self.store: JsonDocumentStore[StudentProfile] = JsonDocumentStore(
            storage, PROFILE_KEY, StudentProfile, lambda: None
        )

    def get_profile(self) -> Optional[StudentProfile]:
        """Get the stored profile, or None if there isn't a valid one."""
        return self.store.load()

    def has_profile(self) -> bool:
        return self.get_profile() is not None

    def require_profile(self) -> StudentProfile:
        """Get the stored profile or raise ProfileNotFoundError."""
        profile = self.get_profile()
        if profile is None:
            raise ProfileNotFoundError("No student profile has been created")
        return profile

    def create_profile(self, form: ProfileCreate) -> StudentProfile:
        """Create (or replace) the profile from an onboarding form."""
        profile = StudentProfile.from_onboarding(form)
        self.store.save(profile)
        logger.info(f"Created profile {profile.id}")
        return profile

    def update_profile(self, **changes: Any) -> StudentProfile:
        """
        Apply field changes to the stored profile.

        Changes are validated against the profile schema; identity and
        timestamp fields cannot be overwritten.

        Raises:
            ProfileNotFoundError: If no profile exists
            ValueError: If a protected field is changed
            pydantic.ValidationError: If the changes don't fit the schema
        """
        protected = _PROTECTED_FIELDS.intersection(changes)
        if protected:
            raise ValueError(f"Cannot update protected fields: {sorted(protected)}")

        current = self.require_profile()
        updated = StudentProfile.model_validate(
            {**current.model_dump(), **changes, "last_updated": datetime.now()}
        )
        self.store.save(updated)
        logger.info(f"Updated profile {updated.id}: {sorted(changes)}")
        return updated

    def reset_profile(self) -> bool:
        """Delete the profile; returns False if there was none."""
        deleted = self.store.clear()
        if deleted:
            logger.info("Profile reset")
        return deleted
