# Path: core/library/store.py
# Purpose: Manage the persisted library of style profiles and their version history.
# Layer: core/library.
# Details: Edits and reverts snapshot the current state and build the next version before committing it.

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.errors import StorageError
from core.models.domain import StyleAnalysisResult, StyleProfile
from core.palette.colors import normalize_hex

from .kv_store import JsonKeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "palette_ai_profiles"
EDIT_CHANGE_LOG = "Updated parameters manually"
EDITABLE_FIELDS = ("name", "description", "visual_technique", "palette", "moods")


def _as_entries(key: str, value: Any) -> Tuple[str, ...]:
    """A single string is one entry; palette entries must be valid hex colors."""

    entries = (value,) if isinstance(value, str) else tuple(value)
    if key != "palette":
        return tuple(str(entry) for entry in entries)

    colors = tuple(normalize_hex(entry) for entry in entries)
    invalid = [str(entry) for entry, color in zip(entries, colors) if color is None]
    if invalid:
        raise ValueError(f"Invalid palette colors: {', '.join(invalid)}")
    return colors


class StyleLibrary:
    """
    Ordered collection of style profiles, newest first.

    The in-memory list is authoritative for the session: when persisting fails the failure is
    logged and reported through :meth:`save`, but the change is kept.
    """

    def __init__(self, store: JsonKeyValueStore, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self.store = store
        self.storage_key = storage_key
        self._profiles: List[StyleProfile] = []

    def load(self) -> List[StyleProfile]:
        """Read profiles from storage; unreadable or malformed data yields an empty library."""

        try:
            raw = self.store.get(self.storage_key)
            payload: Any = json.loads(raw) if raw else []
        except (StorageError, ValueError) as exc:
            logger.error("Failed to load profiles: %s", exc)
            payload = []

        if not isinstance(payload, list):
            logger.error("Stored profiles are not a list; starting with an empty library.")
            payload = []

        profiles: List[StyleProfile] = []
        for item in payload:
            if not isinstance(item, dict):
                logger.warning("Skipping profile entry of type %s", type(item).__name__)
                continue
            try:
                profiles.append(StyleProfile.from_dict(item))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping unreadable profile entry: %s", exc)
        self._profiles = profiles
        return list(profiles)

    def save(self) -> bool:
        """Persist all profiles; returns False (after logging) when storage rejects the write."""

        blob = json.dumps([profile.to_dict() for profile in self._profiles])
        try:
            self.store.set(self.storage_key, blob)
        except StorageError as exc:
            logger.error("Storage limit reached or write failed; delete old styles to save new ones: %s", exc)
            return False
        return True

    def list(self) -> List[StyleProfile]:
        return list(self._profiles)

    def get(self, profile_id: str) -> Optional[StyleProfile]:
        return next((profile for profile in self._profiles if profile.id == profile_id), None)

    def _require(self, profile_id: str) -> StyleProfile:
        profile = self.get(profile_id)
        if profile is None:
            raise KeyError(f"Style profile {profile_id} not found")
        return profile

    def _commit(self, updated: StyleProfile) -> StyleProfile:
        self._profiles = [updated if profile.id == updated.id else profile for profile in self._profiles]
        self.save()
        return updated

    def create_from_analysis(self, analysis: StyleAnalysisResult, reference_images: Sequence[str]) -> StyleProfile:
        """Add a version 1 profile built from ``analysis`` at the front of the library."""

        profile = StyleProfile.from_analysis(analysis, list(reference_images))
        self._profiles = [profile] + self._profiles
        self.save()
        logger.info("Created style profile %s (%s)", profile.id, profile.name)
        return profile

    def edit(self, profile_id: str, change_log: str = EDIT_CHANGE_LOG, **changes: Any) -> StyleProfile:
        """
        Apply field changes as a new version.

        Only name, description, visual_technique, palette, and moods are editable.
        """

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields are not editable: {', '.join(sorted(unknown))}")

        profile = self._require(profile_id)
        normalized: Dict[str, Any] = {
            key: _as_entries(key, value) if key in ("palette", "moods") else str(value)
            for key, value in changes.items()
        }
        updated = profile.committed(replace(profile.data(), **normalized), change_log)
        return self._commit(updated)

    def revert(self, profile_id: str, version: int) -> StyleProfile:
        """Restore the data of the snapshot taken at ``version`` as a new version."""

        profile = self._require(profile_id)
        snapshot = next((item for item in profile.history if item.version == version), None)
        if snapshot is None:
            raise KeyError(f"Style profile {profile_id} has no snapshot for v{version}")
        updated = profile.committed(snapshot.data, f"Reverted to v{version}")
        return self._commit(updated)

    def delete(self, profile_id: str) -> bool:
        remaining = [profile for profile in self._profiles if profile.id != profile_id]
        if len(remaining) == len(self._profiles):
            return False
        self._profiles = remaining
        self.save()
        return True
