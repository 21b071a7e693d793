"""JSON snapshot files for UserProfile backups."""

import logging
from pathlib import Path

from pydantic import ValidationError

from trademind.exceptions import SnapshotError
from trademind.models import UserProfile

logger = logging.getLogger(__name__)


def load_profile(path: Path) -> UserProfile:
    """Read a profile from a JSON snapshot.

    Trades that break the open/closed invariant are still loaded; the
    analytics skip them.

    Raises:
        SnapshotError: If the file is missing or not a valid profile.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Cannot read profile {path}: {e}") from e

    try:
        return UserProfile.model_validate_json(content)
    except ValidationError as e:
        raise SnapshotError(f"Invalid profile file {path}: {e}") from e


def save_profile(profile: UserProfile, path: Path) -> None:
    """Write a profile to a JSON snapshot.

    The file is written to a temporary sibling first and then renamed, so
    a failed write leaves the previous snapshot intact.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(profile.model_dump_json(indent=2), encoding="utf-8")
    tmp_path.replace(path)
    logger.debug("Saved profile %s to %s", profile.id, path)
