# ABOUTME: Manifest generation for export runs.
# ABOUTME: Records which project was exported and when.

from dataclasses import dataclass, asdict
from datetime import datetime, timezone


def _isoformat_utc(moment: datetime) -> str:
    """Format an aware datetime as ISO 8601 in UTC with a trailing Z."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class BackupManifest:
    """Manifest for a single export run."""

    project: str
    generated_at: str = ""

    def __post_init__(self):
        if not self.generated_at:
            self.generated_at = _isoformat_utc(datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert manifest to dictionary for JSON serialization."""
        return asdict(self)


def create_manifest(project_url: str, generated_at: datetime | None = None) -> BackupManifest:
    """Create an export manifest.

    Args:
        project_url: Endpoint URL of the exported project.
        generated_at: Generation time (defaults to now).

    Returns:
        BackupManifest ready to be saved.
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)
    return BackupManifest(project=project_url, generated_at=_isoformat_utc(generated_at))
