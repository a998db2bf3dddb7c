"""Keep the badge block in a README up to date."""

from datetime import datetime, timezone
from pathlib import Path

MARKER_START = "<!-- CONTRIBEMBLEM:START -->"
MARKER_END = "<!-- CONTRIBEMBLEM:END -->"


def build_injection(badge_path: str, updated_at: datetime) -> str:
    """Markdown placed between the markers."""
    stamp = updated_at.astimezone(timezone.utc)
    timestamp = f"{stamp:%B} {stamp.day}, {stamp.year}"
    return f"![ContribEmblem]({badge_path})\n\n*Last updated: {timestamp}*"


def inject(readme_path: str | Path, badge_path: str, updated_at: datetime) -> bool:
    """
    Replace the badge block between the markers, or append one if missing.

    Returns:
        True if the README content changed
    """
    readme_path = Path(readme_path)
    original = readme_path.read_text(encoding="utf-8")
    block = f"{MARKER_START}\n{build_injection(badge_path, updated_at)}\n{MARKER_END}"

    start = original.find(MARKER_START)
    end = original.find(MARKER_END)

    if start >= 0 and end > start:
        updated = original[:start] + block + original[end + len(MARKER_END) :]
    else:
        updated = original if original.endswith("\n") else original + "\n"
        updated += "\n" + block + "\n"

    if updated == original:
        return False

    readme_path.write_text(updated, encoding="utf-8")
    return True
