# src/porchlight/scripts/seed_questions.py
"""Load the starter question catalog into an empty database."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from porchlight.core.logging import configure_logging
from porchlight.core.settings import settings
from porchlight.db.session import SessionLocal
from porchlight.models import Question

logger = logging.getLogger(__name__)

DEFAULT_QUESTIONS: list[dict[str, str]] = [
    {"category": "Safety", "text": "How safe do you feel walking here at night?"},
    {"category": "Safety", "text": "How well lit are the streets?"},
    {"category": "Noise", "text": "How quiet is the neighborhood during the day?"},
    {"category": "Noise", "text": "How quiet is the neighborhood at night?"},
    {"category": "Community", "text": "How friendly are the neighbors?"},
    {"category": "Amenities", "text": "How convenient are nearby shops and services?"},
    {"category": "Transport", "text": "How easy is it to get around without a car?"},
    {"category": "Maintenance", "text": "How well kept are streets and public spaces?"},
]


def load_catalog(path: Path | None) -> list[dict[str, str]]:
    """Return the catalog from a JSON file, or the built-in default."""
    if path is None:
        return DEFAULT_QUESTIONS
    entries = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(entries, list):
        raise ValueError(f"{path} must contain a JSON list of questions")
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"Question entries must be JSON objects: {entry!r}")
        if not entry.get("text") or not entry.get("category"):
            raise ValueError(f"Question entries need text and category: {entry!r}")
    return entries


def seed_questions(db: Session, catalog: list[dict[str, str]], *, force: bool = False) -> int:
    """Insert ``catalog`` unless questions already exist.

    Returns:
        The number of questions inserted.
    """
    existing = db.scalar(select(func.count(Question.id))) or 0
    if existing and not force:
        logger.info("Catalog already has %d questions; nothing to do", existing)
        return 0

    for entry in catalog:
        db.add(
            Question(
                text=entry["text"],
                description=entry.get("description") or None,
                category=entry["category"],
                is_active=True,
            )
        )
    db.commit()
    logger.info("Inserted %d questions", len(catalog))
    return len(catalog)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the review question catalog")
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="JSON list of {text, category, description} entries (defaults to the built-in catalog)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Insert even when the catalog is not empty.",
    )
    args = parser.parse_args()
    configure_logging(settings.log_level)

    try:
        catalog = load_catalog(args.file)
    except (OSError, ValueError) as exc:
        logger.error("Could not read catalog: %s", exc)
        sys.exit(1)

    db = SessionLocal()
    try:
        seed_questions(db, catalog, force=args.force)
    finally:
        db.close()


if __name__ == "__main__":
    main()
