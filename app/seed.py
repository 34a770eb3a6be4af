"""Seed the fixed category set and, optionally, sample announcements.

    python -m app.seed [--with-announcements]

Category seeding is idempotent (get-or-create by name). Sample announcements
are only inserted when the announcements table is empty.
"""
import argparse
import logging
from datetime import datetime, timezone

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app import models  # noqa: F401
from app.config import settings
from app.database import Base, SessionLocal, engine
from app.models.announcement import Announcement, AnnouncementCategory
from app.models.category import Category

logger = logging.getLogger(__name__)

CATEGORY_NAMES = [
    "City",
    "Community events",
    "Crime & Safety",
    "Culture",
    "Discounts & Benefits",
    "Emergencies",
    "For Seniors",
    "Health",
    "Kids & Family",
]

SAMPLE_ANNOUNCEMENTS = [
    ("Title 1", "This is the content of the first announcement about city news and updates.", (2023, 8, 11, 4, 38), ["City"]),
    ("Title 2", "Second announcement with important city information for all residents.", (2023, 8, 11, 4, 36), ["City"]),
    ("Title 3", "Third announcement covering local city developments and plans.", (2023, 8, 11, 4, 35), ["City"]),
    ("Title 4", "City infrastructure update and maintenance schedule announcement.", (2023, 4, 19, 5, 14), ["City"]),
    ("Title 5", "Important notice about upcoming city events and road closures.", (2023, 4, 19, 5, 11), ["City"]),
    ("Title 6", "Community update about parks and recreation facilities in the city.", (2023, 4, 19, 5, 11), ["City"]),
    ("Title 7", "Joint city and health department announcement about wellness programs.", (2023, 3, 24, 7, 27), ["City", "Health"]),
    ("Title 8", "Health and safety guidelines update for city residents.", (2023, 3, 24, 7, 26), ["City", "Health"]),
    ("Title 9", "Public health advisory and city response coordination notice.", (2023, 3, 24, 7, 26), ["City", "Health"]),
    ("Title 10", "Community health fair and city services information announcement.", (2023, 3, 24, 7, 26), ["City", "Health"]),
]


def seed_categories(db: Session) -> dict[str, Category]:
    existing = {c.name: c for c in db.execute(select(Category)).scalars()}
    created = 0
    for name in CATEGORY_NAMES:
        if name not in existing:
            category = Category(name=name)
            db.add(category)
            existing[name] = category
            created += 1
    db.commit()
    logger.info("Seeded %d new categor%s", created, "y" if created == 1 else "ies")
    return existing


def seed_announcements(db: Session, categories: dict[str, Category]) -> int:
    if db.execute(select(func.count(Announcement.id))).scalar_one():
        logger.info("Announcements already present; skipping samples")
        return 0
    for title, content, when, names in SAMPLE_ANNOUNCEMENTS:
        db.add(
            Announcement(
                title=title,
                content=content,
                publication_date=datetime(*when, tzinfo=timezone.utc),
                categories=[
                    AnnouncementCategory(category_id=categories[name].id)
                    for name in names
                ],
            )
        )
    db.commit()
    logger.info("Seeded %d announcements", len(SAMPLE_ANNOUNCEMENTS))
    return len(SAMPLE_ANNOUNCEMENTS)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--with-announcements",
        action="store_true",
        help="also insert sample announcements when none exist",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    # other databases are expected to be migrated with alembic first
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        categories = seed_categories(db)
        if args.with_announcements:
            seed_announcements(db, categories)
    finally:
        db.close()


if __name__ == "__main__":
    main()
