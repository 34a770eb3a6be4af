from sqlalchemy import select
from sqlalchemy.orm import Session

from app.errors import ValidationError
from app.models.category import Category


class CategoryService:
    def __init__(self, db: Session):
        self.db = db

    def get_categories(self) -> list[Category]:
        return list(self.db.execute(select(Category).order_by(Category.name)).scalars())

    def validate_category_ids(self, category_ids: list[int]) -> None:
        """Raise one ValidationError naming every id that has no category."""
        if not category_ids:
            raise ValidationError("At least one category is required")

        existing = set(
            self.db.execute(
                select(Category.id).where(Category.id.in_(category_ids))
            ).scalars()
        )
        missing = [category_id for category_id in category_ids if category_id not in existing]
        if missing:
            raise ValidationError(
                f"Category IDs do not exist: {', '.join(str(i) for i in missing)}"
            )
