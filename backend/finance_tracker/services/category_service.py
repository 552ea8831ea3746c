import logging
from sqlalchemy import delete, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError
from ..models import Category, Transaction, TransactionType, DEFAULT_COLOR, DEFAULT_ICON

logger = logging.getLogger(__name__)

# Seeded for every new user: (name, type, color, icon)
DEFAULT_CATEGORIES = [
    ("Salary", TransactionType.INCOME, "#10B981", "work"),
    ("Freelance", TransactionType.INCOME, "#3B82F6", "business"),
    ("Investment", TransactionType.INCOME, "#8B5CF6", "trending_up"),
    ("Food & Dining", TransactionType.EXPENSE, "#F59E0B", "restaurant"),
    ("Transportation", TransactionType.EXPENSE, "#EF4444", "directions_car"),
    ("Entertainment", TransactionType.EXPENSE, "#EC4899", "movie"),
    ("Shopping", TransactionType.EXPENSE, "#06B6D4", "shopping_bag"),
    ("Bills & Utilities", TransactionType.EXPENSE, "#84CC16", "receipt"),
    ("Healthcare", TransactionType.EXPENSE, "#F97316", "local_hospital"),
    ("Education", TransactionType.EXPENSE, "#6366F1", "school"),
]


class CategoryService:
    def __init__(self, db: Session):
        self.db = db

    def seed_default_categories(self, user_id: int) -> list[Category]:
        categories = [
            Category(user_id=user_id, name=name, type=type_, color=color, icon=icon)
            for name, type_, color, icon in DEFAULT_CATEGORIES
        ]
        self.db.add_all(categories)
        self.db.flush()
        return categories

    def list_categories(self, user_id: int, type_: TransactionType | None = None) -> list[Category]:
        query = self.db.query(Category).filter(Category.user_id == user_id)
        if type_:
            query = query.filter(Category.type == type_)
        return query.order_by(Category.name).all()

    def get_category(self, user_id: int, category_id: int) -> Category:
        category = (
            self.db.query(Category)
            .filter(Category.id == category_id, Category.user_id == user_id)
            .first()
        )
        if not category:
            raise NotFoundError("Category not found")
        return category

    def _check_name_available(self, user_id: int, name: str, exclude_id: int | None = None) -> None:
        query = self.db.query(Category.id).filter(
            Category.user_id == user_id, Category.name == name
        )
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        if query.first():
            raise ConflictError("Category name already exists")

    def _flush_unique_name(self) -> None:
        """Flush, reporting a per-user name collision as a conflict."""
        try:
            self.db.flush()
        except IntegrityError as exc:
            raise ConflictError("Category name already exists") from exc

    def create_category(self, user_id: int, data: dict) -> Category:
        self._check_name_available(user_id, data["name"])

        category = Category(
            user_id=user_id,
            name=data["name"],
            type=data["type"],
            color=data.get("color") or DEFAULT_COLOR,
            icon=data.get("icon") or DEFAULT_ICON,
        )
        self.db.add(category)
        self._flush_unique_name()
        self.db.refresh(category)
        return category

    def update_category(self, user_id: int, category_id: int, update_data: dict) -> Category:
        """Partial update; fields given as null keep their current value."""
        category = self.get_category(user_id, category_id)

        if update_data.get("name"):
            self._check_name_available(user_id, update_data["name"], exclude_id=category_id)

        for field, value in update_data.items():
            if value is not None:
                setattr(category, field, value)

        self._flush_unique_name()
        self.db.refresh(category)
        return category

    def delete_category(self, user_id: int, category_id: int) -> None:
        """
        Delete a category that no transaction references.

        The usage check and the delete are one conditional statement, so a
        transaction inserted concurrently cannot slip in between them.
        """
        category = self.get_category(user_id, category_id)

        in_use = exists().where(Transaction.category_id == category_id)
        result = self.db.execute(
            delete(Category)
            .where(Category.id == category_id, Category.user_id == user_id, ~in_use)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ConflictError("Cannot delete category that is being used by transactions")

        self.db.expunge(category)
        logger.info("Deleted category %d for user %d", category_id, user_id)
