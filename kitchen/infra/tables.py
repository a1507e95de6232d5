"""SQLAlchemy ORM tables and their conversion to detached domain snapshots."""
from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Table, Text, UniqueConstraint
)
from sqlalchemy.orm import relationship

from kitchen.domain.Ingredient import Ingredient, Category
from kitchen.domain.Pantry import FridgeItem
from kitchen.domain.Recipe import Recipe, RecipeIngredient
from kitchen.domain.ShoppingList import ShoppingList, ShoppingListItem
from kitchen.infra.database import Base, utcnow
from kitchen.utilities.constants import (
    CATEGORY_MAX_LENGTH, DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH, QUANTITY_MAX_LENGTH, URL_MAX_LENGTH,
)

# Association table for Recipe and Category (many-to-many, no payload)
recipe_categories = Table(
    "recipe_categories", Base.metadata,
    Column("recipe_id", Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class CategoryRow(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(50), unique=True, nullable=False)

    def to_domain(self) -> Category:
        return Category(id=self.id, name=self.name)


class IngredientRow(Base):
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False, index=True)
    category = Column(String(CATEGORY_MAX_LENGTH), nullable=False, default="")

    def to_domain(self) -> Ingredient:
        return Ingredient(id=self.id, name=self.name, category=self.category or "")


class RecipeIngredientRow(Base):
    """Join entity keyed by (recipe_id, ingredient_id); ``position`` keeps requirement order."""
    __tablename__ = "recipe_ingredients"

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), primary_key=True)
    quantity = Column(String(QUANTITY_MAX_LENGTH), nullable=False, default="")
    position = Column(Integer, nullable=False, default=0)

    recipe = relationship("RecipeRow", back_populates="requirements")
    ingredient = relationship("IngredientRow", lazy="joined")

    def to_domain(self) -> RecipeIngredient:
        return RecipeIngredient(recipe_id=self.recipe_id, ingredient=self.ingredient.to_domain(),
                                quantity=self.quantity or "")


class RecipeRow(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    title = Column(String(NAME_MAX_LENGTH), nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=False, default="")
    instructions = Column(Text, nullable=False, default="")
    prep_time = Column(Integer, nullable=False, default=0)
    cook_time = Column(Integer, nullable=False, default=0)
    servings = Column(Integer, nullable=False, default=0)
    difficulty = Column(String(20), nullable=False, default="Easy")
    image_path = Column(String(URL_MAX_LENGTH), nullable=True)
    video_url = Column(String(URL_MAX_LENGTH), nullable=True)
    is_public = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    owner_user_id = Column(String(64), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    requirements = relationship(
        "RecipeIngredientRow", back_populates="recipe",
        order_by="RecipeIngredientRow.position", cascade="all, delete-orphan",
    )
    categories = relationship("CategoryRow", secondary=recipe_categories, order_by="CategoryRow.id")

    def to_domain(self) -> Recipe:
        return Recipe(
            id=self.id,
            title=self.title,
            description=self.description or "",
            instructions=self.instructions or "",
            prep_time=self.prep_time,
            cook_time=self.cook_time,
            servings=self.servings,
            difficulty=self.difficulty,
            image_path=self.image_path,
            video_url=self.video_url,
            is_public=self.is_public,
            is_featured=self.is_featured,
            owner_user_id=self.owner_user_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
            requirements=[r.to_domain() for r in self.requirements],
            categories=[c.to_domain() for c in self.categories],
        )


class FridgeItemRow(Base):
    __tablename__ = "fridge_items"
    __table_args__ = (UniqueConstraint("owner_user_id", "ingredient_id", name="uq_fridge_owner_ingredient"),)

    id = Column(Integer, primary_key=True)
    owner_user_id = Column(String(64), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)
    quantity = Column(String(QUANTITY_MAX_LENGTH), nullable=False, default="")
    added_date = Column(DateTime, nullable=False, default=utcnow)
    expiry_date = Column(Date, nullable=True)

    ingredient = relationship("IngredientRow", lazy="joined")

    def to_domain(self) -> FridgeItem:
        return FridgeItem(id=self.id, owner_user_id=self.owner_user_id,
                          ingredient=self.ingredient.to_domain(), quantity=self.quantity or "",
                          added_date=self.added_date, expiry_date=self.expiry_date)


class ShoppingListRow(Base):
    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True)
    owner_user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False, default="")
    created_date = Column(DateTime, nullable=False, default=utcnow)
    is_completed = Column(Boolean, nullable=False, default=False)

    items = relationship(
        "ShoppingListItemRow", back_populates="shopping_list",
        order_by="ShoppingListItemRow.id", cascade="all, delete-orphan",
    )

    def to_domain(self) -> ShoppingList:
        return ShoppingList(id=self.id, owner_user_id=self.owner_user_id, name=self.name or "",
                            created_date=self.created_date, is_completed=self.is_completed,
                            items=[i.to_domain() for i in self.items])


class ShoppingListItemRow(Base):
    """Free-text snapshot of an ingredient line; deliberately not a foreign key to ingredients."""
    __tablename__ = "shopping_list_items"

    id = Column(Integer, primary_key=True)
    shopping_list_id = Column(Integer, ForeignKey("shopping_lists.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    quantity = Column(String(QUANTITY_MAX_LENGTH), nullable=False, default="")
    category = Column(String(CATEGORY_MAX_LENGTH), nullable=False, default="")
    is_purchased = Column(Boolean, nullable=False, default=False)

    shopping_list = relationship("ShoppingListRow", back_populates="items")

    def to_domain(self) -> ShoppingListItem:
        return ShoppingListItem(id=self.id, shopping_list_id=self.shopping_list_id, name=self.name,
                                quantity=self.quantity or "", category=self.category or "",
                                is_purchased=self.is_purchased)
