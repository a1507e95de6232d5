"""Recipe domain entity: metadata, ordered ingredient requirements and categories."""
from datetime import datetime
from typing import List, Optional, Iterable

from kitchen.domain.Ingredient import Ingredient, Category
from kitchen.domain.errors import ValidationFailure
from kitchen.utilities.constants import DEFAULT_DIFFICULTY


class RecipeIngredient:
    """Join entity between a recipe and an ingredient, carrying the display quantity."""

    def __init__(self, recipe_id: int = 0, ingredient: Optional[Ingredient] = None, quantity: str = ""):
        self.recipe_id = recipe_id
        self.ingredient = ingredient or Ingredient()
        self.quantity = quantity

    @property
    def ingredient_id(self) -> int:
        return self.ingredient.id

    def __str__(self) -> str:
        return f"{self.quantity} {self.ingredient.name}".strip()

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        ingredient = d.get("ingredient")
        if isinstance(ingredient, dict):
            ingredient = Ingredient.from_dict(ingredient)
        elif ingredient is None:
            ingredient = Ingredient(id=int(d.get("ingredient_id", 0) or 0),
                                    name=d.get("name", "") or "", category=d.get("category", "") or "")
        return RecipeIngredient(recipe_id=int(d.get("recipe_id", 0) or 0), ingredient=ingredient,
                                quantity=d.get("quantity", "") or "")

    def to_dict(self):
        return {
            "recipe_id": self.recipe_id,
            "ingredient_id": self.ingredient_id,
            "name": self.ingredient.name,
            "category": self.ingredient.category,
            "quantity": self.quantity,
        }


class Recipe:
    def __init__(self, id: int = 0, title: str = "", description: str = "", instructions: str = "",
                 prep_time: int = 0, cook_time: int = 0, servings: int = 0,
                 difficulty: str = DEFAULT_DIFFICULTY, image_path: Optional[str] = None,
                 video_url: Optional[str] = None, is_public: bool = True, is_featured: bool = False,
                 owner_user_id: str = "", created_at: Optional[datetime] = None,
                 updated_at: Optional[datetime] = None,
                 requirements: Optional[List[RecipeIngredient]] = None,
                 categories: Optional[Iterable[Category]] = None):
        self.id = id
        self.title = title
        self.description = description
        self.instructions = instructions
        self.prep_time = prep_time
        self.cook_time = cook_time
        self.servings = servings
        self.difficulty = difficulty
        self.image_path = image_path
        self.video_url = video_url
        self.is_public = is_public
        self.is_featured = is_featured
        self.owner_user_id = owner_user_id
        self.created_at = created_at
        self.updated_at = updated_at
        self.requirements = requirements[:] if requirements else []
        self.categories = list(categories) if categories else []
        self._check_unique_requirements()

    def _check_unique_requirements(self):
        seen = set()
        for req in self.requirements:
            if req.ingredient_id in seen:
                raise ValidationFailure(
                    f"Ingredient #{req.ingredient_id} appears more than once in recipe '{self.title}'")
            seen.add(req.ingredient_id)

    def ingredient_ids(self) -> set:
        return {req.ingredient_id for req in self.requirements}

    def category_names(self) -> set:
        return {c.name for c in self.categories}

    def __str__(self) -> str:
        return (f"{self.title} - {self.servings} servings - {self.difficulty} - "
                f"{len(self.requirements)} ingredients - Categories: {', '.join(c.name for c in self.categories)}")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        d['requirements'] = [RecipeIngredient.from_dict(r) for r in d.get('requirements', [])]
        d['categories'] = [Category.from_dict(c) for c in d.get('categories', [])]
        for key in ('created_at', 'updated_at'):
            if isinstance(d.get(key), str):
                d[key] = datetime.fromisoformat(d[key])
        allowed = {
            "id", "title", "description", "instructions", "prep_time", "cook_time", "servings",
            "difficulty", "image_path", "video_url", "is_public", "is_featured", "owner_user_id",
            "created_at", "updated_at", "requirements", "categories",
        }
        return Recipe(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "instructions": self.instructions,
            "prep_time": self.prep_time,
            "cook_time": self.cook_time,
            "servings": self.servings,
            "difficulty": self.difficulty,
            "image_path": self.image_path,
            "video_url": self.video_url,
            "is_public": self.is_public,
            "is_featured": self.is_featured,
            "owner_user_id": self.owner_user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "requirements": [r.to_dict() for r in self.requirements],
            "categories": [c.to_dict() for c in self.categories],
        }
