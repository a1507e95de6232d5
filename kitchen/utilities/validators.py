"""
Request body schemas for the JSON API, validated with Pydantic.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import date

from kitchen.utilities.constants import (
    DIFFICULTIES, DEFAULT_DIFFICULTY, NAME_MAX_LENGTH, QUANTITY_MAX_LENGTH, CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH, URL_MAX_LENGTH,
)


def _strip(v):
    return v.strip() if isinstance(v, str) else v


def _check_difficulty(v):
    if v is not None and v not in DIFFICULTIES:
        raise ValueError(f"Difficulty must be one of {', '.join(DIFFICULTIES)}")
    return v


def _check_quantities(v):
    if v is not None and any(len(q) > QUANTITY_MAX_LENGTH for q in v):
        raise ValueError(f"Quantities may be at most {QUANTITY_MAX_LENGTH} characters")
    return v


class FridgeItemInput(BaseModel):
    """Schema for adding or updating one fridge item."""
    ingredient_id: int = Field(..., ge=1)
    quantity: str = Field("", max_length=QUANTITY_MAX_LENGTH)
    expiry_date: Optional[date] = None

    @field_validator('quantity')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)


class FridgeSetupInput(BaseModel):
    """Schema for the initial fridge setup: parallel id and quantity lists."""
    ingredient_ids: List[int] = Field(default_factory=list)
    quantities: List[str] = Field(default_factory=list)

    @field_validator('quantities')
    @classmethod
    def validate_quantities(cls, v):
        return _check_quantities(v)


class RecipeBase(BaseModel):
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    instructions: Optional[str] = None
    prep_time: Optional[int] = Field(None, ge=0)
    cook_time: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=1)
    image_path: Optional[str] = Field(None, max_length=URL_MAX_LENGTH)
    video_url: Optional[str] = Field(None, max_length=URL_MAX_LENGTH)
    is_featured: Optional[bool] = None


class RecipeInput(RecipeBase):
    """Schema for creating a recipe."""
    title: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    difficulty: str = DEFAULT_DIFFICULTY
    is_public: bool = True
    ingredient_ids: List[int] = Field(default_factory=list)
    quantities: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        """Validate recipe title."""
        if not v.strip():
            raise ValueError('Recipe title cannot be empty')
        return v.strip()

    @field_validator('difficulty')
    @classmethod
    def validate_difficulty(cls, v):
        return _check_difficulty(v)

    @field_validator('quantities')
    @classmethod
    def validate_quantities(cls, v):
        return _check_quantities(v)

    def fields(self) -> dict:
        return self.model_dump(exclude={'ingredient_ids', 'quantities', 'categories'}, exclude_none=True)


class RecipeUpdateInput(RecipeBase):
    """Schema for a partial recipe update; omitted lists leave the stored ones alone."""
    title: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    difficulty: Optional[str] = None
    is_public: Optional[bool] = None
    ingredient_ids: Optional[List[int]] = None
    quantities: Optional[List[str]] = None
    categories: Optional[List[str]] = None

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        return _strip(v)

    @field_validator('difficulty')
    @classmethod
    def validate_difficulty(cls, v):
        return _check_difficulty(v)

    @field_validator('quantities')
    @classmethod
    def validate_quantities(cls, v):
        return _check_quantities(v)

    @model_validator(mode='after')
    def lists_come_together(self):
        if (self.ingredient_ids is None) != (self.quantities is None):
            raise ValueError('ingredient_ids and quantities must be sent together')
        return self

    def fields(self) -> dict:
        return self.model_dump(exclude={'ingredient_ids', 'quantities', 'categories'}, exclude_none=True)


class ShoppingListFromRecipeInput(BaseModel):
    recipe_id: int = Field(..., ge=1)
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)


class MergeInput(BaseModel):
    """Schema for merging several recipes into one shopping list."""
    recipe_ids: List[int] = Field(..., min_length=1)
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)


class CustomItemInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    quantity: str = Field("", max_length=QUANTITY_MAX_LENGTH)
    category: str = Field("", max_length=CATEGORY_MAX_LENGTH)

    @field_validator('name', 'quantity', 'category')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return _strip(v)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError('Item name cannot be empty')
        return v


class PurchasedInput(BaseModel):
    is_purchased: bool = True


class CompletedInput(BaseModel):
    is_completed: bool = True
