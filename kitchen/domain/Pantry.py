"""Pantry aggregate: a user's fridge contents as a snapshot of FridgeItem entries."""
from datetime import date, datetime
from typing import List, Optional

from kitchen.domain.Ingredient import Ingredient
from kitchen.utilities.constants import DATE_FORMAT


class FridgeItem:
    def __init__(self, id: int = 0, owner_user_id: str = "", ingredient: Optional[Ingredient] = None,
                 quantity: str = "", added_date: Optional[datetime] = None,
                 expiry_date: Optional[date] = None):
        self.id = id
        self.owner_user_id = owner_user_id
        self.ingredient = ingredient or Ingredient()
        self.quantity = quantity
        self.added_date = added_date
        self.expiry_date = expiry_date

    @property
    def ingredient_id(self) -> int:
        return self.ingredient.id

    def __str__(self) -> str:
        parts = [f"{self.ingredient.name} - {self.quantity}".rstrip(" -")]
        if self.expiry_date:
            parts.append(f"Exp: {self.expiry_date.strftime(DATE_FORMAT)}")
        return " - ".join(parts)

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "owner_user_id": self.owner_user_id,
            "ingredient_id": self.ingredient_id,
            "name": self.ingredient.name,
            "category": self.ingredient.category,
            "quantity": self.quantity,
            "added_date": self.added_date.isoformat() if self.added_date else None,
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
        }


class Pantry:
    def __init__(self, owner_user_id: str = "", items: Optional[List[FridgeItem]] = None):
        self.owner_user_id = owner_user_id
        self.items: List[FridgeItem] = items[:] if items else []

    def get_items(self):
        '''
        Returns the list of fridge items.
        '''
        return self.items

    def ingredient_ids(self) -> set:
        '''
        Returns the set of ingredient ids on hand; quantities are not considered.
        '''
        return {item.ingredient_id for item in self.items}

    def find(self, ingredient_id: int) -> Optional[FridgeItem]:
        for item in self.items:
            if item.ingredient_id == ingredient_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Fridge of {self.owner_user_id}:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    def to_dict(self):
        return [item.to_dict() for item in self.items]
