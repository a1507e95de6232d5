"""ShoppingList aggregate: named list of free-text items snapshotted from recipes."""
from datetime import datetime
from typing import List, NamedTuple, Optional


class ShoppingRow(NamedTuple):
    """One line produced by the shopping list builder, before it is persisted."""
    name: str
    quantity: str
    category: str


class ShoppingListItem:
    def __init__(self, id: int = 0, shopping_list_id: int = 0, name: str = "", quantity: str = "",
                 category: str = "", is_purchased: bool = False):
        self.id = id
        self.shopping_list_id = shopping_list_id
        self.name = name
        self.quantity = quantity
        self.category = category
        self.is_purchased = is_purchased

    def as_row(self) -> ShoppingRow:
        return ShoppingRow(self.name, self.quantity, self.category)

    def __str__(self) -> str:
        mark = "x" if self.is_purchased else " "
        return f"[{mark}] {self.name} - {self.quantity}".rstrip(" -")

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "shopping_list_id": self.shopping_list_id,
            "name": self.name,
            "quantity": self.quantity,
            "category": self.category,
            "is_purchased": self.is_purchased,
        }


class ShoppingList:
    def __init__(self, id: int = 0, owner_user_id: str = "", name: str = "",
                 created_date: Optional[datetime] = None, is_completed: bool = False,
                 items: Optional[List[ShoppingListItem]] = None):
        self.id = id
        self.owner_user_id = owner_user_id
        self.name = name
        self.created_date = created_date
        self.is_completed = is_completed
        self.items: List[ShoppingListItem] = items[:] if items else []

    def get_items(self):
        return self.items

    def rows(self) -> List[ShoppingRow]:
        return [item.as_row() for item in self.items]

    @property
    def purchased_count(self) -> int:
        return sum(1 for item in self.items if item.is_purchased)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Shopping List '{self.name}':\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    def to_dict(self):
        return {
            "id": self.id,
            "owner_user_id": self.owner_user_id,
            "name": self.name,
            "created_date": self.created_date.isoformat() if self.created_date else None,
            "is_completed": self.is_completed,
            "item_count": len(self.items),
            "purchased_count": self.purchased_count,
            "items": [item.to_dict() for item in self.items],
        }
