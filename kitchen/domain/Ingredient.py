"""Catalog reference data: Ingredient (id, name, category) and recipe Category (id, name)."""


class Ingredient:
    def __init__(self, id: int = 0, name: str = "", category: str = ""):
        self.id = id
        self.name = name
        self.category = category

    def __str__(self) -> str:
        return f"{self.name} (#{self.id}, {self.category or 'uncategorized'})"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.id, self.name, self.category) == (other.id, other.name, other.category)

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.category))

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Ingredient(id=int(d.get("id", 0) or 0), name=d.get("name", "") or "",
                          category=d.get("category", "") or "")

    def to_dict(self):
        return {"id": self.id, "name": self.name, "category": self.category}


class Category:
    def __init__(self, id: int = 0, name: str = ""):
        self.id = id
        self.name = name

    def __str__(self) -> str:
        return self.name

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return (self.id, self.name) == (other.id, other.name)

    def __hash__(self) -> int:
        return hash((self.id, self.name))

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Category(id=int(d.get("id", 0) or 0), name=d.get("name", "") or "")

    def to_dict(self):
        return {"id": self.id, "name": self.name}
