from typing import Final

DATE_FORMAT: Final[str] = "%d-%m-%Y"
DIFFICULTIES: Final[tuple[str, ...]] = ("Easy", "Medium", "Hard")
DEFAULT_DIFFICULTY: Final[str] = "Easy"

# Reference data present at initialization: (id, name)
SEED_CATEGORIES: Final[tuple[tuple[int, str], ...]] = (
    (1, "Vegetarian"),
    (2, "Non-Vegetarian"),
    (3, "Vegan"),
    (4, "Gluten-Free"),
    (5, "Desserts"),
    (6, "Quick Meals"),
)

# (id, name, category)
SEED_INGREDIENTS: Final[tuple[tuple[int, str, str], ...]] = (
    (1, "Flour", "Baking"),
    (2, "Sugar", "Baking"),
    (3, "Eggs", "Dairy"),
    (4, "Milk", "Dairy"),
    (5, "Tomatoes", "Produce"),
    (6, "Onions", "Produce"),
    (7, "Garlic", "Produce"),
    (8, "Chicken", "Meat"),
    (9, "Rice", "Grains"),
    (10, "Olive Oil", "Condiments"),
)

# Column widths shared by the ORM tables and the request validators
NAME_MAX_LENGTH: Final[int] = 100
QUANTITY_MAX_LENGTH: Final[int] = 50
CATEGORY_MAX_LENGTH: Final[int] = 50
DESCRIPTION_MAX_LENGTH: Final[int] = 500
URL_MAX_LENGTH: Final[int] = 255
