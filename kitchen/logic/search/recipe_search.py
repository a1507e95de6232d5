"""Recipe search: substring match on text fields plus an exact category filter."""
from typing import List, Optional, Sequence

from kitchen.domain.Recipe import Recipe

__all__ = ["matches_term", "search_recipes"]


def matches_term(recipe: Recipe, term: str) -> bool:
    """Case-insensitive substring match against title, description or instructions."""
    if not term:
        return True
    needle = term.casefold()
    return any(needle in (text or "").casefold()
               for text in (recipe.title, recipe.description, recipe.instructions))


def search_recipes(recipes: Sequence[Recipe], term: Optional[str] = "", category: Optional[str] = None) -> List[Recipe]:
    """Public recipes matching the term and, when given, the exact category name.

    No ranking: results keep the order of ``recipes``.
    """
    term = term or ""
    result = []
    for recipe in recipes:
        if not recipe.is_public:
            continue
        if category and category not in recipe.category_names():
            continue
        if matches_term(recipe, term):
            result.append(recipe)
    return result
