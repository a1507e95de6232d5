import unittest

from kitchen.domain.Ingredient import Ingredient
from kitchen.domain.Recipe import Recipe, RecipeIngredient
from kitchen.domain.ShoppingList import ShoppingRow
from kitchen.logic.shopping.list_builder import build_from_recipe, merge

EGGS = Ingredient(3, "Eggs", "Dairy")
MILK = Ingredient(4, "Milk", "Dairy")
FLOUR = Ingredient(1, "Flour", "Baking")


class TestShoppingListBuilder(unittest.TestCase):
    def setUp(self):
        self.a = Recipe(id=1, title="Omelette", requirements=[
            RecipeIngredient(1, EGGS, "2"),
            RecipeIngredient(1, MILK, "1 cup"),
        ])
        self.b = Recipe(id=2, title="Cake", requirements=[
            RecipeIngredient(2, EGGS, "3"),
            RecipeIngredient(2, FLOUR, "200g"),
        ])

    def test_build_keeps_requirement_order(self):
        rows = build_from_recipe(self.a)
        self.assertEqual(rows, [ShoppingRow("Eggs", "2", "Dairy"), ShoppingRow("Milk", "1 cup", "Dairy")])

    def test_build_empty_recipe(self):
        self.assertEqual(build_from_recipe(Recipe(title="Nothing")), [])

    def test_merge_first_occurrence_wins(self):
        rows = merge([self.a, self.b])
        self.assertEqual([r.name for r in rows], ["Eggs", "Milk", "Flour"])
        self.assertEqual(rows[0].quantity, "2")

    def test_merge_of_one_recipe_equals_build(self):
        self.assertEqual(merge([self.a]), build_from_recipe(self.a))

    def test_merge_with_sugar(self):
        b = Recipe(id=4, title="Custard", requirements=[
            RecipeIngredient(4, EGGS, "3"),
            RecipeIngredient(4, Ingredient(2, "Sugar", "Baking"), "1 cup"),
        ])
        rows = merge([self.a, b])
        self.assertEqual([(r.name, r.quantity) for r in rows], [("Eggs", "2"), ("Milk", "1 cup"), ("Sugar", "1 cup")])

    def test_merge_order_follows_recipe_order(self):
        rows = merge([self.b, self.a])
        self.assertEqual([(r.name, r.quantity) for r in rows], [("Eggs", "3"), ("Flour", "200g"), ("Milk", "1 cup")])

    def test_merge_dedupes_by_exact_name(self):
        other_eggs = Ingredient(42, "Eggs", "Farm")
        c = Recipe(id=3, title="Scramble", requirements=[RecipeIngredient(3, other_eggs, "6")])
        rows = merge([self.a, c])
        self.assertEqual(len([r for r in rows if r.name == "Eggs"]), 1)
        self.assertEqual(rows[0].category, "Dairy")

    def test_merge_nothing(self):
        self.assertEqual(merge([]), [])


if __name__ == '__main__':
    unittest.main()
