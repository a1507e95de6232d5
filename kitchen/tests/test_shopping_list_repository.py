import unittest

import pytest
from sqlalchemy import func, select

from kitchen.domain.ShoppingList import ShoppingRow
from kitchen.domain.errors import Forbidden, NotFound, PersistenceFailure, ValidationFailure
from kitchen.events.Event_Bus import GLOBAL_EVENT_BUS, SHOPPING_LIST_CREATED, SHOPPING_ITEM_PURCHASED
from kitchen.infra.Recipe_Repository import RecipeRepository
from kitchen.infra.ShoppingList_Repository import ShoppingListRepository
from kitchen.infra.tables import ShoppingListItemRow, ShoppingListRow


class TestShoppingListRepository(unittest.TestCase):
    @pytest.fixture(autouse=True)
    def _inject(self, db, make_recipe):
        self.db = db
        self.repo = ShoppingListRepository(db)
        self.make_recipe = make_recipe
        self.omelette = make_recipe("Omelette", [(3, "2"), (4, "1 cup")])
        self.cake = make_recipe("Cake", [(3, "3"), (1, "200g")], owner="bob")

    def test_create_for_recipe(self):
        sl = self.repo.create_for_recipe("alice", self.omelette.id, "Breakfast")
        self.assertEqual(sl.name, "Breakfast")
        self.assertEqual([(i.name, i.quantity, i.category) for i in sl.items],
                         [("Eggs", "2", "Dairy"), ("Milk", "1 cup", "Dairy")])
        self.assertFalse(sl.is_completed)
        self.assertFalse(any(i.is_purchased for i in sl.items))
        self.assertEqual(self.repo.get(sl.id).owner_user_id, "alice")

    def test_default_name(self):
        sl = self.repo.create_for_recipe("alice", self.omelette.id)
        self.assertEqual(sl.name, "Shopping list for Omelette")

    def test_default_name_fits_column(self):
        long_recipe = self.make_recipe("T" * 100, [(3, "2")])
        sl = self.repo.create_for_recipe("alice", long_recipe.id)
        self.assertEqual(len(sl.name), 100)
        self.assertTrue(sl.name.startswith("Shopping list for TTT"))

    def test_create_merged_first_wins(self):
        sl = self.repo.create_merged("alice", [self.omelette.id, self.cake.id], "Weekend")
        self.assertEqual([(i.name, i.quantity) for i in sl.items],
                         [("Eggs", "2"), ("Milk", "1 cup"), ("Flour", "200g")])

    def test_create_merged_unknown_recipe(self):
        with self.assertRaises(NotFound):
            self.repo.create_merged("alice", [self.omelette.id, 999])
        with self.assertRaises(ValidationFailure):
            self.repo.create_merged("alice", [])
        self.assertEqual(self.repo.list_for_user("alice"), [])

    def test_private_recipe_of_other_user_not_found(self):
        secret = RecipeRepository(self.db).create("bob", {"title": "Secret", "is_public": False}, [3], ["1"])
        with self.assertRaises(NotFound):
            self.repo.create_for_recipe("alice", secret.id)

    def test_list_survives_recipe_delete(self):
        sl = self.repo.create_for_recipe("alice", self.omelette.id, "Breakfast")
        RecipeRepository(self.db).delete("alice", self.omelette.id)
        again = self.repo.get(sl.id)
        self.assertEqual([i.name for i in again.items], ["Eggs", "Milk"])

    def test_failed_persist_leaves_no_partial_list(self):
        rows = [ShoppingRow("Eggs", "2", "Dairy"), ShoppingRow(None, "1", "Dairy")]
        with self.assertRaises(PersistenceFailure):
            self.repo.persist("alice", "Broken", rows)
        self.assertEqual(self.db.scalar(select(func.count(ShoppingListRow.id))), 0)
        self.assertEqual(self.db.scalar(select(func.count(ShoppingListItemRow.id))), 0)

    def test_set_purchased_is_idempotent(self):
        sl = self.repo.create_for_recipe("alice", self.omelette.id)
        item_id = sl.items[0].id
        self.assertTrue(self.repo.set_purchased(item_id, True).is_purchased)
        self.assertTrue(self.repo.set_purchased(item_id, True, actor_id="alice").is_purchased)
        self.assertEqual(self.repo.get(sl.id).purchased_count, 1)
        with self.assertRaises(Forbidden):
            self.repo.set_purchased(item_id, False, actor_id="bob")
        with self.assertRaises(NotFound):
            self.repo.set_purchased(999, True)

    def test_mark_all_purchased(self):
        sl = self.repo.create_for_recipe("alice", self.omelette.id)
        self.assertEqual(self.repo.mark_all_purchased(sl.id, True), 2)
        self.assertEqual(self.repo.get(sl.id).purchased_count, 2)
        self.assertEqual(self.repo.mark_all_purchased(sl.id, False, actor_id="alice"), 2)
        self.assertEqual(self.repo.get(sl.id).purchased_count, 0)
        self.assertFalse(self.repo.get(sl.id).is_completed)

    def test_mark_all_on_empty_list_is_noop(self):
        sl = self.repo.persist("alice", "Empty", [])
        self.assertEqual(self.repo.mark_all_purchased(sl.id, True), 0)
        with self.assertRaises(NotFound):
            self.repo.mark_all_purchased(999, True)

    def test_custom_item_completed_and_delete(self):
        sl = self.repo.create_for_recipe("alice", self.omelette.id)
        item = self.repo.add_custom_item(sl.id, " Bread ", "1 loaf", "Bakery", actor_id="alice")
        self.assertEqual(item.name, "Bread")
        self.assertFalse(item.is_purchased)
        self.assertEqual([i.name for i in self.repo.get(sl.id).items][-1], "Bread")
        with self.assertRaises(Forbidden):
            self.repo.add_custom_item(sl.id, "Beer", actor_id="bob")
        self.assertTrue(self.repo.set_completed(sl.id, True).is_completed)
        with self.assertRaises(Forbidden):
            self.repo.delete(sl.id, "bob")
        self.repo.delete(sl.id, "alice")
        with self.assertRaises(NotFound):
            self.repo.get(sl.id)
        self.assertEqual(self.db.scalar(select(func.count(ShoppingListItemRow.id))), 0)

    def test_list_for_user_newest_first(self):
        first = self.repo.create_for_recipe("alice", self.omelette.id, "First")
        second = self.repo.create_for_recipe("alice", self.cake.id, "Second")
        self.repo.create_for_recipe("bob", self.cake.id, "Bob's")
        self.assertEqual([s.id for s in self.repo.list_for_user("alice")], [second.id, first.id])

    def test_events(self):
        seen = []

        def record(name, payload):
            seen.append(name)

        GLOBAL_EVENT_BUS.subscribe(SHOPPING_LIST_CREATED, record)
        GLOBAL_EVENT_BUS.subscribe(SHOPPING_ITEM_PURCHASED, record)
        try:
            sl = self.repo.create_for_recipe("alice", self.omelette.id)
            self.repo.set_purchased(sl.items[0].id, True)
        finally:
            GLOBAL_EVENT_BUS.unsubscribe(SHOPPING_LIST_CREATED, record)
            GLOBAL_EVENT_BUS.unsubscribe(SHOPPING_ITEM_PURCHASED, record)
        self.assertEqual(seen, [SHOPPING_LIST_CREATED, SHOPPING_ITEM_PURCHASED])
