import unittest
from datetime import date, timedelta

import pytest

from kitchen.events import web_observers

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


class TestKitchenAPI(unittest.TestCase):
    @pytest.fixture(autouse=True)
    def _inject(self, client):
        self.client = client

    def _create_recipe(self, headers=ALICE, **overrides):
        body = {
            "title": "Omelette",
            "description": "Fluffy eggs",
            "ingredient_ids": [3, 4],
            "quantities": ["2", "1 cup"],
            "categories": ["Vegetarian"],
        }
        body.update(overrides)
        resp = self.client.post('/api/recipes', json=body, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_catalog(self):
        resp = self.client.get('/api/catalog/ingredients')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 10)
        cats = self.client.get('/api/catalog/categories').json()
        self.assertIn({"id": 5, "name": "Desserts"}, cats)

    def test_fridge_add_update_and_list(self):
        self.client.post('/api/fridge', json={"ingredient_id": 3, "quantity": "6"}, headers=ALICE)
        resp = self.client.post('/api/fridge', json={"ingredient_id": 3, "quantity": "12",
                                                     "expiry_date": "2026-01-05"}, headers=ALICE)
        self.assertEqual(resp.status_code, 201)
        data = self.client.get('/api/fridge', headers=ALICE).json()
        self.assertEqual(data['count'], 1)
        self.assertEqual(data['items'][0]['quantity'], "12")
        self.assertEqual(data['items'][0]['expiry_date'], "2026-01-05")
        self.assertEqual(self.client.get('/api/fridge', headers=BOB).json()['count'], 0)

    def test_fridge_setup_too_small(self):
        resp = self.client.post('/api/fridge/setup', json={"ingredient_ids": [3, 4], "quantities": ["6", "1 l"]},
                                headers=ALICE)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['error'], "Please add at least 3 ingredients")

    def test_fridge_unknown_ingredient(self):
        resp = self.client.post('/api/fridge', json={"ingredient_id": 999, "quantity": "1"}, headers=ALICE)
        self.assertEqual(resp.status_code, 404)

    def test_fridge_remove(self):
        item = self.client.post('/api/fridge', json={"ingredient_id": 3, "quantity": "6"}, headers=ALICE).json()
        self.assertEqual(self.client.delete(f"/api/fridge/{item['id']}", headers=BOB).status_code, 403)
        self.assertEqual(self.client.delete(f"/api/fridge/{item['id']}", headers=ALICE).status_code, 204)
        self.assertEqual(self.client.delete(f"/api/fridge/{item['id']}", headers=ALICE).status_code, 204)

    def test_fridge_expiring(self):
        today = date.today()
        self.client.post('/api/fridge', json={"ingredient_id": 3, "quantity": "6",
                                              "expiry_date": today.isoformat()}, headers=ALICE)
        self.client.post('/api/fridge', json={"ingredient_id": 4, "quantity": "1 l",
                                              "expiry_date": (today + timedelta(days=30)).isoformat()}, headers=ALICE)
        self.client.post('/api/fridge', json={"ingredient_id": 5, "quantity": "3"}, headers=ALICE)
        resp = self.client.get('/api/fridge/expiring', headers=ALICE)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([(e['name'], e['days_left']) for e in resp.json()], [("Eggs", 0)])
        wide = self.client.get('/api/fridge/expiring', params={"window": 30}, headers=ALICE).json()
        self.assertEqual([e['ingredient_id'] for e in wide], [3, 4])
        self.assertEqual(self.client.get('/api/fridge/expiring', headers=BOB).json(), [])
        self.assertEqual(self.client.get('/api/fridge/expiring', params={"window": -1}, headers=ALICE).status_code, 422)

    def test_fridge_quantity_fits_column(self):
        resp = self.client.post('/api/fridge', json={"ingredient_id": 3, "quantity": "x" * 51}, headers=ALICE)
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post('/api/fridge/setup', json={"ingredient_ids": [3, 4, 5],
                                                           "quantities": ["6", "1 l", "x" * 51]}, headers=ALICE)
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self.client.get('/api/fridge', headers=ALICE).json()['count'], 0)
        resp = self.client.post('/api/fridge', json={"ingredient_id": 3, "quantity": "x" * 50}, headers=ALICE)
        self.assertEqual(resp.status_code, 201)

    def test_cookable(self):
        self._create_recipe()
        pancakes = self._create_recipe(title="Pancakes", ingredient_ids=[3, 4, 1], quantities=["2", "1 cup", "200g"])
        self.client.post('/api/fridge/setup', json={"ingredient_ids": [3, 4, 9], "quantities": ["6", "1 l", "1 kg"]},
                         headers=BOB)
        titles = [r['title'] for r in self.client.get('/api/fridge/cookable', headers=BOB).json()]
        self.assertEqual(titles, ["Omelette"])
        detail = self.client.get(f"/api/recipes/{pancakes['id']}", headers=BOB).json()
        self.assertEqual(detail['missing_ingredient_ids'], [1])
        self.assertFalse(detail['cookable'])

    def test_recipe_crud(self):
        recipe = self._create_recipe()
        self.assertEqual([r['name'] for r in recipe['requirements']], ["Eggs", "Milk"])
        resp = self.client.put(f"/api/recipes/{recipe['id']}", json={"title": "Stolen"}, headers=BOB)
        self.assertEqual(resp.status_code, 403)
        resp = self.client.put(f"/api/recipes/{recipe['id']}", json={"servings": 2}, headers=ALICE)
        self.assertEqual(resp.json()['servings'], 2)
        self.assertEqual(self.client.delete(f"/api/recipes/{recipe['id']}", headers=ALICE).status_code, 204)
        resp = self.client.get(f"/api/recipes/{recipe['id']}")
        self.assertEqual(resp.status_code, 404)
        self.assertIn('error', resp.json())

    def test_recipe_validation(self):
        resp = self.client.post('/api/recipes', json={"title": "Bad", "ingredient_ids": [3, 3],
                                                      "quantities": ["1", "2"]}, headers=ALICE)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post('/api/recipes', json={"title": "Bad", "difficulty": "Insane"}, headers=ALICE)
        self.assertEqual(resp.status_code, 422)

    def test_recipe_title_fits_column(self):
        resp = self.client.post('/api/recipes', json={"title": "T" * 101}, headers=ALICE)
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post('/api/recipes', json={"title": "Soup", "ingredient_ids": [3],
                                                      "quantities": ["q" * 51]}, headers=ALICE)
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self._create_recipe(title="T" * 100)['title'], "T" * 100)

    def test_search_featured_and_mine(self):
        self._create_recipe(title="Chocolate Cake", categories=["Desserts"], is_featured=True)
        self._create_recipe(title="Hot chocolate", categories=["Quick Meals"])
        self._create_recipe(title="Secret chocolate", is_public=False, headers=BOB)
        search = self.client.get('/api/recipes', params={"search": "choc", "category": "Desserts"}).json()
        self.assertEqual([r['title'] for r in search], ["Chocolate Cake"])
        self.assertEqual(len(self.client.get('/api/recipes').json()), 2)
        featured = self.client.get('/api/recipes/featured').json()
        self.assertEqual([r['title'] for r in featured], ["Chocolate Cake"])
        mine = self.client.get('/api/recipes/mine', headers=BOB).json()
        self.assertEqual([r['title'] for r in mine], ["Secret chocolate"])

    def test_shopping_rows_preview(self):
        recipe = self._create_recipe()
        rows = self.client.get(f"/api/recipes/{recipe['id']}/shopping-rows").json()
        self.assertEqual(rows, [{"name": "Eggs", "quantity": "2", "category": "Dairy"},
                                {"name": "Milk", "quantity": "1 cup", "category": "Dairy"}])

    def test_shopping_list_flow(self):
        omelette = self._create_recipe()
        cake = self._create_recipe(title="Cake", ingredient_ids=[3, 1], quantities=["3", "200g"])
        resp = self.client.post('/api/shopping-lists/merge', json={"recipe_ids": [omelette['id'], cake['id']]},
                                headers=ALICE)
        self.assertEqual(resp.status_code, 201)
        sl = resp.json()
        self.assertEqual([(i['name'], i['quantity']) for i in sl['items']],
                         [("Eggs", "2"), ("Milk", "1 cup"), ("Flour", "200g")])

        item_id = sl['items'][0]['id']
        resp = self.client.post(f"/api/shopping-lists/items/{item_id}/purchased", json={"is_purchased": True},
                                headers=ALICE)
        self.assertTrue(resp.json()['is_purchased'])
        resp = self.client.post(f"/api/shopping-lists/items/{item_id}/purchased", json={}, headers=BOB)
        self.assertEqual(resp.status_code, 403)

        resp = self.client.post(f"/api/shopping-lists/{sl['id']}/items", json={"name": "Bread", "quantity": "1"},
                                headers=ALICE)
        self.assertEqual(resp.status_code, 201)
        resp = self.client.post(f"/api/shopping-lists/{sl['id']}/purchased", json={"is_purchased": True},
                                headers=ALICE)
        self.assertEqual(resp.json()['updated'], 4)
        self.assertEqual(resp.json()['shopping_list']['purchased_count'], 4)

        resp = self.client.post(f"/api/shopping-lists/{sl['id']}/completed", json={"is_completed": True},
                                headers=ALICE)
        self.assertTrue(resp.json()['is_completed'])

        lists = self.client.get('/api/shopping-lists', headers=ALICE).json()
        self.assertEqual([s['id'] for s in lists], [sl['id']])
        self.assertEqual(self.client.get(f"/api/shopping-lists/{sl['id']}", headers=BOB).status_code, 403)

        pdf = self.client.get(f"/api/shopping-lists/{sl['id']}/pdf", headers=ALICE)
        self.assertEqual(pdf.status_code, 200)
        self.assertEqual(pdf.headers['content-type'], 'application/pdf')
        self.assertTrue(pdf.content.startswith(b'%PDF'))

        self.assertEqual(self.client.delete(f"/api/shopping-lists/{sl['id']}", headers=ALICE).status_code, 204)
        self.assertEqual(self.client.get(f"/api/shopping-lists/{sl['id']}", headers=ALICE).status_code, 404)

    def test_shopping_list_from_private_recipe_of_other_user(self):
        secret = self._create_recipe(headers=BOB, is_public=False)
        resp = self.client.post('/api/shopping-lists/from-recipe', json={"recipe_id": secret['id']}, headers=ALICE)
        self.assertEqual(resp.status_code, 404)
        resp = self.client.post('/api/shopping-lists/from-recipe', json={"recipe_id": secret['id']}, headers=BOB)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()['name'], "Shopping list for Omelette")

    def test_default_user(self):
        self.client.post('/api/fridge', json={"ingredient_id": 5, "quantity": "3"})
        data = self.client.get('/api/fridge', headers={"X-User-Id": "demo-user"}).json()
        self.assertEqual(data['owner_user_id'], "demo-user")
        self.assertEqual(data['count'], 1)


def test_events_feed(client):
    web_observers.start()
    headers = {"X-User-Id": "events-user"}
    before = client.get('/api/events', headers=headers).json()['next_cursor']
    client.post('/api/fridge', json={"ingredient_id": 6, "quantity": "2"}, headers=headers)
    feed = client.get('/api/events', params={"since": before}, headers=headers).json()
    assert [e['type'] for e in feed['events']] == ['fridge.item_saved']
    assert feed['events'][0]['name'] == "Onions"
    assert feed['events'][0]['created'] is True
    assert feed['next_cursor'] > before
