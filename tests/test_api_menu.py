from decimal import Decimal

import pytest

from menu.models import MenuItem
from tests.factories import MenuItemFactory


@pytest.mark.django_db
def test_list_hides_unavailable_items_unless_asked(api_client):
    MenuItemFactory(name="Shown")
    MenuItemFactory(name="Hidden", available=False)

    names = [row["name"] for row in api_client.get("/api/menu/items/").json()]
    assert names == ["Shown"]

    all_names = {row["name"] for row in api_client.get("/api/menu/items/?include_unavailable=1").json()}
    assert all_names == {"Shown", "Hidden"}


@pytest.mark.django_db
def test_list_filters_by_category_type_and_search(api_client):
    MenuItemFactory(name="Masala Dosa", category="Dosas", description="crisp")
    MenuItemFactory(name="Chicken 65", category="Starters", type="non-veg")
    MenuItemFactory(name="Paneer Tikka", category="Starters")

    def names(query):
        return sorted(row["name"] for row in api_client.get(f"/api/menu/items/?{query}").json())

    assert names("category=Starters") == ["Chicken 65", "Paneer Tikka"]
    assert names("category=all") == ["Chicken 65", "Masala Dosa", "Paneer Tikka"]
    assert names("type=non-veg") == ["Chicken 65"]
    assert names("search=CRISP") == ["Masala Dosa"]


@pytest.mark.django_db
def test_unknown_category_filter_is_rejected(api_client):
    resp = api_client.get("/api/menu/items/?category=Nope")
    assert resp.status_code == 400
    assert resp.json()["field"] == "category"


@pytest.mark.django_db
def test_create_update_delete_item(api_client):
    resp = api_client.post("/api/menu/items/", {
        "name": "<b>Veg Biryani</b>",
        "description": "Fragrant rice",
        "price": "240.00",
        "category": "Rice / Pulao / Biryanis / Raitas",
        "type": "veg",
        "prep_time": 25,
    }, format="json")
    assert resp.status_code == 201, resp.content
    item_id = resp.json()["id"]
    item = MenuItem.objects.get(pk=item_id)
    assert item.name == "Veg Biryani"
    assert item.available is True

    resp = api_client.patch(f"/api/menu/items/{item_id}/", {"price": "260.00"}, format="json")
    assert resp.status_code == 200
    assert MenuItem.objects.get(pk=item_id).price == Decimal("260.00")

    resp = api_client.delete(f"/api/menu/items/{item_id}/")
    assert resp.status_code == 204
    assert not MenuItem.objects.filter(pk=item_id).exists()


@pytest.mark.django_db
@pytest.mark.parametrize("payload,field", [
    ({"price": "-1.00"}, "price"),
    ({"prep_time": 0}, "prep_time"),
    ({"category": "Tapas"}, "category"),
])
def test_create_rejects_invalid_items(api_client, payload, field):
    body = {"name": "Thing", "price": "10.00", "category": "Starters", "type": "veg", "prep_time": 5}
    body.update(payload)

    resp = api_client.post("/api/menu/items/", body, format="json")

    assert resp.status_code == 400
    assert field in resp.json()


@pytest.mark.django_db
def test_toggle_availability(api_client, menu_item):
    resp = api_client.post(f"/api/menu/items/{menu_item.pk}/toggle_availability/")
    assert resp.status_code == 200
    assert resp.json()["available"] is False

    resp = api_client.post(f"/api/menu/items/{menu_item.pk}/toggle_availability/")
    assert resp.json()["available"] is True


@pytest.mark.django_db
def test_rating_updates_average(api_client, menu_item):
    api_client.post(f"/api/menu/items/{menu_item.pk}/rate/", {"rating": 5}, format="json")
    resp = api_client.post(
        f"/api/menu/items/{menu_item.pk}/rate/", {"rating": 2, "comment": "cold"}, format="json"
    )

    assert resp.status_code == 201
    assert resp.json()["average_rating"] == "3.50"
    assert resp.json()["rating_count"] == 2

    bad = api_client.post(f"/api/menu/items/{menu_item.pk}/rate/", {"rating": 6}, format="json")
    assert bad.status_code == 400


@pytest.mark.django_db
def test_missing_item_is_404(api_client):
    assert api_client.get("/api/menu/items/9999/").status_code == 404


@pytest.mark.django_db
def test_categories_endpoint_lists_fixed_categories(api_client):
    data = api_client.get("/api/menu/categories/").json()

    assert len(data["categories"]) == 31
    assert "Dosas" in data["categories"]
    assert data["types"] == ["veg", "non-veg"]
