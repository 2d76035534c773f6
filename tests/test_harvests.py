"""
Tests for harvests and sales.
"""

from superfarmer.core.messaging import HARVEST_ROUTING_KEY
from tests.conftest import API


def _harvest(client, headers, land_commodity, city, **overrides):
    body = {
        "landCommodityId": land_commodity["id"],
        "cityId": city["id"],
        "quantity": 250.5,
        "harvestDate": "2024-03-15",
    }
    body.update(overrides)
    return client.post(f"{API}/harvests", json=body, headers=headers)


class TestHarvests:
    def test_create_and_read(self, client, farmer_headers, land_commodity, city):
        response = _harvest(client, farmer_headers, land_commodity, city)
        assert response.status_code == 201
        harvest = response.json()["data"]
        assert harvest["harvestDate"] == "2024-03-15"
        assert harvest["unit"] == "kg"

        fetched = client.get(f"{API}/harvests/{harvest['id']}", headers=farmer_headers)
        assert fetched.json()["data"]["quantity"] == 250.5

    def test_unknown_land_commodity_is_not_found(self, client, farmer_headers, city):
        response = _harvest(client, farmer_headers, {"id": "missing"}, city)
        assert response.status_code == 404

    def test_invalid_date_is_rejected(self, client, farmer_headers, land_commodity, city):
        response = _harvest(client, farmer_headers, land_commodity, city, harvestDate="15/03/2024")
        assert response.status_code == 422

    def test_list_by_land_commodity_land_and_commodity(
        self, client, farmer_headers, land, commodity, land_commodity, city
    ):
        harvest = _harvest(client, farmer_headers, land_commodity, city).json()["data"]
        for path in (
            f"land_commodity/{land_commodity['id']}",
            f"land/{land['id']}",
            f"commodity/{commodity['id']}",
            f"city/{city['id']}",
        ):
            body = client.get(f"{API}/harvests/{path}", headers=farmer_headers).json()
            assert [h["id"] for h in body["data"]] == [harvest["id"]], path

    def test_cached_list_sees_new_harvest(self, client, farmer_headers, land, land_commodity, city):
        path = f"{API}/harvests/land/{land['id']}"
        assert client.get(path, headers=farmer_headers).json()["meta"]["total"] == 0
        _harvest(client, farmer_headers, land_commodity, city)
        assert client.get(path, headers=farmer_headers).json()["meta"]["total"] == 1

    def test_deleted_land_commodity_hides_its_harvests(
        self, client, farmer_headers, land, commodity, land_commodity, city
    ):
        _harvest(client, farmer_headers, land_commodity, city)
        paths = (f"{API}/harvests/land/{land['id']}", f"{API}/harvests/commodity/{commodity['id']}")
        for path in paths:
            assert client.get(path, headers=farmer_headers).json()["meta"]["total"] == 1, path

        deleted = client.delete(f"{API}/land_commodities/{land_commodity['id']}", headers=farmer_headers)
        assert deleted.status_code == 204
        for path in paths:
            assert client.get(path, headers=farmer_headers).json()["meta"]["total"] == 0, path

        restored = client.patch(
            f"{API}/land_commodities/{land_commodity['id']}/restore", headers=farmer_headers
        )
        assert restored.status_code == 200
        for path in paths:
            assert client.get(path, headers=farmer_headers).json()["meta"]["total"] == 1, path

    def test_report_request(self, client, farmer_headers, land_commodity, publisher):
        response = client.get(
            f"{API}/harvests/land_commodity/{land_commodity['id']}/download",
            params={"start_date": "2024-01-01", "end_date": "2024-12-31"},
            headers=farmer_headers,
        )
        assert response.status_code == 202
        routing_key, payload = publisher.publish_report.await_args.args
        assert routing_key == HARVEST_ROUTING_KEY
        assert payload == {
            "landCommodityId": land_commodity["id"],
            "startDate": "2024-01-01",
            "endDate": "2024-12-31",
        }


class TestSales:
    def test_sale_crud(self, client, farmer_headers, commodity, city):
        response = client.post(
            f"{API}/sales",
            json={
                "commodityId": commodity["id"],
                "cityId": city["id"],
                "quantity": 10,
                "price": 14000,
                "saleDate": "2024-04-01",
            },
            headers=farmer_headers,
        )
        assert response.status_code == 201
        sale = response.json()["data"]

        updated = client.patch(
            f"{API}/sales/{sale['id']}", json={"price": 15000}, headers=farmer_headers
        )
        assert updated.json()["data"]["price"] == 15000

        by_city = client.get(f"{API}/sales/city/{city['id']}", headers=farmer_headers).json()
        assert [s["id"] for s in by_city["data"]] == [sale["id"]]

        assert client.delete(f"{API}/sales/{sale['id']}", headers=farmer_headers).status_code == 204
        by_commodity = client.get(
            f"{API}/sales/commodity/{commodity['id']}", headers=farmer_headers
        ).json()
        assert by_commodity["meta"]["total"] == 0
