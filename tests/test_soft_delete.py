"""
Tests for the soft-delete / restore lifecycle shared by every entity.
"""

import pytest

from tests.conftest import API


class TestCommodityLifecycle:
    def test_delete_hides_row_from_standard_reads(self, client, admin_headers, commodity):
        cid = commodity["id"]
        assert client.delete(f"{API}/commodities/{cid}", headers=admin_headers).status_code == 204

        response = client.get(f"{API}/commodities/{cid}", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

        listed = client.get(
            f"{API}/commodities", params={"name": commodity["name"]}, headers=admin_headers
        ).json()
        assert listed["meta"]["total"] == 0

    def test_deleted_row_is_reachable_through_trash(self, client, admin_headers, commodity):
        cid = commodity["id"]
        client.delete(f"{API}/commodities/{cid}", headers=admin_headers)

        response = client.get(f"{API}/commodities/deleted/{cid}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["deletedAt"] is not None

        trash = client.get(
            f"{API}/commodities/deleted", params={"name": commodity["name"]}, headers=admin_headers
        ).json()
        assert [c["id"] for c in trash["data"]] == [cid]

    def test_restore_brings_row_back(self, client, admin_headers, commodity):
        cid = commodity["id"]
        client.delete(f"{API}/commodities/{cid}", headers=admin_headers)

        response = client.patch(f"{API}/commodities/{cid}/restore", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["deletedAt"] is None

        assert client.get(f"{API}/commodities/{cid}", headers=admin_headers).status_code == 200
        assert client.get(
            f"{API}/commodities/deleted/{cid}", headers=admin_headers
        ).status_code == 404

    def test_restoring_live_row_is_not_found(self, client, admin_headers, commodity):
        response = client.patch(
            f"{API}/commodities/{commodity['id']}/restore", headers=admin_headers
        )
        assert response.status_code == 404

    def test_deleting_twice_is_not_found(self, client, admin_headers, commodity):
        cid = commodity["id"]
        assert client.delete(f"{API}/commodities/{cid}", headers=admin_headers).status_code == 204
        assert client.delete(f"{API}/commodities/{cid}", headers=admin_headers).status_code == 404

    def test_updating_deleted_row_is_not_found(self, client, admin_headers, commodity):
        cid = commodity["id"]
        client.delete(f"{API}/commodities/{cid}", headers=admin_headers)
        response = client.patch(
            f"{API}/commodities/{cid}", json={"description": "x"}, headers=admin_headers
        )
        assert response.status_code == 404

    def test_deleted_name_still_blocks_duplicates(self, client, admin_headers, commodity):
        client.delete(f"{API}/commodities/{commodity['id']}", headers=admin_headers)
        response = client.post(
            f"{API}/commodities",
            json={"name": commodity["name"], "code": "OTHER-CODE"},
            headers=admin_headers,
        )
        assert response.status_code == 409


class TestIntegerKeyedLifecycle:
    def test_city_round_trip(self, client, admin_headers, city):
        city_id = city["id"]
        assert client.delete(f"{API}/cities/{city_id}", headers=admin_headers).status_code == 204
        assert client.get(f"{API}/cities/{city_id}", headers=admin_headers).status_code == 404
        assert client.get(f"{API}/cities/deleted/{city_id}", headers=admin_headers).status_code == 200
        assert client.patch(
            f"{API}/cities/{city_id}/restore", headers=admin_headers
        ).status_code == 200
        assert client.get(f"{API}/cities/{city_id}", headers=admin_headers).status_code == 200

    def test_city_requires_live_province(self, client, admin_headers):
        response = client.post(
            f"{API}/cities", json={"provinceId": 999999, "name": "Nowhere"}, headers=admin_headers
        )
        assert response.status_code == 404


@pytest.mark.parametrize("path", ["lands", "land_commodities", "harvests", "sales"])
def test_trash_listing_needs_a_token(client, path):
    assert client.get(f"{API}/{path}/deleted").status_code == 401


def test_farmer_cannot_empty_reference_data(client, farmer_headers, commodity):
    response = client.delete(f"{API}/commodities/{commodity['id']}", headers=farmer_headers)
    assert response.status_code == 403
