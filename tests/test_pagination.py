"""
Tests for the shared pagination and filtering helper.
"""

from datetime import date, timedelta

from superfarmer.core.pagination import PaginationParams
from tests.conftest import API, unique


def _params(**overrides) -> PaginationParams:
    values = dict(
        page=1, limit=10, sort="created_at", order="desc",
        name=None, start_date=None, end_date=None,
    )
    values.update(overrides)
    return PaginationParams(**values)


class TestPaginationParams:
    def test_offset(self):
        assert _params(page=1).offset == 0
        assert _params(page=3, limit=25).offset == 50

    def test_cache_key_covers_filters(self):
        plain = _params().cache_key()
        filtered = _params(name="rice").cache_key()
        dated = _params(start_date=date(2024, 1, 1)).cache_key()
        assert len({plain, filtered, dated}) == 3


class TestListEndpoints:
    def _seed(self, client, headers, count=3):
        tag = unique("pg")
        for i in range(count):
            client.post(
                f"{API}/commodities",
                json={"name": f"{tag}-{i}", "code": f"{tag}-C{i}"},
                headers=headers,
            )
        return tag

    def test_meta_and_pages(self, client, admin_headers):
        tag = self._seed(client, admin_headers)
        response = client.get(
            f"{API}/commodities", params={"name": tag, "limit": 2}, headers=admin_headers
        )
        assert response.status_code == 200
        body = response.json()
        assert body["meta"] == {"total": 3, "page": 1, "limit": 2, "pages": 2}
        assert len(body["data"]) == 2

        second = client.get(
            f"{API}/commodities", params={"name": tag, "limit": 2, "page": 2}, headers=admin_headers
        ).json()
        assert len(second["data"]) == 1

    def test_name_filter_is_case_insensitive(self, client, admin_headers):
        tag = self._seed(client, admin_headers, count=1)
        response = client.get(
            f"{API}/commodities", params={"name": tag.upper()}, headers=admin_headers
        )
        assert response.json()["meta"]["total"] == 1

    def test_name_filter_matches_wildcards_literally(self, client, admin_headers):
        tag = unique("pct")
        client.post(
            f"{API}/commodities",
            json={"name": f"{tag} grade 100%", "code": f"{tag}-C"},
            headers=admin_headers,
        )
        exact = client.get(
            f"{API}/commodities", params={"name": f"{tag} grade 100%"}, headers=admin_headers
        ).json()
        assert exact["meta"]["total"] == 1

        for wildcard in ("%", "_"):
            names = [
                c["name"]
                for c in client.get(
                    f"{API}/commodities", params={"name": wildcard, "limit": 100},
                    headers=admin_headers,
                ).json()["data"]
            ]
            assert all(wildcard in name for name in names), wildcard

    def test_sort_ascending_by_name(self, client, admin_headers):
        tag = self._seed(client, admin_headers)
        names = [
            c["name"]
            for c in client.get(
                f"{API}/commodities",
                params={"name": tag, "sort": "name", "order": "asc"},
                headers=admin_headers,
            ).json()["data"]
        ]
        assert names == sorted(names)

    def test_unknown_sort_field_falls_back(self, client, admin_headers):
        tag = self._seed(client, admin_headers, count=1)
        response = client.get(
            f"{API}/commodities", params={"name": tag, "sort": "nope"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["meta"]["total"] == 1

    def test_date_window(self, client, admin_headers):
        tag = self._seed(client, admin_headers, count=2)
        future = (date.today() + timedelta(days=30)).isoformat()
        past = (date.today() - timedelta(days=30)).isoformat()

        empty = client.get(
            f"{API}/commodities", params={"name": tag, "start_date": future}, headers=admin_headers
        ).json()
        assert empty["meta"]["total"] == 0

        window = client.get(
            f"{API}/commodities",
            params={"name": tag, "start_date": past, "end_date": future},
            headers=admin_headers,
        ).json()
        assert window["meta"]["total"] == 2

    def test_invalid_params_are_rejected(self, client, admin_headers):
        for params in ({"order": "sideways"}, {"limit": 101}, {"page": 0}):
            response = client.get(f"{API}/commodities", params=params, headers=admin_headers)
            assert response.status_code == 422

    def test_empty_result_has_zero_pages(self, client, admin_headers):
        body = client.get(
            f"{API}/commodities", params={"name": unique("none")}, headers=admin_headers
        ).json()
        assert body["data"] == []
        assert body["meta"]["pages"] == 0
