"""
HTTP tests for the ``/users`` endpoints.
"""

BASE = "/api/v1/users"


def _create(client, **attrs):
    response = client.post(f"{BASE}/", json=attrs)
    assert response.status_code == 201
    return response.json()


def test_create_returns_user_with_camelcase_timestamps(client):
    body = _create(client, name="A", email="a@x.com", role="admin")
    assert body["id"] == 1
    assert body["name"] == "A"
    assert body["role"] == "admin"
    assert body["createdAt"] == body["updatedAt"]


def test_list_returns_all_users_in_insertion_order(client):
    _create(client, name="A")
    _create(client, name="B")
    response = client.get(f"{BASE}/")
    assert response.status_code == 200
    assert [u["name"] for u in response.json()] == ["A", "B"]


def test_list_search_and_pagination(client, seeded):
    assert [u["name"] for u in client.get(f"{BASE}/", params={"search": "bob"}).json()] == ["Bob"]
    page = client.get(f"{BASE}/", params={"page": "2", "limit": "2"}).json()
    assert [u["name"] for u in page] == ["Carol"]


def test_get_one(client):
    created = _create(client, name="A")
    response = client.get(f"{BASE}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_is_404(client):
    response = client.get(f"{BASE}/99")
    assert response.status_code == 404
    assert response.json()["detail"] == "User with ID 99 not found"


def test_non_integer_id_is_rejected(client):
    assert client.get(f"{BASE}/abc").status_code == 422
    assert client.patch(f"{BASE}/abc", json={"name": "x"}).status_code == 422
    assert client.delete(f"{BASE}/abc").status_code == 422


def test_patch_updates_only_supplied_fields(client):
    created = _create(client, name="A", email="a@x.com")
    response = client.patch(f"{BASE}/{created['id']}", json={"name": "A2", "id": 50})
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert body["name"] == "A2"
    assert body["email"] == "a@x.com"
    assert body["createdAt"] == created["createdAt"]
    assert body["updatedAt"] != created["updatedAt"]


def test_patch_missing_is_404(client):
    assert client.patch(f"{BASE}/5", json={"name": "x"}).status_code == 404


def test_delete_then_get_is_404(client):
    created = _create(client, name="A")
    response = client.delete(f"{BASE}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"id": 1, "message": "User with ID 1 has been successfully deleted"}
    assert client.get(f"{BASE}/1").status_code == 404
    assert client.delete(f"{BASE}/1").status_code == 404


def test_search_echoes_query_and_matches(client, seeded):
    body = client.get(f"{BASE}/search", params={"q": "alice"}).json()
    assert body["message"] == "Searching for users with query: alice"
    assert body["query"] == "alice"
    assert [u["name"] for u in body["users"]] == ["Alice"]


def test_paginated_defaults(client, seeded):
    body = client.get(f"{BASE}/paginated").json()
    assert body["message"] == "Paginated users"
    assert body["pagination"] == {"page": 1, "limit": 10, "sortBy": "id", "order": "asc", "total": 3}
    assert body["data"] == "Users from 1 to 10"
    assert [u["id"] for u in body["users"]] == [1, 2, 3]


def test_paginated_sorting_and_slicing(client, seeded):
    body = client.get(
        f"{BASE}/paginated",
        params={"page": "1", "limit": "2", "sortBy": "age", "order": "desc"},
    ).json()
    assert body["data"] == "Users from 1 to 2"
    assert [u["name"] for u in body["users"]] == ["Alice", "Carol"]


def test_paginated_unparseable_numbers_fall_back(client):
    body = client.get(f"{BASE}/paginated", params={"page": "x", "limit": "3abc"}).json()
    assert body["pagination"]["page"] == 1
    assert body["pagination"]["limit"] == 3


def test_filter_echoes_params_and_filters(client, seeded):
    body = client.get(f"{BASE}/filter", params={"role": "user", "age": "17"}).json()
    assert body["message"] == "Filtered users"
    assert body["filters"] == {"role": "user", "age": "17"}
    assert body["appliedFilters"] == 2
    assert [u["name"] for u in body["users"]] == ["Bob"]


def test_filter_without_params(client, seeded):
    body = client.get(f"{BASE}/filter").json()
    assert body["filters"] == {}
    assert body["appliedFilters"] == 0
    assert len(body["users"]) == 3


def test_by_roles_repeated_parameter(client, seeded):
    body = client.get(f"{BASE}/by-roles?roles=admin&roles=user").json()
    assert body["message"] == "Users filtered by roles"
    assert body["roles"] == ["admin", "user"]
    assert body["count"] == 2
    assert [u["name"] for u in body["users"]] == ["Alice", "Bob", "Carol"]


def test_by_roles_single_value(client, seeded):
    body = client.get(f"{BASE}/by-roles?roles=admin").json()
    assert body["roles"] == ["admin"]
    assert body["count"] == 1
    assert [u["name"] for u in body["users"]] == ["Alice"]


def test_by_roles_array_notation(client, seeded):
    body = client.get(f"{BASE}/by-roles?roles[]=editor").json()
    assert body["roles"] == ["editor"]
    assert [u["name"] for u in body["users"]] == ["Carol"]


def test_by_roles_without_roles(client):
    body = client.get(f"{BASE}/by-roles").json()
    assert body["roles"] == []
    assert body["count"] == 0


def test_active_false_is_case_insensitive(client, seeded):
    body = client.get(f"{BASE}/active", params={"isActive": "FALSE"}).json()
    assert body["message"] == "Active users with age filter"
    assert body["filters"]["isActive"] is False
    assert [u["name"] for u in body["users"]] == ["Bob"]


def test_active_invalid_min_age(client):
    body = client.get(f"{BASE}/active", params={"minAge": "abc"}).json()
    assert body["filters"] == {"isActive": True, "minAge": None, "maxAge": None}
    assert body["validFilters"] == {"hasMinAge": False, "hasMaxAge": False}


def test_active_age_range(client, seeded):
    body = client.get(f"{BASE}/active", params={"minAge": "20", "maxAge": "30"}).json()
    assert body["filters"] == {"isActive": True, "minAge": 20, "maxAge": 30}
    assert body["validFilters"] == {"hasMinAge": True, "hasMaxAge": True}
    assert [u["name"] for u in body["users"]] == ["Carol"]


def test_literal_routes_are_not_captured_by_id_route(client):
    for path in ("search", "paginated", "filter", "by-roles", "active"):
        assert client.get(f"{BASE}/{path}").status_code == 200


def test_store_is_per_application(client, store):
    _create(client, name="A")
    assert store.count() == 1
    assert store.find_by_email("missing@x.com") is None


def test_collection_routes_without_trailing_slash(client):
    response = client.post(BASE, json={"name": "A"}, follow_redirects=False)
    assert response.status_code == 201
    assert response.json()["id"] == 1
    response = client.get(BASE, follow_redirects=False)
    assert response.status_code == 200
    assert [u["name"] for u in response.json()] == ["A"]


def test_filter_keeps_every_value_of_repeated_params(client, seeded):
    body = client.get(f"{BASE}/filter?role=user&role=admin").json()
    assert body["filters"] == {"role": ["user", "admin"]}
    assert body["appliedFilters"] == 1
    assert [u["name"] for u in body["users"]] == ["Alice", "Bob"]


def test_paginated_non_positive_page_is_clamped(client, seeded):
    body = client.get(f"{BASE}/paginated", params={"page": "0", "limit": "2"}).json()
    assert body["pagination"]["page"] == 1
    assert body["pagination"]["limit"] == 2
    assert body["data"] == "Users from 1 to 2"
    assert [u["id"] for u in body["users"]] == [1, 2]


def test_paginated_non_positive_limit_is_clamped(client, seeded):
    body = client.get(f"{BASE}/paginated", params={"page": "-3", "limit": "0"}).json()
    assert body["pagination"]["page"] == 1
    assert body["pagination"]["limit"] == 1
    assert body["data"] == "Users from 1 to 1"
    assert [u["id"] for u in body["users"]] == [1]
