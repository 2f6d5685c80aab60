import pytest


class TestProductsCrud:
    """Product endpoints against an in-memory database."""

    @pytest.mark.asyncio
    async def test_create_returns_location(self, client):
        response = await client.post("/api/products", json={"productName": "Widget", "price": 10.0})

        assert response.status_code == 201
        data = response.json()
        assert data["productID"] > 0
        assert data["productName"] == "Widget"
        assert data["price"] == 10.0
        assert response.headers["location"].endswith(f"/api/products/{data['productID']}")

    @pytest.mark.asyncio
    async def test_get_by_id(self, client, create_product):
        created = await create_product("Gadget", 4.25)

        response = await client.get(f"/api/products/{created['productID']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_get_missing(self, client):
        response = await client.get("/api/products/999")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_replaces_fields(self, client, create_product):
        created = await create_product("Old", 1.0)
        product_id = created["productID"]

        response = await client.put(
            f"/api/products/{product_id}",
            json={"productID": product_id, "productName": "New", "price": 2.5}
        )

        assert response.status_code == 204
        assert response.content == b""
        fetched = (await client.get(f"/api/products/{product_id}")).json()
        assert fetched == {"productID": product_id, "productName": "New", "price": 2.5}

    @pytest.mark.asyncio
    async def test_update_id_mismatch(self, client, create_product):
        created = await create_product()
        product_id = created["productID"]

        response = await client.put(
            f"/api/products/{product_id}",
            json={"productID": product_id + 1, "productName": "X", "price": 1}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "ID mismatch"

    @pytest.mark.asyncio
    async def test_update_id_mismatch_on_missing_path(self, client):
        response = await client.put(
            "/api/products/500",
            json={"productID": 501, "productName": "X", "price": 1}
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_missing(self, client):
        response = await client.put(
            "/api/products/500",
            json={"productID": 500, "productName": "X", "price": 1}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unreferenced(self, client, create_product):
        created = await create_product()
        product_id = created["productID"]

        response = await client.delete(f"/api/products/{product_id}")

        assert response.status_code == 204
        assert (await client.get(f"/api/products/{product_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_referenced(self, client, create_product, create_customer, create_sale):
        product = await create_product()
        customer = await create_customer()
        await create_sale(customer["customerID"], product["productID"], 2)

        response = await client.delete(f"/api/products/{product['productID']}")

        assert response.status_code == 400
        assert response.json()["detail"] == "This product has existing sales and cannot be deleted."
        assert (await client.get(f"/api/products/{product['productID']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_delete_missing(self, client):
        response = await client.delete("/api/products/12345")
        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "delete"])
    async def test_oversized_path_id(self, client, method):
        response = await getattr(client, method)("/api/products/99999999999999999999")
        assert response.status_code == 400
        assert "product_id" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_oversized_body_id(self, client):
        response = await client.put(
            "/api/products/1",
            json={"productID": 2**31, "productName": "X", "price": 1}
        )
        assert response.status_code == 400
        assert "productID" in response.json()["detail"]


class TestProductsListing:
    """Paging and sorting of /api/products."""

    @pytest.fixture
    async def catalog(self, create_product):
        items = [("Banana", 3.0), ("Apple", 5.0), ("Cherry", 1.0), ("Date", 5.0), ("Elder", 2.0)]
        return [await create_product(name, price) for name, price in items]

    @pytest.mark.asyncio
    async def test_pages_cover_everything_once(self, client, catalog):
        seen = []
        first = (await client.get("/api/products", params={"pageSize": 2})).json()
        assert first["totalCount"] == 5
        assert first["totalPages"] == 3

        for page in range(1, first["totalPages"] + 1):
            data = (await client.get("/api/products", params={"pageNumber": page, "pageSize": 2})).json()
            assert len(data["data"]) <= 2
            seen.extend(p["productID"] for p in data["data"])

        assert seen == sorted(p["productID"] for p in catalog)

    @pytest.mark.asyncio
    async def test_sort_by_name(self, client, catalog):
        data = (await client.get("/api/products", params={"sortBy": "ProductName"})).json()
        assert [p["productName"] for p in data["data"]] == ["Apple", "Banana", "Cherry", "Date", "Elder"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sort_by", ["ProductID", "ProductName", "Price"])
    async def test_descending_is_reverse(self, client, catalog, sort_by):
        asc = (await client.get("/api/products", params={"sortBy": sort_by, "isAscending": "true"})).json()
        desc = (await client.get("/api/products", params={"sortBy": sort_by, "isAscending": "false"})).json()
        assert asc["data"] == list(reversed(desc["data"]))

    @pytest.mark.asyncio
    async def test_unknown_sort_uses_id(self, client, catalog):
        data = (await client.get("/api/products", params={"sortBy": "Bogus"})).json()
        assert [p["productID"] for p in data["data"]] == sorted(p["productID"] for p in catalog)

    @pytest.mark.asyncio
    async def test_unknown_sort_ignores_descending(self, client, catalog):
        data = (await client.get("/api/products", params={"sortBy": "Bogus", "isAscending": "false"})).json()
        assert [p["productID"] for p in data["data"]] == sorted(p["productID"] for p in catalog)

    @pytest.mark.asyncio
    async def test_page_past_end_is_empty(self, client, catalog):
        response = await client.get("/api/products", params={"pageNumber": 10, "pageSize": 2})
        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["totalCount"] == 5

    @pytest.mark.asyncio
    async def test_huge_page_number_is_empty(self, client, catalog):
        response = await client.get("/api/products", params={"pageNumber": 10**18, "pageSize": 100})
        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["totalCount"] == 5

    @pytest.mark.asyncio
    async def test_huge_page_size_returns_everything(self, client, catalog):
        response = await client.get("/api/products", params={"pageSize": 10**18})
        assert response.status_code == 200
        assert len(response.json()["data"]) == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_size", [0, -3])
    async def test_non_positive_page_size_is_empty(self, client, catalog, page_size):
        response = await client.get("/api/products", params={"pageSize": page_size})
        assert response.status_code == 200
        data = response.json()
        assert data["data"] == []
        assert data["totalCount"] == 5
        assert data["totalPages"] == 0
