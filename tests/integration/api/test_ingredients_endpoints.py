"""Integration tests for ingredient endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from httpx import AsyncClient


pytestmark = pytest.mark.integration


def _url(recipe: dict[str, Any], ingredient_id: int | None = None) -> str:
    base = f"/api/recipes/{recipe['id']}/ingredients"
    return base if ingredient_id is None else f"{base}/{ingredient_id}"


@pytest.fixture
async def flour(
    client: AsyncClient, alice: dict[str, Any], alice_recipe: dict[str, Any]
) -> dict[str, Any]:
    response = await client.post(
        _url(alice_recipe),
        json={"name": "flour", "amount": 200, "unit": "g"},
        headers=alice["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestAddIngredient:
    async def test_owner_adds_ingredient(
        self, flour: dict[str, Any], alice_recipe: dict[str, Any]
    ) -> None:
        assert flour["name"] == "flour"
        assert flour["amount"] == 200
        assert flour["unit"] == "g"
        assert flour["recipe_id"] == alice_recipe["id"]

    async def test_other_user_is_forbidden(
        self, client: AsyncClient, bob: dict[str, Any], alice_recipe: dict[str, Any]
    ) -> None:
        response = await client.post(
            _url(alice_recipe), json={"name": "salt"}, headers=bob["headers"]
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Not authorized to modify this recipe"}

    async def test_unknown_recipe(
        self, client: AsyncClient, alice: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/api/recipes/999/ingredients", json={"name": "salt"}, headers=alice["headers"]
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Recipe not found"}

    async def test_requires_authentication(
        self, client: AsyncClient, alice_recipe: dict[str, Any]
    ) -> None:
        response = await client.post(_url(alice_recipe), json={"name": "salt"})

        assert response.status_code == 401

    async def test_name_is_required(
        self, client: AsyncClient, alice: dict[str, Any], alice_recipe: dict[str, Any]
    ) -> None:
        response = await client.post(
            _url(alice_recipe), json={"amount": 1}, headers=alice["headers"]
        )

        assert response.status_code == 400


class TestListIngredients:
    async def test_anyone_can_list(
        self, client: AsyncClient, flour: dict[str, Any], alice_recipe: dict[str, Any]
    ) -> None:
        response = await client.get(_url(alice_recipe))

        assert response.status_code == 200
        assert [i["id"] for i in response.json()] == [flour["id"]]

    async def test_unknown_recipe_has_none(self, client: AsyncClient) -> None:
        response = await client.get("/api/recipes/999/ingredients")

        assert response.status_code == 200
        assert response.json() == []


class TestUpdateIngredient:
    async def test_owner_updates(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        alice_recipe: dict[str, Any],
        flour: dict[str, Any],
    ) -> None:
        response = await client.patch(
            _url(alice_recipe, flour["id"]),
            json={"amount": 250.5},
            headers=alice["headers"],
        )

        assert response.status_code == 200
        assert response.json()["amount"] == 250.5
        assert response.json()["unit"] == "g"

    async def test_other_user_is_forbidden(
        self,
        client: AsyncClient,
        bob: dict[str, Any],
        alice_recipe: dict[str, Any],
        flour: dict[str, Any],
    ) -> None:
        response = await client.patch(
            _url(alice_recipe, flour["id"]), json={"amount": 1}, headers=bob["headers"]
        )

        assert response.status_code == 403

    async def test_unknown_ingredient(
        self, client: AsyncClient, alice: dict[str, Any], alice_recipe: dict[str, Any]
    ) -> None:
        response = await client.patch(
            _url(alice_recipe, 999), json={"amount": 1}, headers=alice["headers"]
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Ingredient not found"}

    async def test_ingredient_of_another_recipe_is_not_found(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        flour: dict[str, Any],
    ) -> None:
        other = await client.post(
            "/api/recipes",
            json={"title": "Other", "instructions": "x"},
            headers=alice["headers"],
        )

        response = await client.patch(
            _url(other.json(), flour["id"]), json={"amount": 1}, headers=alice["headers"]
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Ingredient not found"}

    async def test_only_disallowed_fields_is_404(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        alice_recipe: dict[str, Any],
        flour: dict[str, Any],
    ) -> None:
        response = await client.patch(
            _url(alice_recipe, flour["id"]),
            json={"recipe_id": 12},
            headers=alice["headers"],
        )

        assert response.status_code == 404


class TestDeleteIngredient:
    async def test_owner_deletes(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        alice_recipe: dict[str, Any],
        flour: dict[str, Any],
    ) -> None:
        response = await client.delete(
            _url(alice_recipe, flour["id"]), headers=alice["headers"]
        )

        assert response.status_code == 204
        assert (await client.get(_url(alice_recipe))).json() == []

    async def test_deleting_twice_is_404(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        alice_recipe: dict[str, Any],
        flour: dict[str, Any],
    ) -> None:
        url = _url(alice_recipe, flour["id"])
        await client.delete(url, headers=alice["headers"])

        response = await client.delete(url, headers=alice["headers"])

        assert response.status_code == 404
        assert response.json() == {"error": "Ingredient not found"}

    async def test_other_user_is_forbidden(
        self,
        client: AsyncClient,
        bob: dict[str, Any],
        alice_recipe: dict[str, Any],
        flour: dict[str, Any],
    ) -> None:
        response = await client.delete(
            _url(alice_recipe, flour["id"]), headers=bob["headers"]
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Not authorized to modify this recipe"}
