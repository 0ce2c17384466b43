"""Tests for the favorites and cascade bookkeeping."""

from uuid import uuid4

import pytest

from recipe_share.containers import AppContainer
from recipe_share.domain.errors import NotFoundError
from tests.conftest import InMemoryUserRepository, recipe_payload


def test_biryani_lifecycle_across_author_and_fan(
    container: AppContainer, user_repository: InMemoryUserRepository
) -> None:
    users = container.user_service
    recipes = container.recipe_service
    author = users.register(email="a@example.com", name="A")
    fan = users.register(email="b@example.com", name="B")

    biryani = recipes.create_recipe(
        author.id, recipe_payload(name="Beef Biryani", category="dinner")
    )
    assert biryani.id in user_repository.users[author.id].created_recipes
    assert [r.id for r in recipes.browse(category="dinner").items] == [biryani.id]

    users.add_favorite(fan.id, biryani.id)
    assert biryani.id in user_repository.users[fan.id].favorite_recipes

    recipes.delete_recipe(biryani.id, author.id)

    assert biryani.id not in user_repository.users[fan.id].favorite_recipes
    assert biryani.id not in user_repository.users[author.id].created_recipes
    with pytest.raises(NotFoundError):
        recipes.get_recipe(biryani.id)


def test_delete_only_removes_the_deleted_recipe(
    container: AppContainer, user_repository: InMemoryUserRepository
) -> None:
    author = container.user_service.register(email="a@example.com", name="A")
    fan = container.user_service.register(email="b@example.com", name="B")
    kept = container.recipe_service.create_recipe(author.id, recipe_payload())
    doomed = container.recipe_service.create_recipe(
        author.id, recipe_payload(name="Doomed")
    )
    container.user_service.add_favorite(fan.id, kept.id)
    container.user_service.add_favorite(fan.id, doomed.id)

    container.recipe_service.delete_recipe(doomed.id, author.id)

    assert user_repository.users[author.id].created_recipes == (kept.id,)
    assert user_repository.users[fan.id].favorite_recipes == (kept.id,)


def test_purge_recipe_is_safe_to_rerun(
    container: AppContainer, user_repository: InMemoryUserRepository
) -> None:
    author = container.user_service.register(email="a@example.com", name="A")
    fan = container.user_service.register(email="b@example.com", name="B")
    recipe = container.recipe_service.create_recipe(author.id, recipe_payload())
    container.user_service.add_favorite(fan.id, recipe.id)

    assert container.favorites.purge_recipe(recipe) == 2
    assert container.favorites.purge_recipe(recipe) == 0
    assert user_repository.users[fan.id].favorite_recipes == ()


def test_deactivation_keeps_recipes_and_favorites(
    container: AppContainer, user_repository: InMemoryUserRepository
) -> None:
    author = container.user_service.register(email="a@example.com", name="A")
    fan = container.user_service.register(email="b@example.com", name="B")
    recipe = container.recipe_service.create_recipe(author.id, recipe_payload())
    container.user_service.add_favorite(fan.id, recipe.id)

    container.user_service.deactivate(author.id, author.id)

    assert container.recipe_service.get_recipe(recipe.id) == recipe
    assert user_repository.users[fan.id].favorite_recipes == (recipe.id,)


def test_list_favorites_resolves_visible_recipes(container: AppContainer) -> None:
    author = container.user_service.register(email="a@example.com", name="A")
    fan = container.user_service.register(email="b@example.com", name="B")
    first = container.recipe_service.create_recipe(
        author.id, recipe_payload(name="First")
    )
    hidden = container.recipe_service.create_recipe(
        author.id, recipe_payload(name="Hidden")
    )
    second = container.recipe_service.create_recipe(
        author.id, recipe_payload(name="Second")
    )
    for recipe in (second, hidden, first):
        container.user_service.add_favorite(fan.id, recipe.id)
    container.recipe_service.update_recipe(hidden.id, author.id, {"is_public": False})

    favorites = container.recipe_service.list_favorites(fan.id)

    assert [recipe.id for recipe in favorites] == [second.id, first.id]
    with pytest.raises(NotFoundError):
        container.recipe_service.list_favorites(uuid4())
