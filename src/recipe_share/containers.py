"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from recipe_share.adapters.supabase_category_repository import (
    SupabaseCategoryRepository,
)
from recipe_share.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from recipe_share.adapters.supabase_user_repository import SupabaseUserRepository
from recipe_share.config import Settings
from recipe_share.services.categories import CategoryRepository, CategoryService
from recipe_share.services.favorites import FavoritesCoordinator
from recipe_share.services.recipes import RecipeRepository, RecipeService
from recipe_share.services.users import UserRepository, UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    recipe_service: RecipeService
    category_service: CategoryService
    favorites: FavoritesCoordinator


def wire_services(
    settings: Settings,
    user_repository: UserRepository,
    recipe_repository: RecipeRepository,
    category_repository: CategoryRepository,
) -> AppContainer:
    """Build services on top of the given repositories."""
    favorites = FavoritesCoordinator(recipes=recipe_repository, users=user_repository)
    user_service = UserService(
        repository=user_repository,
        recipes=recipe_repository,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    recipe_service = RecipeService(
        repository=recipe_repository,
        users=user_repository,
        favorites=favorites,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    category_service = CategoryService(
        repository=category_repository, recipes=recipe_repository
    )
    return AppContainer(
        settings=settings,
        user_service=user_service,
        recipe_service=recipe_service,
        category_service=category_service,
        favorites=favorites,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return wire_services(
        resolved_settings,
        user_repository=SupabaseUserRepository(supabase_client),
        recipe_repository=SupabaseRecipeRepository(supabase_client),
        category_repository=SupabaseCategoryRepository(supabase_client),
    )
