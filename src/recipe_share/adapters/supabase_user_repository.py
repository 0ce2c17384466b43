"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from recipe_share.domain.errors import StorageError
from recipe_share.domain.models import UserRecord
from recipe_share.services.users import UserRepository

ADD_FAVORITE_FUNCTION = "add_favorite_recipe"
REMOVE_FAVORITE_FUNCTION = "remove_favorite_recipe"
ADD_CREATED_FUNCTION = "add_created_recipe"
REMOVE_REFERENCES_FUNCTION = "remove_recipe_references"

USER_COLUMNS = (
    "id, email, name, avatar, created_recipes, favorite_recipes, "
    "is_active, created_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def create_user(self, email: str, name: str, avatar: str | None) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "email": email,
                    "name": name,
                    "avatar": avatar,
                    "created_recipes": [],
                    "favorite_recipes": [],
                    "is_active": True,
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user by id, if present."""
        response = (
            self.client.table("users")
            .select(USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""
        response = (
            self.client.table("users")
            .select(USER_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def get_users(self, user_ids: list[UUID]) -> list[UserRecord]:
        """Return the users for the given ids that exist."""
        response = (
            self.client.table("users")
            .select(USER_COLUMNS)
            .in_("id", [str(user_id) for user_id in user_ids])
            .execute()
        )
        return [_parse_user(row) for row in response.data or []]

    def list_active_users(
        self, offset: int, limit: int
    ) -> tuple[list[UserRecord], int]:
        """Return a page of active users, newest first, and the total count."""
        response = (
            self.client.table("users")
            .select(USER_COLUMNS, count="exact")
            .eq("is_active", True)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        users = [_parse_user(row) for row in response.data or []]
        return users, int(response.count or 0)

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        """Update profile fields and return the user."""
        return self._update(user_id, dict(payload))

    def add_favorite(self, user_id: UUID, recipe_id: UUID) -> UserRecord | None:
        """Append a favorite in one statement; None if already present."""
        return self._change_favorites(ADD_FAVORITE_FUNCTION, user_id, recipe_id)

    def remove_favorite(self, user_id: UUID, recipe_id: UUID) -> UserRecord | None:
        """Remove a favorite in one statement; None if it was not present."""
        return self._change_favorites(REMOVE_FAVORITE_FUNCTION, user_id, recipe_id)

    def add_created_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        """Append a recipe id to the user's authored recipes."""
        self.client.rpc(
            ADD_CREATED_FUNCTION,
            {"target_user": str(user_id), "recipe": str(recipe_id)},
        ).execute()

    def remove_recipe_references(self, recipe_id: UUID) -> int:
        """Drop a recipe from every authored and favorite list."""
        response = self.client.rpc(
            REMOVE_REFERENCES_FUNCTION, {"target_recipe": str(recipe_id)}
        ).execute()
        return int(response.data or 0)

    def _change_favorites(
        self, function: str, user_id: UUID, recipe_id: UUID
    ) -> UserRecord | None:
        response = self.client.rpc(
            function, {"target_user": str(user_id), "recipe": str(recipe_id)}
        ).execute()
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def _update(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("users")
            .update(payload)
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to update user")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    """Parse a users row into a domain model."""
    created_raw = row.get("created_at")
    return UserRecord(
        id=UUID(str(row["id"])),
        email=str(row.get("email", "")),
        name=str(row.get("name", "")),
        avatar=row.get("avatar"),
        created_recipes=tuple(UUID(str(rid)) for rid in row.get("created_recipes") or []),
        favorite_recipes=tuple(
            UUID(str(rid)) for rid in row.get("favorite_recipes") or []
        ),
        is_active=bool(row.get("is_active", True)),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
