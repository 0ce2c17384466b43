"""Pydantic models for incoming request bodies.

Bodies use camelCase keys on the wire; ``model_dump`` yields the snake_case
field names the services expect.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIRequest(BaseModel):
    """Base class for request bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class StrictRequest(APIRequest):
    """Base class for bodies that reject keys they do not declare."""

    model_config = ConfigDict(extra="forbid")


class NutritionInfoRequest(StrictRequest):
    """Nutrition breakdown payload."""

    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)


class RecipeCreateRequest(StrictRequest):
    """Payload for creating a recipe."""

    name: str = Field(min_length=1, max_length=100)
    image: str = Field(min_length=1)
    ingredients: str = Field(min_length=1, max_length=1000)
    steps: str = Field(min_length=1, max_length=2000)
    category: str
    time: str
    difficulty: str | None = None
    servings: int | None = None
    rating: str | None = None
    tags: list[str] | None = None
    nutrition_info: NutritionInfoRequest | None = None
    is_public: bool | None = None

    def to_payload(self) -> dict[str, object]:
        """Return the supplied fields, leaving defaults to the domain."""
        return self.model_dump(exclude_none=True)


class RecipeUpdateRequest(StrictRequest):
    """Payload for a partial recipe update."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    image: str | None = Field(default=None, min_length=1)
    ingredients: str | None = Field(default=None, min_length=1, max_length=1000)
    steps: str | None = Field(default=None, min_length=1, max_length=2000)
    category: str | None = None
    time: str | None = None
    difficulty: str | None = None
    servings: int | None = None
    rating: str | None = None
    tags: list[str] | None = None
    nutrition_info: NutritionInfoRequest | None = None
    is_public: bool | None = None

    def to_payload(self) -> dict[str, object]:
        """Return only the fields the client sent."""
        payload = self.model_dump(exclude_unset=True)
        # Only nutrition can be cleared with an explicit null.
        return {
            key: value
            for key, value in payload.items()
            if value is not None or key == "nutrition_info"
        }


class UserRegisterRequest(APIRequest):
    """Payload for creating a user profile."""

    email: str = Field(min_length=3)
    name: str = Field(min_length=1, max_length=50)
    avatar: str | None = None


class UserUpdateRequest(APIRequest):
    """Payload for editing the requester's own profile."""

    name: str | None = Field(default=None, min_length=1, max_length=50)
    avatar: str | None = None


class CategoryCreateRequest(StrictRequest):
    """Payload for creating a category."""

    name: str
    display_name: str
    emoji: str
    color: str
    description: str | None = Field(default=None, max_length=200)
    is_active: bool | None = None

    def to_payload(self) -> dict[str, object]:
        """Return the supplied fields."""
        return self.model_dump(exclude_none=True)


class CategoryUpdateRequest(StrictRequest):
    """Payload for a partial category update."""

    display_name: str | None = None
    emoji: str | None = None
    color: str | None = None
    description: str | None = Field(default=None, max_length=200)
    is_active: bool | None = None

    def to_payload(self) -> dict[str, object]:
        """Return only the fields the client sent."""
        payload = self.model_dump(exclude_unset=True)
        # Only the description can be cleared with an explicit null.
        return {
            key: value
            for key, value in payload.items()
            if value is not None or key == "description"
        }
