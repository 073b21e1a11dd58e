from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Accepts both snake_case and the camelCase names used on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Caller-supplied context
# ---------------------------------------------------------------------------


class UserLocation(_CamelModel):
    lat: float
    lng: float


class ConversationContext(_CamelModel):
    # Only occasion and budget feed the scorers; the rest is carried through
    # for hard filtering and the LLM selection prompt.
    occasion: str = ""
    budget: str | None = None
    cuisine_preferences: list[str] = Field(default_factory=list)
    vibe: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)
    location_preference: Literal["nearby", "anywhere", "tel_aviv", "specific_city"] = "anywhere"
    specific_city: str | None = None
    max_distance_meters: float | None = Field(default=None, gt=0)
    timing: Literal["now", "tonight", "tomorrow", "weekend", "anytime"] = "anytime"
    specific_time: str | None = None
    specific_day: int | None = Field(default=None, ge=0, le=6)
    conversation_text: str = ""
    language: Literal["en", "he"] = "en"


# ---------------------------------------------------------------------------
# Opening hours (Google Places shape)
# ---------------------------------------------------------------------------


class PeriodPoint(_CamelModel):
    day: int = Field(..., ge=0, le=6)  # 0 = Sunday
    time: str  # "HHMM" or "HH:MM"


class OpeningPeriod(_CamelModel):
    open: PeriodPoint
    close: PeriodPoint | None = None


class OpeningHours(_CamelModel):
    periods: list[OpeningPeriod] = Field(default_factory=list)
    weekday_text: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Candidates
# ---------------------------------------------------------------------------


class ScoredRestaurant(_CamelModel):
    place_id: str = Field(..., min_length=1)
    name: str
    latitude: float | None = None
    longitude: float | None = None
    # Upstream similarity; malformed scores are rejected rather than sorted
    vector_score: float = Field(..., ge=0.0, le=1.0, allow_inf_nan=False)
    rating: float | None = None
    review_count: int | None = None
    price_level: int | None = None
    categories: list[str] = Field(default_factory=list)
    city: str | None = None
    address: str | None = None
    summary: str | None = None
    opening_hours: OpeningHours | None = None

    # Out-of-range optional values are treated as missing, never rejected.
    # Checked after coercion so "7" and 7 behave the same.

    @field_validator("rating", mode="after")
    @classmethod
    def _rating_in_range(cls, value: float | None) -> float | None:
        if value is not None and not 0.0 <= value <= 5.0:
            return None
        return value

    @field_validator("review_count", mode="after")
    @classmethod
    def _review_count_non_negative(cls, value: int | None) -> int | None:
        if value is not None and value < 0:
            return None
        return value

    @field_validator("price_level", mode="after")
    @classmethod
    def _price_level_in_range(cls, value: int | None) -> int | None:
        if value is not None and value not in (1, 2, 3, 4):
            return None
        return value

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class RankedRestaurant(ScoredRestaurant):
    final_score: float
    rating_boost: float = 0.0
    popularity_boost: float = 0.0
    distance_penalty: float = 0.0
    occasion_boost: float = 0.0
    budget_score: float = 0.0
    distance_meters: float | None = None


# ---------------------------------------------------------------------------
# API payloads
# ---------------------------------------------------------------------------


class RerankRequest(_CamelModel):
    candidates: list[ScoredRestaurant] = Field(default_factory=list)
    context: ConversationContext = Field(default_factory=ConversationContext)
    user_location: UserLocation | None = None
    top_n: int | None = Field(default=None, ge=1, le=100)
    apply_filters: bool = Field(
        default=False, description="Run location / opening-hours hard filters first"
    )
    diversify: bool | None = Field(
        default=None, description="Override RankingConfig.enable_diversity"
    )
    max_same_category: int | None = Field(default=None, ge=1)


class RerankResponse(_CamelModel):
    restaurants: list[RankedRestaurant]
    total_candidates: int
    cache_hit: bool = False


class ChatMessage(_CamelModel):
    role: Literal["user", "assistant"]
    content: str


class PicksRequest(RerankRequest):
    messages: list[ChatMessage] = Field(default_factory=list)


class Recommendation(_CamelModel):
    restaurant: RankedRestaurant
    reason: str
    match_percentage: int


class PicksResponse(_CamelModel):
    recommendations: list[Recommendation]
    ranked_count: int


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
