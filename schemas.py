from datetime import datetime, timezone
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, EmailStr, Field, field_validator


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands timestamps back naive; they were written as UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]


# ---- Users / auth ----

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)


class AdminCreate(UserCreate):
    admin_key: str = Field("", alias="adminKey")

    class Config:
        populate_by_name = True


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    id: str
    name: str
    email: EmailStr
    is_admin: bool = False
    created_at: Optional[UTCDateTime] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserOut


class TokenData(BaseModel):
    user_id: Optional[str] = None
    email: Optional[str] = None
    is_admin: bool = False


# ---- Clothing items ----

class ExifData(BaseModel):
    gps_lat: Optional[float] = None
    gps_lon: Optional[float] = None
    gps_alt: Optional[float] = None
    datetime_original: Optional[str] = None
    camera_make: Optional[str] = None
    camera_model: Optional[str] = None
    software: Optional[str] = None


class ClothingItemCreate(BaseModel):
    # Stored verbatim; price in particular is not coerced to a number here.
    brand: str = ""
    price: str = ""
    season: str = ""
    size: str = ""
    category: str = ""


class ClothingItem(ExifData):
    id: str
    user_id: str
    brand: Optional[str] = None
    price: Optional[str] = None
    season: Optional[str] = None
    size: Optional[str] = None
    category: Optional[str] = None
    image_path: Optional[str] = None
    created_at: Optional[UTCDateTime] = None

    class Config:
        from_attributes = True


# ---- Outfits ----

class OutfitCreate(BaseModel):
    name: str = Field(..., min_length=1)
    top_id: Optional[str] = Field(None, alias="topId")
    bottom_id: Optional[str] = Field(None, alias="bottomId")
    shoes_id: Optional[str] = Field(None, alias="shoesId")

    class Config:
        populate_by_name = True

    @field_validator("top_id", "bottom_id", "shoes_id", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if v == "":
            return None
        return v


class Outfit(BaseModel):
    id: str
    user_id: str
    name: str
    top_id: Optional[str] = None
    bottom_id: Optional[str] = None
    shoes_id: Optional[str] = None
    created_at: Optional[UTCDateTime] = None

    class Config:
        from_attributes = True


class OutfitDetail(Outfit):
    top_brand: Optional[str] = None
    top_image: Optional[str] = None
    top_category: Optional[str] = None
    bottom_brand: Optional[str] = None
    bottom_image: Optional[str] = None
    bottom_category: Optional[str] = None
    shoes_brand: Optional[str] = None
    shoes_image: Optional[str] = None
    shoes_category: Optional[str] = None


# ---- Admin analytics ----

class PriceStats(BaseModel):
    total_items: int
    total_price: float
    average_price: float
    social_status: str


class UserWithItems(UserOut):
    items: List[ClothingItem]
    price_stats: PriceStats


class HistogramBucket(BaseModel):
    hour: int
    count: int
    label: str


class LocationPoint(BaseModel):
    item_id: str
    brand: Optional[str] = None
    category: Optional[str] = None
    lat: float
    lng: float
    alt: Optional[float] = None
    timestamp: Optional[str] = None


class Centroid(BaseModel):
    lat: float
    lng: float


class UserLocation(BaseModel):
    user_id: str
    user_name: str
    user_email: str
    items: List[LocationPoint]
    total_items: int
    centroid: Centroid


class PriceTierCounts(BaseModel):
    budget: int = 0
    mid_range: int = 0
    premium: int = 0


class PriceTierPercentages(BaseModel):
    budget: float = 0
    mid_range: float = 0
    premium: float = 0


class PriceTierBreakdown(BaseModel):
    total_items: int
    tiers: PriceTierCounts
    percentages: PriceTierPercentages


class UserPriceTiers(PriceTierBreakdown):
    user_id: str
    user_name: str
    user_email: str


class WardrobeSummary(BaseModel):
    total_users: int
    total_items: int
    items_with_gps: int
    avg_item_price: float


class Message(BaseModel):
    message: str
