from __future__ import annotations

import os
import re
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------
# Paths
# ---------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATA_DIR = PROJECT_ROOT / "data"
CATALOG_RAW_DIR = DATA_DIR / "catalog_raw"
CATALOG_SNAPSHOT_PATH = DATA_DIR / "catalog_snapshot.parquet"

RAW_CATALOG_SUFFIXES = (".xlsx", ".xls", ".csv", ".json")


# ---------------------------
# Related-items policy
# ---------------------------

RELATED_DEFAULT_LIMIT = 4

DEFAULT_RELATED_MAX_LIMIT = 20
RELATED_MAX_LIMIT = int(os.getenv("RELATED_MAX_LIMIT", str(DEFAULT_RELATED_MAX_LIMIT)))

# 0 = score the whole pool
RELATED_POOL_CAP = int(os.getenv("RELATED_POOL_CAP", "0"))


# ---------------------------
# Scoring weights
# ---------------------------

CATEGORY_MATCH_POINTS = 3
BRAND_MATCH_POINTS = 2
NAME_SUBSTRING_POINTS = 5
COMPONENT_KEYWORD_POINTS = 4
SHARED_WORD_POINTS = 2  # per shared significant word

# tokens shorter than this never count as a name signal
MIN_SIGNIFICANT_TOKEN_LEN = 4


# ---------------------------
# Dashboard policy
# ---------------------------

PROFILE_FIELD_WEIGHT = 25
PROFILE_COMPLETION_CAP = 100

RECENT_INQUIRY_DAYS = 30
RECENT_INQUIRY_LIMIT = 10


# ---------------------------
# Inquiry form rules
# ---------------------------

INQUIRY_NAME_MIN_CHARS = 2
INQUIRY_NAME_MAX_CHARS = 100
INQUIRY_MESSAGE_MIN_CHARS = 10
INQUIRY_MESSAGE_MAX_CHARS = 2000

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_RE = re.compile(r"^[\+]?[1-9][\d]{0,15}$")
# stripped from a phone number before PHONE_RE is applied
PHONE_SEPARATORS_RE = re.compile(r"[\s\-()]")


# ---------------------------
# Text processing
# ---------------------------

MAX_INPUT_CHARS = 20_000
MAX_SEARCH_CHARS = 200


# ---------------------------
# Logging / observability
# ---------------------------

LOG_DIR = PROJECT_ROOT / "logs"
LOG_FILE_NAME = "storefront.log"


def setup_logging(level: str = "INFO", log_dir: Optional[Path] = LOG_DIR) -> None:
    """
    Replace loguru's default sink with a stderr sink at ``level`` and,
    unless ``log_dir`` is None, a rotating file sink under ``log_dir``.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / LOG_FILE_NAME,
            level=level.upper(),
            rotation="10 MB",
            retention=5,
        )


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class CatalogItem(BaseModel):
    """
    A single product in a business catalog.

    Owned by the catalog store; never mutated here. Accepts both the
    snake_case field names and the camelCase keys the storefront API uses.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)
    name: str
    description: Optional[str] = None
    category_id: Optional[str] = Field(default=None, alias="categoryId")
    brand_name: Optional[str] = Field(default=None, alias="brandName")
    is_active: bool = Field(default=True, alias="isActive")


class RelatedItemsResponse(BaseModel):
    """
    Response body for GET /items/{item_id}/related.
    """

    item_id: str
    related_items: List[CatalogItem]


class ScoredItem(BaseModel):
    item: CatalogItem
    score: int
    breakdown: Dict[str, int]


class ScoredItemsResponse(BaseModel):
    """
    Response body for GET /items/{item_id}/related/explain.
    """

    item_id: str
    scored_items: List[ScoredItem]


class CatalogResponse(BaseModel):
    """
    Response body for GET /catalog.
    """

    items: List[CatalogItem]
    categories: List[str]
    brands: List[str]


class BusinessProfile(BaseModel):
    """Public profile fields a business admin edits from the dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    hero_slides: List[Dict[str, object]] = Field(default_factory=list, alias="heroSlides")
    brands: List[Dict[str, object]] = Field(default_factory=list)
    additional_content: Optional[str] = Field(default=None, alias="additionalContent")


class ProfileCompletionResponse(BaseModel):
    percent: int = Field(ge=0, le=100)
    missing_fields: List[str]


class InquiryStatus(str, Enum):
    NEW = "NEW"
    READ = "READ"
    REPLIED = "REPLIED"
    CLOSED = "CLOSED"


class Inquiry(BaseModel):
    """A customer inquiry as stored by the inquiry collaborator."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    status: InquiryStatus = InquiryStatus.NEW
    created_at: datetime = Field(alias="createdAt")
    product_id: Optional[str] = Field(default=None, alias="productId")


class InquirySubmission(BaseModel):
    """
    A customer's inquiry form, as posted from a business's storefront.

    Every text field is trimmed before it is checked. The email is also
    lowercased, and a blank phone becomes None. Each failing field reports
    its own error, so one request lists all of them.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    phone: Optional[str] = None
    message: str
    business_id: Optional[str] = Field(default=None, alias="businessId")
    product_id: Optional[str] = Field(default=None, alias="productId")

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        if len(v) < INQUIRY_NAME_MIN_CHARS:
            raise ValueError(f"Name must be at least {INQUIRY_NAME_MIN_CHARS} characters long")
        if len(v) > INQUIRY_NAME_MAX_CHARS:
            raise ValueError(f"Name must be at most {INQUIRY_NAME_MAX_CHARS} characters long")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Email is required")
        if not EMAIL_RE.match(v):
            raise ValueError("Please enter a valid email address")
        return v.lower()

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not PHONE_RE.match(PHONE_SEPARATORS_RE.sub("", v)):
            raise ValueError("Please enter a valid phone number")
        return v

    @field_validator("message")
    @classmethod
    def check_message(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Message is required")
        if len(v) < INQUIRY_MESSAGE_MIN_CHARS:
            raise ValueError(
                f"Message must be at least {INQUIRY_MESSAGE_MIN_CHARS} characters long"
            )
        if len(v) > INQUIRY_MESSAGE_MAX_CHARS:
            raise ValueError(
                f"Message must be at most {INQUIRY_MESSAGE_MAX_CHARS} characters long"
            )
        return v


class StatsRequest(BaseModel):
    """
    Request body for POST /stats.
    """

    products: List[CatalogItem] = Field(default_factory=list)
    inquiries: List[Inquiry] = Field(default_factory=list)


class BusinessStats(BaseModel):
    total_products: int = Field(ge=0)
    active_products: int = Field(ge=0)
    total_inquiries: int = Field(ge=0)
    new_inquiries: int = Field(ge=0)
    read_inquiries: int = Field(ge=0)
    replied_inquiries: int = Field(ge=0)
    closed_inquiries: int = Field(ge=0)
    recent_inquiries: int = Field(ge=0)
    # newest first, at most RECENT_INQUIRY_LIMIT
    latest_inquiries: List[Inquiry] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str
