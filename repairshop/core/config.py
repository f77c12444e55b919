# repairshop/core/config.py
from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field


class BusinessProfile(BaseModel):
    """Shop identity printed at the top of every receipt."""

    name: str
    address: str = ""
    city: str = ""
    phones: list[str] = []
    email: str = ""


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./tickets.db")
    APP_NAME: str = "Repair Shop API"
    APP_DESC: str = "Repair ticket intake, tracking and work-order receipts"
    APP_VERSION: str = "1.0.0"

    # comma separated, "*" allows all
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    TICKET_PREFIX: str = "TKT"

    # Receipt header
    BUSINESS_NAME: str = "Repair Shop"
    BUSINESS_ADDRESS: str = ""
    BUSINESS_CITY: str = ""
    BUSINESS_PHONES: str = ""
    BUSINESS_EMAIL: str = ""
    RECEIPT_LAYOUT: Literal["work_order", "thermal_80", "thermal_58"] = "work_order"
    UNCLAIMED_DAYS: int = Field(default=45, ge=1)

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def business_profile(self) -> BusinessProfile:
        return BusinessProfile(
            name=self.BUSINESS_NAME,
            address=self.BUSINESS_ADDRESS,
            city=self.BUSINESS_CITY,
            phones=[p.strip() for p in self.BUSINESS_PHONES.split(",") if p.strip()],
            email=self.BUSINESS_EMAIL,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["BusinessProfile", "Settings", "get_settings"]
