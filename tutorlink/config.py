from decimal import Decimal
from functools import lru_cache
import os
from pydantic import BaseModel, Field


class Settings(BaseModel):
    env: str = Field(default="dev", alias="ENV")

    postgres_db: str = Field(default="tutorlink", alias="POSTGRES_DB")
    postgres_user: str = Field(default="tutorlink", alias="POSTGRES_USER")
    postgres_password: str = Field(default="tutorlink", alias="POSTGRES_PASSWORD")
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")
    database_url: str = Field(default="", alias="DATABASE_URL")

    jwt_secret: str = Field(default="secret", alias="JWT_SECRET")
    jwt_expire_min: int = Field(default=43200, alias="JWT_EXPIRE_MIN")

    commission_course: Decimal = Field(default=Decimal("0.20"), alias="COMMISSION_COURSE")
    commission_booking: Decimal = Field(default=Decimal("0.15"), alias="COMMISSION_BOOKING")

    scheduler_enabled: bool = Field(default=True, alias="SCHEDULER_ENABLED")
    reminder_lead_minutes: int = Field(default=15, alias="REMINDER_LEAD_MINUTES")
    reminder_interval_seconds: int = Field(default=60, alias="REMINDER_INTERVAL_SECONDS")
    auto_confirm_interval_minutes: int = Field(
        default=10, alias="AUTO_CONFIRM_INTERVAL_MINUTES"
    )

    notification_push_url: str = Field(default="", alias="NOTIFICATION_PUSH_URL")
    notification_push_timeout: float = Field(default=10.0, alias="NOTIFICATION_PUSH_TIMEOUT")

    class Config:
        populate_by_name = True

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(**os.environ)
