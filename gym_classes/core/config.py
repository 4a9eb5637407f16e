# gym_classes/core/config.py

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come from the process environment first, then from a local .env
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    # --- Production URLs (for inside Docker) ---
    DATABASE_URL_PROD: str = "postgresql+psycopg2://postgres:postgres@db:5432/gym_classes"
    KAFKA_BOOTSTRAP_SERVERS_PROD: str = "kafka:9092"

    # --- Local Development URLs (for running locally) ---
    DATABASE_URL_LOCAL: str = "sqlite:///./gym_classes.db"
    KAFKA_BOOTSTRAP_SERVERS_LOCAL: str = "localhost:9092"

    # Throwaway database created and dropped by the test suite
    TEST_DATABASE_URL: str = "sqlite:///./gym_classes_test.db"

    KAFKA_ENABLED: bool = False

    # Auth: the caller's student id is the JWT subject
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"

    # Wall-clock zone the gym's schedules are written in
    GYM_TIMEZONE: str = "UTC"

    # --- Waitlist ---
    # auto_enroll: the first waiting student takes the freed seat immediately.
    # notify: the seat is held for the first waiting student until they claim it.
    WAITLIST_PROMOTION_MODE: Literal["auto_enroll", "notify"] = "auto_enroll"
    # How long a notified student has to claim a held seat. Unset means the
    # offer stays open until claimed or withdrawn.
    WAITLIST_OFFER_EXPIRY_MINUTES: Optional[int] = None

    # --- Scheduling ---
    SESSION_GENERATION_DAYS_AHEAD: int = 14
    SCHEDULER_ENABLED: bool = False

    ENROLL_RATE_LIMIT: str = "30/minute"
    LOG_LEVEL: str = "INFO"

    # --- Dynamic Properties ---
    # These properties return the correct URL based on the ENV
    @property
    def DATABASE_URL(self) -> str:
        return (
            self.DATABASE_URL_LOCAL if self.ENV == "local" else self.DATABASE_URL_PROD
        )

    @property
    def KAFKA_BOOTSTRAP_SERVERS(self) -> str:
        return (
            self.KAFKA_BOOTSTRAP_SERVERS_LOCAL
            if self.ENV == "local"
            else self.KAFKA_BOOTSTRAP_SERVERS_PROD
        )


# Create a single instance of the settings
settings = Settings()
