from typing import List, Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 5000
    ADMIN_KEY: Optional[str] = None
    FRONTEND_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False

    PDF_DIR: str = "./pdfs"
    ADMIN_LIST_LIMIT: int = 300

    # "reject" fails validation for offers outside [0, 90]; "clamp" pulls them into range
    OFFER_PERCENTAGE_POLICY: Literal["reject", "clamp"] = "reject"
    SERIALIZE_PRODUCT_UPDATES: bool = False
    PRODUCT_LOCK_TIMEOUT_SECONDS: int = 10

    SHOP_NAME: str = "Super Computers"
    SHOP_ADDRESS_LINES: List[str] = [
        "Galiveedu, Near ZPHS Boys High School",
        "Annamyya Dist, Andhra Pradesh - 516267",
    ]
    SHOP_PHONE: str = "+91 8688188948"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def get_settings() -> Settings:
    return settings
