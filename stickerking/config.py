from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./stickerking.db"
    COMPANY_NAME: str = "Sticker King"
    CURRENCY_SYMBOL: str = "R"

    # Quote defaults
    DEFAULT_VAT_RATE: float = 15.0
    MIN_ORDER_AMOUNT: float = 100.00

    # Roll layout (mm)
    ROLL_WIDTH_MM: float = 650
    BLEED_MM: float = 1
    MIN_PRICE_PER_STICKER: float = 0.20
    ENFORCE_MIN_PRICE: bool = False  # floor is configured but off by default

    class Config:
        env_file = ".env"


settings = Settings()
