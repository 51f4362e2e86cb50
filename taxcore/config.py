"""Application configuration loaded from environment variables."""

import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    """Centralized application settings."""

    # Server
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "5478"))
    API_PREFIX: str = os.getenv("API_PREFIX", "/api/v1")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: list = os.getenv("CORS_ORIGINS", "*").split(",")

    # Slab tables used when a request does not name a known assessment year
    DEFAULT_ASSESSMENT_YEAR: str = os.getenv("DEFAULT_ASSESSMENT_YEAR", "2024-25")

    # Statutory limits
    MAX_80C_DEDUCTION: float = 150_000.0         # ₹1,50,000
    MAX_80D_DEDUCTION: float = 25_000.0          # self / family, below 60
    MAX_80D_DEDUCTION_SENIOR: float = 50_000.0   # self / family, 60 and above
    LTCG_EQUITY_EXEMPTION: float = 100_000.0     # section 112A
    SENIOR_CITIZEN_AGE: int = 60
    SUPER_SENIOR_CITIZEN_AGE: int = 80

    CURRENCY_DECIMALS: int = 2


settings = Settings()
