import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Inventory
    LOW_STOCK_THRESHOLD: int = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))

    # Orders
    DEFAULT_DISCOUNT: str = os.getenv("DEFAULT_DISCOUNT", "none")

    # Demo
    SEED_DEMO_DATA: bool = os.getenv("SEED_DEMO_DATA", "false").lower() in ("1", "true", "yes")


settings = Settings()
