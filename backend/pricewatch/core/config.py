import os


def _bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings:
    STORE_BACKEND = os.getenv("STORE_BACKEND", "json").lower()  # json|sql
    PRODUCTS_FILE = os.getenv("PRODUCTS_FILE", "data/products.json")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/pricewatch.db")

    TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
    TELEGRAM_CHAT_ID = os.getenv("TELEGRAM_CHAT_ID")
    TELEGRAM_API_BASE = os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org")
    NOTIFY_TIMEOUT_SECONDS = float(os.getenv("NOTIFY_TIMEOUT_SECONDS", "10"))

    BROWSER_EXECUTABLE_PATH = os.getenv("BROWSER_EXECUTABLE_PATH") or None
    BROWSER_HEADLESS = _bool("BROWSER_HEADLESS", "true")
    BROWSER_USER_AGENT = os.getenv(
        "BROWSER_USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/126.0.0.0 Safari/537.36",
    )
    # DOM-ready, not network idle: product pages keep polling forever
    NAVIGATION_TIMEOUT_MS = int(os.getenv("NAVIGATION_TIMEOUT_MS", "60000"))

    PASS_TIMEOUT_SECONDS = float(os.getenv("PASS_TIMEOUT_SECONDS", "300"))

    CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₹")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_JSON = _bool("LOG_JSON", "false")


settings = Settings()
