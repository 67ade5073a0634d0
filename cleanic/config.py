import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cleanic.db")

# Base URL the mobile client uses to reach the booking API (read once at startup)
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:3000").rstrip("/")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "30.0"))

# Cart persistence - "file" keeps the cart on local disk, "redis" keeps it in REDIS_URL
CART_STORAGE_BACKEND = os.getenv("CART_STORAGE_BACKEND", "file").lower()
CART_STORAGE_DIR = os.getenv(
    "CART_STORAGE_DIR", str(Path.home() / ".cleanic" / "storage")
)
REDIS_URL = os.getenv("REDIS_URL")

# Admin dashboard credentials - login is refused when either is missing
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")

# Recipient shown in e-Transfer payment instructions
ETRANSFER_EMAIL = os.getenv("ETRANSFER_EMAIL", "payments@mobilecleanic.ca")

# Daily capacity is informational unless this is switched on
ENFORCE_DAILY_CAPACITY = os.getenv("ENFORCE_DAILY_CAPACITY", "false").lower() == "true"

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
