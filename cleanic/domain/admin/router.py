"""Admin login endpoint"""

import logging
import secrets

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ... import config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


class AdminLoginRequest(BaseModel):
    username: str
    password: str


def check_credentials(username: str, password: str) -> bool:
    """Constant-time comparison against the configured admin account"""
    if not config.ADMIN_USERNAME or not config.ADMIN_PASSWORD:
        logger.warning("Admin login attempted but ADMIN_USERNAME/ADMIN_PASSWORD are not configured")
        return False

    username_ok = secrets.compare_digest(username.encode(), config.ADMIN_USERNAME.encode())
    password_ok = secrets.compare_digest(password.encode(), config.ADMIN_PASSWORD.encode())
    return username_ok and password_ok


@router.post("/login")
async def admin_login(data: AdminLoginRequest):
    if check_credentials(data.username, data.password):
        logger.info(f"🔐 Admin login: {data.username}")
        return {
            "success": True,
            "message": "Login successful",
            "admin": {"username": data.username, "role": "admin"},
        }

    logger.warning(f"⚠️ Failed admin login for {data.username}")
    return JSONResponse(
        status_code=401, content={"success": False, "message": "Invalid credentials"}
    )
