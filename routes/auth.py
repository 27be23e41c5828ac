import logging
from typing import Any, Dict
from urllib.parse import urlparse

from fastapi import APIRouter, Request, Response, HTTPException
from firebase_admin import auth

from dependencies import CurrentUser, Firestore
from models.token import TokenRequest
from models.user import UserRecord

logger = logging.getLogger(__name__)
router = APIRouter()

SESSION_EXPIRES_IN = 5 * 24 * 60 * 60  # 5 days in seconds


@router.get("", response_model=UserRecord)
async def get_authenticated_user(db: Firestore, current_user: CurrentUser) -> Dict[str, Any]:
    """Return the user document of the token's owner"""
    user = db.get_user(current_user.user_id)
    if not user:
        raise HTTPException(status_code=400, detail="No user found")
    return user


@router.post("/login")
async def login(token_request: TokenRequest, request: Request, response: Response):
    try:
        # Verify the ID token
        decoded_token = auth.verify_id_token(
            id_token=token_request.id_token,
            clock_skew_seconds=10
        )

        # Create a session cookie
        session_cookie = auth.create_session_cookie(
            token_request.id_token,
            expires_in=SESSION_EXPIRES_IN
        )
    except Exception as e:
        logger.info("Login failed: %s", e)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    origin = request.headers.get("origin", "")
    domain = None

    # If in production, extract domain from origin
    if origin and "localhost" not in origin:
        domain = urlparse(origin).hostname

    if isinstance(session_cookie, bytes):
        session_cookie = session_cookie.decode("utf-8")

    response.set_cookie(
        key="session",
        value=session_cookie,
        httponly=True,
        secure=domain is not None,
        max_age=SESSION_EXPIRES_IN,
        path="/",
        samesite="lax",
        domain=domain
    )

    return {"success": True, "user_id": decoded_token["uid"]}


@router.post("/logout")
async def logout(response: Response):
    # Clear the session cookie
    response.delete_cookie(
        key="session",
        path="/",
        httponly=True,
    )
    return {"success": True}
