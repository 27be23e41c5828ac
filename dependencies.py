import logging
from typing import Annotated, Union

from fastapi import Request, Depends, HTTPException
from firebase_admin.auth import verify_id_token, verify_session_cookie

from models.user import User
from services.firestore import FirestoreDB
from services.memory_store import InMemoryDB

logger = logging.getLogger(__name__)


async def get_current_user(request: Request) -> User:
    """
    Verify the Firebase ID token from the Authorization header, or the
    session cookie set by /api/auth/login, and return user info
    """
    authorization = request.headers.get("Authorization")
    session_cookie = request.cookies.get("session")

    has_bearer = bool(authorization) and authorization.startswith("Bearer ")
    if not has_bearer and not session_cookie:
        raise HTTPException(
            status_code=401,
            detail="No token, authorization denied"
        )

    try:
        if has_bearer:
            token = authorization.split("Bearer ")[1]
            decoded_token = verify_id_token(token, check_revoked=True, clock_skew_seconds=10)
        else:
            decoded_token = verify_session_cookie(session_cookie, check_revoked=True, clock_skew_seconds=10)
        return User(
            user_id=decoded_token["uid"],
            email=decoded_token.get("email"),
        )
    except Exception as e:
        logger.info("Invalid authentication token: %s", e)
        raise HTTPException(
            status_code=401,
            detail="Token is not valid"
        )


async def get_firestore(request: Request) -> Union[FirestoreDB, InMemoryDB]:
    """ Get the document store from app state """
    return request.app.state.firestore


CurrentUser = Annotated[User, Depends(get_current_user)]
Firestore = Annotated[Union[FirestoreDB, InMemoryDB], Depends(get_firestore)]
