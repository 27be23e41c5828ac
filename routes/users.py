import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status
from firebase_admin import auth

from dependencies import Firestore
from models.user import UserCreate
from utils.avatar import gravatar_url

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_user(db: Firestore, user_data: UserCreate) -> Dict[str, Any]:
    """
    Register a user: the Firebase Auth account holds the credential,
    the users collection holds the name and avatar shown on posts.
    Returns a custom token the client exchanges for an ID token.
    """
    if db.get_user_by_email(user_data.email):
        raise HTTPException(status_code=400, detail="User already exists")

    try:
        account = auth.create_user(
            email=user_data.email,
            password=user_data.password,
            display_name=user_data.name,
        )
    except auth.EmailAlreadyExistsError:
        raise HTTPException(status_code=400, detail="User already exists")

    try:
        user = db.create_user(
            user_id=account.uid,
            name=user_data.name,
            email=user_data.email,
            avatar=gravatar_url(user_data.email),
        )
    except Exception:
        # An auth account without a users document can neither post nor re-register
        logger.error("Removing auth account %s after user document write failed", account.uid)
        auth.delete_user(account.uid)
        raise

    token = auth.create_custom_token(account.uid)
    if isinstance(token, bytes):
        token = token.decode("utf-8")

    logger.info("Registered user %s", account.uid)
    return {"token": token, "user": user}
