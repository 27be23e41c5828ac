from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from dependencies import CurrentUser, Firestore
from models.profile import Profile, ProfileUpdate
from utils.ids import is_valid_document_id

router = APIRouter()


def _with_user(db, profile: Dict[str, Any]) -> Dict[str, Any]:
    """Attach the owner's name and avatar to a profile"""
    user = db.get_user(profile["user"]) or {}
    return {**profile, "name": user.get("name"), "avatar": user.get("avatar")}


@router.get("/me", response_model=Profile)
async def get_my_profile(db: Firestore, current_user: CurrentUser) -> Dict[str, Any]:
    profile = db.get_profile(current_user.user_id)
    if not profile:
        raise HTTPException(status_code=400, detail="There is no profile for this user")
    return _with_user(db, profile)


@router.post("", response_model=Profile)
async def save_profile(db: Firestore, profile_data: ProfileUpdate, current_user: CurrentUser) -> Dict[str, Any]:
    """Create or update the current user's profile"""
    profile = db.upsert_profile(current_user.user_id, profile_data.model_dump())
    return _with_user(db, profile)


@router.get("", response_model=List[Profile])
async def get_profiles(db: Firestore) -> List[Dict[str, Any]]:
    return [_with_user(db, profile) for profile in db.get_all_profiles()]


@router.get("/user/{user_id}", response_model=Profile)
async def get_profile_by_user(db: Firestore, user_id: str) -> Dict[str, Any]:
    profile = db.get_profile(user_id) if is_valid_document_id(user_id) else None
    if not profile:
        raise HTTPException(status_code=400, detail="Profile not found")
    return _with_user(db, profile)


@router.delete("")
async def delete_profile(db: Firestore, current_user: CurrentUser) -> Dict[str, str]:
    db.delete_profile(current_user.user_id)
    return {"msg": "Profile deleted"}
