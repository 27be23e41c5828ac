"""
List mutations for the likes and comments embedded in a post.

Each function takes the current list and returns the new one, raising
HTTPException when the requester is not allowed to make the change.
They are passed to the store's `update_post_list`, which may call them
more than once under contention, so they never touch the store themselves.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import bleach
from fastapi import HTTPException

from utils.ids import new_id


def sanitize_text(text: str) -> str:
    return bleach.clean(text, strip=True)


def check_post_owner(post: Dict[str, Any], user_id: str):
    if post["user"] != user_id:
        raise HTTPException(status_code=401, detail="Can only delete posts this user has made")


def add_like(likes: List[Dict[str, Any]], user_id: str) -> List[Dict[str, Any]]:
    """Prepend a like by the user, unless the user already liked the post"""
    if any(like["user"] == user_id for like in likes):
        raise HTTPException(status_code=400, detail="Post has already been liked by user")
    return [{"user": user_id}] + likes


def remove_like(likes: List[Dict[str, Any]], user_id: str) -> List[Dict[str, Any]]:
    """Remove the first like by the user"""
    remove_index = next((i for i, like in enumerate(likes) if like["user"] == user_id), None)
    if remove_index is None:
        raise HTTPException(status_code=400, detail="Post cannot be unliked by user")
    return likes[:remove_index] + likes[remove_index + 1:]


def new_comment(user: Dict[str, Any], text: str) -> Dict[str, Any]:
    """Snapshot the author's name and avatar into a new comment"""
    return {
        "id": new_id(),
        "user": user["id"],
        "text": sanitize_text(text),
        "name": user.get("name"),
        "avatar": user.get("avatar"),
        "date": datetime.now(timezone.utc),
    }


def add_comment(comments: List[Dict[str, Any]], comment: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [comment] + comments


def find_comment(comments: List[Dict[str, Any]], comment_id: str) -> Optional[Dict[str, Any]]:
    return next((comment for comment in comments if comment["id"] == comment_id), None)


def remove_comment(comments: List[Dict[str, Any]], comment_id: str, user_id: str) -> List[Dict[str, Any]]:
    """Remove a comment, which only its author may do"""
    comment = find_comment(comments, comment_id)
    if comment is None:
        raise HTTPException(status_code=404, detail="No comment exists")

    if comment["user"] != user_id:
        raise HTTPException(status_code=401, detail="User not authorized")

    return [c for c in comments if c["id"] != comment_id]
