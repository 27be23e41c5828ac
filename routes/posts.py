import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, status

from dependencies import Firestore, CurrentUser
from models.post import Post, Like, Comment, PostCreate, CommentCreate
from services import posts as post_service
from utils.ids import is_valid_document_id

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(
        db: Firestore,
        post_data: PostCreate,
        current_user: CurrentUser
) -> Dict[str, Any]:
    """Create a post with a snapshot of the author's name and avatar"""
    user = db.get_user(current_user.user_id)
    if not user:
        raise HTTPException(status_code=400, detail="No user found")

    post = db.create_post(
        user_id=current_user.user_id,
        text=post_service.sanitize_text(post_data.text),
        name=user.get("name"),
        avatar=user.get("avatar"),
    )
    logger.info("Post %s created by %s", post["id"], current_user.user_id)
    return post


@router.get("", response_model=List[Post])
async def get_posts(db: Firestore, current_user: CurrentUser) -> List[Dict[str, Any]]:
    """Get all posts, newest first"""
    return db.get_all_posts()


@router.get("/{post_id}", response_model=Post)
async def get_post(db: Firestore, post_id: str, current_user: CurrentUser) -> Dict[str, Any]:
    post = db.get_post(post_id) if is_valid_document_id(post_id) else None
    if not post:
        raise HTTPException(status_code=404, detail="No post found")
    return post


@router.delete("/{post_id}")
async def delete_post(db: Firestore, post_id: str, current_user: CurrentUser) -> Dict[str, str]:
    """Delete a post; only its owner may do this"""
    if not is_valid_document_id(post_id):
        raise HTTPException(status_code=404, detail="No post found")

    post = db.get_post(post_id)
    if not post:
        raise HTTPException(status_code=400, detail="Post does not exist")

    post_service.check_post_owner(post, current_user.user_id)

    db.delete_post(post_id)
    logger.info("Post %s deleted by %s", post_id, current_user.user_id)
    return {"msg": "Post deleted successfully"}


@router.put("/like/{post_id}", response_model=List[Like], status_code=status.HTTP_201_CREATED)
async def like_post(db: Firestore, post_id: str, current_user: CurrentUser) -> List[Dict[str, Any]]:
    user_id = current_user.user_id
    likes = None
    if is_valid_document_id(post_id):
        likes = db.update_post_list(post_id, "likes", lambda current: post_service.add_like(current, user_id))

    if likes is None:
        raise HTTPException(status_code=404, detail="No post found")
    return likes


@router.delete("/unlike/{post_id}", response_model=List[Like])
async def unlike_post(db: Firestore, post_id: str, current_user: CurrentUser) -> List[Dict[str, Any]]:
    user_id = current_user.user_id
    likes = None
    if is_valid_document_id(post_id):
        likes = db.update_post_list(post_id, "likes", lambda current: post_service.remove_like(current, user_id))

    if likes is None:
        raise HTTPException(status_code=404, detail="No post found")
    return likes


@router.post("/comment/{post_id}", response_model=List[Comment], status_code=status.HTTP_201_CREATED)
async def add_comment(
        db: Firestore,
        post_id: str,
        comment_data: CommentCreate,
        current_user: CurrentUser
) -> List[Dict[str, Any]]:
    """Add a comment to the top of a post's comments"""
    user = db.get_user(current_user.user_id)
    if not user:
        raise HTTPException(status_code=400, detail="No user found")

    comment = post_service.new_comment(user, comment_data.text)
    comments = None
    if is_valid_document_id(post_id):
        comments = db.update_post_list(post_id, "comments", lambda current: post_service.add_comment(current, comment))

    if comments is None:
        raise HTTPException(status_code=400, detail="No post found")

    logger.info("Comment %s added to post %s", comment["id"], post_id)
    return comments


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[Comment])
async def delete_comment(
        db: Firestore,
        post_id: str,
        comment_id: str,
        current_user: CurrentUser
) -> List[Dict[str, Any]]:
    """Delete a comment; only its author may do this"""
    user_id = current_user.user_id
    comments = None
    if is_valid_document_id(post_id):
        comments = db.update_post_list(
            post_id,
            "comments",
            lambda current: post_service.remove_comment(current, comment_id, user_id)
        )

    if comments is None:
        raise HTTPException(status_code=400, detail="No post found")
    return comments
