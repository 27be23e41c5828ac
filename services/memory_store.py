import copy
import itertools
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from services.firestore import ListMutation
from utils.ids import new_id


class InMemoryDB:
    """
    Document store with the FirestoreDB interface, for development and tests.
    All writes hold `_lock`; reads return deep copies.
    """

    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}
        self.posts: Dict[str, Dict[str, Any]] = {}
        self.profiles: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._sequence = itertools.count()
        self._inserted: Dict[str, int] = {}

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        with self._lock:
            self.users.clear()
            self.posts.clear()
            self.profiles.clear()
            self._inserted.clear()

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        user = self.users.get(user_id)
        return {"id": user_id, **copy.deepcopy(user)} if user is not None else None

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        for user_id, user in self.users.items():
            if user.get("email") == email:
                return {"id": user_id, **copy.deepcopy(user)}
        return None

    def create_user(self, user_id: str, name: str, email: str, avatar: str) -> Dict[str, Any]:
        user_data = {
            "name": name,
            "email": email,
            "avatar": avatar,
            "date": datetime.now(timezone.utc),
        }
        with self._lock:
            self.users[user_id] = user_data
        return {"id": user_id, **copy.deepcopy(user_data)}

    def create_post(self, user_id: str, text: str, name: str, avatar: Optional[str]) -> Dict[str, Any]:
        post_id = new_id()
        post_data = {
            "user": user_id,
            "text": text,
            "name": name,
            "avatar": avatar,
            "date": datetime.now(timezone.utc),
            "likes": [],
            "comments": [],
        }
        with self._lock:
            self.posts[post_id] = post_data
            self._inserted[post_id] = next(self._sequence)
        return {"id": post_id, **copy.deepcopy(post_data)}

    def get_all_posts(self) -> List[Dict[str, Any]]:
        # Newest first; insertion order breaks ties between equal timestamps
        ordered = sorted(
            self.posts.items(),
            key=lambda item: (item[1]["date"], self._inserted[item[0]]),
            reverse=True,
        )
        return [{"id": post_id, **copy.deepcopy(post)} for post_id, post in ordered]

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        post = self.posts.get(post_id)
        return {"id": post_id, **copy.deepcopy(post)} if post is not None else None

    def delete_post(self, post_id: str):
        with self._lock:
            self.posts.pop(post_id, None)
            self._inserted.pop(post_id, None)

    def update_post_list(self, post_id: str, field: str, mutate: ListMutation) -> Optional[List[Dict[str, Any]]]:
        with self._lock:
            post = self.posts.get(post_id)
            if post is None:
                return None
            values = mutate(copy.deepcopy(post.get(field, [])))
            post[field] = values
            return copy.deepcopy(values)

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        profile = self.profiles.get(user_id)
        return copy.deepcopy(profile) if profile is not None else None

    def get_all_profiles(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(profile) for profile in self.profiles.values()]

    def upsert_profile(self, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        profile_data = {**copy.deepcopy(fields), "user": user_id, "date": datetime.now(timezone.utc)}
        with self._lock:
            self.profiles[user_id] = profile_data
        return copy.deepcopy(profile_data)

    def delete_profile(self, user_id: str):
        with self._lock:
            self.profiles.pop(user_id, None)
