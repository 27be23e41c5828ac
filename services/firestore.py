import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import firebase_admin
from firebase_admin import firestore as fs
from google.cloud import firestore
from google.cloud.firestore_v1 import FieldFilter

logger = logging.getLogger(__name__)

ListMutation = Callable[[List[Dict[str, Any]]], List[Dict[str, Any]]]


def _with_id(doc) -> Dict[str, Any]:
    data = doc.to_dict()
    data["id"] = doc.id
    return data


class FirestoreDB:
    def __init__(self, app: firebase_admin.App):
        self.db = fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    # Users

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get a user document by uid"""
        snapshot = self.collection("users").document(user_id).get()
        if not snapshot.exists:
            return None
        return _with_id(snapshot)

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        users_ref = self.collection("users").where(
            filter=FieldFilter("email", "==", email)
        ).limit(1).stream()
        for doc in users_ref:
            return _with_id(doc)
        return None

    def create_user(self, user_id: str, name: str, email: str, avatar: str) -> Dict[str, Any]:
        """Create the user document keyed by the Firebase Auth uid"""
        user_data = {
            "name": name,
            "email": email,
            "avatar": avatar,
            "date": datetime.now(timezone.utc),
        }
        self.collection("users").document(user_id).set(user_data)
        return {"id": user_id, **user_data}

    # Posts

    def create_post(self, user_id: str, text: str, name: str, avatar: Optional[str]) -> Dict[str, Any]:
        """Create a new post with empty likes and comments"""
        new_post_ref = self.collection("posts").document()
        new_post_data = {
            "user": user_id,
            "text": text,
            "name": name,
            "avatar": avatar,
            "date": datetime.now(timezone.utc),
            "likes": [],
            "comments": [],
        }
        new_post_ref.set(new_post_data)
        return {"id": new_post_ref.id, **new_post_data}

    def get_all_posts(self) -> List[Dict[str, Any]]:
        """Get all posts sorted by creation date descending"""
        posts_ref = self.collection("posts").order_by("date", direction=firestore.Query.DESCENDING).stream()
        return [_with_id(doc) for doc in posts_ref]

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Get a post by ID"""
        snapshot = self.collection("posts").document(post_id).get()
        if not snapshot.exists:
            return None
        return _with_id(snapshot)

    def delete_post(self, post_id: str):
        self.collection("posts").document(post_id).delete()

    def update_post_list(self, post_id: str, field: str, mutate: ListMutation) -> Optional[List[Dict[str, Any]]]:
        """
        Apply `mutate` to a post's likes or comments inside a transaction.
        Firestore reruns the function on contention, so `mutate` must not
        have side effects. Returns the stored list, or None if the post is missing.
        """
        post_ref = self.collection("posts").document(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                return None

            values = mutate(list(snapshot.to_dict().get(field, [])))
            transaction.update(post_ref, {field: values})
            return values

        return update_in_transaction(transaction, post_ref)

    # Profiles

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        snapshot = self.collection("profiles").document(user_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def get_all_profiles(self) -> List[Dict[str, Any]]:
        return [doc.to_dict() for doc in self.collection("profiles").stream()]

    def upsert_profile(self, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Create or replace the profile of a user"""
        profile_data = {**fields, "user": user_id, "date": datetime.now(timezone.utc)}
        self.collection("profiles").document(user_id).set(profile_data)
        return profile_data

    def delete_profile(self, user_id: str):
        self.collection("profiles").document(user_id).delete()
