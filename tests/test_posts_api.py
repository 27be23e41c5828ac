"""
Tests for the /api/posts routes
"""
from datetime import datetime, timedelta, timezone


def create_post(client, text="hello"):
    response = client.post("/api/posts", json={"text": text})
    assert response.status_code == 201
    return response.json()


class TestCreatePost:
    def test_create_post_snapshots_author(self, client):
        response = client.post("/api/posts", json={"text": "hello"})

        assert response.status_code == 201
        post = response.json()
        assert post["text"] == "hello"
        assert post["user"] == "alice-uid"
        assert post["name"] == "Alice"
        assert post["avatar"] == "https://avatars.test/alice"
        assert post["likes"] == []
        assert post["comments"] == []
        assert post["id"]
        assert post["date"]

    def test_empty_text_is_rejected(self, client, db):
        response = client.post("/api/posts", json={"text": ""})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"msg": "Text is required", "param": "text"}]
        assert db.get_all_posts() == []

    def test_whitespace_and_missing_text_are_rejected(self, client):
        assert client.post("/api/posts", json={"text": "   "}).status_code == 400
        assert client.post("/api/posts", json={}).status_code == 400

    def test_unknown_user(self, client, login):
        login("ghost-uid")

        response = client.post("/api/posts", json={"text": "hello"})

        assert response.status_code == 400
        assert response.json()["detail"] == "No user found"

    def test_markup_is_stripped(self, client):
        post = create_post(client, '<img src="x">hi there')

        assert post["text"] == "hi there"


class TestReadPosts:
    def test_list_is_newest_first(self, client):
        first = create_post(client, "first")
        second = create_post(client, "second")
        third = create_post(client, "third")

        response = client.get("/api/posts")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [third["id"], second["id"], first["id"]]

    def test_list_orders_by_date_not_insertion(self, client, db):
        older = create_post(client, "older")
        newer = create_post(client, "newer")
        db.posts[newer["id"]]["date"] = datetime.now(timezone.utc) - timedelta(days=1)

        ids = [p["id"] for p in client.get("/api/posts").json()]

        assert ids == [older["id"], newer["id"]]

    def test_empty_list(self, client):
        response = client.get("/api/posts")

        assert response.status_code == 200
        assert response.json() == []

    def test_get_by_id(self, client):
        post = create_post(client)

        response = client.get(f"/api/posts/{post['id']}")

        assert response.status_code == 200
        assert response.json()["text"] == "hello"

    def test_get_missing_post(self, client):
        response = client.get("/api/posts/doesnotexist")

        assert response.status_code == 404
        assert response.json()["detail"] == "No post found"

    def test_get_malformed_id(self, client):
        assert client.get("/api/posts/__reserved__").status_code == 404


class TestDeletePost:
    def test_owner_deletes_post(self, client):
        post = create_post(client)

        response = client.delete(f"/api/posts/{post['id']}")

        assert response.status_code == 200
        assert response.json() == {"msg": "Post deleted successfully"}
        assert client.get(f"/api/posts/{post['id']}").status_code == 404

    def test_non_owner_cannot_delete(self, client, login):
        post = create_post(client)
        login("bob-uid")

        response = client.delete(f"/api/posts/{post['id']}")

        assert response.status_code == 401
        assert response.json()["detail"] == "Can only delete posts this user has made"
        assert client.get(f"/api/posts/{post['id']}").json() == post

    def test_delete_missing_post(self, client):
        response = client.delete("/api/posts/doesnotexist")

        assert response.status_code == 400
        assert response.json()["detail"] == "Post does not exist"

    def test_delete_malformed_id(self, client):
        assert client.delete("/api/posts/__reserved__").status_code == 404


class TestLikes:
    def test_like_then_repeat(self, client):
        post = create_post(client)

        response = client.put(f"/api/posts/like/{post['id']}")
        assert response.status_code == 201
        assert response.json() == [{"user": "alice-uid"}]

        repeat = client.put(f"/api/posts/like/{post['id']}")
        assert repeat.status_code == 400
        assert repeat.json()["detail"] == "Post has already been liked by user"
        assert client.get(f"/api/posts/{post['id']}").json()["likes"] == [{"user": "alice-uid"}]

    def test_likes_are_prepended(self, client, login):
        post = create_post(client)
        client.put(f"/api/posts/like/{post['id']}")
        login("bob-uid")

        response = client.put(f"/api/posts/like/{post['id']}")

        assert response.json() == [{"user": "bob-uid"}, {"user": "alice-uid"}]

    def test_like_missing_post(self, client):
        assert client.put("/api/posts/like/doesnotexist").status_code == 404

    def test_unlike(self, client, login):
        post = create_post(client)
        client.put(f"/api/posts/like/{post['id']}")
        login("bob-uid")
        client.put(f"/api/posts/like/{post['id']}")
        login("alice-uid")

        response = client.delete(f"/api/posts/unlike/{post['id']}")

        assert response.status_code == 200
        assert response.json() == [{"user": "bob-uid"}]

    def test_unlike_without_like(self, client, login):
        post = create_post(client)
        login("bob-uid")
        client.put(f"/api/posts/like/{post['id']}")
        login("alice-uid")

        response = client.delete(f"/api/posts/unlike/{post['id']}")

        assert response.status_code == 400
        assert response.json()["detail"] == "Post cannot be unliked by user"
        assert client.get(f"/api/posts/{post['id']}").json()["likes"] == [{"user": "bob-uid"}]

    def test_unlike_missing_post(self, client):
        assert client.delete("/api/posts/unlike/doesnotexist").status_code == 404


class TestComments:
    def test_add_comment(self, client, login):
        post = create_post(client)
        login("bob-uid")

        response = client.post(f"/api/posts/comment/{post['id']}", json={"text": "nice"})

        assert response.status_code == 201
        comments = response.json()
        assert len(comments) == 1
        assert comments[0]["text"] == "nice"
        assert comments[0]["user"] == "bob-uid"
        assert comments[0]["name"] == "Bob"
        assert comments[0]["avatar"] == "https://avatars.test/bob"
        assert comments[0]["id"]
        assert comments[0]["date"]

    def test_comments_are_prepended_with_unique_ids(self, client):
        post = create_post(client)
        client.post(f"/api/posts/comment/{post['id']}", json={"text": "one"})

        comments = client.post(f"/api/posts/comment/{post['id']}", json={"text": "two"}).json()

        assert [c["text"] for c in comments] == ["two", "one"]
        assert comments[0]["id"] != comments[1]["id"]

    def test_comment_requires_text(self, client):
        post = create_post(client)

        response = client.post(f"/api/posts/comment/{post['id']}", json={"text": ""})

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Text is required"

    def test_comment_on_missing_post(self, client):
        response = client.post("/api/posts/comment/doesnotexist", json={"text": "hi"})

        assert response.status_code == 400
        assert response.json()["detail"] == "No post found"

    def test_comment_by_unknown_user(self, client, login):
        post = create_post(client)
        login("ghost-uid")

        response = client.post(f"/api/posts/comment/{post['id']}", json={"text": "hi"})

        assert response.status_code == 400
        assert response.json()["detail"] == "No user found"

    def test_author_deletes_comment(self, client):
        post = create_post(client)
        client.post(f"/api/posts/comment/{post['id']}", json={"text": "keep"})
        comments = client.post(f"/api/posts/comment/{post['id']}", json={"text": "drop"}).json()
        drop_id = comments[0]["id"]

        response = client.delete(f"/api/posts/comment/{post['id']}/{drop_id}")

        assert response.status_code == 200
        assert [c["text"] for c in response.json()] == ["keep"]

    def test_non_author_cannot_delete_comment(self, client, login):
        post = create_post(client)
        comment = client.post(f"/api/posts/comment/{post['id']}", json={"text": "mine"}).json()[0]
        login("bob-uid")

        response = client.delete(f"/api/posts/comment/{post['id']}/{comment['id']}")

        assert response.status_code == 401
        assert response.json()["detail"] == "User not authorized"
        assert len(client.get(f"/api/posts/{post['id']}").json()["comments"]) == 1

    def test_delete_missing_comment(self, client):
        post = create_post(client)

        response = client.delete(f"/api/posts/comment/{post['id']}/nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "No comment exists"

    def test_delete_comment_on_missing_post(self, client):
        response = client.delete("/api/posts/comment/doesnotexist/nope")

        assert response.status_code == 400
        assert response.json()["detail"] == "No post found"
