import io
import os
import threading
import unittest
from dataclasses import replace
from unittest.mock import patch

from api_case import ApiTestCase

from social_api.extensions.identity import jwt_identity, set_identity_resolver
from social_api.repositories import account_repository
from social_api.services import notification_service


class TestFollowRoutes(ApiTestCase):
    def test_follow_and_unfollow_are_symmetric(self):
        response = self.client.post("/users/2/follow")
        self.assertEqual(response.status_code, 201)

        following = self.client.get("/me/following").get_json()
        self.assertEqual([user["user_id"] for user in following["following"]], [2])
        followers = self.client.get("/users/2/followers").get_json()
        self.assertEqual([user["user_id"] for user in followers["followers"]], [1])

        response = self.client.post("/users/2/follow")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Already following")

        response = self.client.delete("/users/2/follow")
        self.assertEqual(response.status_code, 200)

        self.assertEqual(self.client.get("/me/following").get_json()["following"], [])
        self.assertEqual(self.client.get("/users/2/followers").get_json()["followers"], [])

        response = self.client.delete("/users/2/follow")
        self.assertEqual(response.status_code, 403)

    def test_cannot_follow_yourself(self):
        response = self.client.post("/users/1/follow")
        self.assertEqual(response.status_code, 400)

    def test_follower_lists_are_paginated(self):
        for user_id in range(2, 8):
            self.act_as(user_id)
            self.client.post("/users/1/follow")

        self.act_as(1)
        body = self.client.get("/me/followers?offset=2&limit=3").get_json()
        self.assertEqual([user["user_id"] for user in body["followers"]], [4, 5, 6])
        self.assertEqual(body["total"], 6)

        body = self.client.get("/users/3/following").get_json()
        self.assertEqual(body["following"], [{"user_id": 1, "username": "user1"}])

    def test_unknown_user_has_empty_lists(self):
        body = self.client.get("/users/50/followers").get_json()
        self.assertEqual(body["followers"], [])
        self.assertEqual(body["total"], 0)


class TestNotificationRoutes(ApiTestCase):
    def test_follow_creates_notification_for_target(self):
        self.act_as(2)
        self.client.post("/users/1/follow")

        self.act_as(1)
        body = self.client.get("/notifications").get_json()
        self.assertEqual(body["total"], 1)
        notification = body["notifications"][0]
        self.assertEqual(notification["type"], "follow")
        self.assertEqual(notification["source_user_id"], 2)
        self.assertFalse(notification["read"])

        response = self.client.patch(f"/notifications/{notification['id']}")
        self.assertEqual(response.status_code, 200)

        body = self.client.get("/notifications").get_json()
        self.assertTrue(body["notifications"][0]["read"])

    def test_comment_and_reaction_notify_post_author(self):
        post_id = self._create_post()
        self.act_as(2)
        self.client.post(f"/posts/{post_id}/comments", json={"content": "hey"})
        self.client.post(f"/posts/{post_id}/reactions", json={"reaction_type": "like"})
        self.client.post(f"/posts/{post_id}/reactions", json={"reaction_type": "love"})

        self.act_as(1)
        body = self.client.get("/notifications").get_json()
        self.assertEqual(
            [n["type"] for n in body["notifications"]], ["reaction", "comment"]
        )
        self.assertTrue(all(n["post_id"] == post_id for n in body["notifications"]))

    def test_acting_on_own_post_is_silent(self):
        post_id = self._create_post()
        self.client.post(f"/posts/{post_id}/comments", json={"content": "self"})

        body = self.client.get("/notifications").get_json()
        self.assertEqual(body["total"], 0)

    def test_mark_read_checks(self):
        self.act_as(2)
        self.client.post("/users/1/follow")
        self.act_as(1)
        notification_id = self.client.get("/notifications").get_json()[
            "notifications"
        ][0]["id"]

        self.act_as(3)
        self.assertEqual(
            self.client.patch(f"/notifications/{notification_id}").status_code, 403
        )
        self.assertEqual(self.client.patch("/notifications/999").status_code, 404)
        self.assertEqual(self.client.patch("/notifications/abc").status_code, 400)

        self.act_as(1)
        response = self.client.patch(
            f"/notifications/{notification_id}", json={"read": "yes"}
        )
        self.assertEqual(response.status_code, 400)

    def test_unknown_notification_type_is_rejected(self):
        with self.app.app_context():
            with self.assertRaises(ValueError):
                notification_service.notify(1, "poke", 2)

        self.assertEqual(self.client.get("/notifications").get_json()["total"], 0)


class TestMediaRoutes(ApiTestCase):
    def _upload(
        self, post_id, media_type="image", filename="pic.png",
        payload=b"fake-bytes", mimetype="image/png",
    ):
        data = {"type": media_type, "post_id": str(post_id)}
        if filename is not None:
            data["file"] = (io.BytesIO(payload), filename, mimetype)
        return self.client.post("/media", data=data, content_type="multipart/form-data")

    def test_upload_saves_file_and_attaches_to_post(self):
        post_id = self._create_post()

        response = self._upload(post_id)
        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        media_id = body["media_id"]
        self.assertEqual(body["media"]["type"], "image")
        self.assertEqual(body["media"]["url"], f"/uploads/{media_id}_pic.png")

        saved_path = os.path.join(self.upload_dir, f"{media_id}_pic.png")
        with open(saved_path, "rb") as saved:
            self.assertEqual(saved.read(), b"fake-bytes")

        post = self.client.get(f"/posts/{post_id}").get_json()
        self.assertEqual(post["media_ids"], [media_id])

        served = self.client.get(body["media"]["url"])
        self.assertEqual(served.status_code, 200)
        self.assertEqual(served.data, b"fake-bytes")
        served.close()

    def test_media_ids_follow_sequence(self):
        post_id = self._create_post()
        first = self._upload(post_id).get_json()["media_id"]
        second = self._upload(post_id, filename="other.png").get_json()["media_id"]
        self.assertEqual(second, first + 1)

    def test_invalid_type_and_missing_file(self):
        post_id = self._create_post()

        response = self._upload(post_id, media_type="audio")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Invalid media type")

        response = self._upload(post_id, filename=None)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "File is required")

    def test_file_must_match_declared_type(self):
        post_id = self._create_post()
        response = self._upload(post_id, media_type="video", filename="pic.png")
        self.assertEqual(response.status_code, 400)

    def test_bad_post_ids_are_not_found(self):
        for post_id in ("abc", "0", "-4", "999"):
            response = self._upload(post_id)
            self.assertEqual(response.status_code, 404, post_id)
            self.assertEqual(response.get_json()["error"], "Post not found")

    def test_storage_failure_is_generic_500(self):
        post_id = self._create_post()

        with patch(
            "social_api.services.media_service._store_media_locally",
            side_effect=OSError("disk full at /secret/path"),
        ):
            response = self._upload(post_id)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {"error": "Cannot save file"})
        post = self.client.get(f"/posts/{post_id}").get_json()
        self.assertEqual(post["media_ids"], [])

    def test_upload_too_large(self):
        post_id = self._create_post()
        self.app.config["MAX_CONTENT_LENGTH"] = 64

        response = self._upload(post_id, payload=b"x" * 1024)
        self.assertEqual(response.status_code, 413)
        self.assertEqual(response.get_json()["error"], "File too large")


class TestProfileRoutes(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.alice_id = self._register("alice")
        self.bob_id = self._register("bob")

    def test_get_profile(self):
        response = self.client.get(f"/users/{self.bob_id}")
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["username"], "bob")
        self.assertEqual(body["followers_count"], 0)
        self.assertEqual(body["posts_count"], 0)

    def test_get_profile_errors(self):
        self.assertEqual(self.client.get("/users/abc").status_code, 400)
        self.assertEqual(self.client.get("/users/99").status_code, 404)

    def test_private_profile_is_owner_only(self):
        self.act_as(self.alice_id)
        response = self.client.patch("/me", json={"is_private": True})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()["profile"]["is_private"])

        self.assertEqual(self.client.get(f"/users/{self.alice_id}").status_code, 200)

        self.act_as(self.bob_id)
        response = self.client.get(f"/users/{self.alice_id}")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["error"], "Private profile")

    def test_update_profile_renames_consistently(self):
        self.act_as(self.alice_id)
        response = self.client.patch(
            "/me", json={"username": "alicia", "bio": "hi", "avatar": ""}
        )
        self.assertEqual(response.status_code, 200)
        profile = response.get_json()["profile"]
        self.assertEqual(profile["username"], "alicia")
        self.assertEqual(profile["bio"], "hi")
        self.assertEqual(profile["avatar"], "")

        login = self.client.post("/auth/login", json={"login": "alicia", "password": "pass123"})
        self.assertEqual(login.status_code, 200)
        login = self.client.post("/auth/login", json={"login": "alice", "password": "pass123"})
        self.assertEqual(login.status_code, 401)
        login = self.client.post(
            "/auth/login", json={"login": "alice@example.com", "password": "pass123"}
        )
        self.assertEqual(login.status_code, 200)

    def test_rename_to_taken_username(self):
        self.act_as(self.alice_id)
        response = self.client.patch("/me", json={"username": "BOB"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Username already exists")

    def test_update_does_not_restore_concurrently_deleted_account(self):
        self.act_as(self.bob_id)
        deleters = []

        def delete_bob():
            with self.app.app_context():
                account_repository.soft_delete(self.bob_id)

        def replace_then_delete(account, **changes):
            updated = replace(account, **changes)
            deleter = threading.Thread(target=delete_bob)
            deleters.append(deleter)
            deleter.start()
            # the store lock is held here, so the deletion has to wait
            deleter.join(timeout=0.2)
            return updated

        with patch(
            "social_api.repositories.account_repository.replace",
            side_effect=replace_then_delete,
        ):
            response = self.client.patch("/me", json={"bio": "still here"})

        for deleter in deleters:
            deleter.join()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(f"/users/{self.bob_id}").status_code, 404)

    def test_update_after_deletion_is_unauthorized(self):
        self.act_as(self.bob_id)
        with self.app.app_context():
            stale = account_repository.get_by_id(self.bob_id)
        self.assertEqual(self.client.delete("/me").status_code, 200)

        with patch(
            "social_api.services.profile_service.get_current_account",
            return_value=stale,
        ):
            response = self.client.patch("/me", json={"bio": "ghost"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.client.get(f"/users/{self.bob_id}").status_code, 404)

    def test_update_profile_without_account(self):
        self.act_as(404)
        response = self.client.patch("/me", json={"bio": "ghost"})
        self.assertEqual(response.status_code, 401)

    def test_search_users(self):
        self._register("alicia")

        body = self.client.get("/users?search=ALI&sort=-username").get_json()
        self.assertEqual([user["username"] for user in body["users"]], ["alicia", "alice"])
        self.assertEqual(body["total"], 2)

        body = self.client.get("/users?limit=1&offset=1").get_json()
        self.assertEqual([user["username"] for user in body["users"]], ["bob"])
        self.assertEqual(body["total"], 3)

        response = self.client.get("/users?sort=password")
        self.assertEqual(response.status_code, 400)

    def test_deleted_accounts_are_hidden(self):
        self.act_as(self.bob_id)
        self.assertEqual(self.client.delete("/me").status_code, 200)

        self.assertEqual(self.client.get(f"/users/{self.bob_id}").status_code, 404)
        body = self.client.get("/users").get_json()
        self.assertEqual([user["username"] for user in body["users"]], ["alice"])


class TestAuthRoutes(ApiTestCase):
    def test_register_and_login(self):
        response = self.client.post(
            "/auth/register",
            json={"username": "carol", "email": "carol@example.com", "password": "pw"},
        )
        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body["user_id"], 1)
        self.assertTrue(body["token"])

        for login in ("carol", "CAROL", "Carol@Example.com"):
            response = self.client.post("/auth/login", json={"login": login, "password": "pw"})
            self.assertEqual(response.status_code, 200, login)
            self.assertTrue(response.get_json()["token"])

    def test_register_rejects_missing_fields(self):
        response = self.client.post(
            "/auth/register", json={"username": "dave", "password": "pw"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Invalid data")

    def test_register_rejects_duplicates(self):
        self._register("erin")

        response = self.client.post(
            "/auth/register",
            json={"username": "ERIN", "email": "new@example.com", "password": "pw"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Username already exists")

        response = self.client.post(
            "/auth/register",
            json={"username": "erin2", "email": "erin@example.com", "password": "pw"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Email already exists")

    def test_email_collision_at_write_reports_email(self):
        self._register("kate")

        with patch.object(account_repository, "get_by_email", return_value=None):
            response = self.client.post(
                "/auth/register",
                json={"username": "lara", "email": "KATE@example.com", "password": "pw"},
            )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Email already exists")

    def test_login_rejects_bad_credentials(self):
        self._register("frank")
        response = self.client.post("/auth/login", json={"login": "frank", "password": "nope"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()["error"], "Invalid credentials")

    def test_change_password(self):
        user_id = self._register("gina", password="old-pass")
        self.act_as(user_id)

        response = self.client.put(
            "/me/password", json={"old_password": "wrong", "new_password": "x"}
        )
        self.assertEqual(response.status_code, 403)

        response = self.client.put(
            "/me/password", json={"old_password": "old-pass", "new_password": "new-pass"}
        )
        self.assertEqual(response.status_code, 200)

        response = self.client.post("/auth/login", json={"login": "gina", "password": "new-pass"})
        self.assertEqual(response.status_code, 200)
        response = self.client.post("/auth/login", json={"login": "gina", "password": "old-pass"})
        self.assertEqual(response.status_code, 401)

    def test_change_password_without_account(self):
        response = self.client.put(
            "/me/password", json={"old_password": "a", "new_password": "b"}
        )
        self.assertEqual(response.status_code, 401)

    def test_deleted_account_cannot_login(self):
        user_id = self._register("hank")
        self.act_as(user_id)
        self.assertEqual(self.client.delete("/me").status_code, 200)

        response = self.client.post("/auth/login", json={"login": "hank", "password": "pass123"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.client.delete("/me").status_code, 401)

    def test_bearer_token_identity(self):
        set_identity_resolver(self.app, jwt_identity)
        self._register("ivan")
        self._register("judy")
        token = self.client.post(
            "/auth/login", json={"login": "judy", "password": "pass123"}
        ).get_json()["token"]

        response = self.client.post(
            "/posts",
            json={"content": "from judy"},
            headers={"Authorization": f"Bearer {token}"},
        )
        self.assertEqual(response.status_code, 201)
        post = self.client.get(f"/posts/{response.get_json()['post_id']}").get_json()
        self.assertEqual(post["user_id"], 2)

        # without a token the default user acts
        self._create_post("from default")
        body = self.client.get("/users/1/posts").get_json()
        self.assertEqual([p["content"] for p in body["posts"]], ["from default"])

        response = self.client.post(
            "/posts",
            json={"content": "forged"},
            headers={"Authorization": "Bearer not-a-token"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()["error"], "Invalid token")


class TestErrorResponses(ApiTestCase):
    def test_unknown_route_and_method(self):
        response = self.client.get("/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json(), {"error": "Not found"})

        response = self.client.put("/posts")
        self.assertEqual(response.status_code, 405)
        self.assertIn("error", response.get_json())


if __name__ == "__main__":
    unittest.main()
