"""In-memory storage for the API.

Every resource owns one :class:`Store`. Stores are created per application by
:class:`InMemoryDatabase` and live in ``app.extensions``, so two apps (or two
test cases) never share state.
"""
from threading import RLock

from flask import current_app


class DuplicateKeyError(KeyError):
    """A unique index already maps ``key`` to another record."""

    def __init__(self, store: str, index: str, key):
        super().__init__(f"{store}.{index} already has {key!r}")
        self.index = index
        self.key = key


class Store:
    """A keyed record collection guarded by one re-entrant lock.

    Records exposing an ``is_deleted`` attribute are soft-deleted by
    :meth:`delete` and hidden from :meth:`get`, :meth:`list` and
    :meth:`find_by` unless ``include_deleted`` is passed.

    ``unique_indexes`` maps an index name to a function extracting the index
    key from a record. Index entries are only written through :meth:`put`,
    which keeps them consistent with the primary mapping.
    """

    def __init__(self, name: str, unique_indexes=None):
        self.name = name
        self.lock = RLock()
        self._records = {}
        self._next_id = 1
        self._index_keys = dict(unique_indexes or {})
        self._indexes = {index: {} for index in self._index_keys}

    @staticmethod
    def _is_visible(record, include_deleted: bool) -> bool:
        return include_deleted or not getattr(record, "is_deleted", False)

    def allocate_id(self) -> int:
        with self.lock:
            record_id = self._next_id
            self._next_id += 1
            return record_id

    def get(self, record_id, include_deleted: bool = False):
        with self.lock:
            record = self._records.get(record_id)
            if record is None or not self._is_visible(record, include_deleted):
                return None
            return record

    def put(self, record_id, record):
        with self.lock:
            previous = self._records.get(record_id)
            new_keys = {
                index: key_of(record)
                for index, key_of in self._index_keys.items()
            }

            for index, key in new_keys.items():
                owner = self._indexes[index].get(key)
                if owner is not None and owner != record_id:
                    raise DuplicateKeyError(self.name, index, key)

            if previous is not None:
                for index, key_of in self._index_keys.items():
                    self._indexes[index].pop(key_of(previous), None)

            for index, key in new_keys.items():
                self._indexes[index][key] = record_id

            self._records[record_id] = record
            return record

    def list(self, include_deleted: bool = False):
        with self.lock:
            return [
                record for record in self._records.values()
                if self._is_visible(record, include_deleted)
            ]

    def filter(self, predicate, include_deleted: bool = False):
        with self.lock:
            return [
                record for record in self.list(include_deleted)
                if predicate(record)
            ]

    def find_by(self, index: str, key, include_deleted: bool = False):
        with self.lock:
            record_id = self._indexes[index].get(key)
            if record_id is None:
                return None
            return self.get(record_id, include_deleted=include_deleted)

    def delete(self, record_id) -> bool:
        with self.lock:
            record = self._records.get(record_id)
            if record is None:
                return False

            if hasattr(record, "is_deleted"):
                if record.is_deleted:
                    return False
                record.is_deleted = True
                return True

            for index, key_of in self._index_keys.items():
                self._indexes[index].pop(key_of(record), None)
            del self._records[record_id]
            return True


class FollowGraph:
    """Follow edges kept in two adjacency lists updated under one lock."""

    def __init__(self):
        self.lock = RLock()
        self._following = {}
        self._followers = {}

    def is_following(self, follower_id: int, target_id: int) -> bool:
        with self.lock:
            return target_id in self._following.get(follower_id, [])

    def add_edge(self, follower_id: int, target_id: int) -> bool:
        with self.lock:
            if self.is_following(follower_id, target_id):
                return False
            self._following.setdefault(follower_id, []).append(target_id)
            self._followers.setdefault(target_id, []).append(follower_id)
            return True

    def remove_edge(self, follower_id: int, target_id: int) -> bool:
        with self.lock:
            if not self.is_following(follower_id, target_id):
                return False
            # list.remove keeps the relative order of the remaining ids
            self._following[follower_id].remove(target_id)
            self._followers[target_id].remove(follower_id)
            return True

    def following_of(self, user_id: int):
        with self.lock:
            return list(self._following.get(user_id, []))

    def followers_of(self, user_id: int):
        with self.lock:
            return list(self._followers.get(user_id, []))


def _lower(value):
    return (value or "").strip().lower()


class InMemoryDatabase:
    """Flask extension holding the stores of one application."""

    extension_name = "social_api.db"

    def init_app(self, app):
        app.extensions[self.extension_name] = {
            "accounts": Store(
                "accounts",
                unique_indexes={
                    "username": lambda account: _lower(account.username),
                    "email": lambda account: _lower(account.email),
                },
            ),
            "posts": Store("posts"),
            "comments": Store("comments"),
            "reactions": Store("reactions"),
            "notifications": Store("notifications"),
            "media": Store("media"),
            "follows": FollowGraph(),
        }

    def _stores(self):
        return current_app.extensions[self.extension_name]

    @property
    def accounts(self) -> Store:
        return self._stores()["accounts"]

    @property
    def posts(self) -> Store:
        return self._stores()["posts"]

    @property
    def comments(self) -> Store:
        return self._stores()["comments"]

    @property
    def reactions(self) -> Store:
        return self._stores()["reactions"]

    @property
    def notifications(self) -> Store:
        return self._stores()["notifications"]

    @property
    def media(self) -> Store:
        return self._stores()["media"]

    @property
    def follows(self) -> FollowGraph:
        return self._stores()["follows"]


db = InMemoryDatabase()
