from __future__ import annotations

import copy
import itertools
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest
import requests

from app.admin_service import AdminService


# ---------- in-memory Supabase ----------

class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload: Any = None
        self.filters: List[Tuple[str, Any]] = []
        self.order_by: Optional[Tuple[str, bool]] = None
        self.limit_n: Optional[int] = None
        self.on_conflict = ""

    def select(self, columns: str = "*") -> "FakeQuery":
        self.columns = columns
        return self

    def insert(self, rows: Any) -> "FakeQuery":
        self.op, self.payload = "insert", rows
        return self

    def update(self, values: Dict[str, Any]) -> "FakeQuery":
        self.op, self.payload = "update", values
        return self

    def upsert(self, row: Dict[str, Any], on_conflict: str = "") -> "FakeQuery":
        self.op, self.payload, self.on_conflict = "upsert", row, on_conflict
        return self

    def delete(self) -> "FakeQuery":
        self.op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def limit(self, n: int) -> "FakeQuery":
        self.limit_n = n
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(col) == val for col, val in self.filters)

    def execute(self) -> SimpleNamespace:
        self.client.calls.append((self.table, self.op))
        if (self.table, self.op) in self.client.fail_on:
            raise RuntimeError(f"{self.op} on {self.table} failed")
        rows = self.client.tables.setdefault(self.table, [])

        if self.op == "select":
            found = [r for r in rows if self._matches(r)]
            if self.order_by:
                col, desc = self.order_by
                found.sort(key=lambda r: r.get(col), reverse=desc)
            if self.limit_n is not None:
                found = found[: self.limit_n]
            if self.columns != "*":
                keep = [c.strip() for c in self.columns.split(",")]
                found = [{c: r.get(c) for c in keep} for r in found]
            return SimpleNamespace(data=copy.deepcopy(found))

        if self.op == "insert":
            batch = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = [self.client.add_row(self.table, r) for r in batch]
            return SimpleNamespace(data=copy.deepcopy(inserted))

        if self.op == "update":
            touched = [r for r in rows if self._matches(r)]
            for r in touched:
                r.update(copy.deepcopy(self.payload))
            return SimpleNamespace(data=copy.deepcopy(touched))

        if self.op == "delete":
            removed = [r for r in rows if self._matches(r)]
            self.client.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=copy.deepcopy(removed))

        if self.op == "upsert":
            keys = [k.strip() for k in (self.on_conflict or "id").split(",")]
            for r in rows:
                if all(r.get(k) == self.payload.get(k) for k in keys):
                    r.update(copy.deepcopy(self.payload))
                    return SimpleNamespace(data=[copy.deepcopy(r)])
            return SimpleNamespace(data=[copy.deepcopy(self.client.add_row(self.table, self.payload))])

        raise AssertionError(f"unexpected op {self.op}")


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str) -> None:
        self.storage = storage
        self.name = name

    def remove(self, paths: List[str]) -> List[Dict[str, Any]]:
        self.storage.removed.extend(paths)
        if self.storage.fail_remove:
            raise RuntimeError("Object not found")
        return [{"name": p} for p in paths if self.storage.objects.pop(p, None) is not None]

    def upload(self, path: str, content: bytes, file_options: Optional[Dict[str, str]] = None) -> None:
        if self.storage.fail_upload:
            raise RuntimeError("upload rejected")
        self.storage.objects[path] = content

    def get_public_url(self, path: str) -> str:
        return f"https://cdn.example.test/{self.name}/{path}"


class FakeStorage:
    def __init__(self) -> None:
        self.objects: Dict[str, bytes] = {}
        self.removed: List[str] = []
        self.buckets: List[str] = []
        self.fail_remove = False
        self.fail_upload = False

    def from_(self, bucket: str) -> FakeBucket:
        self.buckets.append(bucket)
        return FakeBucket(self, bucket)


class FakeSupabase:
    """Just enough of supabase.Client for the admin service."""

    def __init__(self) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[Tuple[str, str]] = []
        self.fail_on: Set[Tuple[str, str]] = set()
        self.storage = FakeStorage()
        self._ids = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def add_row(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        stored = copy.deepcopy(row)
        stored.setdefault("id", f"{table}-{next(self._ids)}")
        self.tables.setdefault(table, []).append(stored)
        return stored


@pytest.fixture
def fake_client() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def service(fake_client: FakeSupabase) -> AdminService:
    return AdminService(fake_client)


# ---------- Google Places over a fake session ----------

class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, body_is_json: bool = True) -> None:
        self.status_code = status_code
        self._payload = payload
        self._body_is_json = body_is_json

    def json(self) -> Any:
        if not self._body_is_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.requests: List[Dict[str, Any]] = []

    def get(self, url: str, params: Optional[Dict[str, Any]] = None, timeout: Optional[int] = None) -> FakeResponse:
        self.requests.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def places_payload(reviews: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "status": "OK",
        "result": {
            "place_id": "place-123",
            "name": "The Detail Proz",
            "rating": 4.9,
            "user_ratings_total": len(reviews),
            "reviews": reviews,
        },
    }


def make_review(time: int, rating: int = 5, text: str = "Great job on my truck", photo: str = "") -> Dict[str, Any]:
    return {
        "author_name": f"Reviewer {time}",
        "rating": rating,
        "text": text,
        "time": time,
        "relative_time_description": "a week ago",
        "profile_photo_url": photo,
        "language": "en",
    }


@pytest.fixture
def connection_error() -> Exception:
    return requests.ConnectionError("connection refused")
