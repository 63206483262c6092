"""
Tests for the Firestore side of the repositories, against an in-memory client
"""

from datetime import date, datetime
from types import SimpleNamespace

import pytest
import pytz

from placement_attendance.services import repositories
from placement_attendance.services.repositories import EventRepo, StudentRepo

class FakeArrayUnion:
    def __init__(self, values):
        self.values = values

class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None

class FakeDocumentRef:
    def __init__(self, client, collection, doc_id):
        self.client = client
        self.collection = collection
        self.id = doc_id

    def get(self, transaction=None):
        self.client.reads.append((self.id, transaction))
        return FakeSnapshot(self.id, self.client.store[self.collection].get(self.id))

class FakeQuery:
    def __init__(self, client, collection):
        self.client = client
        self.collection = collection
        self.calls = []

    def where(self, field, op, value):
        self.calls.append(("where", field, op, value))
        return self

    def order_by(self, field, direction=None):
        self.calls.append(("order_by", field, direction))
        return self

    def limit(self, count):
        self.calls.append(("limit", count))
        return self

    def get(self):
        self.client.queries.append(self.calls)
        docs = [(doc_id, data) for doc_id, data in self.client.store[self.collection].items()]
        for call in self.calls:
            if call[0] == "where":
                docs = [(i, d) for i, d in docs if d.get(call[1]) == call[3]]
            elif call[0] == "order_by":
                docs.sort(key=lambda item: item[1][call[1]], reverse=call[2] == "DESCENDING")
            elif call[0] == "limit":
                docs = docs[:call[1]]
        return [FakeSnapshot(i, d) for i, d in docs]

class FakeCollection:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def document(self, doc_id):
        return FakeDocumentRef(self.client, self.name, doc_id)

    def where(self, field, op, value):
        return FakeQuery(self.client, self.name).where(field, op, value)

    def order_by(self, field, direction=None):
        return FakeQuery(self.client, self.name).order_by(field, direction)

class FakeTransaction:
    def __init__(self, client):
        self.client = client
        self.updates = []

    def update(self, doc_ref, data):
        self.updates.append((doc_ref.id, data))
        doc = self.client.store[doc_ref.collection][doc_ref.id]
        for field, value in data.items():
            if isinstance(value, FakeArrayUnion):
                current = list(doc.get(field) or [])
                current.extend(v for v in value.values if v not in current)
                doc[field] = current
            else:
                doc[field] = value

class FakeFirestoreClient:
    def __init__(self):
        self.store = {"events": {}, "students": {}}
        self.reads = []
        self.queries = []
        self.transactions = []

    def collection(self, name):
        return FakeCollection(self, name)

    def transaction(self):
        transaction = FakeTransaction(self)
        self.transactions.append(transaction)
        return transaction

@pytest.fixture
def fs_client(monkeypatch):
    client = FakeFirestoreClient()
    fake_firestore = SimpleNamespace(
        transactional=lambda fn: fn,
        ArrayUnion=FakeArrayUnion,
        Query=SimpleNamespace(DESCENDING="DESCENDING"),
    )
    monkeypatch.setattr(repositories, "get_firestore_client", lambda: client)
    monkeypatch.setattr(repositories, "firestore", fake_firestore)
    return client

def test_append_attendance_runs_in_transaction(fs_client):
    fs_client.store["students"]["s1"] = {"name": "Asha", "attendance": [], "attendanceDays": []}
    at = pytz.UTC.localize(datetime(2025, 3, 1, 6, 0))

    assert StudentRepo.append_attendance_fs("s1", at, date(2025, 3, 1)) is True

    transaction = fs_client.transactions[0]
    assert fs_client.reads == [("s1", transaction)]
    assert [doc_id for doc_id, _ in transaction.updates] == ["s1"]
    student = fs_client.store["students"]["s1"]
    assert student["attendance"] == [{"date": at, "present": True}]
    assert student["attendanceDays"] == ["2025-03-01"]

def test_append_attendance_same_day_is_rejected(fs_client):
    fs_client.store["students"]["s1"] = {"name": "Asha", "attendance": [], "attendanceDays": []}
    first = pytz.UTC.localize(datetime(2025, 3, 1, 6, 0))
    second = pytz.UTC.localize(datetime(2025, 3, 1, 9, 0))

    StudentRepo.append_attendance_fs("s1", first, date(2025, 3, 1))
    result = StudentRepo.append_attendance_fs("s1", second, date(2025, 3, 1))

    assert result is False
    assert fs_client.transactions[1].updates == []
    assert len(fs_client.store["students"]["s1"]["attendance"]) == 1

def test_append_attendance_next_day_is_accepted(fs_client):
    fs_client.store["students"]["s1"] = {"name": "Asha"}
    StudentRepo.append_attendance_fs("s1", pytz.UTC.localize(datetime(2025, 3, 1, 6, 0)), date(2025, 3, 1))

    result = StudentRepo.append_attendance_fs("s1", pytz.UTC.localize(datetime(2025, 3, 2, 6, 0)), date(2025, 3, 2))

    assert result is True
    assert fs_client.store["students"]["s1"]["attendanceDays"] == ["2025-03-01", "2025-03-02"]

def test_get_by_name_returns_newest_event(fs_client):
    fs_client.store["events"]["old"] = {"eventName": "Campus Drive", "createdAt": datetime(2025, 1, 1)}
    fs_client.store["events"]["new"] = {"eventName": "Campus Drive", "createdAt": datetime(2025, 2, 1)}
    fs_client.store["events"]["other"] = {"eventName": "Mock Test", "createdAt": datetime(2025, 3, 1)}

    event = EventRepo.get_by_name_fs("Campus Drive")

    assert event["id"] == "new"
    assert fs_client.queries[0] == [
        ("where", "eventName", "==", "Campus Drive"),
        ("order_by", "createdAt", "DESCENDING"),
        ("limit", 1),
    ]

def test_get_by_name_unknown_event(fs_client):
    assert EventRepo.get_by_name_fs("Nope") is None
