import pytest
from sqlalchemy.exc import IntegrityError

import app.repos.resume_repo as rrepo
import app.repos.user_repo as urepo


class _Query:
    def __init__(self, data):
        self.data = data
        self.ordered_by = []

    def filter(self, *args, **kwargs):
        return self

    def order_by(self, *args, **kwargs):
        self.ordered_by.extend(str(a) for a in args)
        return self

    def all(self):
        return self.data if isinstance(self.data, list) else [self.data]

    def first(self):
        if isinstance(self.data, list):
            return self.data[0] if self.data else None
        return self.data


class _DB:
    def __init__(self, data=None):
        self.data = data
        self.added = []
        self.committed = 0
        self.rolled_back = 0
        self.queries = []

    def query(self, model):
        q = _Query(self.data)
        self.queries.append(q)
        return q

    def add(self, obj):
        self.added.append(obj)

    def commit(self):
        self.committed += 1

    def rollback(self):
        self.rolled_back += 1

    def refresh(self, obj):
        return None


def test_user_repo_create(monkeypatch):
    db = _DB()
    monkeypatch.setattr(urepo, "generate_id", lambda: "u1")
    user = urepo.create(db, "auth|1", "u@example.com")
    assert user.id == "u1"
    assert user.auth_subject == "auth|1"
    assert user.email == "u@example.com"
    assert db.committed == 1


def test_user_repo_getters():
    user = type("U", (), {"id": "u1", "auth_subject": "auth|1"})()
    db = _DB(data=user)
    assert urepo.get_by_auth_subject(db, "auth|1") is user
    assert urepo.get_by_id(db, "u1") is user


def test_upsert_returns_existing_without_insert():
    existing = type("U", (), {"id": "u1"})()
    db = _DB(data=existing)
    assert urepo.upsert_by_auth_subject(db, "auth|1", "u@example.com") is existing
    assert db.added == []


def test_upsert_creates_missing_user(monkeypatch):
    db = _DB(data=None)
    monkeypatch.setattr(urepo, "generate_id", lambda: "u-new")
    user = urepo.upsert_by_auth_subject(db, "auth|2", "new@example.com")
    assert user.id == "u-new"
    assert len(db.added) == 1


def test_upsert_recovers_from_concurrent_insert(monkeypatch):
    winner = type("U", (), {"id": "u-winner"})()
    lookups = iter([None, winner])
    db = _DB()
    monkeypatch.setattr(urepo, "get_by_auth_subject", lambda _db, sub: next(lookups))

    def _create(_db, sub, email):
        raise IntegrityError("INSERT", {}, Exception("duplicate key"))

    monkeypatch.setattr(urepo, "create", _create)
    assert urepo.upsert_by_auth_subject(db, "auth|3", "x@example.com") is winner
    assert db.rolled_back == 1


def test_upsert_reraises_when_conflict_row_vanished(monkeypatch):
    db = _DB()
    monkeypatch.setattr(urepo, "get_by_auth_subject", lambda _db, sub: None)
    def _create(_db, sub, email):
        raise IntegrityError("INSERT", {}, Exception("dup"))

    monkeypatch.setattr(urepo, "create", _create)
    with pytest.raises(IntegrityError):
        urepo.upsert_by_auth_subject(db, "auth|4", "x@example.com")


def test_resume_repo_create_stores_all_fields(monkeypatch):
    db = _DB()
    monkeypatch.setattr(rrepo, "generate_id", lambda: "r1")
    resume = rrepo.create(
        db,
        "u1",
        file_name="cv.docx",
        file_url="https://files.example.com/cv.docx",
        file_type="docx",
        extracted_text="full text",
        job_title="Data Engineer",
        job_description="Pipelines",
        ai_response={"atsScore": {"score": 70}},
        ats_score=70.0,
    )
    assert resume.id == "r1"
    assert resume.user_id == "u1"
    assert resume.extracted_text == "full text"
    assert resume.ai_response == {"atsScore": {"score": 70}}
    assert resume.ats_score == 70.0
    assert db.added == [resume]
    assert db.committed == 1


def test_resume_repo_list_orders_newest_first():
    rows = [type("R", (), {"id": "r2"})(), type("R", (), {"id": "r1"})()]
    db = _DB(data=rows)
    assert rrepo.list_by_user(db, "u1") == rows
    assert any("created_at DESC" in o for o in db.queries[0].ordered_by)


def test_resume_repo_get_by_id():
    row = type("R", (), {"id": "r1"})()
    assert rrepo.get_by_id(_DB(data=row), "r1", "u1") is row
    assert rrepo.get_by_id(_DB(data=[]), "r1", "u1") is None
