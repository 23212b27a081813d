import pytest

import app.scripts.ensure_tables as ensure_tables


def test_ensure_tables_main(monkeypatch):
    called = {"setup": False, "ensure": False}
    monkeypatch.setattr(ensure_tables, "setup_logging", lambda: called.update(setup=True))
    monkeypatch.setattr(ensure_tables, "ensure_tables_exist", lambda: called.update(ensure=True))
    ensure_tables.main()
    assert called == {"setup": True, "ensure": True}


def test_ensure_tables_main_propagates_failure(monkeypatch):
    def _boom():
        raise RuntimeError("db down")

    monkeypatch.setattr(ensure_tables, "setup_logging", lambda: None)
    monkeypatch.setattr(ensure_tables, "ensure_tables_exist", _boom)
    with pytest.raises(RuntimeError):
        ensure_tables.main()
