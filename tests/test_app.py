import json
from dataclasses import replace
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from inventory_recon.application.users.use_cases import BootstrapAdminUseCase
from inventory_recon.config import SETTINGS
from inventory_recon.infrastructure.repositories.json_repositories import JsonUserRepository
from inventory_recon.infrastructure.storage import json_store
from inventory_recon.infrastructure.storage.json_store import JsonKeyValueStore

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setattr(json_store, "SETTINGS", replace(SETTINGS, data_dir=tmp_path))
    return tmp_path


def run_app(user=None) -> AppTest:
    app = AppTest.from_file(APP_PATH, default_timeout=30)
    app.session_state["user"] = user
    return app.run()


def test_unreadable_accounts_show_an_error(data_dir: Path):
    (data_dir / "inventory_users.json").write_text(json.dumps([{"id": "u1"}]), encoding="utf-8")

    app = run_app()

    assert not app.exception
    assert "Stored data could not be read" in app.error[0].value


def test_unreadable_records_show_an_error(data_dir: Path):
    admin = BootstrapAdminUseCase(JsonUserRepository(JsonKeyValueStore(data_dir))).execute("boss", "pw", "Boss")
    (data_dir / "inventory_data.json").write_text(json.dumps(["not a record"]), encoding="utf-8")

    app = run_app(admin)

    assert not app.exception
    assert "Stored data could not be read" in app.error[0].value


def test_saving_a_user_shows_a_notice_after_rerun(data_dir: Path):
    repo = JsonUserRepository(JsonKeyValueStore(data_dir))
    admin = BootstrapAdminUseCase(repo).execute("boss", "pw", "Boss")
    app = run_app(admin)

    fields = {field.label: field for field in app.text_input}
    fields["Full name"].input("Clerk One")
    fields["Username"].input("clerk")
    fields["Password"].input("pw")
    next(button for button in app.button if button.label == "Save user").click()
    app.run()

    assert not app.exception
    assert [notice.value for notice in app.success] == ["User saved."]
    assert [user.username for user in repo.list_users()] == ["boss", "clerk"]
