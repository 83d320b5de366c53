"""Tests for the summary status aggregator (PUT/GET /api/status/summary)."""
import pytest
from sqlalchemy import event
from sqlalchemy.orm import sessionmaker

from upfor.errors import ConflictError, ValidationError
from upfor.models.user_status import StatusMode, UserStatus
from upfor.services.status_service import normalize_summary, set_summary
from tests.conftest import create_test_user


class TestNormalizeSummary:

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_specific_requires_text(self, text):
        with pytest.raises(ValidationError):
            normalize_summary(StatusMode.specific, text)

    def test_specific_text_is_trimmed(self):
        assert normalize_summary(StatusMode.specific, "  board games ") == "board games"

    def test_specific_text_limit_applies_after_trim(self):
        assert normalize_summary(StatusMode.specific, " " + "x" * 64 + " ") == "x" * 64
        with pytest.raises(ValidationError):
            normalize_summary(StatusMode.specific, "x" * 65)

    @pytest.mark.parametrize("mode", [StatusMode.off, StatusMode.general])
    def test_other_modes_discard_text(self, mode):
        assert normalize_summary(mode, "party") is None
        assert normalize_summary(mode, "x" * 200) is None


class TestSummaryRoutes:

    def test_new_user_starts_off(self, client):
        user = create_test_user(client, name="Alice")
        resp = client.get("/api/status/summary", headers=user["headers"])
        assert resp.status_code == 200
        status = resp.json()["status"]
        assert status["mode"] == "OFF"
        assert status["text"] is None

    def test_set_specific(self, client):
        user = create_test_user(client, name="Alice")
        resp = client.put("/api/status/summary", headers=user["headers"], json={
            "mode": "SPECIFIC", "text": " sauna tonight ",
        })
        assert resp.status_code == 200
        status = resp.json()["status"]
        assert status["mode"] == "SPECIFIC"
        assert status["text"] == "sauna tonight"

    @pytest.mark.parametrize("body", [{"mode": "SPECIFIC"}, {"mode": "SPECIFIC", "text": ""}])
    def test_specific_without_text_is_400(self, client, db, body):
        user = create_test_user(client, name="Alice")
        resp = client.put("/api/status/summary", headers=user["headers"], json=body)
        assert resp.status_code == 400
        stored = db.query(UserStatus).filter(UserStatus.user_id == user["id"]).one()
        assert stored.mode == StatusMode.off

    def test_off_with_text_stores_null(self, client):
        user = create_test_user(client, name="Alice")
        resp = client.put("/api/status/summary", headers=user["headers"], json={
            "mode": "OFF", "text": "party",
        })
        assert resp.status_code == 200
        assert resp.json()["status"]["text"] is None

    def test_replace_is_whole_record(self, client):
        user = create_test_user(client, name="Alice")
        client.put("/api/status/summary", headers=user["headers"], json={"mode": "SPECIFIC", "text": "hike"})
        resp = client.put("/api/status/summary", headers=user["headers"], json={"mode": "GENERAL"})
        status = resp.json()["status"]
        assert status["mode"] == "GENERAL"
        assert status["text"] is None

    def test_bad_mode_is_400(self, client):
        user = create_test_user(client, name="Alice")
        resp = client.put("/api/status/summary", headers=user["headers"], json={"mode": "MAYBE"})
        assert resp.status_code == 400

    def test_conditional_write(self, client):
        user = create_test_user(client, name="Alice")
        current = client.get("/api/status/summary", headers=user["headers"]).json()["status"]["version"]

        ok = client.put("/api/status/summary", headers=user["headers"], json={
            "mode": "GENERAL", "version": current,
        })
        assert ok.status_code == 200
        assert ok.json()["status"]["version"] == current + 1

        stale = client.put("/api/status/summary", headers=user["headers"], json={
            "mode": "OFF", "version": current,
        })
        assert stale.status_code == 409

    def test_summary_visible_on_profile(self, client):
        user = create_test_user(client, name="Alice")
        client.put("/api/status/summary", headers=user["headers"], json={"mode": "SPECIFIC", "text": "tennis"})
        me = client.get("/api/users/me", headers=user["headers"]).json()
        assert me["status"]["mode"] == "SPECIFIC"
        assert me["status"]["text"] == "tennis"


class TestInterleavedWrites:
    """Two sessions read the same version; the other writer commits first."""

    @pytest.fixture
    def sessions(self, db_engine):
        factory = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
        first, second = factory(), factory()
        yield first, second
        first.close()
        second.close()

    @staticmethod
    def _commit_first_during_flush(second, first, user_id):
        @event.listens_for(second, "before_flush", once=True)
        def _other_writer_wins(session, flush_context, instances):
            set_summary(first, user_id, StatusMode.general, expected_version=1)

    def test_stale_conditional_write_is_409(self, client, db, sessions):
        user = create_test_user(client, name="Alice")
        first, second = sessions
        self._commit_first_during_flush(second, first, user["id"])

        with pytest.raises(ConflictError):
            set_summary(second, user["id"], StatusMode.specific, "sauna", expected_version=1)

        stored = db.query(UserStatus).filter(UserStatus.user_id == user["id"]).one()
        assert stored.mode == StatusMode.general
        assert stored.text is None
        assert stored.version == 2

    def test_unconditional_write_is_reapplied(self, client, db, sessions):
        user = create_test_user(client, name="Alice")
        first, second = sessions
        self._commit_first_during_flush(second, first, user["id"])

        status = set_summary(second, user["id"], StatusMode.specific, "sauna")
        assert status.version == 3

        stored = db.query(UserStatus).filter(UserStatus.user_id == user["id"]).one()
        assert stored.mode == StatusMode.specific
        assert stored.text == "sauna"
        assert stored.version == 3
