"""File-backed student repository."""

import asyncio
import json
import logging
import os
import uuid
from datetime import timedelta
from pathlib import Path

import pytest

from app.errors import DocumentRemovalError, DuplicateKeyError, RecordValidationError
from app.models.student import StudentUpdate, create_student
from app.repositories import FileStudentRepository


def _new(avatar_id: str, username: str = "ada_l", **options):
    return create_student("Ada", "Lovelace", "10th", username, avatar_id, **options)


async def test_create_assigns_id_and_timestamps(student_repo, avatar_id):
    """create() should assign a UUID id and equal createdAt/updatedAt."""
    student = await student_repo.create(_new(avatar_id))

    uuid.UUID(student.id)
    assert student.name == "Ada Lovelace"
    assert student.created_at == student.updated_at
    assert student.last_active == student.created_at


async def test_round_trip(student_repo, avatar_id):
    """A saved student should come back unchanged from find_by_id."""
    saved = await student_repo.save(_new(avatar_id, email="ada@example.com"))
    assert await student_repo.find_by_id(saved.id) == saved


async def test_document_written_with_camel_case_and_iso_dates(student_repo, avatar_id):
    """Documents should use camelCase keys and ISO-8601 date strings."""
    student = await student_repo.create(_new(avatar_id))

    path = student_repo.document_path(student.id)
    assert path == student_repo.directory / f"{student.id}.json"
    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["id"] == student.id
    assert document["firstName"] == "Ada"
    assert document["avatarId"] == avatar_id
    assert isinstance(document["createdAt"], str)
    assert "first_name" not in document


async def test_reload_from_disk(data_dir, student_repo, avatar_id):
    """A fresh repository over the same directory should load the same record."""
    student = await student_repo.create(_new(avatar_id, pin="1234"))

    fresh = FileStudentRepository(data_dir)
    loaded = await fresh.find_by_id(student.id)
    assert loaded == student
    assert loaded.created_at == student.created_at


async def test_save_with_known_id_merges(student_repo, avatar_id):
    """save() with a known id should merge changes and advance updatedAt."""
    created = await student_repo.save(_new(avatar_id))

    updated = await student_repo.save({"id": created.id, "grade": "11th"})

    assert updated.id == created.id
    assert updated.username == "ada_l"
    assert updated.grade == "11th"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


async def test_save_with_unknown_id_creates_new_record(student_repo, avatar_id):
    """save() with an unknown id should create a record under a fresh id."""
    unknown = str(uuid.uuid4())
    payload = _new(avatar_id).model_dump(by_alias=True)
    payload["id"] = unknown

    student = await student_repo.save(payload)

    assert student.id != unknown
    assert await student_repo.find_by_id(unknown) is None


async def test_save_ignores_server_managed_fields(student_repo, avatar_id):
    """save() should drop createdAt and name from caller payloads."""
    created = await student_repo.create(_new(avatar_id))

    updated = await student_repo.save(
        {"id": created.id, "createdAt": "2000-01-01T00:00:00Z", "name": "X Y", "lastName": "King"}
    )

    assert updated.created_at == created.created_at
    assert updated.name == "Ada King"


async def test_update_recomputes_name(student_repo, avatar_id):
    """Changing firstName should rederive name."""
    created = await student_repo.create(_new(avatar_id))

    updated = await student_repo.update(created.id, StudentUpdate(first_name="Augusta"))

    assert updated.name == "Augusta Lovelace"


async def test_update_unknown_id_returns_none(student_repo):
    """update() of an unknown id should return None."""
    assert await student_repo.update(str(uuid.uuid4()), {"grade": "12th"}) is None


async def test_update_rejects_fields_outside_the_closed_set(student_repo, avatar_id):
    """update() should reject unknown fields and leave the record alone."""
    created = await student_repo.create(_new(avatar_id))

    with pytest.raises(RecordValidationError) as exc_info:
        await student_repo.update(created.id, {"favouriteColour": "green"})

    assert "favouriteColour" in exc_info.value.errors
    assert (await student_repo.find_by_id(created.id)) == created


async def test_create_rejects_invalid_input_with_field_errors(student_repo, avatar_id):
    """create() should report every invalid field and store nothing."""
    with pytest.raises(RecordValidationError) as exc_info:
        await student_repo.create(
            {"firstName": "", "lastName": "L", "username": "a!", "grade": "1st", "avatarId": avatar_id}
        )

    assert {"firstName", "username"} <= set(exc_info.value.errors)
    assert await student_repo.find_all() == []


async def test_duplicate_username_rejected(student_repo, avatar_id):
    """A second student with the same username should be rejected."""
    await student_repo.create(_new(avatar_id))

    with pytest.raises(DuplicateKeyError):
        await student_repo.create(_new(avatar_id))

    matches = [s for s in await student_repo.find_all() if s.username == "ada_l"]
    assert len(matches) == 1


async def test_rename_onto_taken_username_rejected(student_repo, avatar_id):
    """Renaming onto a taken username should be rejected."""
    await student_repo.create(_new(avatar_id))
    other = await student_repo.create(_new(avatar_id, username="alan_t"))

    with pytest.raises(DuplicateKeyError):
        await student_repo.update(other.id, {"username": "ada_l"})


async def test_find_by_username(student_repo, avatar_id):
    """find_by_username() should match exactly or return None."""
    created = await student_repo.create(_new(avatar_id))

    assert await student_repo.find_by_username("ada_l") == created
    assert await student_repo.find_by_username("nobody") is None


async def test_delete_is_idempotent(student_repo, avatar_id):
    """Deleting twice should return True then False and remove the document."""
    student = await student_repo.create(_new(avatar_id))
    path = student_repo.document_path(student.id)

    assert await student_repo.delete(student.id) is True
    assert await student_repo.delete(student.id) is False
    assert await student_repo.find_by_id(student.id) is None
    assert not path.exists()


async def test_delete_tolerates_missing_document(student_repo, avatar_id):
    """A document already gone from disk should still count as deleted."""
    student = await student_repo.create(_new(avatar_id))
    student_repo.document_path(student.id).unlink()

    assert await student_repo.delete(student.id) is True
    assert await student_repo.find_by_id(student.id) is None


async def test_failed_document_removal_keeps_mirror(student_repo, avatar_id, monkeypatch):
    """A failed unlink should raise and keep the record."""
    student = await student_repo.create(_new(avatar_id))

    def refuse(self, missing_ok=False):
        raise PermissionError("read-only")

    monkeypatch.setattr(Path, "unlink", refuse)

    with pytest.raises(DocumentRemovalError):
        await student_repo.delete(student.id)

    monkeypatch.undo()
    assert await student_repo.find_by_id(student.id) == student
    assert student_repo.document_path(student.id).exists()


async def test_write_error_propagates_and_mirror_unchanged(student_repo, avatar_id, monkeypatch):
    """A failed write should raise, leave the mirror alone and clean up the temp file."""
    created = await student_repo.create(_new(avatar_id))

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)

    with pytest.raises(OSError, match="disk full"):
        await student_repo.update(created.id, {"grade": "12th"})

    assert (await student_repo.find_by_id(created.id)).grade == "10th"
    assert list(student_repo.directory.glob("*.tmp")) == []


class TestAuthenticate:
    async def test_no_pin_accepts_anything(self, student_repo, avatar_id):
        """A student without a PIN should authenticate with or without one."""
        await student_repo.create(_new(avatar_id))

        assert await student_repo.authenticate("ada_l") is not None
        assert await student_repo.authenticate("ada_l", "0000") is not None

    async def test_pin_must_match_exactly(self, student_repo, avatar_id):
        """A student with a PIN should only authenticate with that exact PIN."""
        await student_repo.create(_new(avatar_id, pin="1234"))

        assert await student_repo.authenticate("ada_l") is None
        assert await student_repo.authenticate("ada_l", "0000") is None
        assert await student_repo.authenticate("ada_l", "1234 ") is None
        assert await student_repo.authenticate("ada_l", "1234") is not None

    async def test_unknown_username(self, student_repo):
        """An unknown username should not authenticate."""
        assert await student_repo.authenticate("ghost", "1234") is None


class TestInitialization:
    async def test_directory_created_on_first_use(self, student_repo):
        """The collection directory should be created by the first call."""
        assert not student_repo.directory.exists()

        assert await student_repo.find_all() == []

        assert student_repo.directory.is_dir()

    async def test_constructor_touches_nothing(self, data_dir):
        """Constructing a repository should not touch the filesystem."""
        repo = FileStudentRepository(data_dir)
        assert repo.load_count == 0
        assert not data_dir.exists()

    async def test_sequential_reads_scan_once(self, student_repo):
        """Later reads should be served from memory."""
        await student_repo.find_all()
        await student_repo.find_by_username("ada_l")

        assert student_repo.load_count == 1

    async def test_concurrent_first_calls_scan_once(self, student_repo, avatar_id):
        """Concurrent first calls should share one directory scan."""
        await asyncio.gather(
            student_repo.find_all(),
            student_repo.find_by_id(str(uuid.uuid4())),
            student_repo.find_by_username("ada_l"),
            student_repo.authenticate("ada_l"),
        )

        assert student_repo.load_count == 1

    async def test_invalid_documents_skipped(self, data_dir, student_repo, avatar_id, caplog):
        """Unparseable or invalid documents should be logged and skipped."""
        good = await student_repo.create(_new(avatar_id))
        directory = student_repo.directory
        (directory / "broken.json").write_text("{not json", encoding="utf-8")
        (directory / f"{uuid.uuid4()}.json").write_text(
            json.dumps({"id": "x", "firstName": "No"}), encoding="utf-8"
        )
        (directory / "readme.txt").write_text("ignored", encoding="utf-8")

        fresh = FileStudentRepository(data_dir)
        with caplog.at_level(logging.WARNING, logger="app.repositories.file_store"):
            students = await fresh.find_all()

        assert students == [good]
        assert sum("Skipping invalid document" in r.getMessage() for r in caplog.records) == 2

    async def test_directory_error_is_fatal(self, data_dir):
        """A data path that is not a directory should fail the load."""
        data_dir.mkdir(parents=True)
        (data_dir / "students").write_text("not a directory", encoding="utf-8")
        repo = FileStudentRepository(data_dir)

        with pytest.raises(OSError):
            await repo.find_all()
        assert repo.load_count == 0


class TestConcurrentWrites:
    async def test_same_id_saves_all_succeed(self, data_dir, student_repo, avatar_id):
        """Concurrent saves of one record should all succeed and leave disk matching memory."""
        created = await student_repo.create(_new(avatar_id))

        for _ in range(5):
            results = await asyncio.gather(
                *(student_repo.save({"id": created.id, "grade": f"g{i}"}) for i in range(8)),
                return_exceptions=True,
            )
            assert [r for r in results if isinstance(r, Exception)] == []

        assert list(student_repo.directory.glob("*.tmp")) == []
        on_disk = await FileStudentRepository(data_dir).find_by_id(created.id)
        assert on_disk == await student_repo.find_by_id(created.id)


class TestReturnedRecords:
    async def test_mutating_a_result_does_not_change_the_store(self, student_repo, avatar_id):
        """Records handed to callers should be copies of the stored ones."""
        created = await student_repo.create(_new(avatar_id))
        created.grade = "changed"

        fetched = await student_repo.find_by_id(created.id)
        assert fetched.grade == "10th"
        fetched.grade = "changed again"

        listed = await student_repo.find_all()
        assert [s.grade for s in listed] == ["10th"]
        listed[0].first_name = "Someone"

        assert (await student_repo.find_by_username("ada_l")).first_name == "Ada"


class TestLegacyDocuments:
    async def test_naive_timestamps_read_as_utc_and_update(self, data_dir, avatar_id):
        """Documents with offset-less timestamps should load as UTC and stay updatable."""
        student_id = str(uuid.uuid4())
        directory = data_dir / "students"
        directory.mkdir(parents=True)
        (directory / f"{student_id}.json").write_text(
            json.dumps(
                {
                    "id": student_id,
                    "firstName": "Ada",
                    "lastName": "Lovelace",
                    "username": "ada_l",
                    "grade": "10th",
                    "avatarId": avatar_id,
                    "createdAt": "2026-03-01T09:30:00",
                    "updatedAt": "2026-03-01T09:30:00",
                }
            ),
            encoding="utf-8",
        )
        repo = FileStudentRepository(data_dir)

        loaded = await repo.find_by_id(student_id)
        assert loaded.created_at.tzinfo is not None
        assert loaded.created_at.utcoffset() == timedelta(0)

        updated = await repo.save({"id": student_id, "grade": "11th"})
        assert updated.grade == "11th"
        assert updated.updated_at > loaded.updated_at

    async def test_document_named_for_another_id_is_skipped(
        self, data_dir, student_repo, avatar_id, caplog
    ):
        """A document whose id differs from its filename should not load, so delete cannot miss it."""
        created = await student_repo.create(_new(avatar_id))
        path = student_repo.document_path(created.id)
        path.rename(path.with_name("legacy.json"))

        fresh = FileStudentRepository(data_dir)
        with caplog.at_level(logging.WARNING, logger="app.repositories.file_store"):
            assert await fresh.find_by_id(created.id) is None

        assert any(
            "Skipping invalid document legacy.json" in r.getMessage() for r in caplog.records
        )
        assert await fresh.delete(created.id) is False
