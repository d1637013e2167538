"""
Notes API — Note Service Unit Tests
====================================

What:  Tests for NoteService business logic (list, create, get, update, delete).
How:   Uses mock DB sessions (no real DB).

What we test:
    ✅ Title validation happens before any store call
    ✅ Missing rows raise NotFoundError
    ✅ Store failures are wrapped in DatabaseError
    ✅ Writes are committed
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from notes_api.exceptions import DatabaseError, NotFoundError, ValidationError
from notes_api.schemas.note import NotePayload
from notes_api.services.note_service import NoteService


class TestNoteServiceList:
    """Tests for list_notes."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, mock_db_session):
        """Empty table should return an empty list."""
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_notes(mock_db_session)

        assert result == []
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_notes_with_results(self, mock_db_session, make_note_row):
        rows = [make_note_row(id=3, title="c"), make_note_row(id=2, title="b")]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_notes(mock_db_session)

        assert [note.id for note in result] == [3, 2]
        assert result[0].title == "c"

    @pytest.mark.asyncio
    async def test_list_notes_store_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = ConnectionRefusedError("db down")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_notes(mock_db_session)

        assert exc_info.value.message == "Internal server error"
        assert exc_info.value.context["operation"] == "list"


class TestNoteServiceCreate:
    """Tests for create_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_note_success(self, mock_db_session, make_note_row):
        mock_result = MagicMock()
        mock_result.scalar_one.return_value = make_note_row(id=7, title="A", content="B")
        mock_db_session.execute.return_value = mock_result

        result = await self.service.create_note(
            mock_db_session, NotePayload(title="A", content="B")
        )

        assert result.id == 7
        assert result.title == "A"
        assert result.content == "B"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, ""])
    async def test_create_note_requires_title(self, mock_db_session, title):
        """Missing or empty title is rejected without touching the store."""
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_note(mock_db_session, NotePayload(title=title))

        assert exc_info.value.message == "Title is required"
        assert exc_info.value.field == "title"
        mock_db_session.execute.assert_not_awaited()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_note_commit_failure(self, mock_db_session, make_note_row):
        mock_result = MagicMock()
        mock_result.scalar_one.return_value = make_note_row()
        mock_db_session.execute.return_value = mock_result
        mock_db_session.commit.side_effect = RuntimeError("connection lost")

        with pytest.raises(DatabaseError):
            await self.service.create_note(mock_db_session, NotePayload(title="A"))


class TestNoteServiceGet:
    """Tests for get_note retrieval."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session, make_note_row, sample_note_data):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = make_note_row()
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_note(mock_db_session, sample_note_data["id"])

        assert result.id == sample_note_data["id"]
        assert result.title == sample_note_data["title"]
        assert result.created_at == sample_note_data["created_at"]

    @pytest.mark.asyncio
    async def test_get_note_null_content_reads_as_empty(self, mock_db_session, make_note_row):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = make_note_row(content=None)
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_note(mock_db_session, 1)

        assert result.content == ""

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session):
        """Non-existent note should raise NotFoundError."""
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_note(mock_db_session, 999999)

        assert exc_info.value.message == "Note not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", [0, -1, 2**31, 10**20])
    async def test_get_note_id_out_of_range(self, mock_db_session, note_id):
        """Ids the integer column cannot hold are not found, without a query."""
        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_db_session, note_id)

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_note_store_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = TimeoutError("pool exhausted")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.get_note(mock_db_session, 1)

        assert exc_info.value.context == {"operation": "get", "note_id": 1}


class TestNoteServiceUpdate:
    """Tests for update_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_update_note_success(self, mock_db_session, make_note_row):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = make_note_row(title="New", content="")
        mock_db_session.execute.return_value = mock_result

        result = await self.service.update_note(mock_db_session, 1, NotePayload(title="New"))

        assert result.title == "New"
        assert result.content == ""
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_note_requires_title(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.update_note(mock_db_session, 1, NotePayload(content="x"))

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_note_validates_before_lookup(self, mock_db_session):
        """A bad body on a missing id is a 400, not a 404."""
        with pytest.raises(ValidationError):
            await self.service.update_note(mock_db_session, 0, NotePayload())

    @pytest.mark.asyncio
    async def test_update_note_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError):
            await self.service.update_note(mock_db_session, 42, NotePayload(title="x"))


class TestNoteServiceDelete:
    """Tests for delete_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_delete_note_success(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = 5
        mock_db_session.execute.return_value = mock_result

        assert await self.service.delete_note(mock_db_session, 5) is None
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_note_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError):
            await self.service.delete_note(mock_db_session, 5)

    @pytest.mark.asyncio
    async def test_delete_note_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=OSError("network unreachable"))

        with pytest.raises(DatabaseError):
            await self.service.delete_note(mock_db_session, 5)
