"""Tests for shared/repository.py."""

import pytest
from unittest.mock import MagicMock

from shared.exceptions import UpstreamFailureError
from shared.repository import BaseRepository


class ThingRepository(BaseRepository[dict]):
    table_name = "things"

    def all(self) -> list[dict]:
        return self._execute(self._table().select("*"), "select").data


class TestBaseRepository:
    def test_init_stores_db_client(self):
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_table_uses_table_name(self):
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.data = [
            {"id": "123"}
        ]

        assert ThingRepository(mock_db).all() == [{"id": "123"}]
        mock_db.table.assert_called_once_with("things")

    def test_execute_wraps_client_errors(self):
        """Any client failure surfaces as UpstreamFailureError with context."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.side_effect = ConnectionError("boom")

        with pytest.raises(UpstreamFailureError) as exc_info:
            ThingRepository(mock_db).all()

        assert exc_info.value.details["table"] == "things"
        assert exc_info.value.details["operation"] == "select"
        assert isinstance(exc_info.value.__cause__, ConnectionError)
