"""
Database Models for Realty Admin
CRUD operations for properties, quiz questions and admin profiles

Uses Supabase for persistent storage. Every call is a single round trip and
returns an OperationResult; failures are logged here and handed back to the
caller with a reason instead of being swallowed.
"""

from typing import Any, Dict, List, Optional, Type
import logging

from pydantic import BaseModel, ValidationError

from config import AppConfig
from .results import ErrorKind, OperationResult
from .schemas import (
    Property,
    QuizQuestion,
    QuizQuestionDraft,
)
from .supabase_client import get_supabase

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Supabase is not configured (set SUPABASE_URL and SUPABASE_KEY)"


def _not_configured() -> OperationResult:
    return OperationResult.failure(ErrorKind.NOT_CONFIGURED, NOT_CONFIGURED_MESSAGE)


def _resolve(client):
    """The caller's client (a signed-in session) or the shared service client."""
    return client if client is not None else get_supabase()


def parse_rows(rows: Optional[List[Dict[str, Any]]], record_type: Type[BaseModel]) -> List[BaseModel]:
    """
    Parse raw table rows into records.

    Rows that do not validate are logged and skipped so one bad row does not
    hide the rest of the table.
    """
    records = []
    for row in rows or []:
        try:
            records.append(record_type.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping malformed {record_type.__name__} row {row.get('id')!r}: {e}")
    return records


class TableModel:
    """
    Shared select/insert/update/delete for one admin table.

    Subclasses set the table name, ordering and record types.
    """

    TABLE: str = ""
    ORDER_COLUMN: str = "id"
    ORDER_DESC: bool = False
    RECORD: Type[BaseModel] = BaseModel
    LABEL: str = "record"

    @classmethod
    def list_all(cls, client=None) -> OperationResult:
        """Select every row in display order."""
        supabase = _resolve(client)
        if not supabase:
            return _not_configured()

        try:
            response = supabase.table(cls.TABLE) \
                .select('*') \
                .order(cls.ORDER_COLUMN, desc=cls.ORDER_DESC) \
                .execute()
            records = parse_rows(response.data, cls.RECORD)
            logger.info(f"Fetched {len(records)} {cls.LABEL} rows")
            return OperationResult.success(records)
        except Exception as e:
            logger.error(f"❌ Error fetching {cls.TABLE}: {e}")
            return OperationResult.from_exception(e)

    @classmethod
    def create(cls, draft: BaseModel, client=None) -> OperationResult:
        """Insert a single row; returns the stored record when the API echoes it."""
        supabase = _resolve(client)
        if not supabase:
            return _not_configured()

        try:
            response = supabase.table(cls.TABLE).insert([draft.to_row()]).execute()
            created = parse_rows(response.data, cls.RECORD)
            logger.info(f"✅ Created {cls.LABEL}")
            return OperationResult.success(created[0] if created else None)
        except Exception as e:
            logger.error(f"❌ Error adding {cls.LABEL}: {e}")
            return OperationResult.from_exception(e)

    @classmethod
    def update(cls, record: BaseModel, client=None) -> OperationResult:
        """Send the whole record as an update-by-id."""
        supabase = _resolve(client)
        if not supabase:
            return _not_configured()

        try:
            response = supabase.table(cls.TABLE) \
                .update(record.to_row()) \
                .eq('id', record.id) \
                .execute()
            if not response.data:
                return OperationResult.failure(
                    ErrorKind.NOT_FOUND, f"No {cls.LABEL} with id {record.id}"
                )
            updated = parse_rows(response.data, cls.RECORD)
            logger.info(f"✅ Updated {cls.LABEL} {record.id}")
            return OperationResult.success(updated[0] if updated else record)
        except Exception as e:
            logger.error(f"❌ Error updating {cls.LABEL} {record.id}: {e}")
            return OperationResult.from_exception(e)

    @classmethod
    def delete(cls, record_id: Any, client=None) -> OperationResult:
        """Delete by id. A delete that matches no row is NOT_FOUND."""
        supabase = _resolve(client)
        if not supabase:
            return _not_configured()

        try:
            response = supabase.table(cls.TABLE) \
                .delete() \
                .eq('id', record_id) \
                .execute()
            if not response.data:
                return OperationResult.failure(
                    ErrorKind.NOT_FOUND, f"No {cls.LABEL} with id {record_id}"
                )
            logger.info(f"✅ Deleted {cls.LABEL} {record_id}")
            return OperationResult.success(record_id)
        except Exception as e:
            logger.error(f"❌ Error deleting {cls.LABEL} {record_id}: {e}")
            return OperationResult.from_exception(e)


class PropertyModel(TableModel):
    """Property database operations (newest first)"""
    TABLE = AppConfig.PROPERTIES_TABLE
    ORDER_COLUMN = 'id'
    ORDER_DESC = True
    RECORD = Property
    LABEL = "property"


class QuizQuestionModel(TableModel):
    """Quiz question database operations (display order)"""
    TABLE = AppConfig.QUIZ_TABLE
    ORDER_COLUMN = 'order_index'
    ORDER_DESC = False
    RECORD = QuizQuestion
    LABEL = "quiz question"

    @classmethod
    def create(cls, draft: QuizQuestionDraft, client=None) -> OperationResult:
        problems = draft.validation_errors()
        if problems:
            return OperationResult.failure(ErrorKind.VALIDATION, "; ".join(problems))
        return super().create(draft, client)

    @classmethod
    def update(cls, record: QuizQuestion, client=None) -> OperationResult:
        problems = record.validation_errors()
        if problems:
            return OperationResult.failure(ErrorKind.VALIDATION, "; ".join(problems))
        return super().update(record, client)


class ProfileModel:
    """Read-only access to the profiles table (role lookups)"""

    @staticmethod
    def get_role(user_id: str, client=None) -> Optional[str]:
        """Get the role stored for a user, or None when unknown"""
        supabase = _resolve(client)
        if not supabase or not user_id:
            return None

        try:
            response = supabase.table(AppConfig.PROFILES_TABLE) \
                .select('role') \
                .eq('id', user_id) \
                .execute()
            return response.data[0].get('role') if response.data else None
        except Exception as e:
            logger.error(f"Error getting role for user {user_id}: {e}")
            return None
