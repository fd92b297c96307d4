"""
Admin Panel Controller
======================
UI-independent state and handlers behind the admin dashboard.

The Streamlit pages only render what this object holds and call its handlers;
the controller talks to the table models and keeps the two record stores in
sync with Supabase (read-after-write by default).

State per collection:
    viewing -> editing (start_edit_*) -> saved (handle_update_*) -> viewing
                                      -> cancelled (cancel_edit_*) -> viewing
Only one edit target exists per collection; starting another edit replaces it.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable, Optional

from config import AppConfig
from utils.auth import ANONYMOUS, AuthContext
from utils.data.record_store import RecordStore
from utils.database.models import PropertyModel, QuizQuestionModel
from utils.database.results import ErrorKind, OperationResult
from utils.database.schemas import (
    Property,
    PropertyDraft,
    QuizQuestion,
    QuizQuestionDraft,
)

logger = logging.getLogger(__name__)

PROPERTIES_TAB = "properties"
QUIZ_TAB = "quiz"
TABS = (PROPERTIES_TAB, QUIZ_TAB)


@dataclass
class PanelError:
    """Most recent failure, surfaced by the page."""
    operation: str
    reason: str
    kind: Optional[ErrorKind] = None

    def __str__(self) -> str:
        return f"{self.operation}: {self.reason}"


class AdminPanel:
    """State and handlers for the properties / quiz questions admin panel."""

    def __init__(self,
                 property_model=PropertyModel,
                 quiz_model=QuizQuestionModel,
                 refresh_after_write: Optional[bool] = None,
                 load_timeout: Optional[float] = None):
        self.property_model = property_model
        self.quiz_model = quiz_model
        self.refresh_after_write = (
            AppConfig.REFRESH_AFTER_WRITE if refresh_after_write is None else refresh_after_write
        )
        self.load_timeout = AppConfig.LOAD_TIMEOUT_SECONDS if load_timeout is None else load_timeout

        self.auth: AuthContext = ANONYMOUS
        self.active_tab = PROPERTIES_TAB
        self.loading = True

        self.properties = RecordStore(sort_key=lambda p: p.id, descending=True)
        self.quiz_questions = RecordStore(sort_key=lambda q: (q.order_index, q.id))

        self.editing_property: Optional[Property] = None
        self.editing_question: Optional[QuizQuestion] = None
        self.show_add_property = False
        self.show_add_question = False
        self.new_property = PropertyDraft()
        self.new_question = QuizQuestionDraft()
        self.pending_delete_property: Optional[int] = None
        self.pending_delete_question: Optional[str] = None

        self.last_error: Optional[PanelError] = None
        self.last_message: Optional[str] = None

    # =========================================================================
    # AUTH GATE
    # =========================================================================

    def sync_auth(self, auth: AuthContext) -> None:
        """
        Adopt the current identity. The initial load runs only when admin
        status turns on; a non-admin context never touches the tables.
        """
        was_admin = self.auth.is_admin
        self.auth = auth

        if auth.is_admin and not was_admin:
            self.load_all()
        elif not auth.is_admin:
            self.loading = True
            self.editing_property = None
            self.editing_question = None
            self.pending_delete_property = None
            self.pending_delete_question = None

    def _denied(self, operation: str) -> Optional[OperationResult]:
        if self.auth.is_admin:
            return None
        logger.warning(f"Blocked '{operation}' for non-admin session")
        return OperationResult.failure(ErrorKind.PERMISSION, "Admin access required")

    # =========================================================================
    # LOADERS
    # =========================================================================

    def load_all(self) -> None:
        """
        Fetch both collections concurrently.

        The loading flag drops once both finish or the timeout passes; late
        responses are still fenced by the record stores.
        """
        if self._denied("load"):
            return

        self.loading = True
        executor = ThreadPoolExecutor(max_workers=2)
        try:
            futures = {
                executor.submit(self.fetch_properties): "properties",
                executor.submit(self.fetch_quiz_questions): "quiz questions",
            }
            _, not_done = wait(futures, timeout=self.load_timeout)
            for future in not_done:
                name = futures[future]
                logger.error(f"❌ Loading {name} timed out after {self.load_timeout}s")
                self._record_failure(
                    f"Error fetching {name}",
                    OperationResult.failure(ErrorKind.NETWORK, f"Timed out after {self.load_timeout}s"),
                )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
            self.loading = False

    def fetch_properties(self) -> OperationResult:
        """Replace the property list (id descending)."""
        return self._fetch(self.properties, self.property_model, "Error fetching properties")

    def fetch_quiz_questions(self) -> OperationResult:
        """Replace the quiz question list (order_index ascending)."""
        return self._fetch(self.quiz_questions, self.quiz_model, "Error fetching quiz questions")

    def _fetch(self, store: RecordStore, model, operation: str) -> OperationResult:
        denied = self._denied(operation)
        if denied:
            return denied

        token = store.begin_load()
        result = model.list_all(client=self.auth.client)
        if not result.ok:
            # Prior list stays in place (stale but consistent)
            if store.is_current(token):
                self._record_failure(operation, result)
            else:
                logger.info(f"Ignored failure from superseded {model.TABLE} load (token {token})")
            return result

        if not store.apply_load(token, result.data):
            logger.info(f"Discarded stale response for {model.TABLE} (token {token})")
        return result

    # =========================================================================
    # TABS
    # =========================================================================

    def set_active_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab

    # =========================================================================
    # PROPERTY HANDLERS
    # =========================================================================

    def open_add_property(self) -> None:
        self.show_add_property = True

    def close_add_property(self) -> None:
        self.show_add_property = False

    def handle_add_property(self, draft: Optional[PropertyDraft] = None) -> OperationResult:
        """
        Insert the draft. On success the draft resets to defaults and the form
        closes; on failure the form keeps whatever was typed.
        """
        if draft is not None:
            self.new_property = draft

        denied = self._denied("add property")
        if denied:
            return denied

        result = self.property_model.create(self.new_property, client=self.auth.client)
        if not result.ok:
            self._record_failure("Error adding property", result)
            return result

        self.new_property = PropertyDraft()
        self.show_add_property = False
        self._after_write(self.properties, self.fetch_properties, upsert=result.data)
        self.last_message = "Property added"
        return result

    def start_edit_property(self, record: Property) -> None:
        self.editing_property = record.model_copy(deep=True)

    def cancel_edit_property(self) -> None:
        self.editing_property = None

    def handle_update_property(self, edited: Optional[Property] = None) -> OperationResult:
        """Send the whole edited record. Edit mode stays on when the update fails."""
        if edited is not None:
            self.editing_property = edited

        if self.editing_property is None:
            return OperationResult.failure(ErrorKind.VALIDATION, "No property is being edited")

        denied = self._denied("update property")
        if denied:
            return denied

        result = self.property_model.update(self.editing_property, client=self.auth.client)
        if not result.ok:
            self._record_failure("Error updating property", result)
            return result

        self.editing_property = None
        self._after_write(self.properties, self.fetch_properties, upsert=result.data)
        self.last_message = "Property updated"
        return result

    def request_delete_property(self, property_id: int) -> None:
        """First step of the delete confirmation."""
        self.pending_delete_property = property_id

    def cancel_delete_property(self) -> None:
        self.pending_delete_property = None

    def handle_delete_property(self, property_id: int, confirmed: bool = True) -> Optional[OperationResult]:
        """
        Delete by id after confirmation, then refresh. A failed delete is
        reported and the row stays in the list.
        """
        self.pending_delete_property = None
        if not confirmed:
            return None

        denied = self._denied("delete property")
        if denied:
            return denied

        result = self.property_model.delete(property_id, client=self.auth.client)
        if not result.ok:
            self._record_failure("Error deleting property", result)
        else:
            self.last_message = "Property deleted"
            if self.editing_property is not None and self.editing_property.id == property_id:
                self.editing_property = None

        self._after_write(
            self.properties,
            self.fetch_properties,
            removed_id=property_id if result.ok else None,
        )
        return result

    # =========================================================================
    # QUIZ QUESTION HANDLERS
    # =========================================================================

    def open_add_question(self) -> None:
        self.show_add_question = True

    def close_add_question(self) -> None:
        self.show_add_question = False

    def handle_add_question(self, draft: Optional[QuizQuestionDraft] = None) -> OperationResult:
        """Validate and insert the question draft."""
        if draft is not None:
            self.new_question = draft

        denied = self._denied("add quiz question")
        if denied:
            return denied

        result = self.quiz_model.create(self.new_question, client=self.auth.client)
        if not result.ok:
            self._record_failure("Error adding quiz question", result)
            return result

        self.new_question = QuizQuestionDraft()
        self.show_add_question = False
        self._after_write(self.quiz_questions, self.fetch_quiz_questions, upsert=result.data)
        self.last_message = "Quiz question added"
        return result

    def start_edit_question(self, record: QuizQuestion) -> None:
        self.editing_question = record.model_copy(deep=True)

    def cancel_edit_question(self) -> None:
        self.editing_question = None

    def handle_update_question(self, edited: Optional[QuizQuestion] = None) -> OperationResult:
        if edited is not None:
            self.editing_question = edited

        if self.editing_question is None:
            return OperationResult.failure(ErrorKind.VALIDATION, "No quiz question is being edited")

        denied = self._denied("update quiz question")
        if denied:
            return denied

        result = self.quiz_model.update(self.editing_question, client=self.auth.client)
        if not result.ok:
            self._record_failure("Error updating quiz question", result)
            return result

        self.editing_question = None
        self._after_write(self.quiz_questions, self.fetch_quiz_questions, upsert=result.data)
        self.last_message = "Quiz question updated"
        return result

    def request_delete_question(self, question_id: str) -> None:
        self.pending_delete_question = question_id

    def cancel_delete_question(self) -> None:
        self.pending_delete_question = None

    def handle_delete_question(self, question_id: str, confirmed: bool = True) -> Optional[OperationResult]:
        self.pending_delete_question = None
        if not confirmed:
            return None

        denied = self._denied("delete quiz question")
        if denied:
            return denied

        result = self.quiz_model.delete(question_id, client=self.auth.client)
        if not result.ok:
            self._record_failure("Error deleting quiz question", result)
        else:
            self.last_message = "Quiz question deleted"
            if self.editing_question is not None and self.editing_question.id == question_id:
                self.editing_question = None

        self._after_write(
            self.quiz_questions,
            self.fetch_quiz_questions,
            removed_id=question_id if result.ok else None,
        )
        return result

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _after_write(self, store: RecordStore, refetch: Callable[[], OperationResult],
                     upsert: Any = None, removed_id: Any = None) -> None:
        """Resynchronize local state after a write."""
        if self.refresh_after_write:
            refetch()
            return

        if upsert is not None:
            store.upsert(upsert)
        if removed_id is not None:
            store.remove(removed_id)

    def _record_failure(self, operation: str, result: OperationResult) -> None:
        self.last_error = PanelError(operation=operation, reason=result.error or "Unknown error", kind=result.kind)
        logger.error(f"❌ {self.last_error}")

    def clear_messages(self) -> None:
        self.last_error = None
        self.last_message = None

    def stats(self) -> dict:
        """Counts for the sidebar."""
        return {
            'properties': len(self.properties),
            'quiz_questions': len(self.quiz_questions),
        }
