"""
Quiz Questions Manager - Admin Section
Bilingual quiz questions: list, edit, add, delete
"""

import streamlit as st
from pydantic import ValidationError

from utils.data.admin_panel import AdminPanel
from utils.database.schemas import QuizQuestion, QuizQuestionDraft, parse_options


def render_quiz_questions_tab(panel: AdminPanel):
    """Render the quiz question list (display order) with add/edit/delete."""

    col1, col2 = st.columns([3, 1])
    with col1:
        st.subheader("Quiz Questions Management")
    with col2:
        if st.button("➕ Add Question", use_container_width=True, key="open_add_question"):
            panel.open_add_question()
            st.rerun()

    if panel.show_add_question:
        render_add_question_form(panel)

    questions = panel.quiz_questions.items()
    if not questions:
        if panel.quiz_questions.loaded:
            st.info("📝 No quiz questions yet.")
        else:
            st.warning("Quiz questions have not loaded yet.")
        return

    for question in questions:
        with st.container(border=True):
            if panel.editing_question is not None and panel.editing_question.id == question.id:
                render_edit_question_form(panel)
            else:
                render_question_row(panel, question)


def render_question_row(panel: AdminPanel, question: QuizQuestion):
    col1, col2, col3 = st.columns([4, 1, 1])

    with col1:
        st.markdown(f"**{question.order_index}. {question.question}**")
        st.caption(question.question_en)
        st.markdown(f"Options: {', '.join(question.options)}")
        if question.options_en:
            st.caption(f"Options (EN): {', '.join(question.options_en)}")

    with col2:
        if st.button("✏️ Edit", key=f"edit_question_{question.id}", use_container_width=True):
            begin_edit_question(panel, question)
            st.rerun()

    with col3:
        if st.button("🗑️ Delete", key=f"delete_question_{question.id}", use_container_width=True):
            panel.request_delete_question(question.id)
            st.rerun()

    if panel.pending_delete_question == question.id:
        st.warning("Are you sure you want to delete this question?")
        confirm_col, cancel_col, _ = st.columns([1, 1, 3])
        with confirm_col:
            if st.button("Yes, delete", key=f"confirm_delete_question_{question.id}", type="primary"):
                panel.handle_delete_question(question.id, confirmed=True)
                st.rerun()
        with cancel_col:
            if st.button("Cancel", key=f"cancel_delete_question_{question.id}"):
                panel.cancel_delete_question()
                st.rerun()


def begin_edit_question(panel: AdminPanel, question: QuizQuestion):
    """Switch the edit target, dropping widget values left by earlier edits."""
    if panel.editing_question is not None:
        _clear_widget_state(f"edit_question_{panel.editing_question.id}")
    _clear_widget_state(f"edit_question_{question.id}")
    panel.start_edit_question(question)


def question_form_fields(values: QuizQuestionDraft, key_prefix: str) -> dict:
    """Input widgets shared by the add and edit forms. Options are one per line."""
    col1, col2 = st.columns(2)

    with col1:
        question = st.text_area("Question", value=values.question, key=f"{key_prefix}_question")
        options = st.text_area(
            "Options (one per line)",
            value="\n".join(values.options),
            key=f"{key_prefix}_options",
        )

    with col2:
        question_en = st.text_area("Question (English)", value=values.question_en, key=f"{key_prefix}_question_en")
        options_en = st.text_area(
            "Options in English (one per line)",
            value="\n".join(values.options_en),
            key=f"{key_prefix}_options_en",
        )

    order_index = st.number_input(
        "Order", value=int(values.order_index), step=1, key=f"{key_prefix}_order_index"
    )

    return {
        'question': question,
        'question_en': question_en,
        'options': parse_options(options),
        'options_en': parse_options(options_en),
        'order_index': order_index,
    }


def render_add_question_form(panel: AdminPanel):
    with st.form("add_question_form"):
        st.markdown("**New Quiz Question**")
        values = question_form_fields(panel.new_question, "new_question")

        save_col, cancel_col, _ = st.columns([1, 1, 3])
        with save_col:
            submitted = st.form_submit_button("💾 Save", use_container_width=True)
        with cancel_col:
            cancelled = st.form_submit_button("✖️ Cancel", use_container_width=True)

    if cancelled:
        panel.close_add_question()
        st.rerun()

    if submitted:
        try:
            draft = QuizQuestionDraft(**values)
        except ValidationError as e:
            st.error(f"❌ Invalid question: {e.errors()[0].get('msg', e)}")
            return

        result = panel.handle_add_question(draft)
        if result.ok:
            _clear_widget_state("new_question")
        st.rerun()


def render_edit_question_form(panel: AdminPanel):
    target = panel.editing_question
    key_prefix = f"edit_question_{target.id}"

    with st.form(f"form_{key_prefix}"):
        values = question_form_fields(target, key_prefix)

        save_col, cancel_col, _ = st.columns([1, 1, 3])
        with save_col:
            submitted = st.form_submit_button("💾 Save", use_container_width=True)
        with cancel_col:
            cancelled = st.form_submit_button("✖️ Cancel", use_container_width=True)

    if cancelled:
        panel.cancel_edit_question()
        _clear_widget_state(key_prefix)
        st.rerun()

    if submitted:
        try:
            edited = QuizQuestion(id=target.id, **values)
        except ValidationError as e:
            st.error(f"❌ Invalid question: {e.errors()[0].get('msg', e)}")
            return

        result = panel.handle_update_question(edited)
        if result.ok:
            _clear_widget_state(key_prefix)
        st.rerun()


def _clear_widget_state(key_prefix: str):
    for key in [k for k in st.session_state.keys() if str(k).startswith(f"{key_prefix}_")]:
        del st.session_state[key]
