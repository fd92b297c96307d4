"""
Properties Management - Admin Section
List, inline edit, add and delete for the properties table
"""

import logging
from typing import List

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from utils.data.admin_panel import AdminPanel
from utils.database.schemas import Property, PropertyCategory, PropertyDraft

logger = logging.getLogger(__name__)

CATEGORIES = [c.value for c in PropertyCategory]
EXPORT_COLUMNS = [
    'id', 'title', 'category', 'type', 'location', 'price',
    'bedrooms', 'bathrooms', 'area', 'image_url', 'description',
]


def render_properties_tab(panel: AdminPanel):
    """Render the properties list with add/edit/delete controls."""

    col1, col2 = st.columns([3, 1])
    with col1:
        st.subheader("Properties Management")
    with col2:
        if st.button("➕ Add Property", use_container_width=True, key="open_add_property"):
            panel.open_add_property()
            st.rerun()

    if panel.show_add_property:
        render_add_property_form(panel)

    properties = panel.properties.items()
    if not properties:
        if panel.properties.loaded:
            st.info("No properties yet.")
        else:
            st.warning("Properties have not loaded yet.")
        return

    for prop in properties:
        with st.container(border=True):
            if panel.editing_property is not None and panel.editing_property.id == prop.id:
                render_edit_property_form(panel)
            else:
                render_property_row(panel, prop)

    render_export(properties)


def render_property_row(panel: AdminPanel, prop: Property):
    """Read-only row with Edit / Delete actions."""
    col1, col2, col3 = st.columns([4, 1, 1])

    with col1:
        st.markdown(f"**{prop.title or 'Untitled'}**")
        st.caption(f"{prop.location} - {prop.price_label} · {prop.category} · {prop.type}")

    with col2:
        if st.button("✏️ Edit", key=f"edit_property_{prop.id}", use_container_width=True):
            begin_edit_property(panel, prop)
            st.rerun()

    with col3:
        if st.button("🗑️ Delete", key=f"delete_property_{prop.id}", use_container_width=True):
            panel.request_delete_property(prop.id)
            st.rerun()

    if panel.pending_delete_property == prop.id:
        st.warning("Are you sure you want to delete this property?")
        confirm_col, cancel_col, _ = st.columns([1, 1, 3])
        with confirm_col:
            if st.button("Yes, delete", key=f"confirm_delete_property_{prop.id}", type="primary"):
                panel.handle_delete_property(prop.id, confirmed=True)
                st.rerun()
        with cancel_col:
            if st.button("Cancel", key=f"cancel_delete_property_{prop.id}"):
                panel.cancel_delete_property()
                st.rerun()


def begin_edit_property(panel: AdminPanel, prop: Property):
    """Switch the edit target, dropping widget values left by earlier edits."""
    if panel.editing_property is not None:
        _clear_widget_state(f"edit_property_{panel.editing_property.id}")
    _clear_widget_state(f"edit_property_{prop.id}")
    panel.start_edit_property(prop)


def property_form_fields(values: PropertyDraft, key_prefix: str) -> dict:
    """Input widgets shared by the add and edit forms. Returns raw values."""
    col1, col2 = st.columns(2)

    with col1:
        title = st.text_input("Title", value=values.title, key=f"{key_prefix}_title")
        location = st.text_input("Location", value=values.location, key=f"{key_prefix}_location")
        price = st.number_input("Price", value=float(values.price), step=1000.0, key=f"{key_prefix}_price")
        area = st.number_input("Area", value=float(values.area), step=1.0, key=f"{key_prefix}_area")
        image_url = st.text_input("Image URL", value=values.image_url, key=f"{key_prefix}_image_url")

    with col2:
        category = st.selectbox(
            "Category",
            CATEGORIES,
            index=CATEGORIES.index(values.category) if values.category in CATEGORIES else 1,
            key=f"{key_prefix}_category",
        )
        type_ = st.text_input("Type", value=values.type, key=f"{key_prefix}_type")
        bedrooms = st.number_input("Bedrooms", value=int(values.bedrooms), step=1, key=f"{key_prefix}_bedrooms")
        bathrooms = st.number_input("Bathrooms", value=int(values.bathrooms), step=1, key=f"{key_prefix}_bathrooms")

    description = st.text_area("Description", value=values.description, key=f"{key_prefix}_description")

    return {
        'title': title,
        'description': description,
        'price': price,
        'location': location,
        'bedrooms': bedrooms,
        'bathrooms': bathrooms,
        'area': area,
        'image_url': image_url,
        'category': category,
        'type': type_,
    }


def render_add_property_form(panel: AdminPanel):
    """New property form. Keeps typed values when the insert fails."""
    with st.form("add_property_form"):
        st.markdown("**New Property**")
        values = property_form_fields(panel.new_property, "new_property")

        save_col, cancel_col, _ = st.columns([1, 1, 3])
        with save_col:
            submitted = st.form_submit_button("💾 Save", use_container_width=True)
        with cancel_col:
            cancelled = st.form_submit_button("✖️ Cancel", use_container_width=True)

    if cancelled:
        panel.close_add_property()
        st.rerun()

    if submitted:
        try:
            draft = PropertyDraft(**values)
        except ValidationError as e:
            logger.warning(f"Rejected property form input: {e}")
            st.error(f"❌ Invalid property: {e.errors()[0].get('msg', e)}")
            return

        result = panel.handle_add_property(draft)
        if result.ok:
            _clear_widget_state("new_property")
        st.rerun()


def render_edit_property_form(panel: AdminPanel):
    """Inline edit form for the current edit target."""
    target = panel.editing_property
    key_prefix = f"edit_property_{target.id}"

    with st.form(f"form_{key_prefix}"):
        values = property_form_fields(target, key_prefix)

        save_col, cancel_col, _ = st.columns([1, 1, 3])
        with save_col:
            submitted = st.form_submit_button("💾 Save", use_container_width=True)
        with cancel_col:
            cancelled = st.form_submit_button("✖️ Cancel", use_container_width=True)

    if cancelled:
        panel.cancel_edit_property()
        _clear_widget_state(key_prefix)
        st.rerun()

    if submitted:
        try:
            edited = Property(id=target.id, **values)
        except ValidationError as e:
            logger.warning(f"Rejected property form input: {e}")
            st.error(f"❌ Invalid property: {e.errors()[0].get('msg', e)}")
            return

        result = panel.handle_update_property(edited)
        if result.ok:
            _clear_widget_state(key_prefix)
        st.rerun()


def properties_to_dataframe(properties: List[Property]) -> pd.DataFrame:
    """Tabular view of the property list, in display order."""
    df = pd.DataFrame([p.model_dump() for p in properties])
    if df.empty:
        return pd.DataFrame(columns=EXPORT_COLUMNS)
    return df[[c for c in EXPORT_COLUMNS if c in df.columns]]


def render_export(properties: List[Property]):
    """CSV download of the current list."""
    st.markdown("---")
    df = properties_to_dataframe(properties)
    st.download_button(
        label="📥 Download properties as CSV",
        data=df.to_csv(index=False),
        file_name="properties.csv",
        mime="text/csv",
        key="export_properties_csv",
    )


def _clear_widget_state(key_prefix: str):
    """Drop cached widget values so the next form render uses fresh defaults."""
    for key in [k for k in st.session_state.keys() if str(k).startswith(f"{key_prefix}_")]:
        del st.session_state[key]
