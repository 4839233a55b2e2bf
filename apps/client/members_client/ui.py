"""
ui.py
Streamlit page for the members API.
Run: streamlit run apps/client/members_client/ui.py
"""

from __future__ import annotations

from datetime import date

import streamlit as st

from members_client.api import MembersApi
from members_client.models import MEMBERSHIP_TYPES, STATUSES, Member, format_date_for_input
from members_client.reconciler import ViewReconciler


def get_reconciler() -> ViewReconciler:
    if "reconciler" not in st.session_state:
        reconciler = ViewReconciler(MembersApi.from_settings())
        reconciler.refresh()
        st.session_state.reconciler = reconciler
        st.session_state.form_version = 0
    return st.session_state.reconciler


def bump_form() -> None:
    # Widget keys carry the version so a reset or load re-seeds the inputs.
    st.session_state.form_version += 1


def member_form(reconciler: ViewReconciler) -> None:
    form = reconciler.form
    version = st.session_state.form_version
    editing = reconciler.mode == "edit"

    st.subheader("✏️ Edit Member" if editing else "➕ Add New Member")
    if form.error:
        st.error(form.error)

    with st.form(key=f"member-form-{version}"):
        name = st.text_input("Name", value=form.name, key=f"name-{version}")
        email = st.text_input("Email", value=form.email, key=f"email-{version}")
        membership_type = st.selectbox(
            "Membership Type",
            options=MEMBERSHIP_TYPES,
            index=MEMBERSHIP_TYPES.index(form.membership_type) if form.membership_type in MEMBERSHIP_TYPES else 0,
            key=f"type-{version}",
        )
        join_date = st.date_input(
            "Join Date",
            value=date.fromisoformat(form.join_date) if form.join_date else date.today(),
            key=f"join-{version}",
        )
        status = st.selectbox(
            "Status",
            options=STATUSES,
            index=STATUSES.index(form.status) if form.status in STATUSES else 0,
            key=f"status-{version}",
        )
        submitted = st.form_submit_button("Update Member" if editing else "Add Member", type="primary")

    if editing and st.button("Cancel Edit"):
        reconciler.cancel_edit()
        bump_form()
        st.rerun()

    if submitted:
        form.name = name
        form.email = email
        form.membership_type = membership_type
        form.join_date = join_date.isoformat() if join_date else ""
        form.status = status
        if reconciler.submit() is not None:
            bump_form()
        st.rerun()


def member_row(reconciler: ViewReconciler, member: Member) -> None:
    cols = st.columns([2, 3, 1, 2, 1, 1, 2])
    cols[0].write(member.name)
    cols[1].write(member.email)
    cols[2].write(member.membership_type)
    cols[3].write(f"Joined: {format_date_for_input(member.join_date)}")
    cols[4].write(member.status)
    if cols[5].button("Edit", key=f"edit-{member.id}"):
        reconciler.begin_edit(member)
        bump_form()
        st.rerun()
    with cols[6]:
        confirmed = st.checkbox("Confirm", key=f"confirm-{member.id}")
        if st.button("Delete", key=f"delete-{member.id}", disabled=not confirmed):
            was_editing = reconciler.editing is not None and reconciler.editing.id == member.id
            if reconciler.delete(member.id, confirm=lambda _prompt: confirmed) and was_editing:
                bump_form()
            st.rerun()


def member_list(reconciler: ViewReconciler) -> None:
    if reconciler.loading:
        st.caption("Loading members...")
        return
    members = reconciler.members
    if not members:
        st.info("No members found.")
        return
    st.subheader(f"Current Members ({len(members)})")
    for member in members:
        member_row(reconciler, member)


def main() -> None:
    st.set_page_config(page_title="Gym Membership Management", layout="wide")
    st.title("🏋️ Gym Membership Management")

    reconciler = get_reconciler()
    notice = reconciler.pop_notice()
    if notice:
        st.success(notice)
    if reconciler.error:
        col1, col2 = st.columns([6, 1])
        col1.error(reconciler.error)
        if col2.button("Dismiss"):
            reconciler.dismiss_error()
            st.rerun()
    if st.button("Refresh"):
        reconciler.refresh()

    member_form(reconciler)
    st.divider()
    member_list(reconciler)


main()
