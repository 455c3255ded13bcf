"""Streamlit front-end for the inventory reconciliation pipeline."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from inventory_recon.application.backup.use_cases import ExportBackupUseCase, ImportBackupUseCase
from inventory_recon.application.dto import PasteBatch, RecordQuery, StatusFilter
from inventory_recon.application.use_cases import (
    SORTABLE_FIELDS,
    ClearInventoryUseCase,
    DeleteRecordUseCase,
    ImportRecordsUseCase,
    ReconcileBatchUseCase,
    SummarizeInventoryUseCase,
    query_records,
)
from inventory_recon.application.users.use_cases import (
    AuthenticateUserUseCase,
    BootstrapAdminUseCase,
    DeleteUserUseCase,
    SaveUserUseCase,
)
from inventory_recon.config import SETTINGS
from inventory_recon.domain.models import UserAccount, UserRole
from inventory_recon.errors import FormatError, InventoryReconError, UserAccountError, ValidationError
from inventory_recon.infrastructure.repositories.json_repositories import (
    JsonInventoryRepository,
    JsonUserRepository,
)
from inventory_recon.infrastructure.storage.json_store import JsonKeyValueStore
from inventory_recon.logging_config import configure_logging
from inventory_recon.presentation.report import (
    CSV_FILENAME,
    EXCEL_FILENAME,
    format_currency,
    records_to_dataframe,
    render_csv,
    render_excel,
    warehouse_dataframe,
)

configure_logging()

st.set_page_config(page_title="Inventory Reconciliation", layout="wide")
st.title("Inventory Reconciliation")

store = JsonKeyValueStore()
inventory_repo = JsonInventoryRepository(store)
user_repo = JsonUserRepository(store)

PASTE_FIELDS = [
    ("codes", "Material (code)", "3005..."),
    ("descriptions", "Short description", "RACK GEAR..."),
    ("warehouses", "Warehouse", "DAGR..."),
    ("system_quantities", "System quantity", "1..."),
    ("physical_quantities", "Physical count", "1..."),
    ("total_values", "System value", "R$ 5.300,10"),
]

if "user" not in st.session_state:
    st.session_state["user"] = None
if "preview" not in st.session_state:
    st.session_state["preview"] = None


def rerun_with_notice(message: str) -> None:
    """Rerun the script and show `message` on the next pass."""
    st.session_state["notice"] = message
    st.rerun()


def render_login() -> None:
    bootstrap = BootstrapAdminUseCase(user_repo)
    if bootstrap.needed():
        st.subheader("Create the first administrator")
        with st.form("bootstrap_form"):
            name = st.text_input("Full name")
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Create administrator")
        if submitted:
            try:
                st.session_state["user"] = bootstrap.execute(username, password, name)
            except UserAccountError as exc:
                st.error(str(exc))
            else:
                st.rerun()
        return

    st.subheader("Sign in")
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")
    if submitted:
        user = AuthenticateUserUseCase(user_repo).execute(username, password)
        if user is None:
            st.error("Invalid username or password")
        else:
            st.session_state["user"] = user
            st.rerun()


def render_import() -> None:
    st.caption("Copy the columns from your spreadsheet and paste each one below.")
    cols = st.columns(3)
    values = {}
    for idx, (key, label, placeholder) in enumerate(PASTE_FIELDS):
        with cols[idx % 3]:
            values[key] = st.text_area(label, placeholder=placeholder, key=f"paste_{key}", height=180)

    if st.button("Process divergences"):
        try:
            st.session_state["preview"] = ReconcileBatchUseCase().execute(PasteBatch(**values))
        except ValidationError as exc:
            st.session_state["preview"] = None
            st.error(f"Paste at least the material codes ({exc}).")

    preview = st.session_state.get("preview")
    if not preview:
        return
    st.subheader(f"Preview ({len(preview.records)} items)")
    st.dataframe(records_to_dataframe(preview.records).drop(columns=["id"]), use_container_width=True)
    col_discard, col_save = st.columns(2)
    with col_discard:
        if st.button("Discard"):
            st.session_state["preview"] = None
            st.rerun()
    with col_save:
        if st.button("Save to database"):
            ImportRecordsUseCase(inventory_repo).execute(preview.records)
            st.session_state["preview"] = None
            for key, _, _ in PASTE_FIELDS:
                st.session_state.pop(f"paste_{key}", None)
            rerun_with_notice("Items recorded successfully.")


def render_dashboard() -> None:
    stats = SummarizeInventoryUseCase(inventory_repo).execute()
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Materials", stats.total_items, help="Items counted")
    c2.metric(
        "Accuracy",
        f"{stats.accuracy_percentage:.1f}%",
        delta="on target" if stats.meets_target(SETTINGS.accuracy_target) else "below target",
        delta_color="normal" if stats.meets_target(SETTINGS.accuracy_target) else "inverse",
    )
    c3.metric("Net divergence", format_currency(stats.net_divergence_value))
    c4.metric("Total system value", format_currency(stats.total_system_value))

    chart_df = warehouse_dataframe(stats.divergence_by_warehouse)
    if not chart_df.empty:
        st.subheader("Absolute value divergence by warehouse")
        st.bar_chart(chart_df.set_index("warehouse"))


def render_records() -> None:
    records = inventory_repo.list_records()
    col_search, col_status, col_sort, col_dir = st.columns([3, 2, 2, 1])
    with col_search:
        search = st.text_input("Search code, warehouse or description")
    with col_status:
        status = st.selectbox("Status", [s.value for s in StatusFilter])
    with col_sort:
        sort_key = st.selectbox("Sort by", ["", *SORTABLE_FIELDS])
    with col_dir:
        descending = st.checkbox("Desc")

    view = query_records(
        records,
        RecordQuery(search=search, status=StatusFilter(status), sort_key=sort_key or None, descending=descending),
    )
    df = records_to_dataframe(view)
    df.insert(0, "delete", False)
    edited = st.data_editor(df, hide_index=True, disabled=list(df.columns[1:]), use_container_width=True)
    st.caption(f"Showing {len(view)} of {len(records)} records")

    col_del, col_csv, col_xlsx, col_clear = st.columns(4)
    with col_del:
        if st.button("Delete selected"):
            use_case = DeleteRecordUseCase(inventory_repo)
            for record_id in edited.loc[edited["delete"].astype(bool), "id"]:
                use_case.execute(record_id)
            st.rerun()
    with col_csv:
        st.download_button("Export CSV", data=render_csv(view), file_name=CSV_FILENAME, mime="text/csv")
    with col_xlsx:
        st.download_button(
            "Export Excel",
            data=render_excel(view),
            file_name=EXCEL_FILENAME,
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
    with col_clear:
        confirm = st.checkbox("Confirm clearing ALL data")
        if st.button("Clear all", disabled=not confirm):
            ClearInventoryUseCase(inventory_repo).execute()
            st.rerun()


def render_users(current: UserAccount) -> None:
    users = user_repo.list_users()
    st.dataframe(
        pd.DataFrame([{"name": u.name, "username": u.username, "role": u.role.value} for u in users]),
        hide_index=True,
    )

    options = {"New user": None, **{f"{u.name} ({u.username})": u for u in users}}
    choice = st.selectbox("Edit", list(options))
    editing = options[choice]
    with st.form("user_form"):
        name = st.text_input("Full name", value=editing.name if editing else "")
        username = st.text_input("Username", value=editing.username if editing else "", disabled=editing is not None)
        password = st.text_input("Password" + (" (blank keeps current)" if editing else ""), type="password")
        roles = [r.value for r in UserRole]
        role = st.selectbox("Role", roles, index=roles.index(editing.role.value) if editing else 1)
        submitted = st.form_submit_button("Save user")
    if submitted:
        try:
            SaveUserUseCase(user_repo).execute(
                name, username, password, UserRole(role), user_id=editing.id if editing else None
            )
        except UserAccountError as exc:
            st.error(str(exc))
        else:
            rerun_with_notice("User saved.")

    if editing is not None and st.button("Delete user"):
        try:
            DeleteUserUseCase(user_repo).execute(editing.id, acting_user=current)
        except UserAccountError as exc:
            st.error(str(exc))
        else:
            rerun_with_notice("User deleted.")


def render_backup() -> None:
    st.caption("The backup includes inventory and users.")
    backup = ExportBackupUseCase(inventory_repo, user_repo).execute()
    st.download_button("Export full backup", data=backup.content, file_name=backup.name, mime="application/json")
    uploaded = st.file_uploader("Import full backup", type=["json"])
    if uploaded is not None and st.button("Replace data with this backup"):
        try:
            ImportBackupUseCase(inventory_repo, user_repo).execute(uploaded.read())
        except FormatError as exc:
            st.error(f"Import failed; check that this is a valid backup. ({exc})")
        else:
            st.session_state["user"] = None
            rerun_with_notice("Data imported. Please sign in again.")


def render_app(user: UserAccount | None) -> None:
    if user is None:
        render_login()
        return

    with st.sidebar:
        st.write(f"**{user.name}**")
        st.caption(user.role.value.lower())
        if st.button("Sign out"):
            st.session_state["user"] = None
            st.session_state["preview"] = None
            st.rerun()

    if user.is_admin:
        tabs = st.tabs(["Dashboard", "Register inventory", "Database", "Users", "Backup"])
        with tabs[0]:
            render_dashboard()
        with tabs[1]:
            render_import()
        with tabs[2]:
            render_records()
        with tabs[3]:
            render_users(user)
        with tabs[4]:
            render_backup()
    else:
        render_import()


notice = st.session_state.pop("notice", None)
if notice:
    st.success(notice)

try:
    render_app(st.session_state["user"])
except InventoryReconError as exc:
    st.error(f"Stored data could not be read: {exc}")
