import asyncio
import sys
from pathlib import Path

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from journal_api.config import get_settings, setup_logging
from journal_api.context import ClientContext
from journal_api.schemas import PatientRecord
from journal_api.storage import MemoryStorage
from journal_ui.messages_page import NO_MESSAGES, PICK_CONTACT
from journal_ui.root import RootController, Section
from journal_ui.scope import Status
from journal_ui.tables import conditions_frame, contact_label, notes_frame

# --------------------
# Page config
# --------------------
st.set_page_config(
    page_title="Journal System Demo",
    page_icon="🩺",
    layout="centered",
)

st.markdown(
    """
<style>
.block-container {
    max-width: 980px;
    padding-top: 2rem;
    padding-bottom: 3rem;
}
h1, h2, h3 { letter-spacing: -0.2px; }
</style>
""",
    unsafe_allow_html=True,
)

WIDGET_PREFIX = "w:"


def run(coro):
    return asyncio.run(coro)


def wkey(view, attr: str) -> str:
    return f"{WIDGET_PREFIX}{view.name}:{attr}"


def bind(view, attr: str) -> str:
    """Widget key for view.<attr>, seeded from the controller the first time."""
    key = wkey(view, attr)
    if key not in st.session_state:
        st.session_state[key] = getattr(view, attr)
    return key


def action(view, method: str, attrs):
    """
    Form callback: copy widget values into the view, run the view action,
    copy the (possibly cleared) fields back into the widgets.
    Runs before the rerun, so writing widget state here is allowed.
    """
    def callback():
        for attr in attrs:
            setattr(view, attr, st.session_state.get(wkey(view, attr), ""))
        run(getattr(view, method)())
        for attr in attrs:
            st.session_state[wkey(view, attr)] = getattr(view, attr)
    return callback


def forget_widgets() -> None:
    for key in [k for k in st.session_state.keys() if str(k).startswith(WIDGET_PREFIX)]:
        del st.session_state[key]


def render_record(record: PatientRecord, fields) -> None:
    st.markdown("### Patient information")
    for label, value in fields:
        if value:
            st.markdown(f"**{label}:** {value}")

    st.markdown("### Notes")
    if not record.notes:
        st.write("No notes.")
    else:
        st.dataframe(notes_frame(record.notes), hide_index=True)

    st.markdown("### Diagnoses")
    if not record.conditions:
        st.write("No diagnoses.")
    else:
        st.dataframe(conditions_frame(record.conditions), hide_index=True)


# =========================
# Session (one controller and one session store per browser session)
# =========================
settings = get_settings()
if "root" not in st.session_state:
    setup_logging(settings.log_level)
    root = RootController(ClientContext.open(settings, storage=MemoryStorage()))
    run(root.restore())
    st.session_state.root = root

root: RootController = st.session_state.root


def do_logout():
    run(root.logout())
    forget_widgets()


# =========================
# Logged out: login / register
# =========================
if root.me is None:
    view = root.layout()[0]

    if view.name == "login":
        st.title("Log in")
        flash = st.session_state.pop("flash", "")
        if flash:
            st.success(flash)
        def submit_login(v=view):
            action(v, "submit", ["username", "password"])()
            if root.me is not None:
                forget_widgets()

        with st.form("login_form"):
            st.text_input("Username", key=bind(view, "username"))
            st.text_input("Password", type="password", key=bind(view, "password"))
            st.form_submit_button("Log in", type="primary", on_click=submit_login)
        if view.error:
            st.error(view.error)
        st.button("Create account", on_click=view.show_register)

    else:
        st.title("Create account")

        def submit_register(v=view):
            action(v, "submit", ["username", "password", "role"])()
            if v.ok:
                st.session_state["flash"] = v.ok

        with st.form("register_form"):
            st.text_input("Username", key=bind(view, "username"))
            st.text_input("Password", type="password", key=bind(view, "password"))
            st.selectbox("Role", view.roles, key=bind(view, "role"))
            st.form_submit_button("Create account", type="primary", on_click=submit_register)
        if view.error:
            st.error(view.error)
        st.button("Back to login", on_click=view.back)

    st.stop()


# =========================
# Logged in: header
# =========================
st.title("Journal System Demo")
st.caption(f"Logged in as: {root.me.username} ({root.me.role.value})")

col_journal, col_messages, col_logout = st.columns(3)
col_journal.button(
    "Journal",
    type="primary" if root.section == Section.JOURNAL else "secondary",
    on_click=root.select,
    args=(Section.JOURNAL,),
)
col_messages.button(
    "Messages",
    type="primary" if root.section == Section.MESSAGES else "secondary",
    on_click=root.select,
    args=(Section.MESSAGES,),
)
col_logout.button("Log out", on_click=do_logout)

st.markdown("---")

for view in root.layout():

    # =========================
    # Doctor/staff: write notes & diagnoses
    # =========================
    if view.name == "patient_notes":
        st.subheader("Patient journal (doctor/staff)")
        st.text_input("Patient name", key=bind(view, "patient_name"))

        with st.form("note_form"):
            st.markdown("#### New note")
            st.text_area("Note", key=bind(view, "note_text"), height=100)
            st.form_submit_button(
                "Save note", on_click=action(view, "create_note", ["patient_name", "note_text"])
            )

        with st.form("diagnosis_form"):
            st.markdown("#### New diagnosis")
            st.text_input("Code", key=bind(view, "diag_code"))
            st.text_input("Text", key=bind(view, "diag_display"))
            st.text_input("Onset date (YYYY-MM-DD, optional)", key=bind(view, "onset_date"))
            st.form_submit_button(
                "Save diagnosis",
                on_click=action(
                    view,
                    "create_diagnosis",
                    ["patient_name", "diag_code", "diag_display", "onset_date"],
                ),
            )

        if view.error:
            st.error(view.error)
        if view.message:
            st.success(view.message)
        st.markdown("---")

    # =========================
    # Doctor/staff: any patient's journal by name
    # =========================
    elif view.name == "record_viewer":
        st.subheader("View patient journal (doctor/staff)")
        with st.form("record_search"):
            st.text_input("Patient name", key=bind(view, "name_query"))
            st.form_submit_button("Show journal", on_click=action(view, "search", ["name_query"]))

        state = view.record
        if state.status == Status.FAILED:
            st.error(state.error)
        elif view.prompt_visible:
            st.info("Search for a patient to view their journal.")
        elif state.status == Status.READY:
            patient = state.data.patient
            render_record(
                state.data,
                [("Name", patient.name), ("Personnummer", patient.personnummer)],
            )

    # =========================
    # Patient: own journal
    # =========================
    elif view.name == "my_journal":
        st.subheader("My journal")
        if not view.mounted:
            with st.spinner("Loading your journal..."):
                run(view.mount())

        state = view.record
        if state.status == Status.FAILED:
            st.error(state.error)
        elif state.status == Status.READY:
            patient = state.data.patient
            render_record(
                state.data,
                [
                    ("Personnummer", patient.personnummer),
                    ("Date of birth", patient.birth_date),
                    ("Gender", patient.gender),
                    ("Contact", patient.contact_info),
                ],
            )

    # =========================
    # Messages (all roles)
    # =========================
    elif view.name == "messages":
        if not view.mounted:
            with st.spinner("Loading contacts..."):
                run(view.mount())

        col_contacts, col_thread = st.columns([1, 3])

        with col_contacts:
            st.subheader("Messages")
            st.caption(view.hint)
            for contact in view.contacts:
                selected = view.selected is not None and view.selected.id == contact.id
                st.button(
                    contact_label(contact),
                    key=f"contact:{contact.id}",
                    type="primary" if selected else "secondary",
                    on_click=lambda c=contact, v=view: run(v.open_thread(c)),
                )

        with col_thread:
            if view.error:
                st.error(view.error)

            if view.selected is None:
                st.write(PICK_CONTACT)
            else:
                st.markdown(f"#### Conversation with {contact_label(view.selected)}")
                if view.loading_thread:
                    st.write("Loading messages...")
                elif not view.thread:
                    st.write(NO_MESSAGES)
                else:
                    for m in view.thread:
                        with st.chat_message("user" if view.is_own(m) else "assistant"):
                            st.caption(f"{m.sender_name} • {m.sent_at}")
                            st.write(m.content)

                with st.form("send_form"):
                    st.text_area("Message", key=bind(view, "text"), height=80)
                    st.form_submit_button("Send", on_click=action(view, "send", ["text"]))
