import streamlit as st

from core.exceptions import WriteError
from core.helpers import render_sidebar, severity_badge, format_wait
from core.session_manager import get_queue
from core.time_utils import minutes_waiting
from models.patient_record import STATUS_WAITING, STATUS_SERVED

TABLE_COLUMNS = [1, 3, 1, 1, 2, 2, 2, 1]


def render_add_form(queue):
    st.subheader("Add New Patient")

    with st.form("patient_form", clear_on_submit=True):
        name = st.text_input("Name", placeholder="Jane Doe")
        c1, c2 = st.columns(2)
        with c1:
            age = st.number_input("Age", min_value=0, max_value=150, step=1)
        with c2:
            severity = st.slider("Severity (1-5)", min_value=1, max_value=5, value=1)
        checkup = st.text_input("Checkup", placeholder="General, X-Ray, Blood test...")
        submitted = st.form_submit_button("Add Patient")

    if submitted:
        try:
            record_id = queue.admit(name, int(age), int(severity), checkup)
        except (ValueError, WriteError) as e:
            st.error(str(e))
            return
        st.session_state["flash"] = f"Added {name.strip()} to the queue (#{record_id})."
        st.rerun()


def render_queue_table(queue, query: str):
    rows = queue.filter(query)

    if not queue.waiting():
        st.info("No patients waiting right now.")
        return
    if not rows:
        st.info("No waiting patients match your search.")
        return

    header = st.columns(TABLE_COLUMNS)
    for col, label in zip(
        header,
        ["#", "Name", "Age", "Severity", "Checkup", "Waiting", "Est. Wait", ""],
    ):
        col.markdown(f"**{label}**")

    for position, p in rows:
        cols = st.columns(TABLE_COLUMNS)
        cols[0].write(position + 1)
        cols[1].write(p.name)
        cols[2].write(p.age)
        cols[3].markdown(severity_badge(p.severity))
        cols[4].write(p.checkup or "—")
        cols[5].write(format_wait(minutes_waiting(p.visit_time)))
        cols[6].write(format_wait(queue.estimated_wait(position)))
        if cols[7].button("Served", key=f"serve_{p.id}"):
            if queue.serve(p.id):
                st.rerun()
            else:
                st.error(f"Could not mark {p.name} as served.")


def main():
    st.set_page_config(
        page_title="Hospital Patient Queue",
        page_icon="🏥",
        layout="wide",
    )

    queue = get_queue()
    render_sidebar()

    st.title("Hospital Patient Queue")

    flash = st.session_state.pop("flash", None)
    if flash:
        st.success(flash)

    counts = queue.summary()
    m1, m2 = st.columns(2)
    m1.metric("Waiting", counts[STATUS_WAITING])
    m2.metric("Served", counts[STATUS_SERVED])

    st.write("---")
    render_add_form(queue)

    st.write("---")
    query = st.text_input("Search Patient", key="search", placeholder="Type to filter by name...")

    st.subheader("Queue")
    render_queue_table(queue, query)

    c1, c2 = st.columns([1, 4])
    with c1:
        if queue.waiting() and st.button("Call Next Patient", type="primary"):
            head = queue.call_next()
            if head is not None:
                st.session_state["last_called"] = head.name
            st.rerun()
    with c2:
        if st.button("Refresh"):
            queue.invalidate()
            st.rerun()

    last_called = st.session_state.get("last_called")
    if last_called:
        st.success(f"Calling: **{last_called}**")


if __name__ == "__main__":
    main()
