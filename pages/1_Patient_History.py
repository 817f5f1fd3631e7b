import streamlit as st
from core.helpers import render_sidebar, record_rows
from core.session_manager import init_session_state, get_settings, get_store
from services.patient_service import load_history, search_by_name


def main():
    init_session_state()
    render_sidebar()

    st.title("Visit History")
    st.write("Every patient seen or waiting, newest first.")

    settings = get_settings()
    store = get_store()

    search_query = st.text_input("Search by name", placeholder="e.g., Anna").strip()

    if search_query:
        with store.session() as db:
            records = search_by_name(db, search_query)
        st.caption(f"{len(records)} record(s) matching “{search_query}”")
    else:
        limit = st.number_input(
            "Rows to show (0 = all)",
            min_value=0,
            value=settings.history_limit,
            step=10,
        )
        with store.session() as db:
            records = load_history(db, int(limit))

    if not records:
        st.info("No records found.")
        st.stop()

    st.dataframe(record_rows(records), use_container_width=True, hide_index=True)

    if st.button("Back to Queue", use_container_width=True):
        st.switch_page("app.py")


if __name__ == "__main__":
    main()
