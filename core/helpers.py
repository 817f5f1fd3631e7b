import streamlit as st


# -----------------------------
# Severity display
# -----------------------------
def severity_color(severity: int) -> str:
    """Streamlit color name for a severity score: 5 red, 3-4 orange, else green."""
    if severity >= 5:
        return "red"
    if severity >= 3:
        return "orange"
    return "green"


def severity_badge(severity: int) -> str:
    return f":{severity_color(severity)}[**{severity}**]"


def format_wait(minutes: int | None) -> str:
    if minutes is None:
        return "—"
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours} h {rest} min"


def record_rows(records):
    """Plain dict rows for st.dataframe."""
    return [
        {
            "ID": r.id,
            "Name": r.name,
            "Age": r.age,
            "Severity": r.severity,
            "Checkup": r.checkup or "",
            "Visit Time": r.visit_time,
            "Status": r.status,
        }
        for r in records
    ]


# -----------------------------
# Sidebar helpers
# -----------------------------
def hide_default_sidebar_nav():
    """Hide Streamlit's default multi-page navigation for a cleaner custom menu."""
    st.markdown(
        """
        <style>
        /* Hide the auto-generated Pages section */
        [data-testid="stSidebarNav"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_sidebar():
    """Render the queue sidebar menu.

    Items:
    - Patient Queue
    - Visit History
    """
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown("### Menu")
        if st.button("Patient Queue", use_container_width=True):
            st.switch_page("app.py")
        if st.button("Visit History", use_container_width=True):
            st.switch_page("pages/1_Patient_History.py")
