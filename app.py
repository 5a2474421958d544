"""
Textile Mill Dashboard — Interactive Dashboard

Run with:  streamlit run app.py
"""

import logging
from datetime import date

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st
import streamlit.components.v1 as components

from textile_dashboard.activity import ActivityTracker, JsonFileKeyValueStore, get_time_ago
from textile_dashboard.config import (
    ACTIVITY_FILE,
    ANALYTICS_COLORS,
    APP_NAME,
    DASHBOARD_COLORS,
    DEFAULT_ACCOUNT_ID,
    PRODUCTION_TYPES,
)
from textile_dashboard.dashboard import DashboardCache, load_production_analytics
from textile_dashboard.library import (
    SORT_OPTIONS,
    BookValidationError,
    filter_books,
    format_file_size,
    format_upload_date,
    load_books,
    record_download,
    record_view,
    upload_book,
)
from textile_dashboard.links import to_preview_url, to_thumbnail_url
from textile_dashboard.models import BookUploadData, Uploader
from textile_dashboard.production_form import (
    QUALITY_GRADES,
    SHIFTS,
    handle_input_change,
    initial_form_data,
    submit_entry,
)
from textile_dashboard.simulator import build_sample_store
from textile_dashboard.store import SupabaseDocumentStore, get_supabase_client

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title=APP_NAME,
    page_icon="🧵",
    layout="wide",
    initial_sidebar_state="expanded",
)

PAGES = {
    "Dashboard": "/",
    "Production Analytics": "/production-data",
    "Production Entry": "/production-data",
    "Book Library": "/book-library",
    "Recent Activity": None,
}


# ---------------------------------------------------------------------------
# Store and session state
# ---------------------------------------------------------------------------
@st.cache_resource
def get_store(account_id: str):
    try:
        client = get_supabase_client()
    except Exception:
        logger.exception("Could not create Supabase client")
        client = None
    if client is not None:
        return SupabaseDocumentStore(client)
    return build_sample_store(account_id)


account_id = st.sidebar.text_input("Account", value=DEFAULT_ACCOUNT_ID)
store = get_store(account_id)
tracker = ActivityTracker(JsonFileKeyValueStore(ACTIVITY_FILE))


def refresh_recent_activity():
    st.session_state["recent_activity"] = tracker.get_history()


tracker.subscribe(refresh_recent_activity)
if "recent_activity" not in st.session_state:
    refresh_recent_activity()

cache: DashboardCache | None = st.session_state.get("dashboard_cache")
if cache is None or cache.account_id != account_id:
    if cache is not None:
        cache.dispose()
    cache = DashboardCache(store, account_id)
    st.session_state["dashboard_cache"] = cache
    cache.refresh()

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title(APP_NAME)
st.sidebar.markdown("Production, inventory and orders at a glance")
st.sidebar.divider()

page = st.sidebar.radio("Navigate", list(PAGES))
if PAGES[page]:
    tracker.add_activity(PAGES[page])

if st.sidebar.button("Refresh data"):
    cache.refresh()

st.sidebar.divider()
st.sidebar.caption("Data: Supabase" if isinstance(store, SupabaseDocumentStore) else "Data: simulated")

st.sidebar.subheader("Recent activity")
for item in st.session_state["recent_activity"][:3]:
    st.sidebar.caption(f"{item.title} · {get_time_ago(item.timestamp)}")


# ---------------------------------------------------------------------------
# Helper: stat card
# ---------------------------------------------------------------------------
def stat_card(label: str, value, color: str, prefix: str = "", suffix: str = ""):
    value_str = f"{value:,.0f}" if isinstance(value, (int, float)) else str(value)
    st.markdown(
        f"""
        <div style="background: linear-gradient(135deg, {color}22, {color}11);
                    border-left: 4px solid {color};
                    border-radius: 8px; padding: 16px; margin-bottom: 8px;">
            <div style="font-size: 13px; color: #888; font-weight: 600; text-transform: uppercase;">{label}</div>
            <div style="font-size: 28px; font-weight: 700; color: #222; margin: 4px 0;">{prefix}{value_str}{suffix}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


# ===========================================================================
# PAGE: Dashboard
# ===========================================================================
if page == "Dashboard":
    st.title("Dashboard")
    overview = cache.overview
    stats = overview["stats"]

    if not overview["has_data"]:
        st.info("Start by adding inventory, creating orders, or recording production data")
    else:
        cards = [
            ("Production", stats["totalProduction"], "", ""),
            ("Recipes", stats["totalRecipes"], "", ""),
            ("Inventory", stats["inventoryItems"], "", ""),
            ("Active Orders", stats["activeOrders"], "", ""),
            ("Inventory Value", stats["totalInventoryValue"], "$", ""),
            ("Low Stock", stats["lowStockItems"], "", " items"),
            ("Revenue", stats["totalRevenue"], "$", ""),
            ("Pending Revenue", stats["pendingRevenue"], "$", ""),
        ]
        cols = st.columns(4)
        for i, (label, value, prefix, suffix) in enumerate(cards):
            with cols[i % 4]:
                stat_card(label, value, DASHBOARD_COLORS[i % len(DASHBOARD_COLORS)], prefix, suffix)

        st.divider()

        trend = pd.DataFrame(overview["production_trend"])
        if not trend.empty:
            st.subheader("Production & Recipes — last 7 months")
            fig = go.Figure()
            fig.add_trace(go.Scatter(
                x=trend["name"], y=trend["batches"], name="Production batches",
                mode="lines", fill="tozeroy", line=dict(color=DASHBOARD_COLORS[1]),
            ))
            fig.add_trace(go.Scatter(
                x=trend["name"], y=trend["recipes"], name="Recipes",
                mode="lines", fill="tozeroy", line=dict(color=DASHBOARD_COLORS[0]),
            ))
            fig.update_layout(height=350, plot_bgcolor="rgba(0,0,0,0)")
            st.plotly_chart(fig, use_container_width=True)

        col1, col2 = st.columns(2)
        with col1:
            status_df = pd.DataFrame(overview["order_status"])
            if not status_df.empty:
                st.subheader("Order Status")
                fig = px.pie(status_df, names="name", values="value",
                             color_discrete_sequence=DASHBOARD_COLORS)
                st.plotly_chart(fig, use_container_width=True)
        with col2:
            category_df = pd.DataFrame(overview["inventory_categories"])
            if not category_df.empty:
                st.subheader("Inventory by Category")
                fig = px.bar(category_df, x="name", y="value",
                             color_discrete_sequence=DASHBOARD_COLORS)
                fig.update_layout(xaxis_title="", yaxis_title="Items", plot_bgcolor="rgba(0,0,0,0)")
                st.plotly_chart(fig, use_container_width=True)


# ===========================================================================
# PAGE: Production Analytics
# ===========================================================================
elif page == "Production Analytics":
    st.title("Production Analytics")
    production_type = st.selectbox("Department", list(PRODUCTION_TYPES), format_func=str.title)
    analytics = load_production_analytics(store, account_id, production_type)

    monthly = pd.DataFrame(analytics["monthly"])
    if monthly.empty:
        st.warning("No production data available yet.")
    else:
        col1, col2 = st.columns([2, 1])
        with col1:
            st.subheader("Monthly Production")
            fig = go.Figure()
            fig.add_trace(go.Bar(
                x=monthly["name"], y=monthly["production"],
                name=analytics["production_label"], marker_color=ANALYTICS_COLORS[0],
            ))
            fig.add_trace(go.Scatter(
                x=monthly["name"], y=monthly["entries"], name="Entries",
                mode="lines+markers", yaxis="y2", line=dict(color=ANALYTICS_COLORS[3]),
            ))
            fig.update_layout(
                height=400,
                yaxis_title=analytics["production_label"],
                yaxis2=dict(title="Entries", overlaying="y", side="right"),
                plot_bgcolor="rgba(0,0,0,0)",
            )
            st.plotly_chart(fig, use_container_width=True)
        with col2:
            st.subheader(analytics["distribution_label"])
            dist = pd.DataFrame(analytics["distribution"])
            fig = px.pie(dist, names="name", values="value",
                         color_discrete_sequence=ANALYTICS_COLORS)
            st.plotly_chart(fig, use_container_width=True)


# ===========================================================================
# PAGE: Production Entry
# ===========================================================================
elif page == "Production Entry":
    st.title("Record Production")
    production_type = st.selectbox("Department", list(PRODUCTION_TYPES), format_func=str.title)
    registry = PRODUCTION_TYPES[production_type]

    form_key = f"form_{production_type}"
    if form_key not in st.session_state:
        st.session_state[form_key] = initial_form_data(production_type, date.today())
    form = st.session_state[form_key]

    def update(field, value):
        st.session_state[form_key] = handle_input_change(
            st.session_state[form_key], production_type, field, value
        )

    col1, col2, col3 = st.columns(3)
    with col1:
        update("date", st.date_input("Date", value=pd.Timestamp(form["date"]).date()).isoformat())
        update("shift", st.selectbox("Shift", SHIFTS, index=SHIFTS.index(form["shift"])))
        update("operator", st.text_input("Operator", value=form["operator"]))
    with col2:
        update("supervisor", st.text_input("Supervisor", value=form["supervisor"]))
        update("machineNo", st.text_input("Machine No.", value=form["machineNo"]))
        update("totalHours", st.number_input("Total hours", min_value=0.0, value=float(form["totalHours"]), step=0.1))
    with col3:
        if production_type == "knitting":
            update("fabricType", st.text_input("Fabric type", value=form["fabricType"]))
            update("yarnType", st.text_input("Yarn type", value=form["yarnType"]))
        elif production_type == "dyeing":
            update("color", st.text_input("Color", value=form["color"]))
            update("batchWeight", st.number_input("Batch weight (kg)", min_value=0.0, value=float(form["batchWeight"])))
        else:
            update("style", st.text_input("Style", value=form["style"]))
            update("size", st.text_input("Size", value=form["size"]))
            update("color", st.text_input("Color", value=form["color"]))

    st.divider()
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        update(registry["target_field"], st.number_input(
            "Target", min_value=0.0, value=float(form[registry["target_field"]]), step=0.1))
    with col2:
        update(registry["quantity_field"], st.number_input(
            "Actual", min_value=0.0, value=float(form[registry["quantity_field"]]), step=0.1))
    with col3:
        st.metric("Efficiency", f"{st.session_state[form_key]['efficiency']}%")
    with col4:
        update("qualityGrade", st.selectbox(
            "Quality grade", QUALITY_GRADES, index=QUALITY_GRADES.index(form["qualityGrade"])))

    update("notes", st.text_area("Notes", value=form["notes"]))

    if st.button("Save entry", type="primary"):
        try:
            entry_id = submit_entry(store, account_id, production_type, st.session_state[form_key])
        except Exception:
            st.error("Failed to save entry. Please try again.")
        else:
            st.success(f"Saved entry {entry_id}")
            del st.session_state[form_key]
            cache.refresh()


# ===========================================================================
# PAGE: Book Library
# ===========================================================================
elif page == "Book Library":
    st.title("Book Library")

    if "books" not in st.session_state:
        st.session_state["books"] = load_books(store)
    books = st.session_state["books"]

    with st.expander("Upload Book"):
        with st.form("upload_book", clear_on_submit=True):
            book_name = st.text_input("Book Name *")
            author = st.text_input("Author Name *")
            description = st.text_area("Description")
            cover_url = st.text_input("Cover Photo URL (Google Drive) *")
            pdf_url = st.text_input("PDF URL (Google Drive) *")
            file_size = st.number_input("File size (bytes)", min_value=0, value=0, step=1)
            submitted = st.form_submit_button("Upload")
        if submitted:
            data = BookUploadData(
                book_name=book_name,
                author=author,
                description=description,
                cover_photo_url=cover_url,
                pdf_url=pdf_url,
                file_size=int(file_size),
            )
            try:
                book = upload_book(store, data, Uploader(id=account_id, display_name=account_id))
            except BookValidationError as exc:
                st.warning(str(exc))
            except Exception:
                st.error("Failed to upload book. Please try again.")
            else:
                st.session_state["books"] = [book, *books]
                st.success("Book uploaded successfully!")
                books = st.session_state["books"]

    col1, col2 = st.columns([3, 1])
    with col1:
        query = st.text_input("Search by book name, author, or description...")
    with col2:
        sort_by = st.selectbox("Sort by", SORT_OPTIONS)

    shown = filter_books(books, query, sort_by)
    if not shown:
        st.info("No books found.")

    for book in shown:
        col1, col2 = st.columns([1, 4])
        with col1:
            st.image(to_thumbnail_url(book.cover_photo_url), use_container_width=True)
        with col2:
            st.markdown(f"**{book.book_name}** — {book.author}")
            st.caption(
                f"{format_upload_date(book.upload_date)} · {format_file_size(book.file_size)} · "
                f"{book.views} views · {book.downloads} downloads"
            )
            if book.description:
                st.write(book.description)
            b1, b2 = st.columns(2)
            if b1.button("View", key=f"view_{book.id}"):
                updated = record_view(store, book)
                st.session_state["books"] = [updated if b.id == book.id else b for b in books]
                st.session_state["viewing"] = to_preview_url(book.pdf_url)
            if b2.button("Download", key=f"download_{book.id}"):
                updated, url = record_download(store, book)
                st.session_state["books"] = [updated if b.id == book.id else b for b in books]
                st.link_button("Open download", url)

    if st.session_state.get("viewing"):
        st.divider()
        components.iframe(st.session_state["viewing"], height=800)


# ===========================================================================
# PAGE: Recent Activity
# ===========================================================================
elif page == "Recent Activity":
    st.title("Recent Activity")
    history = st.session_state["recent_activity"]
    if not history:
        st.info("No recent activity.")
    for item in history:
        st.markdown(f"**{item.title}** · {get_time_ago(item.timestamp)}")
        st.caption(f"{item.description} ({item.path})")
    if history and st.button("Clear history"):
        tracker.clear()
        st.rerun()
