# screens/dashboard.py
"""
Dashboard
- Four stat cards: students, teachers, attendance rate, exams today
- Recent activity feed (latest five)
Growth figures are server values, shown as received.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd
import streamlit as st

from core.api import ApiClient, ApiError, get_client, unwrap
from core.policy import require_admin
from core.settings import load_settings
from core.ui import api_failed, page_title

log = logging.getLogger(__name__)

STATS_PATH = "/api/admin/dashboard/stats"
ACTIVITIES_PATH = "/api/admin/recent-activities"
RECENT_LIMIT = 5


def _signed(value: Any) -> Optional[str]:
    if value is None:
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return str(value)
    text = f"{num:g}"
    return f"+{text}%" if num >= 0 else f"{text}%"


def _count(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value:,}"
    return "—" if value is None else str(value)


def stat_cards(stats: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Label, display value and optional delta for each card."""
    rate = stats.get("attendanceRate")
    return [
        {"label": "Total Students", "value": _count(stats.get("totalStudents")),
         "delta": _signed(stats.get("studentGrowthPercent"))},
        {"label": "Total Teachers", "value": _count(stats.get("totalTeachers")),
         "delta": _signed(stats.get("teacherGrowthPercent"))},
        {"label": "Attendance Rate", "value": "—" if rate is None else f"{rate}%", "delta": None},
        {"label": "Exams Today", "value": _count(stats.get("examsToday")), "delta": None},
    ]


def recent_activities(payload: Any, limit: int = RECENT_LIMIT) -> List[Dict[str, Any]]:
    items = payload.get("activities") if isinstance(payload, Mapping) else payload
    if not isinstance(items, list):
        return []
    return [a for a in items if isinstance(a, Mapping)][:limit]


def load_dashboard(client: ApiClient) -> Dict[str, Any]:
    stats = unwrap(client.get(STATS_PATH)) or {}
    activities = recent_activities(client.get(ACTIVITIES_PATH))
    log.debug("Dashboard loaded with %d recent activities", len(activities))
    return {"stats": stats if isinstance(stats, Mapping) else {}, "activities": activities}


@require_admin
def render():
    settings = load_settings()
    page_title("📊 Dashboard", "Overview of your school")

    try:
        with st.spinner("Loading dashboard..."):
            data = load_dashboard(get_client(settings))
    except ApiError as e:
        api_failed(e, "Failed to fetch dashboard data")
        data = {"stats": {}, "activities": []}

    for col, card in zip(st.columns(4), stat_cards(data["stats"])):
        col.metric(card["label"], card["value"], card["delta"])

    st.divider()
    st.subheader("Recent Activity")
    if not data["activities"]:
        st.info("No recent activities found")
        return
    df = pd.DataFrame(data["activities"]).reindex(columns=["message", "time"])
    df.columns = ["Activity", "When"]
    st.dataframe(df, use_container_width=True, hide_index=True)


if __name__ == "__main__":
    render()
