import math
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px
import plotly.graph_objects as go
from datetime import date

from tracker.config import (
    CHART_COLORS,
    DATA_PATH,
    DEFAULT_TIME_RANGE,
    configure_logging,
    ensure_data_directories,
)
from tracker.domain import TIME_RANGES, TIME_RANGE_LABELS, TransactionDraft
from tracker.engine import over_budget, pie_data
from tracker.formatting import format_currency, format_signed, type_label
from tracker.services import FinanceTracker

configure_logging()
st.set_page_config(page_title="Personal Finance Visualizer", layout="wide")


if "tracker" not in st.session_state:
    ensure_data_directories()
    st.session_state.tracker = FinanceTracker.from_file(DATA_PATH)

tracker: FinanceTracker = st.session_state.tracker

st.title("Personal Finance Visualizer")

menu = st.sidebar.radio("Menu", ["📊 Dashboard", "🧾 Transactions", "💰 Budgets"])
time_range = st.sidebar.selectbox(
    "Time Range",
    options=list(TIME_RANGES),
    index=TIME_RANGES.index(DEFAULT_TIME_RANGE),
    format_func=lambda r: TIME_RANGE_LABELS[r],
)

view = tracker.view(time_range)


def breakdown_to_df(breakdown) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"category": row.category, "spent": row.spent, "limit": row.limit, "remaining": row.remaining}
            for row in breakdown
        ],
        columns=["category", "spent", "limit", "remaining"],
    )


def transactions_to_df(trans) -> pd.DataFrame:
    df = pd.DataFrame(
        [{"id": t.id, "date": t.date, "description": t.description, "amount": t.amount, "category": t.category} for t in trans],
        columns=["id", "date", "description", "amount", "category"],
    )
    df["type"] = df["amount"].map(type_label)
    df["abs_amount"] = np.abs(df["amount"].to_numpy(dtype=float))
    return df


if menu == "📊 Dashboard":
    totals = view.totals
    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Income", format_currency(totals.income))
    with k2:
        st.metric("Expenses", format_currency(totals.expenses))
    with k3:
        st.metric("Net", format_currency(totals.net))
        color = "green" if totals.net >= 0 else "red"
        st.markdown(f":{color}[{'Surplus' if totals.net >= 0 else 'Deficit'}]")

    for row in over_budget(view.breakdown):
        st.warning(f"⚠️ {row.category} is over budget by {format_currency(-row.remaining)}")

    chart_left, chart_right = st.columns(2)
    with chart_left:
        st.subheader("Spending by Category")
        pie = pd.DataFrame(pie_data(view.breakdown), columns=["name", "value"])
        if pie["value"].sum() > 0:
            fig_pie = px.pie(
                pie,
                values="value",
                names="name",
                color_discrete_sequence=CHART_COLORS,
            )
            fig_pie.update_traces(textinfo="label+percent")
            st.plotly_chart(fig_pie, use_container_width=True)
        else:
            st.info("No spending in this period.")

    with chart_right:
        st.subheader("Budget vs Actual")
        bdf = breakdown_to_df(view.breakdown)
        fig_bar = go.Figure()
        fig_bar.add_trace(go.Bar(x=bdf["category"], y=bdf["spent"], name="Spent", marker_color="#8884d8"))
        fig_bar.add_trace(go.Bar(x=bdf["category"], y=bdf["limit"], name="Budget Limit", marker_color="#82ca9d"))
        fig_bar.update_layout(barmode="group", margin=dict(t=20, b=5, l=20, r=30))
        st.plotly_chart(fig_bar, use_container_width=True)

    for alert in reversed(tracker.alerts[-5:]):
        st.error(alert["alert"])
    if tracker.alerts and st.button("Clear Alerts", key="btn_clear_alerts"):
        tracker.clear_alerts()
        st.rerun()

elif menu == "🧾 Transactions":
    st.subheader("➕ Add Transaction")
    with st.form("add_transaction", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            tx_date = st.date_input("Date", value=date.today())
            description = st.text_input("Description")
            amount = st.text_input("Amount")
        with col2:
            category = st.selectbox("Category", [b.category for b in tracker.budgets])
            tx_type = st.radio("Type", ["expense", "income"], format_func=str.capitalize, horizontal=True)
        submitted = st.form_submit_button("Add Transaction")

    if submitted:
        result = tracker.add_transaction(
            TransactionDraft(
                date=tx_date.isoformat(),
                description=description,
                amount=amount,
                category=category,
                type=tx_type,
            )
        )
        if result.is_left():
            st.error(f"❌ {result.get_error()['message']}")
        else:
            st.success("✅ Transaction added!")
            st.rerun()

    st.subheader("📋 Transaction History")
    if not view.filtered:
        st.info("No transactions found")
    else:
        df = transactions_to_df(view.filtered)
        header = st.columns([2, 4, 2, 2, 2, 1])
        for col, title in zip(header, ["Date", "Description", "Amount", "Category", "Type", ""]):
            col.markdown(f"**{title}**")
        for row in df.itertuples(index=False):
            cols = st.columns([2, 4, 2, 2, 2, 1])
            cols[0].write(row.date)
            cols[1].write(row.description)
            cols[2].markdown(f":{'green' if row.amount >= 0 else 'red'}[{format_currency(row.abs_amount)}]")
            cols[3].write(row.category)
            cols[4].write(row.type)
            if cols[5].button("Delete", key=f"del_{row.id}"):
                tracker.delete_transaction(row.id)
                st.rerun()

        csv = df.drop(columns=["abs_amount"]).to_csv(index=False)
        st.download_button("⬇ Download CSV", csv, file_name="transactions.csv", mime="text/csv")

elif menu == "💰 Budgets":
    st.subheader("Budget Management")
    by_category = {row.category: row for row in view.breakdown}
    for b in tracker.budgets:
        row = by_category.get(b.category)
        with st.container(border=True):
            st.markdown(f"### {b.category}")
            left, right = st.columns([2, 1])
            with left:
                new_limit = st.number_input(
                    "Monthly Limit",
                    min_value=0.0,
                    value=float(b.limit) if math.isfinite(b.limit) else 0.0,
                    step=10.0,
                    key=f"limit_{b.category}",
                )
            with right:
                spent = row.spent if row else 0.0
                remaining = row.remaining if row else b.limit
                st.write(f"Spent: {format_currency(spent)}")
                st.write(f"Remaining: {format_signed(remaining)}")
                if b.limit > 0:
                    st.progress(min(1.0, spent / b.limit))

            if math.isfinite(b.limit) and new_limit != b.limit:
                result = tracker.update_budget_limit(b.category, new_limit)
                if result.is_left():
                    st.error(result.get_error()["message"])
                else:
                    st.rerun()
