import streamlit as st
import pandas as pd
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

from logpump.ingestion.cloudwatch import get_logs_client
from logpump.viewer.log_groups import LoadingState, LogGroupList
from logpump.viewer.log_query import QUERY_WINDOW_HOURS, LogQueryError, fetch_recent_logs

load_dotenv()

st.set_page_config(
    page_title="logpump",
    page_icon="🪵",
    layout="wide",
)

@st.cache_resource
def load_client():
    return get_logs_client()

@st.cache_data(ttl=60)
def get_messages(log_group: str, hours: int):
    messages = fetch_recent_logs(load_client(), log_group, hours=hours)
    return pd.DataFrame({"message": messages})

# One group list per browser session, reloaded until a listing succeeds
if "log_groups" not in st.session_state:
    st.session_state.log_groups = LogGroupList()
group_list = st.session_state.log_groups

st.title("🪵 Log Groups")

col1, col2, col3 = st.columns([3, 1, 1])

with col1:
    group_list.search_term = st.text_input("Search", placeholder="/service/dev")
with col2:
    hours = st.number_input("Window (hours)", min_value=1, max_value=24 * 30, value=QUERY_WINDOW_HOURS)
with col3:
    st.write("")
    refresh = st.button("Refresh", use_container_width=True)

if refresh:
    get_messages.clear()

if refresh or group_list.needs_refresh:
    with st.spinner("Loading log groups..."):
        group_list.refresh(load_client())

if group_list.loading_state == LoadingState.ERROR:
    st.error(f"Failed to list log groups: {group_list.error}")

groups = group_list.visible()
st.caption(f"{len(groups)} log groups · {group_list.loading_state.value}")

if group_list.loading_state == LoadingState.LOADED and not groups:
    st.info("No log groups match.")
elif groups:
    selected_group = st.selectbox("Log group", options=groups, index=0)

    with st.spinner(f"Querying {selected_group}..."):
        try:
            df = get_messages(selected_group, int(hours))
        except (ClientError, BotoCoreError, LogQueryError) as e:
            st.error(f"Log query failed: {e}")
            df = pd.DataFrame(columns=["message"])

    st.subheader(selected_group)
    st.caption(f"{len(df)} messages in the last {int(hours)} hours")
    st.dataframe(df, use_container_width=True, height=600)
