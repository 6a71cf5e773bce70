"""Tests for the streamlit log group browser."""

import streamlit as st
from streamlit.testing.v1 import AppTest

from logpump.ingestion import cloudwatch
from logpump.viewer.log_groups import LoadingState

DASHBOARD = "../frontend/dashboard.py"


def test_listing_error_is_shown_then_retried(logs_client, stubber, monkeypatch):
    monkeypatch.setattr(cloudwatch, "get_logs_client", lambda *args, **kwargs: logs_client)
    st.cache_resource.clear()
    st.cache_data.clear()

    stubber.add_client_error("describe_log_groups", service_error_code="ThrottlingException")
    at = AppTest.from_file(DASHBOARD, default_timeout=10).run()

    assert not at.exception
    assert at.session_state["log_groups"].loading_state == LoadingState.ERROR
    assert "ThrottlingException" in at.error[0].value
    assert len(at.selectbox) == 0

    stubber.add_response(
        "describe_log_groups",
        {"logGroups": [{"logGroupName": "/service/dev/somelogs"}, {"logGroupName": "/ecs/web"}]},
    )
    stubber.add_response("start_query", {"queryId": "q"})
    stubber.add_response(
        "get_query_results",
        {"status": "Complete", "results": [[{"field": "@message", "value": "fixed it"}]]},
    )
    at.run()

    assert not at.exception
    assert at.session_state["log_groups"].loading_state == LoadingState.LOADED
    assert len(at.error) == 0
    assert at.selectbox[0].options == ["/service/dev/somelogs", "/ecs/web"]
    assert at.selectbox[0].value == "/service/dev/somelogs"
