import os
import time

from dotenv import load_dotenv

load_dotenv()

ONE_SECOND_MS = 1000
ONE_MINUTE_MS = ONE_SECOND_MS * 60
ONE_HOUR_MS = ONE_MINUTE_MS * 60

QUERY_WINDOW_HOURS = int(os.getenv("QUERY_WINDOW_HOURS", "48"))
QUERY_TIMEOUT = float(os.getenv("QUERY_TIMEOUT", "60"))
QUERY_STRING = "fields @message"
POLL_INTERVAL = 0.25

FAILED_STATUSES = ("Failed", "Timeout", "Cancelled")


class LogQueryError(Exception):
    """A Logs Insights query ended in a non-complete status."""

    def __init__(self, status):
        super().__init__(f"Log query ended with status {status}")
        self.status = status


def _messages(results):
    # Insights returns newest first
    messages = []
    for row in results:
        for field in row:
            if field.get("field") == "@message":
                messages.append(field.get("value", ""))
    messages.reverse()
    return messages

def fetch_logs(client, log_group, start_ms, end_ms, poll_interval=POLL_INTERVAL, sleep=time.sleep,
               timeout=QUERY_TIMEOUT):
    """Runs an Insights query over [start_ms, end_ms] and waits for the messages.

    Polling stops after `timeout` seconds without a final status, which is
    reported as a Timeout failure.
    """
    # Insights takes epoch seconds
    response = client.start_query(
        logGroupName=log_group,
        startTime=start_ms // ONE_SECOND_MS,
        endTime=end_ms // ONE_SECOND_MS,
        queryString=QUERY_STRING
    )
    query_id = response["queryId"]

    status = None
    max_polls = max(1, int(timeout / poll_interval))
    for _ in range(max_polls):
        sleep(poll_interval)
        response = client.get_query_results(queryId=query_id)
        status = response.get("status")

        if status == "Complete":
            return _messages(response.get("results", []))
        if status in FAILED_STATUSES:
            raise LogQueryError(status)

    print(f"[Warning] Log query {query_id} on {log_group} still {status} after {timeout}s")
    raise LogQueryError("Timeout")

def fetch_recent_logs(client, log_group, hours=QUERY_WINDOW_HOURS, now_ms=None, **kwargs):
    """Messages of log_group from the last `hours` hours."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    start_ms = now_ms - hours * ONE_HOUR_MS
    return fetch_logs(client, log_group, start_ms, now_ms, **kwargs)
