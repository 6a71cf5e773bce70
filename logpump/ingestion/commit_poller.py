import os
import random
import time
from dataclasses import dataclass
from typing import Optional

import requests
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

from logpump.ingestion.cloudwatch import (
    LOG_GROUP_NAME,
    LOG_STREAM_NAME,
    ensure_log_stream,
    get_logs_client,
    put_log_event,
)

load_dotenv()

SOURCE_URL = os.getenv("SOURCE_URL", "https://whatthecommit.com/index.txt")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))
MAX_SLEEP_SECONDS = int(os.getenv("MAX_SLEEP_SECONDS", "4"))
CREATE_LOG_STREAM = os.getenv("CREATE_LOG_STREAM", "false").lower() in ("1", "true", "yes")

QUOTE_CHARS = "\"'"


@dataclass
class LogEvent:
    timestamp: int
    message: str

    def to_dict(self):
        return {"timestamp": self.timestamp, "message": self.message}


@dataclass
class IterationResult:
    event: Optional[LogEvent] = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


def epoch_millis(now=None):
    """Wall-clock time as integer milliseconds since the Unix epoch."""
    if now is None:
        now = time.time()
    return int(now * 1000)

def clean_message(text):
    """Drops every double and single quote, leaves everything else untouched."""
    return text.translate(str.maketrans("", "", QUOTE_CHARS))

def fetch_message(url=SOURCE_URL, timeout=HTTP_TIMEOUT, session=None):
    """Fetches the plain-text body from the source URL. No retries."""
    http = session or requests
    response = http.get(url, timeout=timeout)
    response.raise_for_status()
    return response.text

def build_log_event(body, timestamp):
    return LogEvent(timestamp=timestamp, message=clean_message(body))

def next_sleep_seconds(rng=random, max_seconds=MAX_SLEEP_SECONDS):
    """Uniform integer pause in [0, max_seconds]."""
    return rng.randint(0, max_seconds)

def run_iteration(client, url=SOURCE_URL, log_group=LOG_GROUP_NAME, log_stream=LOG_STREAM_NAME,
                  session=None, clock=time.time):
    """Fetches one message and forwards it. Failures are reported in the result, never raised."""
    timestamp = epoch_millis(clock())

    try:
        body = fetch_message(url, session=session)
    except requests.exceptions.RequestException as e:
        print(f"[Warning] Fetch from {url} failed: {e}")
        return IterationResult(error=f"fetch: {e}")

    event = build_log_event(body, timestamp)

    try:
        put_log_event(client, event, log_group=log_group, log_stream=log_stream)
    except (ClientError, BotoCoreError) as e:
        print(f"[Warning] put_log_events to {log_group}:{log_stream} failed: {e}")
        return IterationResult(event=event, error=f"submit: {e}")

    print(f"[{timestamp}] Forwarded {len(event.message)} chars to {log_group}:{log_stream}")
    return IterationResult(event=event)

def run_forever(client=None, max_iterations=None, sleep=time.sleep, rng=random, **kwargs):
    """Poll-and-forward loop. Runs until killed unless max_iterations is given."""
    if client is None:
        client = get_logs_client()

    if CREATE_LOG_STREAM:
        try:
            ensure_log_stream(client, kwargs.get("log_group", LOG_GROUP_NAME),
                              kwargs.get("log_stream", LOG_STREAM_NAME))
        except (ClientError, BotoCoreError) as e:
            print(f"[Warning] Could not create log stream: {e}")

    results = []
    iteration = 0
    while max_iterations is None or iteration < max_iterations:
        result = run_iteration(client, **kwargs)
        if max_iterations is not None:
            results.append(result)
        iteration += 1
        sleep(next_sleep_seconds(rng))
    return results

def main(event=None, context=None):
    """Entry point for a single scheduled run (cloud functions, cron)."""
    return run_iteration(get_logs_client())

if __name__ == "__main__":
    try:
        run_forever()
    except KeyboardInterrupt:
        print("[Info] Stopped.")
