from datetime import datetime, timezone
from logpump.ingestion.cloudwatch import LOG_GROUP_NAME, LOG_STREAM_NAME, get_logs_client, get_recent_events

def check_logs(client=None, limit=20):
    client = client or get_logs_client()
    events = get_recent_events(client, LOG_GROUP_NAME, LOG_STREAM_NAME, limit=limit)

    print(f"Stream: {LOG_GROUP_NAME}:{LOG_STREAM_NAME}")
    print(f"Recent Events: {len(events)}")
    if events:
        newest = max(e["timestamp"] for e in events)
        last_update = datetime.fromtimestamp(newest / 1000, tz=timezone.utc)
        print(f"Last Update: {last_update}")
        print(f"Last Message: {events[-1].get('message', '')}")
    else:
        print("Last Update: None")
    return events

if __name__ == "__main__":
    check_logs()
