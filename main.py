import functions_framework
from logpump.ingestion.commit_poller import main

@functions_framework.cloud_event
def gcp_entry_point(cloud_event):
    """
    Entry point for a scheduled trigger (Cloud Scheduler -> Pub/Sub).
    Each tick forwards exactly one message.
    """
    print(f"Triggered by Cloud Scheduler. Event ID: {cloud_event.get('id')}")
    main()
