import os
import boto3
from botocore.exceptions import ClientError
from dotenv import load_dotenv

load_dotenv()

AWS_REGION = os.getenv("AWS_REGION")
LOG_GROUP_NAME = os.getenv("LOG_GROUP_NAME", "/service/dev/somelogs")
LOG_STREAM_NAME = os.getenv("LOG_STREAM_NAME", "yes")

def get_logs_client(region=AWS_REGION):
    """Creates a CloudWatch Logs client. Credentials come from the standard boto3 chain."""
    if region:
        return boto3.client("logs", region_name=region)
    return boto3.client("logs")

def put_log_event(client, event, log_group=LOG_GROUP_NAME, log_stream=LOG_STREAM_NAME):
    """Submits a single event to the given log group/stream."""
    return client.put_log_events(
        logGroupName=log_group,
        logStreamName=log_stream,
        logEvents=[event.to_dict()]
    )

def ensure_log_stream(client, log_group=LOG_GROUP_NAME, log_stream=LOG_STREAM_NAME):
    """Creates the log stream if it does not exist yet. Returns True when it was created."""
    try:
        client.create_log_stream(logGroupName=log_group, logStreamName=log_stream)
        print(f"[Info] Created log stream {log_group}:{log_stream}")
        return True
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") == "ResourceAlreadyExistsException":
            return False
        raise

def get_recent_events(client, log_group=LOG_GROUP_NAME, log_stream=LOG_STREAM_NAME, limit=20):
    """Returns the newest events of a stream, oldest first."""
    response = client.get_log_events(
        logGroupName=log_group,
        logStreamName=log_stream,
        limit=limit,
        startFromHead=False
    )
    return response.get("events", [])
