from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel
from typing import List, Optional
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

from logpump.ingestion.cloudwatch import LOG_GROUP_NAME, LOG_STREAM_NAME, get_logs_client
from logpump.ingestion.commit_poller import run_iteration
from logpump.viewer.log_groups import LoadingState, LogGroupList
from logpump.viewer.log_query import QUERY_WINDOW_HOURS, LogQueryError, fetch_recent_logs

load_dotenv()

app = FastAPI(title="logpump API")

_client = None

def get_client():
    """Lazily builds one shared CloudWatch Logs client."""
    global _client
    if _client is None:
        _client = get_logs_client()
    return _client

# --- API Payloads ---
class LogGroupsResponse(BaseModel):
    search: str
    log_groups: List[str]

class MessagesResponse(BaseModel):
    log_group: str
    hours: int
    messages: List[str]

class ForwardResponse(BaseModel):
    ok: bool
    timestamp: Optional[int] = None
    message: Optional[str] = None
    error: Optional[str] = None

# --- Routes ---
@app.get("/")
def health_check():
    return {"status": "healthy", "log_group": LOG_GROUP_NAME, "log_stream": LOG_STREAM_NAME}

@app.get("/log-groups", response_model=LogGroupsResponse)
def get_log_groups(search: str = "", client=Depends(get_client)):
    groups = LogGroupList(search_term=search)
    visible = groups.refresh(client)
    if groups.loading_state == LoadingState.ERROR:
        raise HTTPException(status_code=502, detail=f"Could not list log groups: {groups.error}")
    return LogGroupsResponse(search=search, log_groups=visible)

@app.get("/log-groups/messages", response_model=MessagesResponse)
def get_messages(name: str, hours: int = QUERY_WINDOW_HOURS, client=Depends(get_client)):
    if hours <= 0:
        raise HTTPException(status_code=422, detail="hours must be positive.")
    try:
        messages = fetch_recent_logs(client, name, hours=hours)
    except (ClientError, BotoCoreError, LogQueryError) as e:
        raise HTTPException(status_code=502, detail=f"Log query for {name} failed: {e}")
    return MessagesResponse(log_group=name, hours=hours, messages=messages)

@app.post("/forward", response_model=ForwardResponse)
def forward_once(client=Depends(get_client)):
    """Runs a single fetch-and-forward iteration."""
    result = run_iteration(client)
    event = result.event
    return ForwardResponse(
        ok=result.ok,
        timestamp=event.timestamp if event else None,
        message=event.message if event else None,
        error=result.error
    )
