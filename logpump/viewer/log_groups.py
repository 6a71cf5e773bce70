from enum import Enum

from botocore.exceptions import BotoCoreError, ClientError
from rapidfuzz import fuzz
from rapidfuzz.distance import LCSseq

MIN_SEARCH_SCORE = 5


class LoadingState(Enum):
    IDLE = "Idle"
    LOADING = "Loading"
    LOADED = "Loaded"
    ERROR = "Error"


def list_log_groups(client):
    """Returns every log group name visible to the current credentials."""
    names = []
    paginator = client.get_paginator("describe_log_groups")
    for page in paginator.paginate():
        for group in page.get("logGroups", []):
            name = group.get("logGroupName")
            if name:
                names.append(name)
    return names

def fuzzy_score(candidate: str, term: str):
    """Scores term against candidate, case-insensitive, 0-100.

    Every character of term has to appear in candidate in the same order,
    otherwise there is no match and None is returned. Matches are ranked
    by the best aligned substring, so contiguous runs score highest.
    """
    if not term:
        return 0

    text = candidate.lower()
    needle = term.lower()
    if LCSseq.similarity(needle, text) < len(needle):
        return None
    return fuzz.partial_ratio(needle, text)

def search_log_groups(groups, term):
    """Keeps the groups matching term, in listing order."""
    if not term:
        return list(groups)
    matches = []
    for group in groups:
        score = fuzzy_score(group, term)
        if score is not None and score > MIN_SEARCH_SCORE:
            matches.append(group)
    return matches


class LogGroupList:
    """Log group names plus the search currently applied to them."""

    def __init__(self, search_term=""):
        self.log_groups = []
        self.loading_state = LoadingState.IDLE
        self.error = None
        self.search_term = search_term

    @property
    def needs_refresh(self):
        return self.loading_state in (LoadingState.IDLE, LoadingState.ERROR)

    def refresh(self, client):
        """Reloads the names. AWS errors leave an empty list and the ERROR state."""
        self.loading_state = LoadingState.LOADING
        try:
            self.log_groups = list_log_groups(client)
        except (ClientError, BotoCoreError) as e:
            self.loading_state = LoadingState.ERROR
            self.error = str(e)
            self.log_groups = []
            print(f"[Error] Could not list log groups: {e}")
        else:
            self.loading_state = LoadingState.LOADED
            self.error = None
        return self.visible()

    def visible(self):
        return search_log_groups(self.log_groups, self.search_term)
