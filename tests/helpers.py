from unittest.mock import MagicMock

import requests


def fake_session(*bodies):
    """A requests-like session whose GETs return the given bodies, or raise them if exceptions."""
    session = MagicMock()
    responses = []
    for body in bodies:
        if isinstance(body, Exception):
            responses.append(body)
            continue
        response = MagicMock()
        response.text = body
        response.raise_for_status.return_value = None
        responses.append(response)
    session.get.side_effect = responses
    return session


def http_error_response(status=503):
    response = MagicMock()
    response.status_code = status
    response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} Server Error")
    return response


def requests_module_with(session):
    """The requests module, except that get() goes through the fake session."""

    class _Requests:
        exceptions = requests.exceptions
        get = session.get

    return _Requests
