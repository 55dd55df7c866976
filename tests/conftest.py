"""Shared test doubles for the Fitbit client tests."""

import json

import requests


class TrackingResponse(requests.Response):
    """Response that counts how often it was closed."""

    def __init__(self):
        super().__init__()
        self.close_calls = 0

    def close(self):
        self.close_calls += 1
        super().close()


def make_response(status_code=200, json_body=None, content=b""):
    response = TrackingResponse()
    response.status_code = status_code
    if json_body is not None:
        content = json.dumps(json_body).encode("utf-8")
    response._content = content
    response._content_consumed = True
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    return response


class StubSession(requests.Session):
    """Session that answers from a list of canned responses instead of the network."""

    def __init__(self, responses=None, error=None):
        super().__init__()
        self.responses = list(responses or [])
        self.error = error
        self.sent = []
        self.send_kwargs = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        self.send_kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        response = self.responses.pop(0)
        response.url = request.url
        response.request = request
        return response

