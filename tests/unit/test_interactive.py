import io
from datetime import timedelta

import pytest
from rich.console import Console

from xhttp import InteractiveError, InvalidUrlError, Method
from xhttp.interactive import InteractiveSession
from xhttp.response import Response


class ScriptedSession(InteractiveSession):
    """Session whose prompts answer from a script instead of the terminal."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.sent = []
        super().__init__(console=Console(file=io.StringIO(), width=120), on_response=self.sent.append)

    def _ask(self, ask, prompt, **kwargs):
        if not self.answers:
            raise InteractiveError("input stream closed")
        return self.answers.pop(0)


@pytest.fixture
def fake_send(monkeypatch):
    sent_requests = []

    def send(self):
        sent_requests.append(self)
        return Response(status=200, body_bytes=b"ok", duration=timedelta(0))

    monkeypatch.setattr("xhttp.request.Request.send", send)
    return sent_requests


def test_get_without_body(fake_send):
    session = ScriptedSession(["GET", "http://localhost/users", "Accept: application/json", "", False])

    assert session.prompt_and_execute() is False

    (request,) = fake_send
    assert request.method is Method.GET
    assert request.url == "http://localhost/users"
    assert request.get_header("accept") == "application/json"
    assert request.content is None
    assert len(session.sent) == 1


def test_post_with_json_body(fake_send):
    session = ScriptedSession(["POST", "http://localhost/users", "", True, True, '{"name": "x"}', True])

    assert session.prompt_and_execute() is True

    (request,) = fake_send
    assert request.get_header("content-type") == "application/json"


def test_malformed_header_is_reprompted(fake_send):
    session = ScriptedSession(["GET", "http://localhost", "no colon here", "X-A: 1", "", False])

    session.prompt_and_execute()

    assert fake_send[0].header_items == (("X-A", "1"),)
    assert "Invalid header format" in session.console.file.getvalue()


def test_run_reports_errors_and_continues(fake_send, monkeypatch):
    session = ScriptedSession([])
    outcomes = iter([InvalidUrlError("bad"), True, False])

    def step():
        outcome = next(outcomes)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(session, "prompt_and_execute", step)

    session.run()

    assert "Invalid URL: bad" in session.console.file.getvalue()


def test_run_stops_on_closed_input():
    session = ScriptedSession([])

    with pytest.raises(InteractiveError):
        session.run()


def test_eof_becomes_interactive_error():
    session = InteractiveSession(console=Console(file=io.StringIO()))

    def ask(prompt, **kwargs):
        raise EOFError

    with pytest.raises(InteractiveError, match="Interactive prompt error"):
        session._ask(ask, "URL")
