"""Tests for view states and page rendering."""

from techcrush.config import AppConfig
from techcrush.models import Failed, Loaded, Loading, Message
from techcrush.render import LOADING_TEXT, render


def _branches(lines):
    return [l for l in lines if l.style in ("loading", "error", "message")]


class TestViewStates:
    def test_loading_flags(self):
        state = Loading()
        assert (state.loading, state.error, state.message) == (True, None, "")

    def test_failed_flags(self):
        state = Failed("boom")
        assert (state.loading, state.error, state.message) == (False, "boom", "")

    def test_loaded_flags(self):
        state = Loaded("hi")
        assert (state.loading, state.error, state.message) == (False, None, "hi")

    def test_message_payload(self):
        assert Message("hi").to_dict() == {"message": "hi"}


class TestRender:
    def test_loading_branch(self):
        branches = _branches(render(Loading(), AppConfig()))
        assert len(branches) == 1
        assert branches[0].text == LOADING_TEXT
        assert branches[0].style == "loading"

    def test_error_branch(self):
        branches = _branches(render(Failed("HTTP error! status: 500"), AppConfig()))
        assert len(branches) == 1
        assert branches[0].text == "Error: HTTP error! status: 500"
        assert branches[0].style == "error"

    def test_message_branch(self):
        branches = _branches(render(Loaded("THIS IS MY TECH_CRUSH BACKEND!"), AppConfig()))
        assert len(branches) == 1
        assert branches[0].text == "THIS IS MY TECH_CRUSH BACKEND!"
        assert branches[0].style == "message"

    def test_page_frame(self):
        lines = render(Loaded("x"), AppConfig(port=5001))
        assert lines[0].style == "heading"
        assert lines[1].style == "subtitle"
        assert lines[-1].text == "Ensure the message service is running on http://localhost:5001."
