"""Turn a viewer state into the lines of the message page."""

from typing import List, NamedTuple

from techcrush.config import AppConfig
from techcrush.models import Failed, Loading, ViewState


HEADING = "Message Viewer"
SUBTITLE = "Communicating with the message service"
LOADING_TEXT = "Loading message from backend..."


class Line(NamedTuple):
    text: str
    style: str  # "heading", "subtitle", "loading", "error", "message", "hint"


def render(state: ViewState, config: AppConfig) -> List[Line]:
    """Render the page for ``state``.

    Exactly one of the loading, error, or message branches is emitted,
    checked in that order.
    """
    lines = [Line(HEADING, "heading"), Line(SUBTITLE, "subtitle")]

    if isinstance(state, Loading):
        lines.append(Line(LOADING_TEXT, "loading"))
    elif isinstance(state, Failed):
        lines.append(Line(f"Error: {state.description}", "error"))
    else:
        lines.append(Line(state.text, "message"))

    lines.append(
        Line(f"Ensure the message service is running on {config.base_url}.", "hint")
    )
    return lines
