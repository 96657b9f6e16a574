"""Data models for the message payload and the viewer's render states."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass
class Message:
    message: str

    def to_dict(self) -> dict:
        return {"message": self.message}


@dataclass(frozen=True)
class Loading:
    """The single fetch is still outstanding."""

    @property
    def loading(self) -> bool:
        return True

    @property
    def error(self) -> Optional[str]:
        return None

    @property
    def message(self) -> str:
        return ""


@dataclass(frozen=True)
class Failed:
    """The fetch settled with an error; ``description`` is never empty."""

    description: str

    @property
    def loading(self) -> bool:
        return False

    @property
    def error(self) -> Optional[str]:
        return self.description

    @property
    def message(self) -> str:
        return ""


@dataclass(frozen=True)
class Loaded:
    """The fetch settled with the service's message."""

    text: str

    @property
    def loading(self) -> bool:
        return False

    @property
    def error(self) -> Optional[str]:
        return None

    @property
    def message(self) -> str:
        return self.text


ViewState = Union[Loading, Failed, Loaded]
