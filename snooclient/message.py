"""Private messages and inbox endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .client import Client, ListOptions, Response, parse_timestamp

KIND_COMMENT = "t1"
KIND_MESSAGE = "t4"


@dataclass
class Message:
    """A private message, or a comment reply shown in the inbox."""

    id: str = ""
    full_id: str = ""
    created: datetime | None = None
    subject: str = ""
    text: str = ""
    parent_id: str = ""
    author: str = ""
    to: str = ""
    is_comment: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Message":
        return cls(
            id=data.get("id") or "",
            full_id=data.get("name") or "",
            created=parse_timestamp(data.get("created_utc")),
            subject=data.get("subject") or "",
            text=data.get("body") or "",
            parent_id=data.get("parent_id") or "",
            author=data.get("author") or "",
            to=data.get("dest") or "",
            is_comment=bool(data.get("was_comment")),
        )


@dataclass
class Inbox:
    """An inbox listing split into comment replies and messages."""

    comments: list[Message] = field(default_factory=list)
    messages: list[Message] = field(default_factory=list)
    after: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "Inbox":
        """Build an inbox from a listing; children of other kinds are skipped."""
        inbox = cls()
        if not isinstance(data, dict):
            return inbox
        listing = data.get("data") or {}
        inbox.after = listing.get("after") or ""
        for child in listing.get("children") or []:
            kind = child.get("kind")
            payload = child.get("data") or {}
            if kind == KIND_COMMENT:
                inbox.comments.append(Message.from_json(payload))
            elif kind == KIND_MESSAGE:
                inbox.messages.append(Message.from_json(payload))
        return inbox


@dataclass
class SendMessageRequest:
    """A message to send. ``to`` is a username, or /r/name for a subreddit's mods."""

    to: str
    subject: str
    text: str
    # If set, the message appears to come from this subreddit.
    from_subreddit: str = ""

    def to_form(self) -> dict[str, str]:
        form = {"to": self.to, "subject": self.subject, "text": self.text}
        if self.from_subreddit:
            form["from_sr"] = self.from_subreddit
        return form


def _ids_form(ids: tuple[str, ...]) -> dict[str, str]:
    if not ids:
        raise ValueError("must provide at least 1 id")
    return {"id": ",".join(ids)}


class MessageService:
    """Message endpoints of the API."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def read_all(self) -> Response:
        """Queue marking all messages and comments as read (answers 202)."""
        return self.client.request("POST", "api/read_all_messages")

    def read(self, *args: str) -> Response:
        """Mark messages or comments as read via their full ids."""
        return self.client.request("POST", "api/read_message", form=_ids_form(args))

    def unread(self, *args: str) -> Response:
        """Mark messages or comments as unread via their full ids."""
        return self.client.request("POST", "api/unread_message", form=_ids_form(args))

    def block(self, thing_id: str) -> Response:
        """Block the author of a post, comment or message via its full id."""
        return self.client.request("POST", "api/block", form={"id": thing_id})

    def collapse(self, *args: str) -> Response:
        return self.client.request("POST", "api/collapse_message", form=_ids_form(args))

    def uncollapse(self, *args: str) -> Response:
        return self.client.request("POST", "api/uncollapse_message", form=_ids_form(args))

    def delete(self, message_id: str) -> Response:
        return self.client.request("POST", "api/del_msg", form={"id": message_id})

    def send(self, request: SendMessageRequest | None) -> Response:
        """Send a message."""
        if request is None:
            raise ValueError("SendMessageRequest: cannot be None")
        form = request.to_form()
        form["api_type"] = "json"
        return self.client.request("POST", "api/compose", form=form)

    def _inbox(self, path: str, options: ListOptions | None) -> Inbox:
        response = self.client.request("GET", path, params=options)
        inbox = Inbox.from_json(response.data)
        response.after = inbox.after
        return inbox

    def inbox(self, options: ListOptions | None = None) -> tuple[list[Message], list[Message]]:
        """Return comments and messages in the inbox, respectively."""
        inbox = self._inbox("message/inbox", options)
        return inbox.comments, inbox.messages

    def inbox_unread(
        self, options: ListOptions | None = None
    ) -> tuple[list[Message], list[Message]]:
        """Return unread comments and messages in the inbox, respectively."""
        inbox = self._inbox("message/unread", options)
        return inbox.comments, inbox.messages

    def sent(self, options: ListOptions | None = None) -> list[Message]:
        """Return messages the account has sent."""
        return self._inbox("message/sent", options).messages