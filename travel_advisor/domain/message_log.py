"""Append-only conversation log for one session."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional, Union

from pydantic import ValidationError

from travel_advisor.domain.enums import Role
from travel_advisor.domain.exceptions import RequestValidationError
from travel_advisor.domain.models import Message


class MessageLog:
    """Ordered turns of one session.

    Turns are appended, never edited or removed. Each appended turn gets the
    next logical timestamp so ordering does not depend on wall-clock time.
    """

    def __init__(self, messages: Iterable[Union[Message, dict[str, Any]]] = ()):
        self._messages: list[Message] = []
        self.extend(messages)

    def append(self, role: Union[Role, str], content: str) -> Message:
        try:
            message = Message(role=role, content=content, timestamp=self._next_timestamp())
        except ValidationError as e:
            raise RequestValidationError(
                f"invalid message: {e.errors()[0].get('msg', 'invalid')}",
                code="INVALID_MESSAGE",
                user_message="Each message must have a role and content.",
            ) from None
        self._messages.append(message)
        return message

    def extend(self, messages: Iterable[Union[Message, dict[str, Any]]]) -> None:
        for item in messages:
            if isinstance(item, Message):
                self.append(item.role, item.content)
            elif isinstance(item, dict):
                self.append(item.get("role", ""), item.get("content", ""))
            else:
                raise RequestValidationError(
                    f"unsupported message type {type(item).__name__}",
                    code="INVALID_MESSAGE",
                    user_message="Each message must have a role and content.",
                )

    def _next_timestamp(self) -> int:
        return self._messages[-1].timestamp + 1 if self._messages else 1

    def snapshot(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def last(self, role: Optional[Role] = None) -> Optional[Message]:
        for message in reversed(self._messages):
            if role is None or message.role == role:
                return message
        return None

    def to_payload(self) -> list[dict[str, Any]]:
        return [m.model_dump(mode="json") for m in self._messages]

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __len__(self) -> int:
        return len(self._messages)

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]
