"""Exception hierarchy for message validation and dispatch."""

from typing import Iterable, Iterator, List


class WorkRobotError(Exception):
    """Base class for every error raised by workrobot."""


# ── Validation (raised by the mutating call, before any send) ──


class MessageValidationError(WorkRobotError):
    """A builder call would put a message into an invalid state."""


class MessageTooLong(MessageValidationError):
    """Raised when text or markdown content exceeds its byte limit"""


class ImageTooLarge(MessageValidationError):
    """Raised when image content exceeds the 2 MiB limit"""


class TooManyArticles(MessageValidationError):
    """Raised when a card would hold more than 8 articles"""


class MissingRequiredField(MessageValidationError):
    def __init__(self, field: str):
        super().__init__(f"required field is empty: {field}")
        self.field = field


# ── Dispatch ──


class DispatchError(WorkRobotError):
    """A message could not be delivered to the webhook."""


class RequestConstructionFailed(DispatchError):
    pass


class TransportFailed(DispatchError):
    pass


class ResponseUnreadable(DispatchError):
    pass


class ResponseMalformed(DispatchError):
    pass


class RemoteRejected(DispatchError):
    """The webhook answered with a non-zero errcode."""

    def __init__(self, code: int, message: str = ""):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class DispatchErrors(DispatchError):
    """Every failure of a concurrent batch sent in aggregate mode."""

    def __init__(self, errors: Iterable[BaseException]):
        self.errors: List[BaseException] = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
