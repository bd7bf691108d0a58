"""Error taxonomy shared by the codec, the daemon client and the resolver."""

from __future__ import annotations

from kontroll.core.domain.models import FailureKind


class KontrollError(Exception):
    """Base error. `message` is what the user sees, verbatim."""

    kind: FailureKind = FailureKind.DAEMON_REJECTED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidColor(KontrollError):
    kind = FailureKind.INVALID_COLOR

    def __init__(self, text: str) -> None:
        super().__init__(f"{text} is not a valid hex color")
        self.text = text


class DaemonUnreachable(KontrollError):
    kind = FailureKind.DAEMON_UNREACHABLE


class NoActiveBinding(KontrollError):
    kind = FailureKind.NO_ACTIVE_BINDING


class UnknownDevice(KontrollError):
    kind = FailureKind.UNKNOWN_DEVICE


class DaemonRejected(KontrollError):
    kind = FailureKind.DAEMON_REJECTED


_BY_KIND: dict[FailureKind, type[KontrollError]] = {
    FailureKind.DAEMON_UNREACHABLE: DaemonUnreachable,
    FailureKind.NO_ACTIVE_BINDING: NoActiveBinding,
    FailureKind.UNKNOWN_DEVICE: UnknownDevice,
    FailureKind.DAEMON_REJECTED: DaemonRejected,
}


def error_for_code(code: str | None, message: str) -> KontrollError:
    """Map a daemon error code to its exception. Unknown codes are rejections."""

    try:
        kind = FailureKind(code) if code else FailureKind.DAEMON_REJECTED
    except ValueError:
        kind = FailureKind.DAEMON_REJECTED
    return _BY_KIND.get(kind, DaemonRejected)(message)
