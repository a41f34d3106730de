"""Error model and exit codes."""

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    CHECK_FAILED = 1
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    TOOLKIT_ERROR = 4
    RUNTIME_ERROR = 5


@dataclass
class SvteError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self):
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


class InvalidAcceleratorSpec(SvteError):
    def __init__(self, spec, reason=""):
        message = f"invalid accelerator {spec!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            code=ExitCode.CONFIG_ERROR,
            hint="use the form Control+Shift+T or <Control><Shift>t",
        )
        self.spec = spec


def user_facing_error(message, hint=""):
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
