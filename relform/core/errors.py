"""Process exit codes used by the relform CLI."""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    Values are part of the command-line contract and must stay stable:
    - 0: Success
    - 1: User error (invalid form data, bad arguments)
    - 2: Environment error (config unreadable, template missing)
    - 3: Render error (template engine failed)
    - 5: I/O error (output could not be written)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    RENDER_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
