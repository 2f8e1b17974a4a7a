# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used by the interactive loop.

These signals interrupt or redirect loop execution (quitting the session or
cancelling the line being edited) without being treated as errors.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass the `except Exception` block that guards verb execution.

Signals:
- QuitSignal: Terminate the loop session.
- CancelSignal: Abandon the current line and prompt again.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Clasp.

    These are not errors. They're used to control flow like quitting
    or abandoning the current input line.
    """


class QuitSignal(FlowSignal):
    """Raised to signal an immediate exit from the loop."""

    def __init__(self, message: str = "Quit signal received."):
        super().__init__(message)


class CancelSignal(FlowSignal):
    """Raised to abandon the current input line."""

    def __init__(self, message: str = "Cancel signal received."):
        super().__init__(message)
