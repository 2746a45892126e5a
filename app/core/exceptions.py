"""
Relay board exceptions.

Errors raised by the device client, the relay board service and the
notifier. The HTTP layer maps each of them to a status code.
"""


class DeviceError(Exception):
    """Base exception for relay board operations."""
    pass


class DeviceUnavailableError(DeviceError):
    """Raised when the relay board cannot be reached."""
    pass


class DeviceCommandError(DeviceError):
    """Raised when a command cannot be sent to the relay board."""
    pass


class DeviceReadError(DeviceError):
    """Raised when a response frame cannot be read from the relay board."""
    pass


class DeviceCloseError(DeviceError):
    """Raised when the connection to the relay board fails to close."""
    pass


class StatusRetriesExhaustedError(DeviceError):
    """Raised when the board never returned a settled status frame."""

    def __init__(self, message: str = "unexpected error"):
        super().__init__(message)


class NotificationError(Exception):
    """Raised when a relay state change cannot be published."""
    pass
