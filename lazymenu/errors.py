"""Fatal error types surfaced to the command line."""

from __future__ import annotations


class LazymenuError(Exception):
    """Base class for errors that end the process with failure status."""


class ResourceExhaustedError(LazymenuError):
    """The candidate list could not be built."""


class TerminalUnavailableError(LazymenuError):
    """The controlling terminal could not be acquired for keyboard input."""
