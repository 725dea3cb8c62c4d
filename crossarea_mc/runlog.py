"""
Progress and error output for a simulation run.

A RunLog is created once by the caller and passed into the engine, so the
simulation itself never touches sys.stdout/sys.stderr directly.
"""

import sys
from typing import Optional, TextIO


class RunLog:
    """
    Two text destinations: a progress stream and an error stream.

    Parameters:
        stream: Progress output (default: sys.stdout at write time)
        error_stream: Error output (default: sys.stderr at write time)
        verbose: Emit per-orientation detail lines
    """

    def __init__(self, stream: Optional[TextIO] = None,
                 error_stream: Optional[TextIO] = None,
                 verbose: bool = False, enabled: bool = True):
        self._stream = stream
        self._error_stream = error_stream
        self.verbose = verbose
        self.enabled = enabled
        self._owned = None

    @classmethod
    def from_logfile(cls, path, verbose: bool = False) -> "RunLog":
        """
        Send progress and errors to the same file.

        Raises:
            OSError: If the file cannot be opened for writing
        """
        handle = open(path, 'w')
        log = cls(handle, handle, verbose=verbose)
        log._owned = handle
        return log

    @classmethod
    def silent(cls) -> "RunLog":
        return cls(enabled=False)

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def error_stream(self) -> TextIO:
        return self._error_stream if self._error_stream is not None else sys.stderr

    def info(self, message: str):
        if self.enabled:
            print(message, file=self.stream)

    def detail(self, message: str):
        """Only written in verbose mode."""
        if self.enabled and self.verbose:
            print(message, file=self.stream)

    def error(self, message: str):
        if self.enabled:
            print(message, file=self.error_stream)

    def close(self):
        if self._owned is not None:
            self._owned.close()
            self._owned = None

    def __enter__(self) -> "RunLog":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
