"""Error reporting for the Monkey command-line interpreter. The core pipeline never raises for bad programs: parse
errors come back as a list of messages and runtime errors as Error objects. This module turns both into colored console
output. Only MonkeyErrors should be encountered while running: if another type of error makes it all the way to
ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class MonkeyError(Exception):
    """Error raised by the interpreter's outer layer (files that cannot be read, programs that cannot be parsed)."""

    def __init__(self, message, internal=False):
        super().__init__(message)
        self.message = message
        self.internal = internal


class ParseError(MonkeyError):
    """Raised when source text could not be parsed. errors holds the parser's messages, in order."""

    def __init__(self, errors, source=""):
        super().__init__("; ".join(errors))
        self.errors = list(errors)
        self.source = source


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report Monkey errors instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, path=None):
        self.fatal = fatal
        self.path = path  # used as a location prefix in messages

    def _prefix(self, line_num=None):
        if self.path is None:
            return ""
        location = f"{self.path}:{line_num}: " if line_num is not None else f"{self.path}: "
        return colored(location, attrs=["bold"])

    def format_error(self, error, line_num=None):
        """Returns the message for a runtime Error object or a MonkeyError. ParseErrors get one indented line per parser
        message below a header.
        """
        error_msg = self._prefix(line_num)
        if getattr(error, "internal", False):
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"])

        if isinstance(error, ParseError):
            count = len(error.errors)
            error_msg += f"{count} parse error{'s' if count != 1 else ''}"
            for msg in error.errors:
                error_msg += "\n\t" + msg
            return error_msg
        return error_msg + error.message

    def warn(self, msg, line_num=None):
        """Prints a warning. Warnings are never fatal."""
        print(self._prefix(line_num) + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + msg)

    def report(self, error, line_num=None):
        """Reports error: a runtime Error object produced by evaluation, or a MonkeyError. Exits if fatal."""
        print(self.format_error(error, line_num))
        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.report(MonkeyError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.report(MonkeyError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, MonkeyError):
            self.report(exc_val)
        elif exc_type is not None:
            self.report(MonkeyError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
