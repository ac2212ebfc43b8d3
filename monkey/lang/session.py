"""Session control for the Monkey interpreter, either in command-line mode or file interpretation mode. A session owns
the top-level environment, so bindings made by one input are visible to the next.
"""

from monkey.core import ast
from monkey.core.environment import Environment
from monkey.core.evaluator import Evaluator
from monkey.core.object import is_error
from monkey.interpreter import parse_source
from monkey.lang.error import MonkeyError


class Session:
    """Governs a Monkey session: parsed programs waiting to run, the shared environment and the results so far."""
    SH_FILE = "<in>"  # command-line interpreter filename
    OPENERS = "({"
    CLOSERS = ")}"

    def __init__(self, error_handler, path=SH_FILE, step_limit=None):
        self.error_handler = error_handler
        self.path = path              # used for error messages
        self.step_limit = step_limit  # node visits allowed per run, None for no limit

        self.env = Environment()
        self.to_exec = []  # list of (line num, Program) to evaluate on the next run
        self.results = []  # values of evaluated programs, oldest first

        if path != Session.SH_FILE:
            self.add(Session.read_source(path))

    @staticmethod
    def read_source(path):
        """Returns the contents of the file at path, raising a MonkeyError if it cannot be read."""
        try:
            with open(path, "r") as file:
                return file.read()
        except OSError:
            raise MonkeyError(f"'{path}' could not be opened")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line onto prev (the unfinished input so far) and returns the result along with whether more input is
        needed, i.e. whether there are still unclosed parentheses or braces.
        """
        line = f"{prev}\n{line}" if prev else line
        line = line.rstrip()

        opened = sum(line.count(char) for char in Session.OPENERS)
        closed = sum(line.count(char) for char in Session.CLOSERS)
        return line, opened > closed

    def add(self, source, line_num=None):
        """Parses source and queues it. Evaluation is delayed until run is called. Raises ParseError on bad syntax."""
        program = parse_source(source)
        self.to_exec.append((line_num, program))
        return program

    def run(self):
        """Evaluates queued programs in order. Error results are reported through the error handler; other results are
        kept in self.results, except for programs ending in a let statement, which produce nothing to show.
        """
        while self.to_exec:
            line_num, program = self.to_exec.pop(0)
            result = Evaluator(self.step_limit).evaluate(program, self.env)

            if is_error(result):
                self.error_handler.report(result, line_num)
            elif not program.statements or not isinstance(program.statements[-1], ast.LetStatement):
                self.results.append(result)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
