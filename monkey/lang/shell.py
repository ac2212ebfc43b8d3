"""Handles interactive/command-line mode for the Monkey interpreter. Uses cmd as backend."""

import cmd

from monkey.lang.session import Session


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Monkey interpreter :: Python backend\nType 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary Monkey input."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = Session.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            if not line:
                return

            self.sess.add(line, self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop().inspect())

    def parseline(self, line):
        """Continuation lines are Monkey input, even when they start with a command name."""
        if self._tmp_line:
            return None, None, line
        return super().parseline(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Monkey interpreter!\n\n"
              "Monkey is a small expression-oriented language with integers, booleans,\n"
              "conditionals and first-class functions. Bindings persist for the whole session.\n\n"
              "Try it out by typing 'let add = fn(a, b) { a + b };'. This binds a function\n"
              "to the name 'add'. Next, try typing 'add(1, 2)', giving '3' as the result.\n"
              "Unclosed parentheses or braces continue the input on the next line.\n"
              "Type 'exit' or press Ctrl-D to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_line:
            self.default("")
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn(f"ignoring arguments to exit: '{arg}'")
        return True
