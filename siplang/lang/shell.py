"""Handles interactive/command-line mode for the sip interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """sip interpreter shell."""
    intro = "sip interpreter :: Python backend\nType 'help' for more information."
    prompt = ">>> "
    secondary_prompt = "... "  # used for line continutations
    _tmp_prompt = ">>> "       # also used for prompt swapping in line continuations
    commands = ("vars", "help", "exit", "EOF")

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def onecmd(self, line):
        """Runs line as a shell command only if it is a bare command name that the session has not bound as a variable
        (EOF always is a command). Anything else, including a line continuation, is sip source.
        """
        command = line.strip()
        if not command or command == "EOF":
            return super().onecmd(command)
        if self._tmp_line or command not in self.commands or command in self.sess.env:
            return self.default(line)
        return super().onecmd(command)

    def default(self, line):
        """Executes arbitrary sip source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(self._tmp_line + line)

            if add_to_prev:
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                if not line:
                    return

                self.sess.add(line, self.line_num - line.count("\n"))
                self.sess.run()

                if self.sess.results:
                    print(self.sess.pop().inspect())

    def do_vars(self, arg):
        """Lists the current bindings."""
        for name in self.sess.env.names():
            print(f"{name} = {self.sess.env.get(name).inspect()}")

    def do_help(self, arg):
        """Prints a short intro rather than the command docs."""
        print("Welcome to the sip interpreter!\n\n"
              "sip is a small dynamically-typed scripting language. Declare variables with \n"
              "'var x = 100', reassign them with 'x = x * 2', and branch with \n"
              "'if (x > 100) { ... } else { ... }'. Every line is evaluated as soon as \n"
              "it is complete, and its value is printed.\n\n"
              "Type 'vars' to list the current bindings and 'exit' to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
