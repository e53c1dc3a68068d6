"""Handles interactive/command-line mode for ecalc interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """ecalc interpreter shell."""
    intro = "ecalc expression interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary ecalc statement."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            output = self.sess.execute(self.sess.preprocess_line(line), self.line_num)

            if output is not None:
                print(output)

    def do_help(self, arg):
        """Prints a short intro to ecalc statements rather than command docs."""
        if arg:
            return self.default(f"help {arg}")  # statement about a variable named 'help'

        print("Welcome to the ecalc interpreter!\n\n"
              "Statements are evaluated one line at a time:\n"
              "  print <expr>   prints the value of <expr>, e.g. 'print (1 + 2) * 3'\n"
              "  x = <expr>     assigns the value of <expr> (or nil) to x\n"
              "  y -> x         makes y an alias of x: reading y reads x's current value\n\n"
              "Expressions combine integers, floats, nil and variables with + - * / ** and\n"
              "parentheses. Integer division truncates, and nil in any operation gives nil.\n"
              "Type 'exit' to quit.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"exit {arg}")  # statement about a variable named 'exit'
        return True
