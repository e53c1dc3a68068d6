"""Session control for the ecalc language. A Session owns the Environment and dispatches statements one at a time,
either from the interactive shell or from a file.

```
<print_stmt>  ::= "print" <expr>          ; outputs the rendering of <expr>
<assign_stmt> ::= IDENTIFIER "=" <expr>   ; stores a concrete value (drops any previous alias)
<alias_stmt>  ::= IDENTIFIER "->" IDENTIFIER
```

A statement either runs to completion or raises: the environment is only changed once the whole statement has been
read and evaluated.
"""

from ecalc.lang.environment import Environment
from ecalc.lang.error import EvaluationError, GenericException, ParseError
from ecalc.lang.grammar import Evaluator
from ecalc.pure.lexical import Lexer, TokenKind
from ecalc.pure.values import render


class Session:
    """Governs an ecalc session, with control over its variables."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.environment = Environment()
        self.lexer = Lexer()
        self.evaluator = Evaluator(self.lexer, self.environment)
        self.statements = []  # list of (line, line num) loaded from path
        self._running = False

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        line = Session.preprocess_line(line)
                        if line:
                            self.statements.append((line, line_num + 1))
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess_line(line):
        """Removes the line terminator and surrounding whitespace."""
        return line.strip()

    def set_statement(self, text):
        """Resets the lexer to text and reads its first token. Can't be called while a statement is running."""
        if self._running:
            raise GenericException("cannot set a statement while '{}' is running", self.lexer.source, internal=True)
        self.lexer.reset(text)
        self.lexer.advance()

    def run(self):
        """Runs the current statement. Returns the line of text a print statement outputs, None otherwise."""
        if self.lexer.current is None:
            raise GenericException("no statement to run", internal=True)

        self._running = True
        try:
            token = self.lexer.current
            if token.kind is TokenKind.PRINT:
                return self.handle_print()
            elif token.kind is TokenKind.IDENTIFIER:
                return self.handle_variable()
            elif token.kind is TokenKind.END:
                return None
            raise self.evaluator.error(ParseError, "expected 'print' or assignment but got {}", token.kind, token)
        except RecursionError:
            source = self.lexer.source
            raise EvaluationError("expression nested too deeply", diagnosis=False).locate(source, 0, len(source))
        finally:
            self._running = False

    def execute(self, line, line_num):
        """Registers line with the error handler, then sets and runs it. Returns output of run."""
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        try:
            self.set_statement(line)
            output = self.run()
        except GenericException as error:
            if not error.located and not error.internal:
                error.locate(line, 0, len(line))
            raise

        self.error_handler.remove_line(self.path)  # error was not raised
        return output

    def run_all(self):
        """Runs every statement loaded from path in order, printing outputs. Stops at the first error."""
        for line, line_num in self.statements:
            output = self.execute(line, line_num)
            if output is not None:
                print(output)

    def handle_print(self):
        self.evaluator.eat(TokenKind.PRINT)
        value = self.evaluator.expr()
        self.evaluator.eat(TokenKind.END)
        return render(value)

    def handle_variable(self):
        name_token = self.evaluator.eat(TokenKind.IDENTIFIER)
        name = name_token.identifier

        if self.lexer.current.kind is TokenKind.ASSIGN:
            self.evaluator.eat(TokenKind.ASSIGN)
            value = self.evaluator.expr()
            self.evaluator.eat(TokenKind.END)

            previous = self.environment.variables.get(name)
            if previous is not None and previous.is_alias:
                self.error_handler.warn("'{}' no longer aliases '{}'", (name, previous.target),
                                        start=name_token.start, end=name_token.end)
            self.environment.assign(name, value)

        elif self.lexer.current.kind is TokenKind.REF:
            self.evaluator.eat(TokenKind.REF)
            target_token = self.evaluator.eat(TokenKind.IDENTIFIER)
            self.evaluator.eat(TokenKind.END)

            try:
                self.environment.alias(name, target_token.identifier)
            except GenericException as error:
                raise error.locate(self.lexer.source, target_token.start, target_token.end)

        else:
            token = self.lexer.current
            raise self.evaluator.error(ParseError, "expected primary expression but got {}", token.kind, token)
