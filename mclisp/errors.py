class McLispError(Exception):
    """ Base class for all host-level mclisp errors"""
    pass

class McLispSyntaxError(McLispError):
    """ Raised when source text cannot be read into a single tree"""
    pass

class UnbalancedParentheses(McLispSyntaxError):
    """ Raised when a '(' is never closed or a ')' has nothing to close"""

class MalformedTopLevel(McLispSyntaxError):
    """ Raised when a single form is expected but the source holds several"""

class RecursionDepthExceeded(McLispError):
    """ Raised when evaluation or list nesting exceeds the configured depth"""

    def __init__(self, limit: int, message: str | None = None):
        super().__init__(message or f"Maximum recursion depth {limit} exceeded")
        self.limit = limit

class UnknownOperator(McLispError):
    """ Raised in strict mode when a list is headed by an unbound operator"""

    def __init__(self, name: str):
        super().__init__(f"Unknown operator {name!r}")
        self.name = name
