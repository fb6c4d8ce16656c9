"""Typed failures raised by parsing, calibration and evaluation."""


class ExpressionError(Exception):
    def __init__(self, message, code="9999", expression=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.expression = expression

    def __str__(self):
        if self.expression is not None:
            return f"[{self.code}] {self.message} (in {self.expression!r})"
        return f"[{self.code}] {self.message}"


class ParseError(ExpressionError):
    pass


class UndefinedVariableError(ExpressionError):
    pass


class DivisionByZeroError(ExpressionError):
    pass


class UnknownOperatorError(ExpressionError):
    pass


class CalibrationError(ExpressionError):
    pass


# Codes are structured as:
# 1. Digit: stage (1 parse, 2 evaluation, 3 calibration)
# 2.-4. Digit: error number

ERROR_MESSAGES = {
    "1000": "Empty expression",
    "1001": "Unexpected character: ",  # + character
    "1002": "Sign without operand",
    "1003": "Missing operand for: ",  # + token
    "1004": "Dangling operands after building tree",
    "1005": "Malformed integ(...) syntax",
    "1006": "Non-numeric initial condition: ",  # + text
    "1007": "Expression nests deeper than ",  # + depth limit
    "1008": "Equation defined twice: ",  # + name
    "1009": "Unbalanced parenthesis",
    "1010": "Function needs a parenthesised argument: ",  # + name

    "2000": "Variable not found: ",  # + name
    "2001": "Division by zero",
    "2002": "Unknown operator: ",  # + operator

    "3000": "Expression already calibrated",
    "3001": "Calibration interval has zero magnitude",

    "9999": "Unexpected error: "  # + error
}


def message_for(code, detail=""):
    return ERROR_MESSAGES.get(code, ERROR_MESSAGES["9999"]) + str(detail)
