from method_guards.utils.serialisation import get_exception_error_type


class GuardException(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.error_type = get_exception_error_type(self)


class InvalidGuardArgumentException(GuardException, TypeError):
    def __init__(self, message: str, *, param_name: str):
        super().__init__(f"{message} (Parameter '{param_name}')")
        self.param_name = param_name


class NotAnArgumentReferenceException(InvalidGuardArgumentException):
    def __init__(self, reference: object, method_name: str) -> None:
        super().__init__(
            f"Not a reference to an argument: `{reference}` is not a parameter of `{method_name}`",
            param_name="name",
        )
        self.reference = reference


class InvalidGuardOperationException(GuardException, RuntimeError):
    pass


class MethodNotFoundException(GuardException, RuntimeError):
    def __init__(self, message: str = "Could not resolve the currently executing method") -> None:
        super().__init__(message)
