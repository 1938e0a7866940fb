"""Error raised for invalid scenes, bad input and numeric failures."""


class RTError(Exception):
    """A fatal renderer error carrying the process exit status it maps to."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def __str__(self) -> str:
        return self.message