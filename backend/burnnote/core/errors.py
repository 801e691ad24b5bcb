# burnnote/core/errors.py


class NoteValidationError(ValueError):
    """Rejected note input, keyed by form field ("text", "password")."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in self.errors.items()))


class StoreUnavailable(RuntimeError):
    """The persistence backend could not be reached or failed mid-operation."""
