"""Domain errors raised by the tracker services.

Update and delete against an unknown id are not errors: they are silent
no-ops. Only the conditions below abort an operation, and each is raised
before anything is mutated or persisted.
"""


class TrackerError(Exception):
    """Base class for tracker errors."""


class DuplicateRecordError(TrackerError):
    """A customer with identical values for every required field exists."""

    def __init__(self, join_id: str, fields: list[str]):
        self.join_id = join_id
        self.fields = fields
        super().__init__(
            f"A customer with identical required fields already exists ({join_id}: "
            f"{', '.join(fields)})"
        )


class FieldDefinitionError(TrackerError):
    """A field definition uses a reserved or already taken name."""


class ImportValidationError(TrackerError):
    """An imported data file was rejected; the store is left untouched."""


class ImportTooLargeError(ImportValidationError):
    """An imported data file exceeds the storage quota."""
