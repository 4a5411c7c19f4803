"""
Domain exceptions - Infrastructure error types for registration.

Expected business outcomes (missing fields, duplicate names) are NOT
exceptions; they are returned as a failed RegistrationResult. The types
below describe genuine infrastructure failures raised by store adapters.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class StoreError(RegistrationError):
    """A store adapter could not complete an operation."""

    pass


class DuplicateRecordError(StoreError):
    """
    A unique constraint was violated on write.

    Raised when a concurrent registration wins the race between the
    uniqueness pre-check and the create call.
    """

    def __init__(self, entity: str, field: str) -> None:
        super().__init__(f"{entity} with duplicate {field}")
        self.entity = entity
        self.field = field


class RecordNotFound(StoreError):
    """Update targeted a record that does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
