"""Field registry: the dynamic schema customers are captured against."""
import logging

from tracker.core.exceptions import FieldDefinitionError
from tracker.models import FieldDefinition, FieldDefinitionCreate, FieldDefinitionUpdate
from tracker.models.customer import RESERVED_NAMES
from tracker.models.field import DEFAULT_FIELDS
from tracker.store import KeyValueStore, PersistedCollection

logger = logging.getLogger(__name__)

FIELDS_KEY = "fields"


def default_fields() -> list[FieldDefinition]:
    return [FieldDefinition(**seed.model_dump()) for seed in DEFAULT_FIELDS]


class FieldRegistry:
    """Owns the ``fields`` collection.

    Names are checked on create and update: a name may not be one of the
    fixed customer attributes and may not already belong to another
    definition. Deleting a definition leaves stored customer values alone.
    """

    def __init__(self, store: KeyValueStore):
        self._fields = PersistedCollection(store, FIELDS_KEY, FieldDefinition, default_fields)

    @property
    def fields(self) -> tuple[FieldDefinition, ...]:
        return self._fields.items

    def get(self, field_id: str) -> FieldDefinition | None:
        return next((f for f in self._fields if f.id == field_id), None)

    def names(self) -> list[str]:
        return [f.name for f in self._fields]

    def required_names(self) -> list[str]:
        return [f.name for f in self._fields if f.required]

    def _check_name(self, name: str, field_id: str | None = None) -> str:
        name = name.strip()
        if not name:
            raise FieldDefinitionError("Field name is required")
        if name in RESERVED_NAMES:
            raise FieldDefinitionError(f"'{name}' is a reserved customer attribute")
        if any(f.name == name and f.id != field_id for f in self._fields):
            raise FieldDefinitionError(f"A field named '{name}' already exists")
        return name

    def create(self, data: FieldDefinitionCreate) -> FieldDefinition:
        name = self._check_name(data.name)
        field = FieldDefinition(**data.model_dump(exclude={"name"}), name=name)
        self._fields.append(field)
        logger.info(f"Created field {field.name} ({field.type})")
        return field

    def update(self, field_id: str, data: FieldDefinitionUpdate) -> FieldDefinition | None:
        """Merge the supplied keys into a definition. Unknown ids are ignored."""
        current = self.get(field_id)
        if current is None:
            logger.debug(f"Field {field_id} not found, update ignored")
            return None

        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if "name" in changes:
            changes["name"] = self._check_name(changes["name"], field_id)

        updated = FieldDefinition.model_validate({**current.model_dump(), **changes})
        self._fields.replace(updated if f.id == field_id else f for f in self._fields)
        logger.info(f"Updated field {updated.name}")
        return updated

    def delete(self, field_id: str) -> bool:
        if self.get(field_id) is None:
            logger.debug(f"Field {field_id} not found, delete ignored")
            return False
        self._fields.replace(f for f in self._fields if f.id != field_id)
        logger.info(f"Deleted field {field_id}")
        return True
