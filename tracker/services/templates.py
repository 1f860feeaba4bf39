"""Print template and saved checklist registries."""
import logging

from tracker.core.config import settings
from tracker.models import ChecklistTemplate, PrintTemplate, PrintTemplateCreate, PrintTemplateUpdate
from tracker.models.template import DEFAULT_TEMPLATE_FOOTER, DEFAULT_TEMPLATE_HEADER
from tracker.store import KeyValueStore, PersistedCollection

logger = logging.getLogger(__name__)

TEMPLATES_KEY = "templates"
SAVED_CHECKLISTS_KEY = "savedChecklists"


class PrintTemplateRegistry:
    """
    Owns the ``templates`` collection.

    One template carries ``is_default``. Renaming it is overridden back to
    the default name and deleting it is refused; both are logged no-ops
    rather than errors. Data written before the flag existed gets it on the
    first template when loaded.
    """

    def __init__(self, store: KeyValueStore, default_name: str | None = None):
        self.default_name = default_name or settings.default_template_name
        self._templates = PersistedCollection(
            store, TEMPLATES_KEY, PrintTemplate, self._seed_templates
        )
        self._normalize_default()

    def _seed_templates(self) -> list[PrintTemplate]:
        return [
            PrintTemplate(
                name=self.default_name,
                header=DEFAULT_TEMPLATE_HEADER,
                footer=DEFAULT_TEMPLATE_FOOTER,
                is_default=True,
            )
        ]

    def _normalize_default(self) -> None:
        templates = list(self._templates)
        if not templates:
            return
        flagged = [t for t in templates if t.is_default]
        if len(flagged) == 1:
            return
        keep = flagged[0].id if flagged else templates[0].id
        self._templates.replace(t.model_copy(update={"is_default": t.id == keep}) for t in templates)
        logger.info(f"Marked template {keep} as default")

    @property
    def templates(self) -> tuple[PrintTemplate, ...]:
        return self._templates.items

    @property
    def default(self) -> PrintTemplate | None:
        return next((t for t in self._templates if t.is_default), None)

    def get(self, template_id: str) -> PrintTemplate | None:
        return next((t for t in self._templates if t.id == template_id), None)

    def is_protected(self, template_id: str) -> bool:
        template = self.get(template_id)
        return template is not None and template.is_default

    def create(self, data: PrintTemplateCreate) -> PrintTemplate:
        # The first template ever created becomes the default.
        template = PrintTemplate(**data.model_dump(), is_default=len(self._templates) == 0)
        self._templates.append(template)
        logger.info(f"Created print template {template.name}")
        return template

    def update(self, template_id: str, data: PrintTemplateUpdate) -> PrintTemplate | None:
        current = self.get(template_id)
        if current is None:
            logger.debug(f"Template {template_id} not found, update ignored")
            return None

        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if current.is_default and changes.get("name", self.default_name) != self.default_name:
            logger.warning(f"Default template cannot be renamed to {changes['name']!r}")
            changes["name"] = self.default_name

        updated = current.model_copy(update=changes)
        self._templates.replace(updated if t.id == template_id else t for t in self._templates)
        logger.info(f"Updated print template {updated.name}")
        return updated

    def delete(self, template_id: str) -> bool:
        template = self.get(template_id)
        if template is None:
            logger.debug(f"Template {template_id} not found, delete ignored")
            return False
        if template.is_default:
            logger.warning("The default template cannot be deleted")
            return False
        self._templates.replace(t for t in self._templates if t.id != template_id)
        logger.info(f"Deleted print template {template.name}")
        return True


class ChecklistTemplateRegistry:
    """Owns ``savedChecklists``: reusable checklists addressed by index."""

    def __init__(self, store: KeyValueStore):
        self._checklists = PersistedCollection(store, SAVED_CHECKLISTS_KEY, ChecklistTemplate)

    @property
    def checklists(self) -> tuple[ChecklistTemplate, ...]:
        return self._checklists.items

    def __len__(self) -> int:
        return len(self._checklists)

    def get(self, index: int) -> ChecklistTemplate | None:
        if 0 <= index < len(self._checklists):
            return self._checklists.items[index]
        return None

    def append(self, checklist: ChecklistTemplate) -> ChecklistTemplate:
        self._checklists.append(checklist)
        logger.info(f"Saved checklist template {checklist.title}")
        return checklist

    def remove(self, index: int) -> bool:
        if self.get(index) is None:
            logger.debug(f"No checklist template at {index}, remove ignored")
            return False
        self._checklists.replace(c for i, c in enumerate(self._checklists) if i != index)
        logger.info(f"Removed checklist template {index}")
        return True
