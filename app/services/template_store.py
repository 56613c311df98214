from __future__ import annotations

import html
import logging
from typing import List, Optional, Sequence

from app.models.plan import PlanItem, Template
from .persistence import PersistenceSync

logger = logging.getLogger(__name__)

EMPTY_NAME_MESSAGE = "Please enter a name for the plan."


class TemplateNameError(ValueError):
    """Raised when a template is saved without a usable name."""


def template_caption(template: Template) -> str:
    """Markdown for a template row in the templates dialog.

    Template names are typed by the user, so they are HTML-escaped before
    the caption is rendered with ``unsafe_allow_html``.
    """
    return f"**{html.escape(template.name)}**  \n<span class='ex-meta'>{len(template.plan)} exercises</span>"


class TemplateStore:
    def __init__(self, templates: Sequence[Template] = (), sync: Optional[PersistenceSync] = None) -> None:
        self.sync = sync
        self._templates: List[Template] = [t.model_copy(deep=True) for t in templates]

    def _persist(self) -> None:
        if self.sync is not None:
            self.sync.write_templates(self._templates)

    @property
    def templates(self) -> List[Template]:
        return [t.model_copy(deep=True) for t in self._templates]

    def names(self) -> List[str]:
        return [t.name for t in self._templates]

    def __len__(self) -> int:
        return len(self._templates)

    def save(self, name: str, items: Sequence[PlanItem]) -> Template:
        """Snapshot ``items`` under ``name``, replacing any template of that name.

        The name is stored as given; only blank names are rejected. A re-saved
        template moves to the end of the list.
        """
        if not name or not name.strip():
            raise TemplateNameError(EMPTY_NAME_MESSAGE)
        template = Template(name=name, plan=[item.model_copy(deep=True) for item in items])
        replaced = name in self.names()
        self._templates = [t for t in self._templates if t.name != name]
        self._templates.append(template)
        self._persist()
        logger.info("%s template %r (%d exercises)", "Replaced" if replaced else "Saved", name, len(template.plan))
        return template.model_copy(deep=True)

    def load(self, name: str) -> Optional[Template]:
        for t in self._templates:
            if t.name == name:
                return t.model_copy(deep=True)
        return None

    def delete(self, name: str) -> bool:
        remaining = [t for t in self._templates if t.name != name]
        if len(remaining) == len(self._templates):
            return False
        self._templates = remaining
        self._persist()
        logger.info("Deleted template %r", name)
        return True
