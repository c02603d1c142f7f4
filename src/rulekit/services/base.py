"""BaseService — foundation for all rulekit services.

Every service receives a :class:`Workspace` at construction time and
reads its settings and paths from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rulekit.config.settings import RulekitSettings
    from rulekit.infrastructure.workspace import Workspace


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ModeService(BaseService):
            def generate(self, ...) -> ServiceResult:
                directory = self._workspace.resolve(...)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @property
    def _settings(self) -> RulekitSettings:
        return self._workspace.settings
