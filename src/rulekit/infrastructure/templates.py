"""Shared Jinja2 template loading with per-workspace override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateNotFound,
)


def build_template_environment(group: str, *, override_dir: Path | None = None) -> Environment:
    """Build a Jinja2 environment with workspace overrides before packaged defaults.

    Packaged files live under ``rulekit/templates/<group>/``. When
    *override_dir* is given, a file of the same name there wins.
    """
    loaders: list[BaseLoader] = []
    if override_dir is not None:
        loaders.append(FileSystemLoader(str(override_dir)))

    loaders.append(PackageLoader("rulekit", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)


def read_source(env: Environment, name: str) -> str:
    """Return the raw text of *name* without rendering it.

    Raises:
        jinja2.TemplateNotFound: No loader provides *name*.
    """
    if env.loader is None:
        raise TemplateNotFound(name)
    source, _filename, _uptodate = env.loader.get_source(env, name)
    return source
