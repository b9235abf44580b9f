# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Prompt manager backed by Jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"

REFINE_TEMPLATE = "refine.j2"
SECURITY_TEMPLATE = "security.j2"
TRANSPILE_FILE_TEMPLATE = "transpile_file.j2"


class PromptManager:
    """Loads and renders named templates from one or more directories.

    Override directories are searched before the packaged templates, so a
    project can replace ``refine.j2`` without copying the rest.
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        *,
        extra_dirs: Optional[Sequence[Path]] = None,
    ) -> None:
        base_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        if not base_dir.exists():
            raise FileNotFoundError(
                f"Templates directory not found: {base_dir}"
            )
        paths = []
        for override in extra_dirs or ():
            override_path = Path(override)
            if not override_path.exists():
                raise FileNotFoundError(
                    f"Prompt override directory not found: {override_path}"
                )
            paths.append(override_path)
        paths.append(base_dir)

        self._base_dir = base_dir
        self._search_paths = tuple(paths)
        loaders = [FileSystemLoader(str(path)) for path in self._search_paths]
        self._env = Environment(
            loader=ChoiceLoader(loaders),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            autoescape=False,
        )

    def render(self, template_name: str, **context) -> str:
        template = self._get_template(template_name)
        return template.render(**context)

    def list_templates(self) -> list[str]:
        return sorted(set(self._env.list_templates()))

    @property
    def templates_dir(self) -> Path:
        return self._base_dir

    @property
    def search_paths(self) -> tuple[Path, ...]:
        return self._search_paths

    def _get_template(self, template_name: str) -> Template:
        try:
            return self._env.get_template(template_name)
        except TemplateNotFound as exc:
            raise FileNotFoundError(
                f"Template '{template_name}' not found in {self._search_paths}"
            ) from exc


class OraclePrompts:
    """Builds the three fixed-shape prompts the pipeline sends to the oracle."""

    def __init__(self, manager: Optional[PromptManager] = None) -> None:
        self._manager = manager or PromptManager()

    @property
    def manager(self) -> PromptManager:
        return self._manager

    def refine(self, language: str, version: str, code: str) -> str:
        return self._manager.render(
            REFINE_TEMPLATE, language=language, version=version, code=code
        )

    def security(
        self, node_description: str, flagged: Sequence[str] = ()
    ) -> str:
        return self._manager.render(
            SECURITY_TEMPLATE,
            node_description=node_description,
            flagged=list(flagged),
        )

    def transpile_file(self, language: str, filename: str, content: str) -> str:
        return self._manager.render(
            TRANSPILE_FILE_TEMPLATE,
            language=language,
            filename=filename,
            content=content,
        )


__all__ = [
    "OraclePrompts",
    "PromptManager",
    "REFINE_TEMPLATE",
    "SECURITY_TEMPLATE",
    "TRANSPILE_FILE_TEMPLATE",
]
