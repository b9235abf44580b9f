"""Compiler pipeline that wires the engines, generator and oracle together."""

from __future__ import annotations

import logging

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from dotenv import load_dotenv

from intellicompiler.codegen import TemplateCodeGenerator
from intellicompiler.configuration import (
    CompilerSettings,
    build_compiler_settings,
)
from intellicompiler.engines import (
    SecurityRule,
    SecurityRuleEngine,
    SemanticClassifier,
    VersionInferenceEngine,
)
from intellicompiler.exceptions import CompilerConfigError
from intellicompiler.llm.providers import load_provider
from intellicompiler.nodes import SyntaxNode
from intellicompiler.oracle import LLMOracle, RefinementOracle
from intellicompiler.prompting import OraclePrompts, PromptManager
from intellicompiler.report import Report
from intellicompiler.transpiler import DirectoryTranspiler, TranspileSummary

DEFAULT_CONFIG_PATH = Path(__file__).parent / "configs" / "default_config.yaml"
_DOTENV_LOADED = False
LOGGER = logging.getLogger(__name__)


def load_config(path: Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise CompilerConfigError(f"Config file {path} not found")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise CompilerConfigError(f"Config file {path} must contain a mapping")
    return data


class IntelligentCompiler:
    """Runs version inference, classification, generation, refinement and
    security analysis for a node and bundles the results into a Report.

    Only the oracle can fail, and its failures arrive as values; ``compile``
    therefore always returns a complete report.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        *,
        config: Optional[Dict[str, Any]] = None,
        oracle: Optional[RefinementOracle] = None,
        security_rules: Optional[Iterable[SecurityRule]] = None,
        generator: Optional[TemplateCodeGenerator] = None,
    ) -> None:
        self._ensure_dotenv()
        self.config_path = config_path
        config_root = (
            Path(config_path).resolve().parent
            if config_path is not None
            else Path.cwd()
        )
        if config is None:
            config = load_config(config_path or DEFAULT_CONFIG_PATH)
        self.config = config
        self.settings: CompilerSettings = build_compiler_settings(
            config, config_root=config_root
        )
        llm_cfg = dict(self.settings.llm.raw)
        llm_cfg.setdefault("timeout_s", self.settings.llm.timeout_s)
        self.oracle: RefinementOracle = oracle or LLMOracle(
            load_provider(llm_cfg)
        )
        self.prompts = OraclePrompts(
            PromptManager(extra_dirs=self.settings.llm.prompt_overrides)
        )
        self.version_engine = VersionInferenceEngine(self.settings.versions)
        self.semantic = SemanticClassifier()
        self.generator = generator or TemplateCodeGenerator()
        self.security = SecurityRuleEngine(
            self.oracle,
            security_rules
            if security_rules is not None
            else SecurityRuleEngine.rules_from_settings(self.settings.security),
            prompts=self.prompts,
        )

    def compile(self, node: SyntaxNode, language: str) -> Report:
        version = self.version_engine.infer(language, node)
        semantic = self.semantic.classify(node)
        base = self.generator.generate(node, language)
        refinement = self.oracle.predict(
            self.prompts.refine(language, version, base)
        )
        security = self.security.assess(node)
        LOGGER.info(
            "Compiled %s for %s %s (refined=%s, findings=%d)",
            semantic.meaning,
            language,
            version,
            "ok" if refinement.ok else "failed",
            len(security.findings),
        )
        return Report(
            language=language,
            version=version,
            meaning=semantic.meaning,
            type_tags=semantic.type_tags,
            base_code=base,
            refinement=refinement,
            security=security,
        )

    def compile_many(
        self,
        nodes: Iterable[SyntaxNode],
        language: str,
        *,
        workers: int = 1,
    ) -> List[Report]:
        """Compile independent nodes; results keep the input order."""

        items = list(nodes)
        if workers <= 1 or len(items) <= 1:
            return [self.compile(node, language) for node in items]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(
                executor.map(lambda node: self.compile(node, language), items)
            )

    def directory_transpiler(self) -> DirectoryTranspiler:
        return DirectoryTranspiler(
            self.oracle, self.settings.traversal, prompts=self.prompts
        )

    def transpile_directory(
        self, source_dir: Path, output_dir: Path, language: str
    ) -> TranspileSummary:
        return self.directory_transpiler().transpile(
            source_dir, output_dir, language
        )

    def _ensure_dotenv(self) -> None:
        global _DOTENV_LOADED
        if _DOTENV_LOADED:
            return
        load_dotenv()
        _DOTENV_LOADED = True


__all__ = ["DEFAULT_CONFIG_PATH", "IntelligentCompiler", "load_config"]
