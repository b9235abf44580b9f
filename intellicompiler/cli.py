"""CLI entrypoints for intellicompiler."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from intellicompiler import IntelligentCompiler
from intellicompiler.exceptions import CompilerError, NodeDecodeError
from intellicompiler.logging import setup_file_logger
from intellicompiler.nodes import Identifier, SyntaxNode, node_from_dict
from intellicompiler.orchestrator import DEFAULT_CONFIG_PATH, load_config


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intellicompiler",
        description=(
            "Generate, refine and security-review code skeletons for "
            "syntax nodes, or transpile whole directories."
        ),
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to a YAML config (default: packaged default_config.yaml).",
    )
    parser.add_argument(
        "--llm-provider",
        type=str,
        help="Override the oracle provider (openai, anthropic, relay, echo).",
    )
    parser.add_argument("--model", type=str, help="Override the model name.")
    parser.add_argument(
        "--api-base",
        type=str,
        help="Override base URL for OpenAI/Relay compatible providers.",
    )
    parser.add_argument(
        "--api-key-env",
        type=str,
        help="Environment variable holding the provider API key.",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        help="Per-call oracle timeout in seconds.",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this rotating log file.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser(
        "compile", help="Compile a single syntax node into a report."
    )
    compile_parser.add_argument(
        "--node",
        type=str,
        help=(
            "YAML/JSON node document. Without it a demo node "
            "(identifier 'x' using generics) is compiled."
        ),
    )
    compile_parser.add_argument(
        "--language", "-l", type=str, required=True, help="Target language."
    )
    compile_parser.add_argument(
        "--format",
        choices=["text", "json", "yaml"],
        default="text",
        help="Report output format.",
    )

    dir_parser = subparsers.add_parser(
        "transpile-dir", help="Transpile every convertible file in a tree."
    )
    dir_parser.add_argument("source", type=str, help="Source directory.")
    dir_parser.add_argument("output", type=str, help="Output directory.")
    dir_parser.add_argument(
        "--language", "-l", type=str, required=True, help="Target language."
    )
    dir_parser.add_argument(
        "--workers",
        type=int,
        help="Number of files transpiled concurrently.",
    )
    dir_parser.add_argument(
        "--summary",
        type=str,
        help="Write the JSON walk summary to this file.",
    )
    return parser


def _apply_cli_overrides(
    args: argparse.Namespace, config: Dict[str, Any]
) -> Dict[str, Any]:
    compiler_cfg = config.setdefault("compiler", {})
    llm_cfg = compiler_cfg.setdefault("llm", {})
    if args.llm_provider:
        llm_cfg["provider"] = args.llm_provider
    if args.model:
        llm_cfg["model"] = args.model
        if not args.llm_provider and llm_cfg.get("provider") == "echo":
            llm_cfg.pop("provider")
    if args.api_base:
        llm_cfg["base_url"] = args.api_base
    if args.api_key_env:
        llm_cfg["api_key_env"] = args.api_key_env
    if args.timeout:
        llm_cfg["timeout_s"] = args.timeout
    if getattr(args, "workers", None):
        compiler_cfg.setdefault("traversal", {})["workers"] = args.workers
    return config


def _demo_node() -> SyntaxNode:
    return Identifier("x", metadata={"uses_generics": "true"})


def _load_node(path: Optional[str]) -> SyntaxNode:
    if not path:
        return _demo_node()
    node_path = Path(path)
    if not node_path.exists():
        raise NodeDecodeError(f"Node file '{node_path}' not found")
    data = yaml.safe_load(node_path.read_text(encoding="utf-8"))
    return node_from_dict(data)


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.DEBUG if args.verbose else logging.INFO
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level, format="%(levelname)s %(name)s: %(message)s"
        )
    logging.getLogger().setLevel(level)
    if args.log_file:
        setup_file_logger(Path(args.log_file))


def _run_compile(
    compiler: IntelligentCompiler, args: argparse.Namespace
) -> int:
    node = _load_node(args.node)
    report = compiler.compile(node, args.language)
    if args.format == "json":
        print(report.to_json())
    elif args.format == "yaml":
        print(report.to_yaml(), end="")
    else:
        print(report.render_text())
    return 0


def _run_transpile_dir(
    compiler: IntelligentCompiler, args: argparse.Namespace
) -> int:
    summary = compiler.transpile_directory(
        Path(args.source), Path(args.output), args.language
    )
    payload = json.dumps(summary.to_dict(), indent=2)
    if args.summary:
        summary_path = Path(args.summary)
        summary_path.parent.mkdir(parents=True, exist_ok=True)
        summary_path.write_text(payload + "\n", encoding="utf-8")
    print(payload)
    return 0 if summary.ok else 2


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    config_path = Path(args.config) if args.config else DEFAULT_CONFIG_PATH
    try:
        config = _apply_cli_overrides(args, load_config(config_path))
        compiler = IntelligentCompiler(config_path, config=config)
        if args.command == "compile":
            return _run_compile(compiler, args)
        return _run_transpile_dir(compiler, args)
    except CompilerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
