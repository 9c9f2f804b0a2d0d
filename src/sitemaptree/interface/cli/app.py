from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the headless lifecycle: logging bootstrap, configuration
resolution (defaults, saved preferences, command-line overrides), sitemap
loading, the initial layout pass, and rendering of the visible tree as text
or of the complete tree as JSON.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from sitemaptree.core.analysis.text_renderer import generate_tree_lines
from sitemaptree.core.analysis.tree_renderer import initialize
from sitemaptree.core.services.sitemap_loader import load_sitemap_tree
from sitemaptree.core.services.validator import validate_config
from sitemaptree.domain.config import get_default_config, load_config
from sitemaptree.domain.errors import SitemapInputError, SitemapTreeError
from sitemaptree.domain.layout_models import LayoutSettings, RenderState
from sitemaptree.infra.logging import LoggingConfig, configure_logging, get_logger
from sitemaptree.interface.cli import args as cli_args
from sitemaptree.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_INPUT_ERROR = 2
EXIT_SITEMAP_ERROR = 3

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 on success, 2 for unusable input, 3 for an unreadable or empty
        sitemap, 1 for anything unexpected.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console only)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=None))

    # 3. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not args.input_path:
        msg = i18n.t("cli.errors.no_input", default="No sitemap given. Use -i/--input.")
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    # 4. Load and lay out
    try:
        tree = load_sitemap_tree(args.input_path)
        state = initialize(tree, LayoutSettings.from_config(clean_conf))
    except SitemapInputError as e:
        return _fail(e, EXIT_INPUT_ERROR)
    except SitemapTreeError as e:
        return _fail(e, EXIT_SITEMAP_ERROR)
    except KeyboardInterrupt:
        print(i18n.t("cli.status.interrupted", default="Interrupted."), file=sys.stderr)
        return 130
    except Exception as e:
        msg = i18n.t("cli.errors.unexpected", default="Unexpected failure: {error}", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_UNEXPECTED

    # 5. Rendering
    if args.json_output:
        print(json.dumps(tree.to_dict(), ensure_ascii=False, indent=2))
    else:
        try:
            _print_human_summary(state, show_urls=args.show_urls, save_path=args.save_path or "")
        except OSError as e:
            msg = i18n.t("cli.errors.save_failed", default="Cannot write {path}: {error}",
                         path=args.save_path, error=str(e))
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return EXIT_INPUT_ERROR

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge the known override keys into `base`."""
    out = dict(base)
    for k in ("initial_depth",):
        if k in overrides:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _fail(error: SitemapTreeError, code: int) -> int:
    logger.error(str(error))
    print(f"ERROR: {error}", file=sys.stderr)
    return code


def _print_human_summary(state: RenderState, show_urls: bool, save_path: str) -> None:
    """Print the visible part of the tree followed by a one-line summary."""
    lines = generate_tree_lines(
        state.tree,
        expanded=state.expanded,
        show_urls=show_urls,
        save_path=save_path,
    )
    for line in lines:
        print(line)

    print()
    print(i18n.t(
        "cli.status.summary",
        default="{visible} of {total} nodes shown (max depth {depth}).",
        visible=len(state.nodes),
        total=state.tree.count_nodes(),
        depth=state.tree.max_depth(),
    ))
    if save_path:
        print(i18n.t("cli.status.saved", default="Tree written to {path}", path=save_path))

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
