from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the headless viewer and translates the
parsed namespace into configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

from sitemaptree.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the SitemapTree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="sitemaptree",
        description=i18n.t("app.description", default="Browse a sitemap.xml as a collapsible URL tree."),
    )

    # --- Input ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help=i18n.t("cli.args.input", default="Path to the sitemap XML file."),
    )

    # --- Expansion Policy ---
    depth_group = p.add_mutually_exclusive_group()
    depth_group.add_argument(
        "--depth",
        dest="initial_depth",
        type=int,
        default=None,
        help=i18n.t("cli.args.depth", default="Expand nodes shallower than this depth."),
    )
    depth_group.add_argument(
        "--all",
        dest="expand_all",
        action="store_true",
        help=i18n.t("cli.args.all", default="Expand every node."),
    )

    # --- Output ---
    p.add_argument(
        "--urls",
        dest="show_urls",
        action="store_true",
        help=i18n.t("cli.args.urls", default="Print the URL next to each label."),
    )
    p.add_argument(
        "--save",
        dest="save_path",
        default=None,
        help=i18n.t("cli.args.save", default="Also write the text tree to this file."),
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json", default="Print the full tree as JSON."),
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults", default="Ignore saved preferences."),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump", default="Print the resolved configuration and exit."),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options that map onto persisted preferences are returned; output
    switches stay on the namespace.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.expand_all:
        overrides["initial_depth"] = "all"
    elif args.initial_depth is not None:
        overrides["initial_depth"] = args.initial_depth

    return overrides
