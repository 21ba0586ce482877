from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional

from .changelog import load
from .config import Config
from .errors import ChangelogError
from .release import Release, ReleaseContext, Repository


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    # Notes go to stdout, so logs stay on stderr
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--changelog", dest="filename", help="changelog file (default: CHANGELOG.md)")
    common.add_argument(
        "--strict",
        dest="strict_latest",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="require a heading for the previous release",
    )
    common.add_argument("--add-unreleased", action="store_true", default=None)
    common.add_argument("--keep-unreleased", action="store_true", default=None)
    common.add_argument("--add-version-url", action="store_true", default=None)
    common.add_argument("--head", help="ref used in the [unreleased] compare link")
    common.add_argument("--latest-version", help="version of the previous release")
    common.add_argument("-v", "--verbose", action="store_true")
    common.add_argument("--log-file")

    parser = argparse.ArgumentParser(
        prog="changelog-release",
        description="Extract and promote the Unreleased section of a Keep a Changelog file.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("notes", parents=[common], help="print the Unreleased entries")

    release = sub.add_parser(
        "release", parents=[common], help="promote Unreleased to a dated release"
    )
    release.add_argument("--version", dest="version", required=True)
    release.add_argument("--tag-name", help="tag for the new release (default: the version)")
    release.add_argument("--latest-tag", help="tag of the previous release, omit for the first release")
    release.add_argument("--repo", help="host/owner/project or a git remote URL")
    release.add_argument("--dry-run", action="store_true")
    return parser


def apply_overrides(cfg: Config, args: argparse.Namespace) -> Config:
    overrides = {}
    for name in ("filename", "strict_latest", "add_unreleased", "keep_unreleased", "add_version_url", "head"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    return dataclasses.replace(cfg, **overrides) if overrides else cfg


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        cfg = apply_overrides(Config.from_env(), args)
        cfg.validate()
    except (RuntimeError, ValueError) as e:
        logging.error(f"Configuration error: {e}")
        return 2

    try:
        doc = load(cfg.filename)
        if args.command == "notes":
            ctx = ReleaseContext(version="", tag_name="", latest_version=args.latest_version)
            print(Release(doc, ctx, cfg).changelog())
            return 0

        ctx = ReleaseContext(
            version=args.version,
            tag_name=args.tag_name or args.version,
            latest_version=args.latest_version,
            latest_tag=args.latest_tag,
            repo=Repository.parse(args.repo) if args.repo else None,
            is_dry_run=args.dry_run,
        )
        release = Release(doc, ctx, cfg)
        print(release.changelog())
        if release.write():
            logging.info(f"Released {ctx.version} in {doc.filename}")
        else:
            logging.info(f"{doc.filename} left unchanged")
    except ChangelogError as e:
        logging.error(str(e))
        return 1
    return 0


def main() -> None:
    raise SystemExit(run())
