"""Command line entry point.

Usage:
    depscope app.checkout.Checkout [more.Types ...] [--manifest composer.json]
             [--package acme/module-checkout] [--path src] [--module App_Checkout]
             [--verbose]
"""

import argparse
import logging
import sys
from typing import Optional

from depscope.builders import make_inspector
from depscope.components import ModuleRegistry
from depscope.errors import DepscopeError
from depscope.packages import ManifestReader, PackageCache
from depscope.scan import TypeReport, check_requirements, scan_type
from depscope.settings import Settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depscope",
        description="List the types a class depends on and the components defining them.",
    )
    parser.add_argument("types", nargs="+", metavar="TYPE", help="Fully-qualified type names")
    parser.add_argument("--manifest", help="Manifest whose requirements are cross-checked")
    parser.add_argument("--package", default="", help="Package name of the scanned code")
    parser.add_argument(
        "--path", action="append", default=[], help="Directory to import scanned code from"
    )
    parser.add_argument(
        "--module", action="append", default=[], help="Name of a known application module"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    saved_path = list(sys.path)
    sys.path[:0] = args.path
    try:
        return _run(args, settings)
    finally:
        sys.path[:] = saved_path


def _run(args: argparse.Namespace, settings: Settings) -> int:
    modules = ModuleRegistry(settings.known_modules + args.module)
    inspector = make_inspector(settings, modules=modules, cache=PackageCache())

    reports = []
    failed = False
    for name in args.types:
        try:
            report = scan_type(inspector, name)
        except (DepscopeError, OSError) as e:
            logger.error("Skipping %s: %s", name, e)
            failed = True
            continue
        reports.append(report)
        print(format_report(report))

    if args.manifest:
        try:
            requirements = ManifestReader().read_requirements(args.manifest)
        except DepscopeError as e:
            logger.error("%s", e)
            return 1
        check = check_requirements(reports, requirements, args.package)
        for package in check.missing:
            print(f"Missing requirement: {package}")
        for package in check.unused:
            print(f"Unused requirement: {package}")
        failed = failed or not check.ok

    return 1 if failed else 0


def format_report(report: TypeReport) -> str:
    lines = [
        f"{report.type_name} ({report.component or 'unknown component'})"
        + (" [deprecated]" if report.deprecated else "")
    ]
    for dependency in report.dependencies:
        if dependency.component is None:
            lines.append(f"  {dependency.name}: {dependency.error}")
        else:
            component = dependency.component
            version = f" {component.package_version}" if component.package_version else ""
            lines.append(
                f"  {dependency.name}: {component} ({component.component_type.value}{version})"
            )
    return "\n".join(lines)


if __name__ == "__main__":
    sys.exit(main())
