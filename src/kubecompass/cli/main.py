#!/usr/bin/env python3
"""
KUBECOMPASS CLI - Component Navigator
-------------------------------------
Read-only reporting front end over the resolution layer:

  kubecompass component list  [--env ENV]   paths grouped by namespace
  kubecompass component path  NAME          backing file of one component
  kubecompass component show  NAME          per-object summary with GVK
  kubecompass namespace list                every namespace directory

Author: KubeCompass Team
Date: 2026-10-17
"""

import sys
import argparse
import logging
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from kubecompass.cli.formatter import KubeFormatter
from kubecompass.component import resolver
from kubecompass.component.namespace import namespaces
from kubecompass.core.app import DEFAULT_ENV, App
from kubecompass.core.errors import ComponentError

VERSION = "0.1.0"

# Global console for consistent styling across the application
console = Console()


class KubeCompassCLI:
    """
    CLI wrapper that translates user commands into resolver calls.
    Every ComponentError becomes a red one-line message and exit code 1.
    """

    def __init__(self, out: Optional[Console] = None):
        self.console = out or console
        self.formatter = KubeFormatter(self.console)
        self.parser = argparse.ArgumentParser(
            prog="kubecompass",
            description="KubeCompass - resolve ksonnet-style components to files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("--version", action="version", version=f"kubecompass v{VERSION}")
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
        self.parser.add_argument("--root", default=".", help="Application root (default: current directory)")

        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        component_parser = subparsers.add_parser("component", help="Inspect components")
        component_sub = component_parser.add_subparsers(dest="action", metavar="Action")

        list_parser = component_sub.add_parser("list", help="List component paths by namespace")
        list_parser.add_argument("--env", default=DEFAULT_ENV, help=f"Environment (default: {DEFAULT_ENV})")

        path_parser = component_sub.add_parser("path", help="Print the file backing a component")
        path_parser.add_argument("name", help="Component name, e.g. 'app/bar'")

        show_parser = component_sub.add_parser("show", help="Summarize the objects of a component")
        show_parser.add_argument("name", help="Component name, e.g. 'app/bar'")

        namespace_parser = subparsers.add_parser("namespace", help="Inspect namespaces")
        namespace_sub = namespace_parser.add_subparsers(dest="action", metavar="Action")
        namespace_sub.add_parser("list", help="List namespace directories")

    def print_header(self, subtitle: str):
        self.console.print(Panel.fit(
            f"[bold cyan]KubeCompass v{VERSION}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _dispatch(self, args: argparse.Namespace) -> int:
        app = App.load(args.root)

        if args.command == "component" and args.action == "list":
            self.print_header("Component Paths")
            grouped = resolver.make_paths_by_namespace(app, args.env)
            self.formatter.print_paths_by_namespace(grouped, args.env)
        elif args.command == "component" and args.action == "path":
            self.console.print(resolver.path(app, args.name), markup=False, highlight=False, soft_wrap=True)
        elif args.command == "component" and args.action == "show":
            component = resolver.extract_component(app, args.name)
            self.formatter.print_summaries(component.name(True), component.summarize())
        elif args.command == "namespace" and args.action == "list":
            self.formatter.print_namespaces(namespaces(app))
        else:
            self.parser.print_help()
            return 2
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit code."""
        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

        try:
            return self._dispatch(args)
        except ComponentError as e:
            self.console.print(f"[bold red]Error:[/bold red] {escape(e.message)}", highlight=False)
            return 1


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubeCompassCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
