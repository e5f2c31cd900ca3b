# src/kubecompass/cli/formatter.py
from typing import Dict, List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kubecompass.component.namespace import Namespace
from kubecompass.core.models import Summary


class KubeFormatter:
    """
    KubeFormatter: renders resolution results as rich tables.
    Owns no state beyond the console it prints to.
    """

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def print_paths_by_namespace(self, grouped: Dict[Namespace, List[str]], env: str):
        table = Table(title=f"Components in '{escape(env)}'", show_lines=True, header_style="bold magenta")
        table.add_column("Namespace", style="cyan")
        table.add_column("Path", style="white")

        for ns, paths in grouped.items():
            table.add_row(escape(ns.path or "/"), "\n".join(escape(p) for p in paths))

        self.console.print(table)

    def print_summaries(self, name: str, summaries: List[Summary]):
        """
        One row per emitted object. A malformed GVK raises ComponentError
        before anything is printed.
        """
        table = Table(title=f"Component '{escape(name)}'", header_style="bold magenta")
        table.add_column("Index", justify="right")
        table.add_column("Type")
        table.add_column("Kind", style="cyan")
        table.add_column("Group/Version")
        table.add_column("Name", style="white")

        rows = []
        for s in summaries:
            if s.type == "jsonnet":
                rows.append((s.index_str, s.type, "[dim]n/a[/dim]", "[dim]n/a[/dim]", escape(s.name)))
                continue
            spec = s.type_spec()
            rows.append((s.index_str, s.type, escape(spec.kind), escape(spec.api_version), escape(s.name)))

        for row in rows:
            table.add_row(*row)

        self.console.print(table)

    def print_namespaces(self, namespaces: List[Namespace]):
        table = Table(title="Namespaces", header_style="bold magenta")
        table.add_column("Namespace", style="cyan")
        table.add_column("Directory", style="dim")
        for ns in namespaces:
            table.add_row(escape(ns.path or "/"), escape(ns.dir))
        self.console.print(table)
