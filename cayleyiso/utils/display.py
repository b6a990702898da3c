"""Rich console display utilities for tables, classes, witnesses and automorphisms."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from cayleyiso.core.maps import Isomorphism
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.library.iso_class import IsoClass
from cayleyiso.witness.inverse import InverseOutcome
from cayleyiso.witness.protocol import LAW_NAMES, WitnessReport

console = Console()


def _verdict(value: bool | None) -> str:
    if value is None:
        return "[dim]n/a[/dim]"
    return "[green]yes[/green]" if value else "[red]no[/red]"


def display_cayley_table(group: FiniteGroup) -> None:
    """Print the multiplication table with element names as headers."""
    names = [str(x) for x in group.elements]
    table = Table(title=f"Cayley table: {group.label}")
    table.add_column("∘", style="bold cyan")
    for name in names:
        table.add_column(name, justify="center")
    for i, name in enumerate(names):
        table.add_row(name, *(names[j] for j in group.table[i]))
    console.print(table)


def display_iso_class(cls: IsoClass) -> None:
    tree = Tree(f"[bold]{cls.name or 'unnamed'}[/bold]")
    tree.add(f"[cyan]order[/cyan]: {cls.size}")
    tree.add(f"[green]canonical key[/green]: {cls.key}")
    console.print(Panel(tree, title="Isomorphism class", border_style="blue"))


def display_known_structures(rows: list[tuple[str, FiniteGroup, str | None]]) -> None:
    table = Table(title="Known groups")
    table.add_column("Name", style="cyan")
    table.add_column("Order", style="green", justify="right")
    table.add_column("Registered as", style="yellow")
    for name, group, registered in rows:
        table.add_row(name, str(len(group)), registered or "-")
    console.print(table)


def display_witness_report(report: WitnessReport) -> None:
    """Display each law verdict and the derived isomorphism verdicts."""
    table = Table(title=f"Witness: {report.source_label} -> {report.target_label}")
    table.add_column("Law", style="cyan")
    table.add_column("Holds", justify="center")
    table.add_column("Counterexample", style="dim")

    for field_name, description in LAW_NAMES.items():
        value = getattr(report, field_name)
        example = report.counterexamples.get(field_name)
        table.add_row(description, _verdict(value), ", ".join(map(repr, example)) if example else "")

    table.add_row("[bold]isomorphism (bijective homomorphism)[/bold]", _verdict(report.is_isomorphism), "")
    table.add_row(
        "[bold]isomorphism (homomorphic two-sided inverse)[/bold]",
        _verdict(report.is_isomorphism_by_inverse), "",
    )
    console.print(table)


def display_inverse_outcome(outcome: InverseOutcome) -> None:
    style = "green" if outcome.ok else "yellow"
    console.print(Panel(outcome.explain(), title="Inverse construction", border_style=style))
    if outcome.report is not None:
        display_witness_report(outcome.report)


def display_isomorphisms(isos: list[Isomorphism], title: str, limit: int = 24) -> None:
    """Display isomorphisms as element mappings."""
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Mapping", style="cyan")

    for i, iso in enumerate(isos[:limit], 1):
        mapping = ", ".join(f"{x}→{iso(x)}" for x in iso.source.elements)
        table.add_row(str(i), mapping)

    console.print(table)
    if len(isos) > limit:
        console.print(f"  ... and {len(isos) - limit} more")
