"""CLI interface for canonicalization and isomorphism search.

Usage:
    cayleyiso list-structures
    cayleyiso classify C4
    cayleyiso classify --table table.json
    cayleyiso aut V4
    cayleyiso iso S3 D3
    cayleyiso witness C8 C4 --map "[0,1,2,3,0,1,2,3]"
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from cayleyiso.core.config import EngineConfig
from cayleyiso.core.errors import CayleyIsoError
from cayleyiso.core.structure import FiniteGroup

console = Console()


def _load_group(name: str) -> FiniteGroup:
    from cayleyiso.library.known_structures import KNOWN_STRUCTURES, load_by_name

    group = load_by_name(name)
    if group is None:
        console.print(f"[red]Unknown group '{name}'.[/red]")
        console.print(f"Known: {', '.join(KNOWN_STRUCTURES)} (or Cn, Dn, Sn)")
        sys.exit(2)
    return group


def _parse_index_list(text: str, option: str) -> list[int]:
    try:
        values = json.loads(text)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint=option) from exc
    if not isinstance(values, list) or not all(isinstance(v, int) for v in values):
        raise click.BadParameter("expected a JSON list of element indices", param_hint=option)
    return values


@click.group()
@click.option("--max-size", default=None, type=int, help="Ceiling for isomorphism / automorphism search")
@click.option("--canonical-max-size", default=None, type=int, help="Ceiling for canonical-key computation")
@click.option("--workers", default=None, type=int, help="Worker processes for permutation search (default: in-process)")
@click.option("-v", "--verbose", is_flag=True, help="Log search progress")
@click.pass_context
def main(
    ctx: click.Context,
    max_size: int | None,
    canonical_max_size: int | None,
    workers: int | None,
    verbose: bool,
) -> None:
    """Canonical forms and isomorphism witnesses for small finite groups."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    defaults = EngineConfig()
    ctx.ensure_object(dict)
    ctx.obj["config"] = EngineConfig(
        max_canonical_size=canonical_max_size or defaults.max_canonical_size,
        max_search_size=max_size or defaults.max_search_size,
        workers=workers,
    )


@main.command("list-structures")
def list_structures() -> None:
    """List the known groups and the canonical name each one registers."""
    from cayleyiso.library.iso_class import IsoClassRegistry, auto_classify
    from cayleyiso.library.known_structures import KNOWN_STRUCTURES, seed_registry
    from cayleyiso.utils.display import display_known_structures

    registry = seed_registry(IsoClassRegistry())
    rows = []
    for name, factory in KNOWN_STRUCTURES.items():
        group = factory()
        rows.append((name, group, auto_classify(group, registry).name))
    display_known_structures(rows)


@main.command()
@click.argument("name", required=False)
@click.option("--table", "table_path", type=click.Path(exists=True, dir_okay=False), help="JSON file holding a Cayley table")
@click.pass_context
def classify(ctx: click.Context, name: str | None, table_path: str | None) -> None:
    """Canonicalize a group and look its key up among the known groups."""
    from cayleyiso.library.iso_class import IsoClassRegistry, auto_classify, iso_class
    from cayleyiso.library.known_structures import seed_registry
    from cayleyiso.utils.display import display_iso_class

    config: EngineConfig = ctx.obj["config"]
    if table_path:
        try:
            structure = json.loads(Path(table_path).read_text())
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--table") from exc
    elif name:
        structure = _load_group(name)
    else:
        raise click.UsageError("give a group NAME or --table FILE")

    try:
        cls = iso_class(structure, max_size=config.max_canonical_size, workers=config.workers)
        cls = auto_classify(cls, seed_registry(IsoClassRegistry()))
    except CayleyIsoError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    display_iso_class(cls)


@main.command()
@click.argument("name")
def table(name: str) -> None:
    """Show the Cayley table of a known group."""
    from cayleyiso.utils.display import display_cayley_table

    display_cayley_table(_load_group(name))


@main.command()
@click.argument("name")
@click.option("--top", default=24, help="Number of automorphisms to list")
@click.pass_context
def aut(ctx: click.Context, name: str, top: int) -> None:
    """Enumerate Aut(G)."""
    from cayleyiso.solvers.search import automorphism_group
    from cayleyiso.utils.display import display_isomorphisms

    config: EngineConfig = ctx.obj["config"]
    group = _load_group(name)
    try:
        autg = automorphism_group(group, max_size=config.max_search_size, workers=config.workers)
    except CayleyIsoError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    console.print(f"\n[bold]|Aut({group.label})| = {len(autg)}[/bold]")
    display_isomorphisms(list(autg.elements), title=f"Aut({group.label})", limit=top)


@main.command()
@click.argument("first")
@click.argument("second")
@click.option("--all", "show_all", is_flag=True, help="List every isomorphism, not just one")
@click.pass_context
def iso(ctx: click.Context, first: str, second: str, show_all: bool) -> None:
    """Decide whether two groups are isomorphic and show a witness."""
    from cayleyiso.solvers.search import enumerate_isomorphisms, find_isomorphism
    from cayleyiso.utils.display import display_isomorphisms, display_witness_report
    from cayleyiso.witness.protocol import build_witness

    config: EngineConfig = ctx.obj["config"]
    g, h = _load_group(first), _load_group(second)
    try:
        if show_all:
            isos = enumerate_isomorphisms(g, h, max_size=config.max_search_size, workers=config.workers)
        else:
            found = find_isomorphism(g, h, max_size=config.max_search_size)
            isos = [found] if found else []
    except CayleyIsoError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if not isos:
        console.print(f"[yellow]{g.label} and {h.label} are not isomorphic.[/yellow]")
        return
    console.print(f"[green]{g.label} ≅ {h.label}[/green]")
    display_isomorphisms(isos, title=f"{g.label} → {h.label}")
    display_witness_report(build_witness(g, h, isos[0].forward, isos[0].backward))


@main.command()
@click.argument("source")
@click.argument("target")
@click.option("--map", "map_text", required=True, help="JSON list: index in TARGET of each SOURCE element")
@click.option("--inverse", "inverse_text", default=None, help="JSON list: proposed inverse, by index")
@click.pass_context
def witness(ctx: click.Context, source: str, target: str, map_text: str, inverse_text: str | None) -> None:
    """Verify a proposed map (and inverse) between two known groups."""
    from cayleyiso.core.maps import FiniteMap
    from cayleyiso.utils.display import display_inverse_outcome, display_witness_report
    from cayleyiso.witness.inverse import try_build_inverse
    from cayleyiso.witness.protocol import build_witness

    g, h = _load_group(source), _load_group(target)
    try:
        f = FiniteMap(g, h, _parse_index_list(map_text, "--map"))
        if inverse_text is not None:
            inv = FiniteMap(h, g, _parse_index_list(inverse_text, "--inverse"))
            display_witness_report(build_witness(g, h, f, inv))
        else:
            display_witness_report(build_witness(g, h, f))
            display_inverse_outcome(try_build_inverse(g, h, f))
    except CayleyIsoError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
