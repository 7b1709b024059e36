"""
Command-line interface for polygeom.

Tessellates procedural surfaces and reports mesh statistics, optionally after
merging coplanar triangles.
"""

from collections import Counter
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from polygeom import __version__
from polygeom.core.config import GeometrySettings, load_settings
from polygeom.core.exceptions import PolygeomError
from polygeom.core.logging import configure_from_settings, configure_logging
from polygeom.geometry.mesh import PolyMesh
from polygeom.procedural.shapes import PlaneSurface, SphereSurface, tessellate

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default="WARNING", help="Minimum log level")
@click.option("--json-logs", is_flag=True, help="Emit JSON log lines")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file (geometry and logging sections)",
)
@click.pass_context
def main(
    ctx: click.Context, log_level: str, json_logs: bool, config_path: Optional[Path]
) -> None:
    """polygeom - Indexed polygon meshes with cached geometric queries."""
    ctx.ensure_object(dict)
    ctx.obj["settings"] = None

    if config_path is not None:
        try:
            settings = load_settings(config_path)
        except PolygeomError as e:
            console.print(f"[red]✗[/red] {e}")
            raise SystemExit(1)
        configure_from_settings(settings.logging)
        ctx.obj["settings"] = settings.geometry
    else:
        configure_logging(level=log_level, json_output=json_logs)


def _resolve_tolerance(
    ctx: click.Context, mesh: PolyMesh, tolerance: Optional[float]
) -> Optional[float]:
    """Command-line tolerance wins over the settings file."""
    if tolerance is not None:
        return tolerance
    settings: Optional[GeometrySettings] = ctx.obj.get("settings")
    if settings is None:
        return None
    return settings.resolve_tolerance(mesh.vertices)


def _report(title: str, mesh: PolyMesh, merged: Optional[PolyMesh]) -> None:
    table = Table(title=title)
    table.add_column("Property", style="cyan")
    table.add_column("Tessellated")
    if merged is not None:
        table.add_column("Merged")

    def arities(m: PolyMesh) -> str:
        counts = Counter(int(c) for c in m.face_counts)
        return ", ".join(f"{arity}:{n}" for arity, n in sorted(counts.items())) or "-"

    rows = [
        ("Vertices", lambda m: str(len(m.vertices))),
        ("Used vertices", lambda m: str(len(m.used_vertices()))),
        ("Faces", lambda m: str(m.face_count())),
        ("Arity histogram", arities),
    ]
    for name, fn in rows:
        values = [fn(mesh)]
        if merged is not None:
            values.append(fn(merged))
        table.add_row(name, *values)

    console.print(table)


def _run(ctx: click.Context, title: str, mesh: PolyMesh, merge: bool, tolerance: Optional[float]) -> None:
    merged = None
    if merge:
        resolved = _resolve_tolerance(ctx, mesh, tolerance)
        if resolved is None:
            console.print("[red]✗[/red] Merging needs --tolerance or a --config file")
            raise SystemExit(1)
        merged = mesh.merge_coplanar(resolved)
    _report(title, mesh, merged)


@main.command()
@click.option("--rows", default=4, show_default=True, type=click.IntRange(min=1))
@click.option("--cols", default=4, show_default=True, type=click.IntRange(min=1))
@click.option("--size", default=1.0, show_default=True, help="Edge length of the plane")
@click.option("--merge/--no-merge", default=True, show_default=True)
@click.option("--tolerance", type=float, default=None, help="Absolute coplanarity tolerance")
@click.pass_context
def plane(
    ctx: click.Context, rows: int, cols: int, size: float, merge: bool, tolerance: Optional[float]
) -> None:
    """Tessellate a square plane."""
    surface = PlaneSurface(u_axis=(size, 0.0, 0.0), v_axis=(0.0, size, 0.0))
    _run(ctx, f"Plane {rows}x{cols}", tessellate(surface, rows, cols), merge, tolerance)


@main.command()
@click.option("--rows", default=8, show_default=True, type=click.IntRange(min=1))
@click.option("--cols", default=16, show_default=True, type=click.IntRange(min=1))
@click.option("--radius", default=1.0, show_default=True)
@click.option("--merge/--no-merge", default=False, show_default=True)
@click.option("--tolerance", type=float, default=None, help="Absolute coplanarity tolerance")
@click.pass_context
def sphere(
    ctx: click.Context, rows: int, cols: int, radius: float, merge: bool, tolerance: Optional[float]
) -> None:
    """Tessellate a UV sphere."""
    surface = SphereSurface(radius=radius)
    _run(ctx, f"Sphere {rows}x{cols}", tessellate(surface, rows, cols), merge, tolerance)


if __name__ == "__main__":
    main()
