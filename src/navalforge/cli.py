"""CLI entry point for the NavalForge pipeline.

Usage:
    navalforge run --ship ship.json --top top.png --side side.png
    navalforge run-step hull_loft -i '{"ship_file": "ship.json"}'
    navalforge generate top.png side.png --ship ship.json -o ship.obj
    navalforge info
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from navalforge.core.logging import setup_logging

app = typer.Typer(name="navalforge", help="Ship blueprints to procedural 3D mesh")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


@app.command()
def run(
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    ship: Optional[Path] = typer.Option(None, help="Ship description JSON (dimensions + hints)"),
    top: Optional[Path] = typer.Option(None, help="Plan view image"),
    side: Optional[Path] = typer.Option(None, help="Side view image"),
    blueprint: Optional[Path] = typer.Option(None, help="Combined blueprint image (split into views)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    log_file: Optional[Path] = typer.Option(None, help="Also write the run log to this file"),
) -> None:
    """Run the full pipeline."""
    setup_logging("DEBUG" if verbose else "INFO", log_file=log_file)
    from navalforge.core.pipeline_runner import run_pipeline

    seed = {
        "ship_file": ship,
        "top_view_path": top,
        "side_view_path": side,
        "blueprint_path": blueprint,
    }
    results = run_pipeline(config, {k: v for k, v in seed.items() if v is not None})

    table = Table(title="Pipeline results")
    table.add_column("Step", style="cyan")
    table.add_column("Output", style="green")
    for name, output in results.items():
        table.add_row(name, output.model_dump_json(indent=2))
    console.print(table)


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. hull_loft)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
) -> None:
    """Run a single pipeline step."""
    setup_logging()
    from navalforge.core.pipeline_runner import load_pipeline_config, import_step_class, load_step_config

    pipeline_cfg = load_pipeline_config(config)
    entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_cls = import_step_class(entry.module)
    step_config = load_step_config(Path(entry.config_file), step_cls.config_type)
    step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

    input_data = json.loads(input_json) if input_json else {}
    missing = [f for f in step_cls.get_input_schema().get("required", []) if f not in input_data]
    if missing:
        example = json.dumps({f: f"path/to/{f.removesuffix('_file')}.json" for f in missing})
        console.print(f"[yellow]Step '{step_name}' is missing input fields: {missing}[/yellow]")
        console.print(f"  navalforge run-step {step_name} -i '{example}'")
        raise typer.Exit(1)

    console.print(f"[green]Running step: {step_name}[/green]")
    output = step_instance.execute(step_cls.input_type(**input_data))
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def generate(
    top: Path = typer.Argument(..., help="Plan view image"),
    side: Path = typer.Argument(..., help="Side view image"),
    ship: Path = typer.Option(..., help="Ship description JSON (dimensions + hints)"),
    output: Path = typer.Option(Path("ship.obj"), "--output", "-o", help="Output OBJ path"),
    length_segments: int = typer.Option(24, help="Hull segments along the length"),
    radial_segments: int = typer.Option(8, help="Hull segments around each section"),
) -> None:
    """Generate an OBJ directly from two view images, without data_root artifacts."""
    setup_logging()
    from navalforge.core.ship_pipeline import MeshPipelineConfig, build_ship_mesh
    from navalforge.core.ship_spec import parse_ship_spec
    from navalforge.steps.s02_hull_loft.config import HullLoftConfig
    from navalforge.utils.io import load_pixel_buffer, read_json

    parsed = parse_ship_spec(read_json(ship))
    cfg = MeshPipelineConfig(
        hull=HullLoftConfig(length_segments=length_segments, radial_segments=radial_segments)
    )
    result = build_ship_mesh(
        load_pixel_buffer(top), load_pixel_buffer(side), parsed.dimensions, parsed.hints, cfg
    )
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.text, encoding="utf-8")

    for issue in parsed.issues + result.issues:
        console.print(f"[yellow]warning:[/yellow] {issue}")
    stats = result.stats
    console.print(
        f"[green]Wrote {output}[/green]: {stats.vertex_count} vertices, {stats.face_count} faces, "
        f"size {', '.join(f'{s:.2f}' for s in stats.size)} m"
    )


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps, what they consume and what they produce."""
    from navalforge.core.pipeline_runner import import_step_class, load_pipeline_config

    pipeline_cfg = load_pipeline_config(config)
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name} (data_root={pipeline_cfg.data_root})")
    table.add_column("Step", style="cyan")
    table.add_column("Enabled", style="yellow")
    table.add_column("After", style="dim")
    table.add_column("Required inputs", style="magenta")
    table.add_column("Outputs", style="green")

    for step in pipeline_cfg.steps:
        step_cls = import_step_class(step.module)
        required = step_cls.get_input_schema().get("required", [])
        outputs = step_cls.get_output_schema().get("properties", {})
        table.add_row(
            step.name,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) or "-",
            ", ".join(required) or "-",
            ", ".join(k for k in outputs if k.endswith(("_file", "_path"))) or "-",
        )
    console.print(table)


if __name__ == "__main__":
    app()
