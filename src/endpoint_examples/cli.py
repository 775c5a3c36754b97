"""CLI entry point for endpoint-examples."""

from pathlib import Path

import click

from endpoint_examples.generator.examples import document
from endpoint_examples.generator.render import RENDERERS
from endpoint_examples.parser.postman import parse_postman

DEFAULT_INPUT = "src/postman_endpoint.json"
DEFAULT_OUTPUT = "ENDPOINTS_EXAMPLES.md"


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-i", "--input", "input_path", default=DEFAULT_INPUT, show_default=True, envvar="ENDPOINT_EXAMPLES_INPUT", type=click.Path(path_type=Path), help="Path to Postman collection JSON (or YAML).")
@click.option("-o", "--output", "output_path", default=DEFAULT_OUTPUT, show_default=True, envvar="ENDPOINT_EXAMPLES_OUTPUT", type=click.Path(path_type=Path), help="Path to output file.")
@click.option("-f", "--format", "fmt", default="md", show_default=True, envvar="ENDPOINT_EXAMPLES_FORMAT", type=click.Choice(sorted(RENDERERS)), help="Output format.")
def main(input_path: Path, output_path: Path, fmt: str):
    """Generate heuristic success/error examples for every request in a Postman collection."""
    input_path = input_path.resolve()
    output_path = output_path.resolve()

    if not input_path.exists():
        raise click.ClickException(f"Input not found: {input_path}")

    click.echo(f"Parsing {input_path}...")
    endpoints = parse_postman(input_path)
    click.echo(f"Found {len(endpoints)} endpoints.")

    content = RENDERERS[fmt](document(endpoints))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    click.echo(f"Generated {fmt.upper()} examples -> {output_path}")
