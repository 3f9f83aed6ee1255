"""objmap command line - inspect conventions, discovery and plans."""
import json
import logging
import sys

import click
from colorama import Fore, Style, init

from objmap import __version__
from objmap.config import MapperConfig
from objmap.exceptions import MappingError
from objmap.introspection.introspector import is_generic_map, resolve_type
from objmap.mapper.convention_mapper import ConventionMapper
from objmap.mapper.object_mapper import ObjectMapper

# Initialize colorama
init(autoreset=True)


def print_banner():
    """Print application banner."""
    click.echo(f"{Fore.CYAN}{'=' * 44}")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}objmap - Object Mapping Inspector{Fore.CYAN}     ║")
    click.echo(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    click.echo()


def confidence_color(confidence: float, threshold: float) -> str:
    if confidence >= threshold:
        return Fore.GREEN
    if confidence > 0:
        return Fore.YELLOW
    return Fore.RED


def load_type(value: str):
    """Resolve "package.module:Class" / "package.module.Class" for click arguments."""
    if is_generic_map(value):
        return value
    cls = resolve_type(value)
    if cls is None:
        raise click.BadParameter(f"Cannot import type '{value}'")
    return cls


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """objmap - Inspect naming conventions and mapping plans."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("source_name")
@click.argument("destination_name")
@click.option("--threshold", type=float, default=ConventionMapper.DEFAULT_THRESHOLD, show_default=True)
def confidence(source_name, destination_name, threshold):
    """Score how likely two property names denote the same property."""
    mapper = ConventionMapper(threshold=threshold)

    for convention in mapper.get_conventions():
        score = convention.calculate_match_confidence(source_name, destination_name)
        color = confidence_color(score, mapper.threshold)
        click.echo(f"  {convention.name:<14} {color}{score:.2f}")

    best, convention_name = mapper.score(source_name, destination_name)
    color = confidence_color(best, mapper.threshold)
    verdict = "match" if best >= mapper.threshold else "no match"
    click.echo(
        f"{Fore.CYAN}{source_name} -> {destination_name}: "
        f"{color}{best:.2f} ({convention_name or '-'}, {verdict})"
    )


@cli.command()
@click.argument("names", nargs=-1, required=True)
def detect(names):
    """Detect the naming convention of property names."""
    mapper = ConventionMapper()

    for name in names:
        convention = mapper.detect_convention(name)
        if convention is None:
            click.echo(f"  {name:<24} {Fore.RED}unknown")
        else:
            click.echo(f"  {name:<24} {Fore.GREEN}{convention.name:<14}{Fore.WHITE}{convention.normalize(name)}")


@cli.command()
@click.argument("source_type")
@click.argument("destination_type")
@click.option("--threshold", type=float, default=ConventionMapper.DEFAULT_THRESHOLD, show_default=True)
@click.option("--as-json", "as_json", is_flag=True, help="Print results as JSON")
def discover(source_type, destination_type, threshold, as_json):
    """Discover property correspondences between two types."""
    source = load_type(source_type)
    destination = load_type(destination_type)
    mapper = ConventionMapper(threshold=threshold)
    matches = mapper.explain(source, destination)

    if as_json:
        click.echo(json.dumps([match.to_dict() for match in matches], indent=2))
        return

    print_banner()
    if not matches:
        click.echo(f"{Fore.YELLOW}No reflectable properties to compare")
        return

    for match in matches:
        color = confidence_color(match.confidence, mapper.threshold)
        marker = "✓" if match.accepted else "✗"
        click.echo(
            f"  {color}{marker} {match.destination_property:<24} <- "
            f"{match.source_property or '-':<24} {match.confidence:.2f} {match.convention or ''}"
        )

    accepted = sum(1 for match in matches if match.accepted)
    click.echo(f"\n{Fore.CYAN}{accepted}/{len(matches)} properties matched at threshold {mapper.threshold:.2f}")


@cli.command()
@click.argument("source_type")
@click.argument("destination_type")
@click.option("--conventions/--no-conventions", default=True, help="Use convention discovery")
@click.option("--threshold", type=float, default=ConventionMapper.DEFAULT_THRESHOLD, show_default=True)
def plan(source_type, destination_type, conventions, threshold):
    """Show the resolved mapping plan for a type pair."""
    source = load_type(source_type)
    destination = load_type(destination_type)
    config = MapperConfig.for_testing().with_conventions(conventions, threshold)

    try:
        resolved = ObjectMapper(config).get_plan(source, destination)
    except MappingError as e:
        click.echo(f"{Fore.RED}✗ {e}", err=True)
        sys.exit(1)

    click.echo(f"{Fore.CYAN}{resolved.source_type} -> {resolved.destination_type}")
    for entry in resolved:
        click.echo(f"  {entry.property_name:<24} <- {entry.source:<24} {Fore.WHITE}{entry.origin}")


def main():
    cli()


if __name__ == "__main__":
    main()
