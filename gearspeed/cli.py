import typer
from typing_extensions import Annotated

from .config import Config, load_config
from .utils import logger, set_log_level

# Initialize environment variables
load_config()
Config.refresh()

app = typer.Typer(
    help="GearSpeed - Robot gear system optimizer", rich_markup_mode=None
)

SEPARATOR = "=" * 55


@app.callback()
def configure(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
):
    """Apply logging settings before any command runs"""
    try:
        Config.validate()
    except ValueError as e:
        typer.echo(f"Error: {str(e)}")
        raise typer.Exit(code=1)
    set_log_level("DEBUG" if verbose else Config.log_level())


def _format_row(combo):
    return (
        f"{combo.input_rpm:>9} | {combo.driving_gear:>6}T | {combo.driven_gear:>5}T | "
        f"{combo.gear_ratio:>5.2f} | {combo.output_rpm:>10.1f}"
    )


def _echo_table_header():
    typer.echo("Input RPM | Driving | Driven | Ratio | Output RPM")
    typer.echo("----------|---------|--------|-------|----------")


def _echo_card(card):
    typer.echo(f"   Input: {card['input']} | Gears: {card['gears']}")
    typer.echo(f"   Ratio: {card['ratio']} | Output: {card['output']}")
    if "difference_display" in card:
        typer.echo(f"   Difference from target: {card['difference_display']}")
    typer.echo(f"   → Best for: {card['best_for']}")


def _echo_optimization(combinations):
    from .views import optimization_summary

    summary = optimization_summary(combinations)
    for key in ("fastest", "slowest", "balanced"):
        card = summary[key]
        typer.echo(f"\n{card['title']}:")
        _echo_card(card)


def _echo_perfect_ratios(combinations):
    from .views import find_perfect_ratios

    perfect = find_perfect_ratios(combinations)
    typer.echo("Perfect ratio setups (whole number ratios):")
    for item in perfect["items"]:
        typer.echo(
            f"   {item['input']} | {item['gears']} | "
            f"Ratio: {item['ratio']} | Output: {item['output']}"
        )
    if perfect["remaining"]:
        typer.echo(f"   {perfect['remaining_display']}")
    typer.echo(f"\nTotal perfect ratios: {perfect['count']} out of {perfect['total']}")
    typer.echo(f"Percentage: {perfect['percent_display']}")


def _echo_statistics(combinations):
    from .views import compute_statistics

    stats = compute_statistics(combinations)
    typer.echo("Speed distribution:")
    typer.echo(f"   Fastest setup: {stats['max_display']}")
    typer.echo(f"   Slowest setup: {stats['min_display']}")
    typer.echo(f"   Average speed: {stats['avg_display']}")
    typer.echo(f"   Speed range: {stats['range_display']}")

    typer.echo("\nSpeed categories:")
    for item in stats["categories"]:
        typer.echo(
            f"   {item['category']}: {item['count']} setups ({item['percent_display']})"
        )

    typer.echo("\nInput RPM distribution:")
    for item in stats["rpm_distribution"]:
        typer.echo(f"   {item['input_rpm']} RPM motor: {item['count']} combinations")

    typer.echo("\nEngineering recommendations:")
    for line in stats["recommendations"]:
        typer.echo(f"   → {line}")


@app.command("list")
def list_combinations(
    rpm: Annotated[
        str, typer.Option("--rpm", help="Input RPM to show (all, 100, 200, 600)")
    ] = "all",
    sort: Annotated[
        str, typer.Option("--sort", help="Sort by output, ratio or input")
    ] = "output",
    page: Annotated[int, typer.Option("--page", help="Page number (1-based)")] = 1,
):
    """List one page of gear combinations"""
    from tqdm import tqdm

    from .generator import generate_all_combinations
    from .views import ViewContext

    try:
        context = (
            ViewContext(generate_all_combinations())
            .with_filter(rpm)
            .with_sort(sort)
            .go_to(page)
        )
    except ValueError as e:
        typer.echo(f"Error: {str(e)}")
        raise typer.Exit(code=1)

    table = context.table()
    if not table["rows"]:
        typer.echo("No combinations found matching your criteria")
        return

    typer.echo(f"Found {table['total']} combinations ({table['page_info']}):")
    _echo_table_header()
    for row in tqdm(table["rows"], desc="Listing combinations"):
        typer.echo(
            f"{row['input_rpm']:>9} | {row['driving_display']:>7} | "
            f"{row['driven_display']:>6} | {row['gear_ratio']:>5.2f} | "
            f"{row['output_rpm']:>10.1f} | {row['category']}"
        )


@app.command("optimize")
def optimize():
    """Show the fastest, slowest and most balanced setups"""
    from .generator import generate_all_combinations

    _echo_optimization(generate_all_combinations())


@app.command("stats")
def statistics():
    """Show output speed statistics"""
    from .generator import generate_all_combinations

    _echo_statistics(generate_all_combinations())


@app.command("perfect")
def perfect_ratios():
    """Show setups with whole-number gear ratios"""
    from .generator import generate_all_combinations

    _echo_perfect_ratios(generate_all_combinations())


@app.command("calc")
def calculate(
    input_rpm: Annotated[
        str, typer.Option("--input-rpm", help="Motor speed (default: 200)")
    ] = None,
    driving: Annotated[
        str, typer.Option("--driving", help="Driving gear teeth (default: 24)")
    ] = None,
    driven: Annotated[
        str, typer.Option("--driven", help="Driven gear teeth (default: 48)")
    ] = None,
):
    """Calculate a single gear setup"""
    from .calculator import calculator
    from .models import InvalidGear

    try:
        result = calculator.calculate(input_rpm, driving, driven)
    except InvalidGear as e:
        typer.echo(f"Error: {str(e)}")
        raise typer.Exit(code=1)

    typer.echo(
        f"Setup: {result['input_rpm']:.1f} RPM | "
        f"{result['driving_gear']}T → {result['driven_gear']}T"
    )
    typer.echo(f"Gear ratio: {result['ratio_display']}")
    typer.echo(f"Output speed: {result['output_display']}")
    typer.echo(f"Speed factor: {result['speed_factor_display']}")
    typer.echo(f"Torque factor: {result['torque_factor_display']}")


@app.command("report")
def generate_report():
    """Run the full gear combination analysis"""
    from .generator import generate_all_combinations

    typer.echo("ROBOT GEAR SYSTEM OPTIMIZER - ADVANCED ANALYSIS")
    typer.echo(SEPARATOR)

    combinations = generate_all_combinations()
    typer.echo(f"Processing {len(combinations)} configurations...\n")
    logger.info(f"Analyzing {len(combinations)} gear combinations")

    typer.echo("Sample combinations (first 10):")
    _echo_table_header()
    for combo in combinations[:10]:
        typer.echo(_format_row(combo))

    typer.echo(f"\n... ({len(combinations) - 10} more combinations) ...")
    typer.echo("\nLast 3 combinations:")
    for combo in combinations[-3:]:
        typer.echo(_format_row(combo))

    typer.echo(f"\n{SEPARATOR}\nOptimization analysis:")
    _echo_optimization(combinations)

    typer.echo(f"\n{SEPARATOR}\nPerfect ratio analysis:")
    _echo_perfect_ratios(combinations)

    typer.echo(f"\n{SEPARATOR}\nComprehensive statistics:")
    _echo_statistics(combinations)

    typer.echo(f"\n{SEPARATOR}")
    typer.echo("Analysis complete!")
    typer.echo(f"Total combinations analyzed: {len(combinations)}")


@app.command("serve")
def serve(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int, typer.Option("--port", help="Web UI port")] = None,
):
    """Start the web dashboard"""
    import uvicorn

    from .web.app import app as web_app

    host = host or Config.HOST
    port = port or Config.port()
    logger.info(f"Dashboard available at http://localhost:{port}")
    uvicorn.run(web_app, host=host, port=port, log_level=Config.LOG_LEVEL.lower())


def main():
    app()


if __name__ == "__main__":
    main()
