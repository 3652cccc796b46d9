"""Main runner: validates and executes the sales and forecast domains."""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from salescast.config import (
    SalescastConfig,
    apply_overrides,
    get_env_config,
    load_pipeline_config,
)
from salescast.domains import forecast, sales

type DomainResult = dict[str, bool | str | int]

console = Console()

DOMAINS = {
    "sales": sales,
    "forecast": forecast,
}

YAML_CONFIG = Path("salescast.yaml")


def load_config(env: str | None = None, path: Path = YAML_CONFIG) -> SalescastConfig:
    """Build the run config: preset for the environment, then file overrides.

    ``salescast.yaml`` in the working directory wins over ``[tool.salescast]``
    in pyproject.toml.
    """
    if path.exists():
        import yaml
        with open(path) as f:
            overrides = yaml.safe_load(f) or {}
    else:
        overrides = get_env_config()

    config = load_pipeline_config(env or overrides.get("env", "production"))
    return apply_overrides(config, overrides)


def validate_all() -> list[DomainResult]:
    results = []
    for name, module in DOMAINS.items():
        match module.validate():
            case {"status": "ok", **rest}:
                results.append({"domain": name, "valid": True, **rest})
            case {"status": "error", "message": msg}:
                results.append({"domain": name, "valid": False, "error": msg})
            case _:
                results.append({"domain": name, "valid": False, "error": "Unknown validation result"})
    return results


def run_all(config: SalescastConfig) -> None:
    console.print("[bold]Running all domains...[/bold]")
    for name, module in DOMAINS.items():
        console.print(f"\n[cyan]{'='*60}[/cyan]")
        console.print(f"[bold cyan]Domain: {name}[/bold cyan]")
        module.run(config)


def _cli_overrides(args: argparse.Namespace) -> dict:
    overrides: dict = {}
    if args.seed is not None:
        overrides.setdefault("generator", {})["seed"] = args.seed
    if args.model:
        overrides.setdefault("forecast", {})["model"] = args.model
    if args.periods is not None:
        overrides.setdefault("forecast", {})["horizon"] = args.periods
    if args.export:
        overrides.setdefault("export", {})["enabled"] = True
    return overrides


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate sales history and revenue forecasts")
    parser.add_argument("--validate", action="store_true", help="Only validate, don't run")
    parser.add_argument("--domain", type=str, help="Run a specific domain only")
    parser.add_argument("--env", type=str, help="Config preset (production, staging, development, test)")
    parser.add_argument("--model", type=str, help="Forecast model id")
    parser.add_argument("--periods", type=int, help="Number of periods to forecast")
    parser.add_argument("--seed", type=int, help="Seed for reproducible generation")
    parser.add_argument("--export", action="store_true", help="Write outputs to disk")
    args = parser.parse_args(argv)

    if args.validate:
        results = validate_all()
        table = Table(title="Validation Results")
        table.add_column("Domain")
        table.add_column("Valid")
        table.add_column("Details")

        for r in results:
            status = "[green]✓[/green]" if r["valid"] else "[red]✗[/red]"
            table.add_row(r["domain"], status, r.get("error", "OK"))

        console.print(table)

        if not all(r["valid"] for r in results):
            sys.exit(1)
        return

    try:
        config = apply_overrides(load_config(args.env), _cli_overrides(args))
        if args.domain:
            if args.domain not in DOMAINS:
                console.print(f"[red]Unknown domain: {args.domain}[/red]")
                sys.exit(1)
            DOMAINS[args.domain].run(config)
        else:
            run_all(config)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
