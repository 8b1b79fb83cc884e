"""CLI entry-point: validate, review, search and inspect a product bundle."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from rtcatalog.catalog.filters import filter_products
from rtcatalog.catalog.structures import (
    count_structure_types,
    format_grouped_structures,
    parse_and_group_structures,
)
from rtcatalog.config import get_settings
from rtcatalog.review.checks import run_review_checks, summarize_checks
from rtcatalog.review.data_audit import audit_product_data, data_fix_recommendations
from rtcatalog.review.revision import FixedClock, SystemClock, calculate_revision_stats
from rtcatalog.review.summary import filter_review_summaries, review_dashboard, review_products
from rtcatalog.review.validator import validate_products
from rtcatalog.schemas.models import FilterState, ProductRecord
from rtcatalog.store.products import ProductLoadError, load_products
from rtcatalog.vocabulary import VocabularyError, get_vocabulary

app = typer.Typer(help="Radiotherapy AI product catalog: review and filtering tools")

_STATUS_STYLE = {"critical": "red", "warning": "yellow", "ok": "green"}
_URGENCY_STYLE = {"high": "red", "medium": "yellow", "low": "green"}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    settings = get_settings()
    level = logging.DEBUG if verbose else getattr(logging, settings.rtcat_log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load(products_path: str | None, console: Console) -> list[ProductRecord]:
    path = Path(products_path) if products_path else get_settings().products_path
    try:
        return load_products(path)
    except ProductLoadError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _vocabulary(console: Console):
    try:
        return get_vocabulary()
    except VocabularyError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _clock(today: str | None):
    return FixedClock(date.fromisoformat(today)) if today else SystemClock()


@app.command()
def validate(
    products_path: str = typer.Argument(None, help="Product JSON file or directory (default from RTCAT_PRODUCTS_PATH)"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 when any product has an issue"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Check modality, anatomy and certification values against the vocabulary."""
    console = Console()
    products = _load(products_path, console)
    results = validate_products(products, _vocabulary(console))
    flagged = {pid: issues for pid, issues in results.items() if issues}

    if as_json:
        print(json.dumps({pid: [i.model_dump() for i in issues] for pid, issues in flagged.items()}, indent=2))
    else:
        table = Table(title=f"Validation issues ({len(flagged)}/{len(products)} products)")
        table.add_column("Product")
        table.add_column("Field")
        table.add_column("Invalid values")
        for pid, issues in flagged.items():
            for issue in issues:
                table.add_row(pid, issue.field, ", ".join(issue.invalid_values))
        console.print(table)

    if flagged and strict:
        raise typer.Exit(1)


@app.command()
def review(
    products_path: str = typer.Argument(None, help="Product JSON file or directory"),
    category: str = typer.Option(None, help="Only this category"),
    company: str = typer.Option(None, help="Only this company"),
    status: str = typer.Option(None, help="critical | warning | ok"),
    urgency: str = typer.Option(None, help="high | medium | low"),
    today: str = typer.Option(None, help="Reference date YYYY-MM-DD (default: today)"),
    product: str = typer.Option(None, "--product", help="Show the full checklist for one product id"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Review status and urgency for every product."""
    console = Console()
    products = _load(products_path, console)
    vocabulary = _vocabulary(console)
    settings = get_settings()

    if product:
        match = next((p for p in products if p.id == product), None)
        if match is None:
            console.print(f"[red]Error: no product with id {product}[/red]")
            raise typer.Exit(1)
        checks = run_review_checks(match, vocabulary)
        digest = summarize_checks(match, checks)
        if as_json:
            print(json.dumps({"checks": [c.model_dump(mode="json") for c in checks], **digest.model_dump()}, indent=2))
            return
        console.print(f"[bold]{match.name}[/bold] ({match.company})")
        for line in digest.notes:
            console.print(line)
        return

    try:
        summaries = review_products(products, _clock(today), vocabulary, settings.rtcat_revision_sentinel)
        summaries = filter_review_summaries(summaries, category, company, status, urgency)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        print(json.dumps([s.model_dump(mode="json") for s in summaries], indent=2))
        return

    table = Table(title="Product review")
    for col in ("Product", "Company", "Category", "Status", "Urgency", "Days", "Issues"):
        table.add_column(col)
    for s in summaries:
        table.add_row(
            s.name or s.id,
            s.company,
            s.category,
            f"[{_STATUS_STYLE.get(s.status.value, 'white')}]{s.status.value}[/]",
            f"[{_URGENCY_STYLE.get(s.urgency.value, 'white')}]{s.urgency.value}[/]",
            str(s.days_since_review),
            str(s.issue_count),
        )
    console.print(table)
    stats = review_dashboard(summaries)
    console.print(
        f"Critical: {stats.critical_count}  Warning: {stats.warning_count}  Overdue: {stats.overdue_count}"
    )


@app.command()
def search(
    products_path: str = typer.Argument(None, help="Product JSON file or directory"),
    query: str = typer.Option("", "--query", "-q", help="Free-text search"),
    task: list[str] = typer.Option(default=[], help="Task/category (repeatable)"),
    location: list[str] = typer.Option(default=[], help="Anatomical location (repeatable)"),
    modality: list[str] = typer.Option(default=[], help="Modality (repeatable)"),
    certification: list[str] = typer.Option(default=[], help="Certification (repeatable)"),
    company: list[str] = typer.Option(default=[], help="Company (repeatable)"),
    first_value_only: Optional[bool] = typer.Option(
        None, "--first-value-only/--all-values", help="Location/modality honour only the first value"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print matching ids as JSON"),
):
    """Filter the catalog by facets and free text."""
    console = Console()
    products = _load(products_path, console)
    if first_value_only is None:
        first_value_only = get_settings().rtcat_filter_first_value_only
    filters = FilterState(
        tasks=task,
        locations=location,
        companies=company,
        certifications=certification,
        modalities=modality,
    )
    matches = filter_products(products, filters, query, first_value_only=first_value_only)

    if as_json:
        print(json.dumps([p.id for p in matches], indent=2))
        return
    table = Table(title=f"{len(matches)} of {len(products)} products")
    for col in ("Id", "Name", "Company", "Category", "Modality", "Certification"):
        table.add_column(col)
    for p in matches:
        table.add_row(p.id, p.name, p.company, p.category, ", ".join(p.modality_list), p.certification or "")
    console.print(table)


@app.command()
def structures(
    product_id: str = typer.Argument(..., help="Product id"),
    products_path: str = typer.Argument(None, help="Product JSON file or directory"),
    types: bool = typer.Option(False, "--types", help="Also count OAR / GTV / elective structures"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Show a product's supported structures grouped by model."""
    console = Console()
    products = _load(products_path, console)
    product = next((p for p in products if p.id == product_id), None)
    if product is None:
        console.print(f"[red]Error: no product with id {product_id}[/red]")
        raise typer.Exit(1)

    parsed = parse_and_group_structures(product.structure_entries)
    counts = count_structure_types(product.structure_entries) if types else None
    if as_json:
        payload = parsed.model_dump()
        if counts is not None:
            payload["types"] = counts.model_dump()
        print(json.dumps(payload, indent=2))
        return
    console.print(format_grouped_structures(parsed) or "[yellow]No structures listed.[/yellow]")
    if counts is not None:
        console.print(
            f"OARs: {counts.oars}  GTV: {counts.gtv}  Elective: {counts.elective}  Total: {counts.total}"
        )


@app.command()
def revisions(
    products_path: str = typer.Argument(None, help="Product JSON file or directory"),
    today: str = typer.Option(None, help="Reference date YYYY-MM-DD (default: today)"),
):
    """Revision freshness across the catalog."""
    console = Console()
    products = _load(products_path, console)
    stats = calculate_revision_stats(products, _clock(today), get_settings().rtcat_revision_sentinel)
    groups = stats.revision_age_groups
    console.print(f"Up to date: {stats.revision_percentage}%")
    console.print(f"Average days since revision: {stats.average_days_since_revision}")
    console.print(
        f"0-3 months: {groups.short_term}  3-6 months: {groups.medium_term}  "
        f"6-12 months: {groups.long_term}  >12 months: {groups.critical}"
    )
    if stats.products_needing_revision:
        console.print("[bold]Needing revision:[/bold]")
        for p in stats.products_needing_revision:
            console.print(f"- {p.id} {p.name} (last revised {p.last_revised or 'never'})")


@app.command("audit-data")
def audit_data(
    products_path: str = typer.Argument(None, help="Product JSON file or directory"),
    category: str = typer.Option(None, help="Only audit this category"),
):
    """Count missing dates, URLs, structures and regulatory info; print fix recommendations."""
    console = Console()
    products = _load(products_path, console)
    if category:
        products = [p for p in products if p.category == category]
    result = audit_product_data(products)
    console.print_json(data=result.model_dump())
    for rec in data_fix_recommendations(result):
        console.print(f"- {rec}")


if __name__ == "__main__":
    app()
