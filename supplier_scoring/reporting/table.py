"""Console table report using Rich."""

from typing import Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from supplier_scoring.core.data_types import ScoredSupplier
from supplier_scoring.core.models import SupplierTier

TIER_STYLES: Dict[SupplierTier, str] = {
    SupplierTier.A: "bold green",
    SupplierTier.B: "yellow",
    SupplierTier.C: "dim",
}


class ScoreTableReport:
    """Print a scored batch to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def generate(self, suppliers: List[ScoredSupplier], limit: Optional[int] = None) -> None:
        self.console.print("\n[bold blue]Supplier Ranking[/bold blue]\n")
        self._print_stats(suppliers)

        rows = suppliers[:limit] if limit else suppliers
        if rows:
            self._print_table(rows)

    def _print_stats(self, suppliers: List[ScoredSupplier]):
        total_revenue = sum(s.total_revenue for s in suppliers)
        avg_score = sum(s.total_score for s in suppliers) / len(suppliers) if suppliers else 0
        counts = {tier: sum(1 for s in suppliers if s.tier == tier) for tier in SupplierTier}

        stats_text = f"""
[bold]Suppliers:[/bold] {len(suppliers)}
[bold]Total revenue:[/bold] {total_revenue:,.0f}
[bold]Tier A:[/bold] {counts[SupplierTier.A]}  [bold]Tier B:[/bold] {counts[SupplierTier.B]}  [bold]Tier C:[/bold] {counts[SupplierTier.C]}

[bold]Average Total Score:[/bold] {avg_score:.1f}/10
        """

        self.console.print(Panel(stats_text, title="Summary", border_style="blue"))

    def _print_table(self, suppliers: List[ScoredSupplier]):
        table = Table(show_header=True, header_style="bold magenta")

        table.add_column("Tier", justify="center", width=4)
        table.add_column("Supplier", width=30)
        table.add_column("Revenue", justify="right", width=14)
        table.add_column("TG %", justify="right", width=6)
        table.add_column("S/A/E/M", justify="center", width=18)
        table.add_column("Total", justify="right", width=5)
        table.add_column("Action", width=40)

        for s in suppliers:
            style = TIER_STYLES.get(s.tier, "")
            table.add_row(
                s.tier.value if s.tier else "-",
                s.name[:30],
                f"{s.total_revenue:,.0f}",
                f"{s.avg_margin_percent:.1f}",
                f"{s.sales_score:.2f}/{s.assortment_score:.2f}/{s.efficiency_score:.2f}/{s.margin_score}",
                f"{s.total_score:.1f}",
                (s.action or "")[:40],
                style=style,
            )

        self.console.print(table)
