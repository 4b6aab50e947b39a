"""
Seed demo data for testing and demos.

Creates (or reuses) a demo client, records a few sales on different days and
prints the resulting statistics.

Usage:
    python scripts/seed_demo_data.py
    python scripts/seed_demo_data.py --email someone@example.com --sales 5
"""

import argparse
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# Add parent directory to path so we can import from services
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.time import start_of_day_utc, utc_now
from repositories.client_repository import get_client_by_email
from services.client_ranking_service import (
    get_top_client_by_average_sale_value,
    get_top_client_by_total_sales,
    get_top_clients_by_purchase_frequency,
)
from services.client_service import create_client
from services.sale_service import create_sale
from services.sales_stats_service import get_sales_per_day


def seed_demo_data(email: str, sale_count: int) -> None:
    """Create the demo client if needed and record `sale_count` sales."""

    client = get_client_by_email(email)
    if client is None:
        client = create_client(name="Demo Client", email=email, birth_date=date(1990, 1, 15))
        print(f"[SUCCESS] Demo client created: {client.id}")
    else:
        print(f"Demo client already exists: {client.id}")

    today = start_of_day_utc(utc_now())
    for offset in range(sale_count):
        sale = create_sale(
            value=Decimal("49.90") + offset * 10,
            client_id=client.id,
            sale_date=today - timedelta(days=offset, hours=-12),
        )
        print(f"  Recorded sale #{sale.id}: {sale.value} on {sale.sale_date.date()}")

    print("=" * 50)
    print("SALES PER DAY")
    print("=" * 50)
    for row in get_sales_per_day():
        print(f"{row['date']}: {row['total']}")

    print("=" * 50)
    print("TOP CLIENTS")
    print("=" * 50)
    top_total = get_top_client_by_total_sales()
    top_average = get_top_client_by_average_sale_value()
    print(f"By total:     {top_total.as_dict() if top_total else None}")
    print(f"By average:   {top_average.as_dict() if top_average else None}")
    print(f"By frequency: {[c.as_dict() for c in get_top_clients_by_purchase_frequency()]}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a demo client with sales")
    parser.add_argument("--email", default="demo@example.com", help="Demo client email")
    parser.add_argument("--sales", type=int, default=3, help="Number of sales to record")
    args = parser.parse_args()

    seed_demo_data(args.email, args.sales)


if __name__ == "__main__":
    main()
