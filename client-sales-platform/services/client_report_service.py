"""
Client report service.

Builds the nested, Portuguese-keyed client report consumed by the reporting
front end:

    {
      "data": {"clientes": [...]},
      "meta": {"registroTotal", "pagina", "limite", "ultimaPagina"},
      "redundante": {"status": "ok"}
    }

Each client entry carries, with independent 50% probability, an extra
`duplicado` field repeating the client name. The existing report format
depends on it, so it is reproduced. The coin flip comes from the `rng`
argument so callers can make it deterministic.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional

from domain.client import Client
from domain.pagination import last_page, normalize_pagination
from repositories.client_repository import list_clients_page

logger = logging.getLogger(__name__)

DUPLICATE_FIELD_PROBABILITY: float = 0.5


def _report_entry(client: Client, rng: random.Random) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "info": {
            "nomeCompleto": client.name,
            "detalhes": {
                "email": client.email,
                "nascimento": client.birth_date.isoformat(),
            },
        },
        "estatisticas": {
            "vendas": [
                {"data": sale.sale_date.date().isoformat(), "valor": float(sale.value)}
                for sale in client.sales
            ],
        },
    }

    if rng.random() < DUPLICATE_FIELD_PROBABILITY:
        entry["duplicado"] = {"nomeCompleto": client.name}

    return entry


def build_client_report(
    page: Optional[Any] = None,
    limit: Optional[Any] = None,
    name: Optional[str] = None,
    email: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Build one page of the nested client report.

    Clients come newest first, each with its sales oldest first. The page
    and the total count are read under the same filter in a single request.

    Args:
        page: Page number (default 1)
        limit: Page size (default 10)
        name: Case-insensitive partial filter on client name
        email: Case-insensitive partial filter on client email
        rng: Source for the `duplicado` coin flip (default: a fresh Random)

    Returns:
        Report envelope (see module docstring)

    Raises:
        ValidationError: page or limit is not a positive integer
    """

    window = normalize_pagination(page, limit)
    source = rng if rng is not None else random.Random()

    clients, total = list_clients_page(
        skip=window.skip,
        take=window.take,
        name=name,
        email=email,
        include_sales=True,
    )
    logger.debug("Client report page %s: %s of %s clients", window.page, len(clients), total)

    return {
        "data": {"clientes": [_report_entry(client, source) for client in clients]},
        "meta": {
            "registroTotal": total,
            "pagina": window.page,
            "limite": window.limit,
            "ultimaPagina": last_page(total, window.limit),
        },
        "redundante": {"status": "ok"},
    }


__all__ = ["DUPLICATE_FIELD_PROBABILITY", "build_client_report"]
