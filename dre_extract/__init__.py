"""dre-extract: DRE spreadsheet extraction and semantic account lookup.

The package fetches a hand-maintained DRE (income statement) sheet export,
detects its month header, parses pt-BR formatted values, and exposes the
accounts through semantic keys such as ``"ebitda"`` or ``"lucro_liquido"``.

Architecture
------------
* ``scraper``: httpx retrieval of the CSV export.
* ``extractor``: grid reading, header/month-column detection, row extraction.
* ``transformer``: alias resolution and pandas views of a snapshot.
* ``service``: :class:`DREDataService`, the query facade that owns the
  latest snapshot.

Configuration
-------------
``config/config.json`` holds the source endpoint and detection thresholds;
``config/aliases.json`` holds the account alias table. ``DRE_SOURCE_URL`` and
friends override the source (see :mod:`dre_extract.config`).

Examples
--------
Print the KPIs for March:

    >>> python -m dre_extract.main --month mar
"""

from dre_extract.service import DREDataService, create_service

__version__ = "0.1.0"
__all__ = ["DREDataService", "__version__", "create_service"]

# Public helper for introspection tools.
def get_version() -> str:
    """Return the current package version string.

    Returns
    -------
    str
        Semantic version identifier (e.g., ``"0.1.0"``).
    """
    return __version__


__all__.append("get_version")
