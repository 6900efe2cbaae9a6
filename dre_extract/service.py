"""DRE query facade.

:class:`DREDataService` owns the latest extraction snapshot and answers value
queries by semantic account key. It is the only entry point presentation code
needs::

    service = create_service()
    await service.load()
    service.value_at("ebitda", "mar")
    service.debug_keys("receita_liquida", "lucro_liquido")

Lifecycle
---------
* construction: empty snapshot, ``loading`` is ``True``;
* :meth:`DREDataService.load`: fetch, extract, publish a whole new snapshot;
  any failure publishes the empty snapshot instead and ``loading`` is cleared
  either way;
* :meth:`DREDataService.clear`: teardown back to the empty snapshot.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from dre_extract.config import (
    DEFAULT_THRESHOLDS,
    ExtractionThresholds,
    build_source_url,
    get_account_aliases,
    get_extraction_thresholds,
    setup_logging,
)
from dre_extract.extractor.extraction import extract_dre
from dre_extract.extractor.months import classify_month
from dre_extract.extractor.types import AccountRow, DRESnapshot, HeaderLocation, MonthColumn
from dre_extract.scraper.downloader import fetch_text
from dre_extract.transformer.aliases import AliasMatch, AliasResolver
from dre_extract.transformer.normalizer import snapshot_to_frame
from dre_extract.utils.parsing import normalize_text

if TYPE_CHECKING:
    import pandas as pd

logger = setup_logging(__name__)

__all__ = ["DREDataService", "KeyDiagnostic", "create_service", "normalize_month"]

Fetcher = Callable[[], Awaitable[str]]

# Fixed costs: a dedicated line, else operating costs, else the sum of expense groups.
FIXED_COST_KEY = "custos_fixos"
FIXED_COST_FALLBACK = "custos_operacionais"
FIXED_COST_COMPONENTS = ("despesas_adm", "despesas_comercial", "despesas_logistica")

SUMMARY_KEYS = ("faturamento_bruto", "receita_liquida", "ebitda", "lucro_liquido")


@dataclass(frozen=True)
class KeyDiagnostic:
    """Whether a semantic key resolved to a row in the current snapshot."""

    key: str
    found: bool
    name: str | None = None
    exact: bool | None = None

    @property
    def status(self) -> str:
        """Format resolution status for reports."""
        if not self.found:
            return "✗ not found"
        how = "exact" if self.exact else "partial"
        return f"✓ {self.name} ({how})"


def normalize_month(month: Any) -> str:
    """Map user input such as ``"MAR"``, ``"Março"`` or ``"mar/25"`` to a month key.

    Unrecognized input is returned in normalized form, so lookups simply miss.
    """
    key = classify_month(month)
    return key if key is not None else normalize_text(month)


class DREDataService:
    """Owner of the current DRE snapshot and its query operations.

    Parameters
    ----------
    aliases
        Semantic key to textual variants; defaults to ``config/aliases.json``.
    thresholds
        Layout detection constants.
    fetcher
        Coroutine factory returning the CSV payload; defaults to an httpx GET
        of :func:`build_source_url`.
    """

    def __init__(
        self,
        aliases: Mapping[str, tuple[str, ...]] | None = None,
        thresholds: ExtractionThresholds = DEFAULT_THRESHOLDS,
        fetcher: Fetcher | None = None,
    ) -> None:
        self._aliases = aliases if aliases is not None else get_account_aliases()
        self._thresholds = thresholds
        self._fetcher = fetcher
        self._loading = True
        self._publish(DRESnapshot.empty())

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def _publish(self, snapshot: DRESnapshot) -> None:
        resolver = AliasResolver(snapshot.rows, self._aliases)
        # Snapshot and resolver are swapped together.
        self._state = (snapshot, resolver)

    @property
    def snapshot(self) -> DRESnapshot:
        """Latest published snapshot."""
        return self._state[0]

    @property
    def rows(self) -> tuple[AccountRow, ...]:
        """Account rows in sheet order."""
        return self.snapshot.rows

    @property
    def months(self) -> tuple[str, ...]:
        """Discovered month keys in column order."""
        return self.snapshot.months

    @property
    def month_columns(self) -> tuple[MonthColumn, ...]:
        """Month-to-column bindings of the current snapshot."""
        return self.snapshot.month_columns

    @property
    def location(self) -> HeaderLocation | None:
        """Header location of the current snapshot."""
        return self.snapshot.location

    @property
    def loading(self) -> bool:
        """``True`` until the first load finishes (successfully or not)."""
        return self._loading

    @property
    def aliases(self) -> Mapping[str, tuple[str, ...]]:
        """Alias table in use."""
        return self._aliases

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def _fetch(self) -> str:
        if self._fetcher is not None:
            return await self._fetcher()
        return await fetch_text(build_source_url())

    def load_text(self, text: str | bytes | None) -> DRESnapshot:
        """Extract and publish a snapshot from an already retrieved payload.

        Failures publish the empty snapshot; nothing is raised.
        """
        try:
            snapshot = extract_dre(text, self._thresholds)
        except Exception:
            logger.exception("Error reading DRE CSV")
            snapshot = DRESnapshot.empty()

        self._publish(snapshot)
        self._loading = False
        return snapshot

    async def load(self) -> DRESnapshot:
        """Fetch the sheet export, extract it and publish the result.

        Returns
        -------
        DRESnapshot
            The published snapshot; empty when the fetch or the extraction
            failed.
        """
        self._loading = True
        try:
            text = await self._fetch()
        except Exception:
            logger.exception("Error fetching DRE CSV")
            self._publish(DRESnapshot.empty())
            self._loading = False
            return self.snapshot

        snapshot = self.load_text(text)
        logger.info("Loaded DRE: %d rows, months %s", len(snapshot.rows), list(snapshot.months))
        return snapshot

    refresh = load

    def clear(self) -> None:
        """Drop the current snapshot."""
        self._publish(DRESnapshot.empty())
        self._loading = False

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def resolve(self, semantic_key: str) -> AliasMatch | None:
        """Resolve a semantic key, reporting the matched variant."""
        return self._state[1].resolve(semantic_key)

    def find_row(self, semantic_key: str) -> AccountRow | None:
        """Return the row labelled by any alias of ``semantic_key``."""
        return self._state[1].find_row(semantic_key)

    def value_at(self, semantic_key: str, month: Any) -> float:
        """Return the value of an account in a month.

        Parameters
        ----------
        semantic_key
            Canonical account key (e.g. ``"ebitda"``).
        month
            Month key or label; case, accents and year suffix are ignored.

        Returns
        -------
        float
            The value, or ``0.0`` when the account or month is missing.
        """
        row = self.find_row(semantic_key)
        if row is None:
            return 0.0
        return row.value(normalize_month(month))

    def debug_keys(self, *semantic_keys: str) -> list[KeyDiagnostic]:
        """Report for each key whether it resolved to a row."""
        diagnostics = []
        for key in semantic_keys:
            match = self.resolve(key)
            if match is None:
                diagnostics.append(KeyDiagnostic(key=key, found=False))
            else:
                diagnostics.append(KeyDiagnostic(key=key, found=True, name=match.row.name, exact=match.exact))
        return diagnostics

    def fixed_costs(self, month: Any) -> float:
        """Fixed costs for a month, with fallbacks for sheets lacking the line.

        Uses ``custos_fixos`` when present, else ``custos_operacionais``, else
        the sum of administrative, commercial and logistics expenses.
        """
        for key in (FIXED_COST_KEY, FIXED_COST_FALLBACK):
            if self.find_row(key) is not None:
                return self.value_at(key, month)
        return sum(self.value_at(key, month) for key in FIXED_COST_COMPONENTS)

    def month_summary(self, month: Any, keys: tuple[str, ...] = SUMMARY_KEYS) -> dict[str, float]:
        """Headline figures for one month, plus ``custos_fixos``."""
        summary = {key: self.value_at(key, month) for key in keys}
        summary[FIXED_COST_KEY] = self.fixed_costs(month)
        return summary

    def to_frame(self, index: str = "name") -> pd.DataFrame:
        """Current snapshot as a wide DataFrame."""
        return snapshot_to_frame(self.snapshot, index=index)


def create_service(
    fetcher: Fetcher | None = None,
    aliases: Mapping[str, tuple[str, ...]] | None = None,
    thresholds: ExtractionThresholds | None = None,
) -> DREDataService:
    """Create a service configured from ``config/`` unless overridden.

    Parameters
    ----------
    fetcher
        Optional payload source; defaults to the configured HTTP endpoint.
    aliases
        Optional alias table.
    thresholds
        Optional detection constants; defaults to ``config.json``.

    Returns
    -------
    DREDataService
        Unloaded service (``loading`` is ``True``).
    """
    if thresholds is None:
        thresholds = get_extraction_thresholds()
    return DREDataService(aliases=aliases, thresholds=thresholds, fetcher=fetcher)
