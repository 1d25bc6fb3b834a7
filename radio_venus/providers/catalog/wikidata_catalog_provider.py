"""Fresh candidate feed: electronic musicians from the Wikidata SPARQL endpoint.

Produces the lowest-precedence tier of the merge.  Every row is a human
with a birth date and at least one genre that is a subclass of electronic
music (Q9730); the genre labels are classified on the spot and rows that
classify to nothing are dropped.
"""

from __future__ import annotations

import re
from typing import Any

import httpx

from radio_venus.models.artist import ArtistRecord
from radio_venus.providers.http_support import get_json
from radio_venus.services.date_normalizer import normalize_birth_date
from radio_venus.services.genre_classifier import GenreClassifier, sort_categories, sort_subgenres
from radio_venus.utils.errors import InvalidDateError, RadioVenusError
from radio_venus.utils.logging import get_logger

_SPARQL_URL = "https://query.wikidata.org/sparql"
_ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_UNLABELED = re.compile(r"^Q\d+$")

SPARQL_TEMPLATE = """
SELECT ?artist ?artistLabel ?birthDate
       (GROUP_CONCAT(DISTINCT ?genreLabel; separator="|") AS ?genres)
WHERE {{
  ?artist wdt:P31 wd:Q5 ;
          wdt:P569 ?birthDate ;
          wdt:P136 ?genre .
  ?genre wdt:P279* wd:Q9730 .
  SERVICE wikibase:label {{
    bd:serviceParam wikibase:language "en" .
    ?artist rdfs:label ?artistLabel .
    ?genre rdfs:label ?genreLabel .
  }}
  FILTER(YEAR(?birthDate) > 1600)
}}
GROUP BY ?artist ?artistLabel ?birthDate
HAVING(COUNT(?genre) > 0)
LIMIT {limit}
"""


class WikidataCatalogProvider:
    """Bulk candidate source; not a per-name provider."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        classifier: GenreClassifier,
        sparql_url: str = _SPARQL_URL,
    ) -> None:
        self._http = http_client
        self._classifier = classifier
        self._sparql_url = sparql_url
        self._logger = get_logger(__name__)

    def get_provider_name(self) -> str:
        return "wikidata_catalog"

    async def fetch_candidates(self, limit: int = 100) -> list[ArtistRecord]:
        """Run the SPARQL query and return classified candidate records.

        Transport failures are logged and yield an empty list: the build
        carries on with seed and cache only.
        """
        try:
            data = await get_json(
                self._http,
                self._sparql_url,
                self.get_provider_name(),
                params={"query": SPARQL_TEMPLATE.format(limit=int(limit)), "format": "json"},
                headers={"Accept": "application/sparql-results+json"},
            )
        except RadioVenusError as exc:
            self._logger.warning("wikidata_catalog_failed", error=str(exc))
            return []

        bindings = ((data or {}).get("results") or {}).get("bindings") or []
        records = [r for r in (self._row_to_record(row) for row in bindings) if r is not None]
        self._logger.info("wikidata_catalog_fetched", rows=len(bindings), accepted=len(records))
        return records

    def _row_to_record(self, row: dict[str, Any]) -> ArtistRecord | None:
        name = (row.get("artistLabel") or {}).get("value", "").strip()
        birth = (row.get("birthDate") or {}).get("value", "")[:10]
        raw_genres = [g for g in (row.get("genres") or {}).get("value", "").split("|") if g]
        uri = (row.get("artist") or {}).get("value", "")

        if not name or _UNLABELED.match(name) or not _ISO_DAY.match(birth):
            return None
        try:
            normalized = normalize_birth_date(birth)
        except InvalidDateError:
            return None

        categories, subgenres = self._classifier.classify(raw_genres)
        if not categories:
            return None

        return ArtistRecord(
            name=name,
            birth_date=normalized.date,
            date_approx=normalized.approx,
            genres=sort_categories(categories),
            subgenres=sort_subgenres(subgenres),
            raw_provider_tags=tuple(raw_genres),
            stable_id=uri.rsplit("/", 1)[-1] or None,
        )
