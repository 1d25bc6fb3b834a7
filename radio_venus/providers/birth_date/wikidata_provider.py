"""Tier 2 of the birth-date chain: Wikidata entity claims.

``wbsearchentities`` returns up to five candidate items for the name; each
is fetched with ``wbgetentities`` and accepted only if it looks like a
musician (a human with a music occupation in P106) or a musical group
(P31).  Hits whose label and matched alias both differ from the queried
name are skipped without a fetch.  The musician filter is what keeps the
"Prince" the chain resolves from being a prince.

The date comes from P569 (date of birth), or P571 (inception) for groups.
Wikidata's own time precision (9 = year, 10 = month, 11 = day) travels
with the candidate so partial dates are normalized correctly.
"""

from __future__ import annotations

import re
from typing import Any

import httpx

from radio_venus.config.curation import MUSIC_GROUP_TYPES, MUSIC_OCCUPATIONS
from radio_venus.interfaces.birth_date_provider import IBirthDateProvider
from radio_venus.models.resolution import BirthDateCandidate, DatePrecision, ProviderResult
from radio_venus.providers.http_support import get_json
from radio_venus.utils.concurrency import RequestThrottle
from radio_venus.utils.errors import RadioVenusError
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import names_match

_API_URL = "https://www.wikidata.org/w/api.php"
_HUMAN = "Q5"
_SEARCH_LIMIT = 5
_TIME_RE = re.compile(r"^[+-]?\d{4}-\d{2}-\d{2}")
_PRECISIONS = {9: DatePrecision.YEAR, 10: DatePrecision.MONTH, 11: DatePrecision.DAY}


def _claim_ids(claims: dict[str, Any], prop: str) -> set[str]:
    ids: set[str] = set()
    for claim in claims.get(prop, []):
        value = claim.get("mainsnak", {}).get("datavalue", {}).get("value")
        if isinstance(value, dict) and value.get("id"):
            ids.add(value["id"])
    return ids


def _claim_time(claims: dict[str, Any], prop: str) -> tuple[str, int] | None:
    for claim in claims.get(prop, []):
        value = claim.get("mainsnak", {}).get("datavalue", {}).get("value")
        if isinstance(value, dict) and value.get("time"):
            return value["time"], int(value.get("precision", 11))
    return None


def is_music_entity(claims: dict[str, Any]) -> bool:
    """Return ``True`` for a human musician or a musical group."""
    instances = _claim_ids(claims, "P31")
    if instances & MUSIC_GROUP_TYPES:
        return True
    return _HUMAN in instances and bool(_claim_ids(claims, "P106") & MUSIC_OCCUPATIONS)


def hit_names_match(name: str, hit: dict[str, Any]) -> bool:
    """Return ``True`` if a search hit's label or matched alias fits *name*.

    Hits without any label (a stable-id hint) are accepted.
    """
    texts = [hit.get("label"), (hit.get("match") or {}).get("text")]
    texts = [t for t in texts if isinstance(t, str) and t]
    return not texts or any(names_match(name, t) for t in texts)


class WikidataBirthDateProvider(IBirthDateProvider):
    """Structured knowledge-base lookup with a musician-only filter."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        min_interval: float = 0.2,
        api_url: str = _API_URL,
    ) -> None:
        self._http = http_client
        self._throttle = RequestThrottle(min_interval)
        self._api_url = api_url
        self._logger = get_logger(__name__)

    async def _api(self, **params: Any) -> Any:
        await self._throttle.wait()
        return await get_json(
            self._http,
            self._api_url,
            self.get_provider_name(),
            params={**params, "format": "json"},
        )

    async def query(
        self, name: str, hint: str | None = None
    ) -> ProviderResult[BirthDateCandidate]:
        provider = self.get_provider_name()
        try:
            search = await self._api(
                action="wbsearchentities",
                search=name,
                language="en",
                type="item",
                limit=_SEARCH_LIMIT,
            )
            hits = (search or {}).get("search") or []
            if hint and hint.startswith("Q"):
                hits = [{"id": hint}] + [h for h in hits if h.get("id") != hint]
            if not hits:
                return ProviderResult.no_result(provider)

            rejected: list[str] = []
            for hit in hits:
                qid = hit.get("id")
                if not qid:
                    continue
                if not hit_names_match(name, hit):
                    rejected.append(f"{qid} ({hit.get('label')})")
                    continue
                data = await self._api(action="wbgetentities", ids=qid, props="claims")
                entity = ((data or {}).get("entities") or {}).get(qid) or {}
                claims = entity.get("claims") or {}
                if not claims:
                    continue
                if not is_music_entity(claims):
                    rejected.append(qid)
                    continue
                found = _claim_time(claims, "P569") or _claim_time(claims, "P571")
                if found is None or not _TIME_RE.match(found[0]):
                    continue
                time_value, precision = found
                self._logger.debug("wikidata_entity_matched", artist=name, qid=qid)
                return ProviderResult.found(
                    BirthDateCandidate(
                        raw=time_value,
                        precision=_PRECISIONS.get(min(precision, 11), DatePrecision.YEAR),
                        stable_id=qid,
                        label=hit.get("label"),
                    ),
                    provider,
                )
        except RadioVenusError as exc:
            self._logger.warning("wikidata_query_failed", artist=name, error=str(exc))
            return ProviderResult.transport_failure(provider, str(exc))

        if rejected:
            return ProviderResult.wrong_match(
                provider, f"not a matching musician: {', '.join(rejected)}"
            )
        return ProviderResult.no_result(provider, "no dated music entity")

    def get_provider_name(self) -> str:
        return "wikidata"

    def is_available(self) -> bool:
        return True
