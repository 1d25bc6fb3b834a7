"""Optional LLM post-filter for discovery candidates.

Accepted candidates are sent to an LLM in fixed-size batches together with
a fixed description of the station's aesthetic.  The model answers with
``{"reject": [names]}``.

The filter fails open: a missing provider, an API error or an unparseable
answer keeps the whole batch, and a candidate the answer does not name is
kept as well.  Only an explicit rejection drops a candidate.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import Any

import structlog

from radio_venus.interfaces.llm_provider import ILLMProvider
from radio_venus.models.artist import ArtistRecord
from radio_venus.utils.errors import ConfigurationError
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import name_key

_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)

_SYSTEM_PROMPT = (
    "You curate the artist roster of an internet radio station. "
    "You will be given the station's aesthetic and a list of candidate artists "
    "with their genres. Reject only artists that clearly do not fit. "
    'Answer with a single JSON object of the form {"reject": ["Artist Name", ...]} '
    "and nothing else. Use the names exactly as given."
)


def parse_rejections(response: str) -> set[str]:
    """Return the name keys listed under ``reject`` in an LLM answer.

    Raises
    ------
    ValueError
        If the answer holds no JSON object with a ``reject`` list.
    """
    text = response.strip()
    fence = _JSON_FENCE_RE.search(text)
    if fence:
        text = fence.group(1).strip()
    if not text.startswith("{"):
        start, end = text.find("{"), text.rfind("}")
        if start != -1 and end > start:
            text = text[start:end + 1]

    parsed: Any = json.loads(text)
    if not isinstance(parsed, dict) or not isinstance(parsed.get("reject"), list):
        raise ValueError("LLM answer has no 'reject' list")
    return {name_key(str(n)) for n in parsed["reject"] if str(n).strip()}


class AestheticJudge:
    """Batch LLM judgment with fail-open semantics.

    Parameters
    ----------
    llm_provider:
        Completion provider.  ``None`` turns the judge into a pass-through.
    aesthetic_description:
        Fixed description of what fits.
    batch_size:
        Candidates per LLM call.
    """

    def __init__(
        self,
        llm_provider: ILLMProvider | None,
        aesthetic_description: str,
        batch_size: int = 10,
    ) -> None:
        self._llm = llm_provider
        self._description = aesthetic_description
        self._batch_size = max(1, batch_size)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def enabled(self) -> bool:
        return self._llm is not None and self._llm.is_available()

    # -- Public API -----------------------------------------------------------

    async def filter(
        self, candidates: Sequence[ArtistRecord]
    ) -> tuple[list[ArtistRecord], list[ArtistRecord]]:
        """Split *candidates* into ``(kept, rejected)``, preserving order."""
        if not candidates:
            return [], []
        if not self.enabled:
            self._logger.info("aesthetic_judge_skipped", reason="no llm provider configured")
            return list(candidates), []

        kept: list[ArtistRecord] = []
        rejected: list[ArtistRecord] = []
        for start in range(0, len(candidates), self._batch_size):
            batch = list(candidates[start:start + self._batch_size])
            rejections = await self._judge_batch(batch)
            for record in batch:
                if record.key in rejections:
                    rejected.append(record)
                else:
                    kept.append(record)

        self._logger.info("aesthetic_judge_done", kept=len(kept), rejected=len(rejected))
        return kept, rejected

    # -- Internal helpers -----------------------------------------------------

    def build_prompt(self, batch: Sequence[ArtistRecord]) -> str:
        lines = [f"Station aesthetic: {self._description}", "", "Candidates:"]
        for record in batch:
            genres = ", ".join(g.value for g in record.genres) or "unknown"
            lines.append(f"- {record.name} ({genres})")
        return "\n".join(lines)

    async def _judge_batch(self, batch: Sequence[ArtistRecord]) -> set[str]:
        if self._llm is None:
            raise ConfigurationError(message="No LLM provider configured for the aesthetic judge")
        try:
            response = await self._llm.complete(
                system_prompt=_SYSTEM_PROMPT,
                user_prompt=self.build_prompt(batch),
                temperature=0.0,
                max_tokens=500,
            )
            rejections = parse_rejections(response)
        except Exception as exc:  # noqa: BLE001
            self._logger.warning(
                "aesthetic_judge_batch_kept",
                provider=self._llm.get_provider_name(),
                size=len(batch),
                error=str(exc),
            )
            return set()

        batch_keys = {r.key for r in batch}
        return rejections & batch_keys
