"""Birth-date provider tiers, in resolution order.

    1. ManualOverrideProvider       curated JSON map, bypasses everything else
    2. WikidataBirthDateProvider    knowledge base, musician/group filter
    3. MusicBrainzBirthDateProvider music registry life-span, captures MBID
    4. WikipediaBirthDateProvider   infobox scrape with disambiguated titles
    5. CommunityDbBirthDateProvider RateYourMusic page, bot-challenge tolerant
"""

from radio_venus.providers.birth_date.community_db_provider import CommunityDbBirthDateProvider
from radio_venus.providers.birth_date.manual_override_provider import ManualOverrideProvider
from radio_venus.providers.birth_date.musicbrainz_provider import MusicBrainzBirthDateProvider
from radio_venus.providers.birth_date.wikidata_provider import WikidataBirthDateProvider
from radio_venus.providers.birth_date.wikipedia_provider import WikipediaBirthDateProvider

__all__ = [
    "CommunityDbBirthDateProvider",
    "ManualOverrideProvider",
    "MusicBrainzBirthDateProvider",
    "WikidataBirthDateProvider",
    "WikipediaBirthDateProvider",
]
