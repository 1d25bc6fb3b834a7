"""Genre tag and artist similarity sources."""

from radio_venus.providers.tags.everynoise_provider import EverynoiseTagProvider
from radio_venus.providers.tags.lastfm_api_provider import LastfmApiSimilarityProvider
from radio_venus.providers.tags.lastfm_provider import LastfmSimilarityProvider, LastfmTagProvider

__all__ = [
    "EverynoiseTagProvider",
    "LastfmApiSimilarityProvider",
    "LastfmSimilarityProvider",
    "LastfmTagProvider",
]
