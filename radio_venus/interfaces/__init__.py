"""Public interface definitions for all external collaborators.

Every external source and sink is reached only through the abstract base
classes in this package; concrete adapters live in ``radio_venus.providers``
and are wired together in ``radio_venus.main``.

    Interface              ->  Concrete implementations
    IBirthDateProvider     ->  ManualOverrideProvider, WikidataBirthDateProvider,
                               MusicBrainzBirthDateProvider,
                               WikipediaBirthDateProvider,
                               CommunityDbBirthDateProvider
    ITagProvider           ->  EverynoiseTagProvider, LastfmTagProvider
    ISimilarityProvider    ->  LastfmSimilarityProvider,
                               LastfmApiSimilarityProvider
    IMediaProvider         ->  YouTubeMediaProvider
    IPlaylistProvider      ->  SpotifyPlaylistProvider
    ILLMProvider           ->  AnthropicLLMProvider, OpenAILLMProvider
    ICacheProvider         ->  MemoryCacheProvider
    ISnapshotStore         ->  JsonSnapshotStore
    IRecordIndex           ->  SqliteRecordIndex
"""

from radio_venus.interfaces.birth_date_provider import IBirthDateProvider
from radio_venus.interfaces.cache_provider import ICacheProvider
from radio_venus.interfaces.llm_provider import ILLMProvider
from radio_venus.interfaces.media_provider import IMediaProvider
from radio_venus.interfaces.playlist_provider import IPlaylistProvider
from radio_venus.interfaces.provider import IProvider
from radio_venus.interfaces.record_store import IRecordIndex, ISnapshotStore
from radio_venus.interfaces.tag_provider import ISimilarityProvider, ITagProvider

__all__ = [
    "IBirthDateProvider",
    "ICacheProvider",
    "ILLMProvider",
    "IMediaProvider",
    "IPlaylistProvider",
    "IProvider",
    "IRecordIndex",
    "ISimilarityProvider",
    "ISnapshotStore",
    "ITagProvider",
]
