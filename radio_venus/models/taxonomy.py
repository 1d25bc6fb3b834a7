"""Closed genre vocabulary: canonical categories and finer subgenres.

Categories are the coarse buckets a listener browses by; subgenres are the
Discogs-style identifiers kept alongside them.  Both are ``(str, Enum)`` so
they serialize as plain strings in the snapshot while a typo in a tag table
fails at import time instead of silently creating a new genre.
"""

from __future__ import annotations

from enum import Enum


class GenreCategory(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """Canonical genre categories.

    ``INTERCELESTIAL`` and ``VALENTINE`` are curated labels: no raw tag maps
    to them, they are only ever set by hand.
    """

    AMBIENT = "ambient"
    TECHNO = "techno"
    ELECTRONICA = "electronica"
    IDM = "idm"
    INDUSTRIAL = "industrial"
    DARKWAVE = "darkwave"
    TRIPHOP = "triphop"
    DNB = "dnb"
    INDIEPOP = "indiepop"
    ALTROCK = "altrock"
    ARTPOP = "artpop"
    FOLK = "folk"
    JAZZ = "jazz"
    CLASSICAL = "classical"
    HIPHOP = "hiphop"
    INTERCELESTIAL = "intercelestial"
    VALENTINE = "valentine"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS: dict[GenreCategory, str] = {
    GenreCategory.AMBIENT: "Ambient / Drone",
    GenreCategory.TECHNO: "Techno / House",
    GenreCategory.ELECTRONICA: "Electronica",
    GenreCategory.IDM: "IDM / Experimental",
    GenreCategory.INDUSTRIAL: "Industrial / Noise",
    GenreCategory.DARKWAVE: "Synthwave / Darkwave",
    GenreCategory.TRIPHOP: "Trip-Hop / Downtempo",
    GenreCategory.DNB: "Drum & Bass / Jungle",
    GenreCategory.INDIEPOP: "Indie / Experimental",
    GenreCategory.ALTROCK: "Alt Rock / Post-Punk",
    GenreCategory.ARTPOP: "Art Pop / Avant-Garde",
    GenreCategory.FOLK: "Folk / Neofolk",
    GenreCategory.JAZZ: "Jazz / Spiritual",
    GenreCategory.CLASSICAL: "Classical / Orchestral",
    GenreCategory.HIPHOP: "Hip-Hop / R&B",
    GenreCategory.INTERCELESTIAL: "Inter-Celestial",
    GenreCategory.VALENTINE: "Valentine's day special",
}


class Subgenre(str, Enum):  # noqa: UP042
    """Discogs-style subgenre identifiers, grouped by parent category."""

    # ambient
    AMBIENT = "ambient"
    DARK_AMBIENT = "dark-ambient"
    DRONE = "drone"
    BERLIN_SCHOOL = "berlin-school"
    NEW_AGE = "new-age"
    SPACE_AMBIENT = "space-ambient"
    # electronica
    INDIETRONICA = "indietronica"
    CHILLWAVE = "chillwave"
    LO_FI = "lo-fi"
    MICROHOUSE = "microhouse"
    FOLKTRONICA = "folktronica"
    GLITCH_POP = "glitch-pop"
    NU_DISCO = "nu-disco"
    # idm
    IDM = "idm"
    EXPERIMENTAL = "experimental"
    ABSTRACT = "abstract"
    GLITCH = "glitch"
    LEFTFIELD = "leftfield"
    # techno
    TECHNO = "techno"
    HOUSE = "house"
    DEEP_HOUSE = "deep-house"
    MINIMAL = "minimal"
    DUB_TECHNO = "dub-techno"
    TECH_HOUSE = "tech-house"
    ACID = "acid"
    ELECTRO = "electro"
    TRANCE = "trance"
    PROGRESSIVE_HOUSE = "progressive-house"
    # triphop
    TRIP_HOP = "trip-hop"
    DOWNTEMPO = "downtempo"
    DUB = "dub"
    FUTURE_JAZZ = "future-jazz"
    CHILLOUT = "chillout"
    BROKEN_BEAT = "broken-beat"
    NU_JAZZ = "nu-jazz"
    # industrial
    INDUSTRIAL = "industrial"
    NOISE = "noise"
    EBM = "ebm"
    POWER_ELECTRONICS = "power-electronics"
    RHYTHMIC_NOISE = "rhythmic-noise"
    HARSH_NOISE = "harsh-noise"
    # darkwave
    DARKWAVE = "darkwave"
    SYNTH_POP = "synth-pop"
    NEW_WAVE = "new-wave"
    COLDWAVE = "coldwave"
    SYNTHWAVE = "synthwave"
    DARKSYNTH = "darksynth"
    KRAUTROCK = "krautrock"
    # dnb
    DRUM_N_BASS = "drum-n-bass"
    JUNGLE = "jungle"
    BREAKBEAT = "breakbeat"
    BREAKCORE = "breakcore"
    DUBSTEP = "dubstep"
    GRIME = "grime"
    UK_GARAGE = "uk-garage"
    FUTURE_GARAGE = "future-garage"
    FOOTWORK = "footwork"
    # indiepop
    INDIE_POP = "indie-pop"
    BEDROOM_POP = "bedroom-pop"
    NOISE_POP = "noise-pop"
    PSYCH_POP = "psych-pop"
    LO_FI_INDIE = "lo-fi-indie"
    JANGLE_POP = "jangle-pop"
    TWEE_POP = "twee-pop"
    # altrock
    POST_PUNK = "post-punk"
    BRITPOP = "britpop"
    SHOEGAZE = "shoegaze"
    POST_ROCK = "post-rock"
    NOISE_ROCK = "noise-rock"
    MADCHESTER = "madchester"
    ALTERNATIVE_ROCK = "alternative-rock"
    INDIE_ROCK = "indie-rock"
    # artpop
    ART_POP = "art-pop"
    AVANT_GARDE_POP = "avant-garde-pop"
    BAROQUE_POP = "baroque-pop"
    CHAMBER_POP = "chamber-pop"
    EXPERIMENTAL_POP = "experimental-pop"
    ART_ROCK = "art-rock"
    GLAM = "glam"
    # folk
    NEOFOLK = "neofolk"
    DARK_FOLK = "dark-folk"
    FREAK_FOLK = "freak-folk"
    PSYCHEDELIC_FOLK = "psychedelic-folk"
    CHAMBER_FOLK = "chamber-folk"
    GOTHIC_COUNTRY = "gothic-country"
    FOLK_ROCK = "folk-rock"
    AMBIENT_FOLK = "ambient-folk"
    # jazz
    SPIRITUAL_JAZZ = "spiritual-jazz"
    DARK_JAZZ = "dark-jazz"
    DOOM_JAZZ = "doom-jazz"
    FREE_JAZZ = "free-jazz"
    MODAL_JAZZ = "modal-jazz"
    JAZZ_FUSION = "jazz-fusion"
    SOUL_JAZZ = "soul-jazz"
    COSMIC_JAZZ = "cosmic-jazz"
    AMBIENT_JAZZ = "ambient-jazz"
    # classical
    CLASSICAL = "classical"
    BAROQUE = "baroque"
    ROMANTIC = "romantic"
    CONTEMPORARY = "contemporary"
    NEO_CLASSICAL = "neo-classical"
    IMPRESSIONIST = "impressionist"
    MODERN_CLASSICAL = "modern-classical"
    OPERA = "opera"
    MINIMALIST = "minimalist"
    # hiphop
    HIP_HOP = "hip-hop"
    CLOUD_RAP = "cloud-rap"
    TRAP = "trap"
    PHONK = "phonk"
    BOOM_BAP = "boom-bap"
    EXPERIMENTAL_HIPHOP = "experimental-hiphop"
    LO_FI_HIPHOP = "lo-fi-hiphop"
    RNB = "rnb"
    NEO_SOUL = "neo-soul"
    SOUL = "soul"
    # intercelestial
    WORLD = "world"
    FIELD_RECORDING = "field-recording"
    OUTSIDER = "outsider"
    TRADITIONAL = "traditional"
    UNCLASSIFIABLE = "unclassifiable"
