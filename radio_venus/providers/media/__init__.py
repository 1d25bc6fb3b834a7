from radio_venus.providers.media.youtube_provider import YouTubeMediaProvider

__all__ = ["YouTubeMediaProvider"]
