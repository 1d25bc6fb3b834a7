from radio_venus.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
