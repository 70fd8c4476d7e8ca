"""Global search engine instance to avoid circular imports."""

from .core.engine import SearchEngine
from .config import get_settings

# Global search engine instance
settings = get_settings()
search_engine = SearchEngine(
    default_algorithm=settings.default_algorithm,
    rabin_karp_base=settings.rabin_karp_base,
    rabin_karp_modulus=settings.rabin_karp_modulus,
    enable_cache=settings.enable_cache,
    cache_max_size=settings.cache_max_size,
    max_matches=settings.max_matches,
)
