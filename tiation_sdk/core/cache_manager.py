"""Optional on-disk caching for GET responses."""

import json
import hashlib
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from pathlib import Path

logger = logging.getLogger(__name__)

_MISSING = object()


class ResponseCacheManager:
    """Caches decoded GET response bodies as JSON files."""
    
    def __init__(
        self,
        cache_dir: str = ".tiation_cache",
        max_age_seconds: int = 300,
        enabled: bool = True,
        namespace: str = ""
    ):
        """Initialize cache manager.
        
        Entries are only shared between managers with the same namespace.
        """
        self.enabled = enabled
        self.namespace = namespace
        self.hits = 0
        self.misses = 0
        if not self.enabled:
            return
        
        self.cache_dir = Path(cache_dir) / "responses"
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.max_age = timedelta(seconds=max_age_seconds)
    
    def _generate_cache_key(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Generate cache key from request path and query params."""
        normalized = json.dumps(sorted((params or {}).items()), default=str)
        return hashlib.md5(f"{self.namespace} GET {path} {normalized}".encode('utf-8')).hexdigest()
    
    def get_response(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Get cached response body, or the module's miss sentinel."""
        if not self.enabled:
            return _MISSING
        
        cache_file = self.cache_dir / f"{self._generate_cache_key(path, params)}.json"
        if not cache_file.exists():
            self.misses += 1
            return _MISSING
        
        try:
            with open(cache_file, 'r', encoding='utf-8') as f:
                cached_data = json.load(f)
            
            cache_time = datetime.fromisoformat(cached_data["timestamp"])
            if datetime.now() - cache_time > self.max_age:
                cache_file.unlink()  # Remove expired entry
                self.misses += 1
                return _MISSING
            
            self.hits += 1
            logger.debug(f"Cache hit for GET {path}")
            return cached_data["response"]
            
        except (OSError, ValueError, KeyError) as e:
            logger.warning(f"Failed to read cached response for {path}: {e}")
            self.misses += 1
            return _MISSING
    
    def cache_response(self, path: str, params: Optional[Dict[str, Any]], response: Any) -> None:
        """Cache a decoded response body."""
        if not self.enabled:
            return
        
        cache_file = self.cache_dir / f"{self._generate_cache_key(path, params)}.json"
        try:
            cache_entry = {
                "timestamp": datetime.now().isoformat(),
                "path": path,
                "response": response
            }
            with open(cache_file, 'w', encoding='utf-8') as f:
                json.dump(cache_entry, f, indent=2)
            
            logger.debug(f"Cached response for GET {path}")
            
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to cache response for {path}: {e}")
    
    def get_hit_rate(self) -> float:
        """Get cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0
    
    def clear_cache(self) -> int:
        """Clear all cache entries."""
        if not self.enabled:
            return 0
        
        removed = 0
        for cache_file in self.cache_dir.glob("*.json"):
            try:
                cache_file.unlink()
                removed += 1
            except OSError as e:
                logger.warning(f"Failed to remove cache file: {e}")
        
        if removed:
            logger.info(f"Cleared {removed} cache entries")
        return removed


def is_cache_miss(value: Any) -> bool:
    """Return True when a cache lookup found nothing."""
    return value is _MISSING
