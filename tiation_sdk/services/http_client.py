"""HTTP transport for the Tiation API with retry logic and usage statistics."""

import hashlib
import itertools
import logging
from typing import Any, Dict, Optional

import backoff
import requests

from ..config.settings import Settings
from ..core.cache_manager import ResponseCacheManager, is_cache_miss
from ..exceptions import (
    RateLimitError,
    ServerError,
    TiationError,
    TransportError,
    error_from_response,
)

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (RateLimitError, ServerError, TransportError)
MUTATING_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class HttpClient:
    """Wrapper around requests.Session that speaks the Tiation JSON API."""
    
    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
        cache: Optional[ResponseCacheManager] = None
    ):
        """Initialize the HTTP client."""
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update(self._default_headers())
        self.cache = cache or ResponseCacheManager(
            cache_dir=settings.cache_dir,
            max_age_seconds=settings.cache_max_age_seconds,
            enabled=settings.cache_enabled,
            namespace=self._cache_namespace()
        )
        
        # Statistics tracking
        self.total_requests = 0
        self.failed_requests = 0
        self.retried_requests = 0
    
    def _cache_namespace(self) -> str:
        """Scope cached responses to one host and one API key."""
        key_digest = hashlib.sha256(self.settings.api_key.encode("utf-8")).hexdigest()
        return f"{self.settings.base_url}|{key_digest}"
    
    def _default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": self.settings.user_agent,
        }
    
    def build_url(self, path: str) -> str:
        """Join the configured base URL and an API path."""
        return f"{self.settings.base_url}/{path.lstrip('/')}"
    
    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None
    ) -> Any:
        """Send a single request and decode the response."""
        url = self.build_url(path)
        self.total_requests += 1
        
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_body,
                timeout=self.settings.timeout
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"{method} {path} timed out after {self.settings.timeout}s", original=e)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}", original=e)
        
        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {"message": response.text} if response.text else {}
            raise error_from_response(
                response.status_code,
                payload,
                headers=response.headers,
                reason=getattr(response, "reason", "") or ""
            )
        
        if response.status_code == 204 or not response.content:
            return None
        
        try:
            return response.json()
        except ValueError:
            return response.text
    
    def _retry_waits(self):
        """Build a wait function for one logical request."""
        attempts = itertools.count()
        
        def wait(exc: Exception) -> float:
            attempt = next(attempts)
            if isinstance(exc, RateLimitError) and exc.retry_after is not None:
                if exc.retry_after > self.settings.max_retry_after:
                    logger.warning(
                        f"Server asked to retry after {exc.retry_after:g}s; "
                        f"waiting {self.settings.max_retry_after:g}s instead"
                    )
                return min(exc.retry_after, self.settings.max_retry_after)
            return self.settings.backoff_factor ** attempt
        
        return wait
    
    def _on_backoff(self, details: Dict[str, Any]) -> None:
        self.retried_requests += 1
        logger.warning(
            f"Request failed (attempt {details['tries']}/{self.settings.max_retries + 1}), "
            f"retrying in {details['wait']:.1f}s: {details.get('exception')}"
        )
    
    def _on_giveup(self, details: Dict[str, Any]) -> None:
        logger.error(
            f"Request failed after {details['tries']} attempts: {details.get('exception')}"
        )
    
    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
        use_cache: bool = True
    ) -> Any:
        """Make an API request with retry logic, returning the decoded body."""
        method = method.upper()
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        
        if method == "GET" and use_cache:
            cached = self.cache.get_response(path, params)
            if not is_cache_miss(cached):
                return cached
        
        send = backoff.on_exception(
            backoff.runtime,
            RETRYABLE_ERRORS,
            value=self._retry_waits(),
            max_tries=self.settings.max_retries + 1,
            jitter=None,
            on_backoff=self._on_backoff,
            on_giveup=self._on_giveup,
            raise_on_giveup=True
        )(self._send)
        
        logger.debug(f"{method} {path}")
        try:
            result = send(method, path, params=params, json_body=json_body)
        except TiationError:
            self.failed_requests += 1
            raise
        
        if method == "GET" and use_cache:
            self.cache.cache_response(path, params, result)
        elif method in MUTATING_METHODS:
            self.cache.clear_cache()
        
        return result
    
    def get(self, path: str, params: Optional[Dict[str, Any]] = None, use_cache: bool = True) -> Any:
        return self.request("GET", path, params=params, use_cache=use_cache)
    
    def post(self, path: str, json_body: Any = None) -> Any:
        return self.request("POST", path, json_body=json_body)
    
    def patch(self, path: str, json_body: Any = None) -> Any:
        return self.request("PATCH", path, json_body=json_body)
    
    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
    
    def get_usage_statistics(self) -> Dict[str, Any]:
        """Get usage statistics for the client."""
        return {
            "total_requests": self.total_requests,
            "failed_requests": self.failed_requests,
            "retried_requests": self.retried_requests,
            "success_rate": (
                (self.total_requests - self.failed_requests - self.retried_requests) / self.total_requests
                if self.total_requests > 0 else 0
            ),
            "cache_hit_rate": self.cache.get_hit_rate(),
        }
    
    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
