"""Mapper configuration."""
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from objmap.conventions.base import NamingConvention
from objmap.mapper.profile import MappingProfile


class CacheType(str, Enum):
    """Plan cache lifetime policies"""
    MEMORY = "memory"
    SHARED = "shared"
    PERSISTENT = "persistent"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class MapperConfig:
    """
    Configuration for an ObjectMapper

    Instances are immutable; the with_* methods return modified copies:

    ```python
    config = MapperConfig.for_production().with_profile(UserProfile())
    mapper = ObjectMapper(config)
    ```
    """

    cache_type: CacheType = CacheType.MEMORY
    cache_dir: str = ".cache/objmap"
    cache_ttl: Optional[int] = None
    warmup: bool = True
    use_conventions: bool = False
    convention_threshold: float = 0.8
    profiles: List[Any] = field(default_factory=list)
    conventions: List[Any] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "MapperConfig":
        """Load config from OBJMAP_* environment variables."""
        ttl = os.getenv("OBJMAP_CACHE_TTL")
        return cls(
            cache_type=CacheType(os.getenv("OBJMAP_CACHE_TYPE", CacheType.MEMORY.value).lower()),
            cache_dir=os.getenv("OBJMAP_CACHE_DIR", ".cache/objmap"),
            cache_ttl=int(ttl) if ttl else None,
            warmup=_env_bool("OBJMAP_WARMUP", True),
            use_conventions=_env_bool("OBJMAP_USE_CONVENTIONS", False),
            convention_threshold=float(os.getenv("OBJMAP_CONVENTION_THRESHOLD", "0.8")),
        )

    # Presets

    @classmethod
    def default(cls) -> "MapperConfig":
        return cls()

    @classmethod
    def for_development(cls) -> "MapperConfig":
        return cls().with_cache(CacheType.MEMORY).with_warmup(False).with_conventions(True, 0.7)

    @classmethod
    def for_production(cls) -> "MapperConfig":
        return cls().with_cache(CacheType.SHARED).with_warmup(True).with_conventions(True)

    @classmethod
    def for_testing(cls) -> "MapperConfig":
        return cls().with_cache(CacheType.MEMORY).with_warmup(False).with_conventions(False)

    @classmethod
    def minimal(cls) -> "MapperConfig":
        return cls(warmup=False)

    # Builders

    def with_cache(
        self, cache_type: CacheType, cache_dir: Optional[str] = None, ttl: Optional[int] = None
    ) -> "MapperConfig":
        return replace(
            self,
            cache_type=CacheType(cache_type),
            cache_dir=cache_dir or self.cache_dir,
            cache_ttl=ttl if ttl is not None else self.cache_ttl,
        )

    def with_warmup(self, enabled: bool = True) -> "MapperConfig":
        return replace(self, warmup=enabled)

    def with_conventions(self, enabled: bool = True, threshold: Optional[float] = None) -> "MapperConfig":
        if threshold is None:
            threshold = self.convention_threshold
        return replace(self, use_conventions=enabled, convention_threshold=threshold)

    def with_convention_threshold(self, threshold: float) -> "MapperConfig":
        return replace(self, convention_threshold=max(0.0, min(1.0, threshold)))

    def with_convention(self, convention: Any) -> "MapperConfig":
        return replace(self, conventions=[*self.conventions, convention])

    def with_profile(self, profile: Any) -> "MapperConfig":
        return replace(self, profiles=[*self.profiles, profile])

    def with_profiles(self, profiles: List[Any]) -> "MapperConfig":
        return replace(self, profiles=[*self.profiles, *profiles])

    def validate(self) -> "MapperConfig":
        """
        Check the configuration

        Raises:
            ValueError: On an out-of-range threshold, a negative TTL, or
                profiles/conventions of the wrong type
        """
        if not 0.0 <= self.convention_threshold <= 1.0:
            raise ValueError("Convention threshold must be between 0.0 and 1.0")
        if self.cache_ttl is not None and self.cache_ttl < 0:
            raise ValueError("Cache TTL must not be negative")
        for profile in self.profiles:
            if not isinstance(profile, MappingProfile):
                raise ValueError(f"Profiles must be MappingProfile instances, got {type(profile).__name__}")
        for convention in self.conventions:
            if not isinstance(convention, NamingConvention):
                raise ValueError(f"Conventions must be NamingConvention instances, got {type(convention).__name__}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "cache_type": self.cache_type.value,
            "cache_dir": self.cache_dir,
            "cache_ttl": self.cache_ttl,
            "warmup": self.warmup,
            "use_conventions": self.use_conventions,
            "convention_threshold": self.convention_threshold,
            "profiles": [type(profile).__name__ for profile in self.profiles],
            "conventions": [getattr(convention, "name", repr(convention)) for convention in self.conventions],
        }
