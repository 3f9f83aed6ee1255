"""Mapping profiles - reusable bundles of create_map() calls."""
from abc import ABC, abstractmethod
from typing import List, Tuple

from objmap.introspection.introspector import TypeId
from objmap.mapper.registry import MappingRegistry


class MappingProfile(MappingRegistry, ABC):
    """
    Bundle of mapping configuration

    Subclasses implement configure(), which runs once when the profile is
    constructed:

    ```python
    class UserProfile(MappingProfile):
        def configure(self):
            self.create_map(UserEntity, UserDTO) \\
                .for_member("full_name", lambda m: m.map_from("name"))

    mapper.add_profile(UserProfile())
    ```
    """

    def __init__(self):
        super().__init__()
        self.configure()

    @abstractmethod
    def configure(self) -> None:
        """Register the profile's mappings."""

    def pairs(self) -> List[Tuple[TypeId, TypeId]]:
        """Type pairs configured by this profile."""
        seen = {}
        for mapping in self.all_type_mappings():
            key = (mapping.source_name, mapping.destination_name)
            seen.setdefault(key, (mapping.source_type, mapping.destination_type))
        return list(seen.values())

    @property
    def name(self) -> str:
        return type(self).__name__
