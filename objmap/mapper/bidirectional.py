"""Paired mappings A -> B and B -> A configured together."""
import threading
from typing import Any, Dict

from objmap.exceptions import MappingConfigurationError
from objmap.mapper.type_mapping import MemberConfiguration, TypeMapping


class BidirectionalTypeMapping:
    """
    Two TypeMappings sharing property pairs

    Usage:
    ```python
    mapper.create_map_bidirectional(UserEntity, UserDTO) \\
        .for_members("user_id", "id") \\
        .for_members("email_address", "email") \\
        .seal()
    ```

    for_members(a, b) registers ``B.b <- A.a`` on the forward mapping and
    ``A.a <- B.b`` on the reverse mapping immediately.
    """

    def __init__(self, forward: TypeMapping, reverse: TypeMapping):
        self.forward = forward
        self.reverse = reverse
        self.member_pairs: Dict[str, str] = {}
        self._sealed = False
        self._lock = threading.RLock()

    @property
    def type_a(self) -> Any:
        return self.forward.source_type

    @property
    def type_b(self) -> Any:
        return self.forward.destination_type

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def for_members(self, property_a: str, property_b: str) -> "BidirectionalTypeMapping":
        """Pair property_a on type A with property_b on type B."""
        with self._lock:
            self._ensure_open(property_b)
            self.forward.for_member(property_b, lambda m: m.map_from(property_a))
            self.reverse.for_member(property_a, lambda m: m.map_from(property_b))
            self.member_pairs[property_a] = property_b
        return self

    def for_member_pairs(self, pairs: Dict[str, str]) -> "BidirectionalTypeMapping":
        """Pair several properties, keyed by the type A name."""
        for property_a, property_b in pairs.items():
            self.for_members(property_a, property_b)
        return self

    def for_forward_member(self, property_b: str, configure: MemberConfiguration) -> "BidirectionalTypeMapping":
        """Configure a type B property on the A -> B direction only."""
        with self._lock:
            self._ensure_open(property_b)
            self.forward.for_member(property_b, configure)
        return self

    def for_reverse_member(self, property_a: str, configure: MemberConfiguration) -> "BidirectionalTypeMapping":
        """Configure a type A property on the B -> A direction only."""
        with self._lock:
            self._ensure_open(property_a)
            self.reverse.for_member(property_a, configure)
        return self

    def seal(self) -> "BidirectionalTypeMapping":
        """Seal both directions; idempotent."""
        with self._lock:
            if self._sealed:
                return self
            self.forward.seal()
            self.reverse.seal()
            self._sealed = True
        return self

    def get_forward_mapping(self) -> TypeMapping:
        return self.forward

    def get_reverse_mapping(self) -> TypeMapping:
        return self.reverse

    def _ensure_open(self, property_name: str) -> None:
        if self._sealed:
            raise MappingConfigurationError.already_sealed(
                self.forward.source_name, self.forward.destination_name, property_name
            )

    def __repr__(self) -> str:
        return f"BidirectionalTypeMapping({self.forward.source_name} <-> {self.forward.destination_name})"
