from dataclasses import dataclass, field
from typing import Dict, Iterable, List


@dataclass(frozen=True, slots=True)
class CandyType:
    label: str
    hue: int


@dataclass(slots=True)
class CandyTypes:
    """Canonical candy definitions stored on the registry entity.

    ``spawnable`` is the token set the generator and refill draw from. Unknown
    names are dropped and an empty selection falls back to every defined type.
    """
    types: Dict[str, CandyType]
    spawnable: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.set_spawnable(self.spawnable or self.types.keys())

    def hue_for(self, type_name: str) -> int:
        return self.types[type_name].hue

    def label_for(self, type_name: str) -> str:
        return self.types[type_name].label

    def spawnable_types(self) -> List[str]:
        return list(self.spawnable)

    def defined_types(self) -> List[str]:
        return list(self.types.keys())

    def set_spawnable(self, type_names: Iterable[str]) -> None:
        seen: set[str] = set()
        filtered: List[str] = []
        for name in type_names:
            if name in self.types and name not in seen:
                filtered.append(name)
                seen.add(name)
        self.spawnable = filtered or list(self.types.keys())


DEFAULT_CANDY_TYPES: Dict[str, CandyType] = {
    'orange': CandyType(label='Orange', hue=24),
    'lime':   CandyType(label='Lime', hue=132),
    'berry':  CandyType(label='Berry', hue=290),
    'lemon':  CandyType(label='Lemon', hue=55),
    'sky':    CandyType(label='Sky', hue=200),
    'cherry': CandyType(label='Cherry', hue=350),
}
