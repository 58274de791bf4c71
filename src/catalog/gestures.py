"""
Gesture records supplied to practice sessions.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


class Difficulty(Enum):
    """How hard a gesture is to learn."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Gesture:
    """
    A single learnable gesture.
    
    Attributes:
        id: Catalog key
        instructions: Ordered practice steps, at least one
        key_points: Short hints shown on request
        points: Points awarded when the gesture is completed
    """
    id: str
    name: str
    description: str
    difficulty: Difficulty
    category: str
    image_url: str
    instructions: Tuple[str, ...]
    key_points: Tuple[str, ...] = ()
    unlocked: bool = False
    completed: bool = False
    points: int = 0
    video_url: Optional[str] = None
    
    def __post_init__(self):
        # Freeze sequences so a record can't be mutated through its lists
        object.__setattr__(self, 'instructions', tuple(self.instructions))
        object.__setattr__(self, 'key_points', tuple(self.key_points))
        if not isinstance(self.difficulty, Difficulty):
            object.__setattr__(self, 'difficulty', Difficulty(self.difficulty))
        
        if not self.instructions:
            raise ValueError(f"Gesture '{self.id}' has no instructions")
        if self.points < 0:
            raise ValueError(f"Gesture '{self.id}' has negative points: {self.points}")
    
    @property
    def step_count(self) -> int:
        return len(self.instructions)
    
    @classmethod
    def from_dict(cls, data: dict) -> "Gesture":
        """Build a gesture from a mapping with camelCase or snake_case keys."""
        def pick(*keys, default=None):
            for key in keys:
                if key in data:
                    return data[key]
            return default
        
        return cls(
            id=data['id'],
            name=data['name'],
            description=data.get('description', ""),
            difficulty=Difficulty(pick('difficulty', default="easy")),
            category=data.get('category', ""),
            image_url=pick('image_url', 'imageUrl', default=""),
            instructions=tuple(data.get('instructions') or ()),
            key_points=tuple(pick('key_points', 'keyPoints', default=()) or ()),
            unlocked=bool(data.get('unlocked', False)),
            completed=bool(data.get('completed', False)),
            points=int(data.get('points', 0)),
            video_url=pick('video_url', 'videoUrl'),
        )


@dataclass
class GestureCatalog:
    """Read-only lookup of gestures by id."""
    gestures: List[Gesture] = field(default_factory=list)
    
    def __post_init__(self):
        self._by_id: Dict[str, Gesture] = {}
        for gesture in self.gestures:
            if gesture.id in self._by_id:
                raise ValueError(f"Duplicate gesture id: {gesture.id}")
            self._by_id[gesture.id] = gesture
    
    def get(self, gesture_id: str) -> Gesture:
        """Get gesture by id. Raises KeyError for unknown ids."""
        try:
            return self._by_id[gesture_id]
        except KeyError:
            raise KeyError(f"Unknown gesture: {gesture_id}") from None
    
    def ids(self) -> List[str]:
        return [g.id for g in self.gestures]
    
    def __contains__(self, gesture_id: str) -> bool:
        return gesture_id in self._by_id
    
    def __iter__(self) -> Iterator[Gesture]:
        return iter(self.gestures)
    
    def __len__(self) -> int:
        return len(self.gestures)
