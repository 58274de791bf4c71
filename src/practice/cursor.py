"""
Step cursor over a gesture's instructions.
"""


class InstructionCursor:
    """Bounded index into an ordered list of instruction steps."""
    
    DONE = "done"
    CURRENT = "current"
    PENDING = "pending"
    
    def __init__(self, step_count: int):
        if step_count < 1:
            raise ValueError("A gesture needs at least one instruction")
        self._step_count = step_count
        self._index = 0
    
    @property
    def index(self) -> int:
        return self._index
    
    @property
    def step_count(self) -> int:
        return self._step_count
    
    @property
    def at_start(self) -> bool:
        return self._index == 0
    
    @property
    def at_end(self) -> bool:
        return self._index == self._step_count - 1
    
    def next(self) -> bool:
        """Move forward one step. Returns False at the last step."""
        if self.at_end:
            return False
        self._index += 1
        return True
    
    def previous(self) -> bool:
        """Move back one step. Returns False at the first step."""
        if self.at_start:
            return False
        self._index -= 1
        return True
    
    def reset(self):
        self._index = 0
    
    def status(self, index: int) -> str:
        if index < self._index:
            return self.DONE
        if index == self._index:
            return self.CURRENT
        return self.PENDING
