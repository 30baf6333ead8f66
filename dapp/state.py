from dataclasses import dataclass, field
from typing import List


@dataclass
class DAppState:
    """Accumulated application state; ``count`` always equals ``len(submitters)``."""

    submitters: List[str] = field(default_factory=list)
    count: int = 0

    def record_submission(self, sender: str) -> None:
        self.submitters.append(sender)
        self.count += 1

    def snapshot(self) -> List[str]:
        return list(self.submitters)
