import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence


@dataclass
class PlayRound:
    sample: List[dict]
    codes: list
    labels: List[str]
    existing_names: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            'sample': self.sample,
            'codes': self.codes,
            'labels': self.labels,
            'existing_names': self.existing_names,
        }


def build_play_round(items: Sequence[dict], existing_names: Sequence[str] = (), sample_size: int = 10,
                     rng: Optional[random.Random] = None) -> PlayRound:
    """Prepare one game round for a room.

    The sample is a shuffled copy cut to ``sample_size``; ``codes`` and
    ``labels`` describe every item in stored order so the client can check
    answers against the whole room.
    """
    rng = rng or random.Random()
    shuffled = [dict(item) for item in items]
    rng.shuffle(shuffled)
    sample = shuffled[:max(0, sample_size)]

    names = []
    seen = set()
    for name in existing_names:
        if name not in seen:
            seen.add(name)
            names.append(name)

    return PlayRound(
        sample=sample,
        codes=[item.get('code') for item in items],
        labels=[item.get('label') for item in items],
        existing_names=names,
    )
