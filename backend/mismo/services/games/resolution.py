from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional


@dataclass
class RoundResult:
    round: int
    submissions: Dict[str, int]
    lives_lost: Dict[str, int]
    mismo_values: List[int] = field(default_factory=list)
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    eliminated: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            'round': self.round,
            'submissions': dict(self.submissions),
            'lives_lost': dict(self.lives_lost),
            'mismo_values': list(self.mismo_values),
            'min_value': self.min_value,
            'max_value': self.max_value,
            'eliminated': list(self.eliminated),
        }


def resolve(submissions: Mapping[str, int], round_number: int = 1) -> RoundResult:
    """Work out who loses lives for one round of submissions.

    ``submissions`` maps each active player's id to the number they chose.

    - A value chosen by exactly two players is a mismo: both lose one life.
    - Among values chosen by exactly one player, the holder of the lowest and
      the holder of the highest each lose one life. A lone unique value is
      both, so its holder loses two.
    - Values chosen by three or more players are safe.

    Pure: applying the losses and eliminations is left to the caller.
    """
    groups: Dict[int, List[str]] = defaultdict(list)
    for player_id, number in submissions.items():
        groups[number].append(player_id)

    lives_lost = {player_id: 0 for player_id in submissions}

    mismo_values = sorted(value for value, holders in groups.items() if len(holders) == 2)
    for value in mismo_values:
        for player_id in groups[value]:
            lives_lost[player_id] += 1

    unique_values = [value for value, holders in groups.items() if len(holders) == 1]
    min_value = max_value = None
    if unique_values:
        min_value = min(unique_values)
        max_value = max(unique_values)
        lives_lost[groups[min_value][0]] += 1
        lives_lost[groups[max_value][0]] += 1

    return RoundResult(
        round=round_number,
        submissions=dict(submissions),
        lives_lost=lives_lost,
        mismo_values=mismo_values,
        min_value=min_value,
        max_value=max_value,
    )
