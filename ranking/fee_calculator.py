"""
Fee calculation for match exports.

Every active player pays a flat base fee. On top of that each loss or draw
costs a bet fee (a heavier fee for a 6-0 loss), and the bet fees of one
player on one calendar day are capped.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Sequence

from models.match import MatchRecord
from models.player import Player
from models.stats import PlayerFee
from .outcome import is_draw, lost_by, participates, won_by

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeeConstants:
    """Fee amounts, in the club's currency."""
    base_fee: int = 1500000
    bet_fee: int = 30000
    special_loss_fee: int = 60000
    special_loss_score: str = '6-0'
    max_daily_fee: int = 100000

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'FeeConstants':
        """Read the ``fees`` section of the configuration."""
        fees = config.get('fees', {}) or {}
        defaults = cls()
        return cls(
            base_fee=int(fees.get('base_fee', defaults.base_fee)),
            bet_fee=int(fees.get('bet_fee', defaults.bet_fee)),
            special_loss_fee=int(fees.get('special_loss_fee', defaults.special_loss_fee)),
            special_loss_score=str(fees.get('special_loss_score', defaults.special_loss_score)),
            max_daily_fee=int(fees.get('max_daily_fee', defaults.max_daily_fee)),
        )


def match_day(moment: datetime) -> date:
    """The local calendar day a match was played on."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def match_fee(match: MatchRecord, player_id: str, constants: FeeConstants) -> int:
    """The uncapped fee one match costs the given player."""
    if lost_by(match, player_id):
        if match.score == constants.special_loss_score:
            return constants.special_loss_fee
        return constants.bet_fee
    if is_draw(match.score) and participates(match, player_id):
        return constants.bet_fee
    return 0


def daily_fees(player_id: str, matches: Sequence[MatchRecord],
               constants: FeeConstants) -> Dict[date, int]:
    """Capped fee per calendar day for one player, in first-played order."""
    days: Dict[date, int] = OrderedDict()
    for match in matches:
        if not participates(match, player_id):
            continue
        day = match_day(match.match_date)
        days[day] = days.get(day, 0) + match_fee(match, player_id, constants)

    for day, fee in days.items():
        if fee > constants.max_daily_fee:
            logger.debug(f"Capping fee of player {player_id} on {day}: {fee} -> {constants.max_daily_fee}")
            days[day] = constants.max_daily_fee
    return days


def calculate_player_fee(player: Player, matches: Sequence[MatchRecord],
                         constants: FeeConstants) -> PlayerFee:
    """Compute the fee breakdown for a single player."""
    fee = PlayerFee(player_id=player.id, name=player.name)
    for match in matches:
        if not participates(match, player.id):
            continue
        fee.total_matches += 1
        if is_draw(match.score):
            fee.draws += 1
        elif won_by(match, player.id):
            fee.wins += 1
        else:
            fee.losses += 1

    fee.bet_fee = sum(daily_fees(player.id, matches, constants).values())
    fee.base_fee = constants.base_fee if player.is_active else 0
    fee.total_fee = fee.base_fee + fee.bet_fee
    return fee


def calculate_fees(players: Sequence[Player], matches: Sequence[MatchRecord],
                   constants: FeeConstants = FeeConstants()) -> List[PlayerFee]:
    """
    Compute fees for all players.

    Only players that owe a bet fee are returned, ordered by total fee,
    highest first. Players with equal totals keep their input order.
    """
    fees = [calculate_player_fee(player, matches, constants) for player in players]
    owing = [fee for fee in fees if fee.bet_fee > 0]
    return sorted(owing, key=lambda f: f.total_fee, reverse=True)
