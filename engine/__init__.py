from .table_params import TableParams
from .wheel import Outcome, OutcomeSource, PocketColor, pocket_color, RED_NUMBERS, BLACK_NUMBERS, WHEEL_ORDER
from .roulette_rules import BetKind, BetCategory, Wager, RoundSettlement, settle, is_winner, payout_multiplier
from .exceptions import RouletteError, InvalidBetCategory, InvalidStake, InsufficientFunds, InvalidRoundState, TopUpNotAllowed
from .ledger import BalanceLedger
from .history import HistoryEntry, HistoryLog
from .round_engine import RouletteTable, RoundPhase
