from nicegui import ui

from engine.roulette_rules import BetCategory, OUTSIDE_EVEN_MONEY, DOZENS, COLUMNS, payout_multiplier
from engine.table_params import TableParams


def rules_markdown(params: TableParams) -> str:
    """Payout table and house rules, straight from the engine's tables."""
    rows = [('Straight (one number)', BetCategory.straight(17))]
    rows += [(c.label, c) for c in OUTSIDE_EVEN_MONEY]
    rows += [(f'Dozen {c.label}', c) for c in DOZENS]
    rows += [(f'Column {c.number}', c) for c in COLUMNS]

    lines = ['| Bet | Pays |', '|---|---|']
    lines += [f'| {name} | {payout_multiplier(cat)} to 1 |' for name, cat in rows]
    lines += [
        '',
        '**How to play**',
        '',
        '1. Pick a chip value',
        '2. Place chips on the felt',
        '3. Press **SPIN**: the stakes leave your balance',
        '4. When the wheel stops, winnings are added to your balance',
        '',
        f"Zero loses every outside bet. Chips: {', '.join(f'€{c}' for c in params.chip_values)}.",
        f"Below €{params.top_up_threshold} the house lends €{params.top_up_amount}.",
        '',
        '*Play money only.*',
    ]
    return '\n'.join(lines)


def show_rules_view(params: TableParams = None):
    params = params or TableParams()
    with ui.column().classes('w-full max-w-3xl mx-auto gap-6 p-4'):
        ui.label('HOUSE RULES').classes('text-3xl font-light text-purple-400')
        with ui.card().classes('w-full bg-slate-900 p-6'):
            ui.markdown(rules_markdown(params)).classes('text-slate-300')
