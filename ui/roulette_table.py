from nicegui import ui
import asyncio
import traceback

from engine.exceptions import RouletteError
from engine.roulette_rules import BetCategory, OUTSIDE_EVEN_MONEY, DOZENS, COLUMNS, payout_multiplier, winning_pockets
from engine.round_engine import RouletteTable, RoundPhase
from engine.wheel import PocketColor, WHEEL_ORDER, pocket_color
from ui.history_panel import show_history_panel, pocket_chip, POCKET_CLASSES
from utils.persistence import load_table_params

# Felt rows, top to bottom (column 3 sits on top on a real layout)
FELT_ROWS = [[n for n in range(1, 37) if (n - k) % 3 == 0] for k in (3, 2, 1)]


def wheel_neighbours(pocket: int, spread: int = 4) -> list:
    """Pockets either side of `pocket` on the physical wheel, for the result strip."""
    idx = WHEEL_ORDER.index(pocket)
    return [WHEEL_ORDER[(idx + off) % len(WHEEL_ORDER)] for off in range(-spread, spread + 1)]


def show_roulette_table(table: RouletteTable = None):
    table = table or RouletteTable(load_table_params())
    params = table.params
    selected = {'chip': 10 if 10 in params.chip_values else params.chip_values[0]}

    # --- HANDLERS ---
    def place(category: BetCategory):
        try:
            table.place_bet(category, selected['chip'])
        except RouletteError as e:
            ui.notify(str(e), type='warning')
        except Exception as e:
            print(traceback.format_exc())
            ui.notify(f"Error: {str(e)}", type='negative')
        refresh_all()

    def clear():
        try:
            table.clear_bets()
        except RouletteError as e:
            ui.notify(str(e), type='warning')
        refresh_all()

    def borrow():
        try:
            table.top_up()
            ui.notify(f'Borrowed €{params.top_up_amount} from the house', type='info')
        except RouletteError as e:
            ui.notify(str(e), type='warning')
        refresh_all()

    def pick_chip(value: int):
        selected['chip'] = value
        render_chips.refresh()

    async def spin():
        try:
            outcome = table.spin()
        except RouletteError as e:
            ui.notify(str(e), type='warning')
            return
        except Exception as e:
            print(traceback.format_exc())
            ui.notify(f"Error: {str(e)}", type='negative')
            return

        refresh_all()
        # Presentation delay only: the outcome is already fixed
        await asyncio.sleep(params.reveal_delay_s)

        try:
            settlement = table.reveal()
            kind = 'positive' if settlement.total_won > 0 else 'negative'
            ui.notify(f"{outcome}: won €{settlement.total_won}, lost €{settlement.total_lost}", type=kind)
        except Exception as e:
            print(traceback.format_exc())
            ui.notify(f"Error: {str(e)}", type='negative')
        refresh_all()

    def refresh_all():
        render_header.refresh()
        render_chips.refresh()
        render_wheel.refresh()
        render_felt.refresh()
        render_history.refresh()

    # --- SECTIONS ---
    @ui.refreshable
    def render_header():
        busy = table.phase != RoundPhase.OPEN
        with ui.row().classes('w-full items-center justify-between'):
            with ui.row().classes('items-center gap-4'):
                with ui.column().classes('gap-0'):
                    ui.label('BALANCE').classes('text-[10px] text-slate-500 font-bold tracking-widest')
                    ui.label(f'€{table.current_balance():,}').classes('text-3xl font-black text-white')
                if table.can_top_up:
                    ui.button(f'Borrow €{params.top_up_amount}', on_click=borrow).props('outline color=amber')
            with ui.row().classes('gap-2'):
                btn_clear = ui.button('CLEAR', icon='backspace', on_click=clear).props('flat color=grey')
                btn_spin = ui.button('SPINNING...' if busy else 'SPIN', icon='casino', on_click=spin) \
                    .props('color=yellow text-color=black size=lg')
                if busy or not table.active_wagers:
                    btn_clear.disable()
                    btn_spin.disable()
        with ui.row().classes('gap-2 min-h-[28px]'):
            ui.label(f"Round {table.round_no} | On the felt: €{table.pending_stake}").classes('text-xs text-slate-400')
            last = table.last_settlement
            if last is not None and last.total_won > 0:
                ui.badge(f"Win +€{last.total_won}", color='green')
            if last is not None and last.total_lost > 0:
                ui.badge(f"Loss -€{last.total_lost}", color='red')

    @ui.refreshable
    def render_chips():
        affordable = set(table.affordable_chips())
        with ui.row().classes('items-center gap-2'):
            ui.label('Chip').classes('text-xs text-slate-400')
            for value in params.chip_values:
                is_sel = value == selected['chip']
                b = ui.button(f'€{value}', on_click=lambda v=value: pick_chip(v)) \
                    .props(f"round {'color=white text-color=black' if is_sel else 'color=grey-9'}")
                if value not in affordable:
                    b.disable()

    @ui.refreshable
    def render_wheel():
        with ui.row().classes('w-full items-center justify-center gap-1 min-h-[48px]'):
            if table.phase == RoundPhase.RESOLVING:
                ui.spinner('dots', size='lg', color='yellow')
                ui.label('No more bets').classes('text-sm text-yellow-400 italic')
            elif table.last_outcome is not None:
                for p in wheel_neighbours(table.last_outcome.pocket):
                    size = 'w-12 h-12' if p == table.last_outcome.pocket else 'w-8 h-8 opacity-60'
                    pocket_chip(p, size=size)
            else:
                ui.label('Place your bets').classes('text-sm text-slate-500 italic')

    def felt_cell(category: BetCategory, label: str, cls: str):
        stake = table.stake_on(category)
        disabled = table.phase != RoundPhase.OPEN
        # Ring the cells the last ball paid
        if table.last_outcome is not None and table.last_outcome.pocket in winning_pockets(category):
            cls += ' ring-4 ring-yellow-400'
        with ui.element('div').classes('relative'):
            b = ui.button(label, on_click=lambda c=category: place(c)).props('unelevated dense') \
                .classes(f'w-full text-white font-bold {cls}')
            b.tooltip(f'{category.label} pays {payout_multiplier(category)} to 1')
            if disabled:
                b.disable()
            if stake > 0:
                ui.badge(f'€{stake}', color='yellow').props('floating text-color=black')

    @ui.refreshable
    def render_felt():
        with ui.card().classes('w-full bg-emerald-950 border border-emerald-800 p-4 gap-3'):
            ui.label('Numbers').classes('text-xs text-slate-400')
            with ui.row().classes('w-full no-wrap gap-1'):
                with ui.column().classes('w-12'):
                    felt_cell(BetCategory.straight(0), '0', POCKET_CLASSES[PocketColor.GREEN] + ' h-full')
                with ui.column().classes('flex-grow gap-1'):
                    for row in FELT_ROWS:
                        with ui.grid(columns=12).classes('w-full gap-1'):
                            for n in row:
                                felt_cell(BetCategory.straight(n), str(n), POCKET_CLASSES[pocket_color(n)])

            ui.label('Columns').classes('text-xs text-slate-400')
            with ui.grid(columns=3).classes('w-full gap-1'):
                for cat in COLUMNS:
                    felt_cell(cat, cat.label, 'bg-slate-700')

            ui.label('Dozens').classes('text-xs text-slate-400')
            with ui.grid(columns=3).classes('w-full gap-1'):
                for cat in DOZENS:
                    felt_cell(cat, cat.label, 'bg-slate-700')

            ui.label('Even money').classes('text-xs text-slate-400')
            with ui.grid(columns=6).classes('w-full gap-1'):
                for cat in OUTSIDE_EVEN_MONEY:
                    extra = {'red': 'bg-red-700', 'black': 'bg-zinc-900'}.get(cat.key, 'bg-slate-700')
                    felt_cell(cat, cat.label, extra)

    @ui.refreshable
    def render_history():
        show_history_panel(table.history)

    # --- UI LAYOUT ---
    with ui.column().classes('w-full max-w-5xl mx-auto gap-6 p-4'):
        ui.label('ROULETTE TABLE (SINGLE ZERO)').classes('text-2xl font-light text-cyan-400')
        with ui.card().classes('w-full bg-slate-900 p-6 gap-4'):
            render_header()
            ui.separator().classes('bg-slate-700')
            render_chips()
            render_wheel()
        with ui.grid(columns=2).classes('w-full gap-6'):
            render_felt()
            render_history()
