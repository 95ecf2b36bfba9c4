from nicegui import ui
import plotly.graph_objects as go

from engine.history import HistoryLog
from engine.wheel import PocketColor, POCKET_COUNT, pocket_color

# Tailwind classes for a pocket chip
POCKET_CLASSES = {
    PocketColor.RED: 'bg-red-600',
    PocketColor.BLACK: 'bg-zinc-900 border border-zinc-700',
    PocketColor.GREEN: 'bg-green-600',
}
BAR_COLORS = {PocketColor.RED: '#dc2626', PocketColor.BLACK: '#52525b', PocketColor.GREEN: '#16a34a'}


def pocket_chip(pocket: int, size: str = 'w-10 h-10'):
    cls = POCKET_CLASSES[pocket_color(pocket)]
    with ui.element('div').classes(f'{size} rounded-full flex items-center justify-center {cls}'):
        ui.label(str(pocket)).classes('text-white font-bold text-sm')


def show_history_panel(history: HistoryLog):
    with ui.card().classes('w-full bg-slate-900 border border-slate-700 p-4 gap-4'):
        ui.label('GAME HISTORY').classes('text-lg font-light text-slate-300')

        # 1. Last numbers
        pockets = history.recent_pockets(10)
        ui.label('Last numbers').classes('text-xs text-slate-500')
        with ui.row().classes('gap-2 flex-wrap'):
            if not pockets:
                ui.label('No rounds played yet.').classes('text-slate-500 italic')
            for p in pockets:
                pocket_chip(p)

        # 2. Counters over the last 10
        stats = history.summary(10)
        ui.label(f"Last {stats['rounds']} rounds").classes('text-xs text-slate-500')
        with ui.grid(columns=4).classes('w-full gap-2'):
            for name, key, color in [('Red', 'red', 'text-red-500'), ('Black', 'black', 'text-white'),
                                     ('Even', 'even', 'text-blue-500'), ('Odd', 'odd', 'text-purple-500')]:
                with ui.column().classes('bg-slate-800 rounded p-2 gap-0'):
                    ui.label(name).classes('text-[10px] text-slate-500 uppercase')
                    ui.label(str(stats[key])).classes(f'text-lg font-bold {color}')

        # 3. Detailed results
        recent = history.recent(5)
        if recent:
            ui.label('Recent results').classes('text-xs text-slate-500')
            for entry in recent:
                with ui.row().classes('w-full items-center justify-between bg-slate-800 rounded p-2 no-wrap'):
                    with ui.row().classes('items-center gap-2'):
                        pocket_chip(entry.outcome.pocket, size='w-8 h-8')
                        ui.label(entry.timestamp.astimezone().strftime('%H:%M:%S')).classes('text-xs text-slate-400')
                    with ui.row().classes('gap-2'):
                        if entry.total_won > 0:
                            ui.badge(f'+€{entry.total_won}', color='green')
                        if entry.total_lost > 0:
                            ui.badge(f'-€{entry.total_lost}', color='red')

        # 4. Pocket frequency
        if len(history):
            freq = history.pocket_frequencies()
            fig = go.Figure(go.Bar(
                x=list(range(POCKET_COUNT)), y=freq.tolist(),
                marker_color=[BAR_COLORS[pocket_color(p)] for p in range(POCKET_COUNT)],
            ))
            fig.update_layout(title=f'Pocket Frequency ({len(history)} rounds)', paper_bgcolor='rgba(0,0,0,0)',
                              plot_bgcolor='rgba(0,0,0,0)', font=dict(color='#94a3b8'),
                              margin=dict(l=20, r=20, t=40, b=20), xaxis=dict(dtick=1))
            ui.plotly(fig).classes('w-full h-64')
