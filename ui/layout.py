from nicegui import ui
from typing import Dict, Callable

def create_layout(nav_funcs: Dict[str, Callable]) -> ui.column:
    """
    Builds the main frame: Header, Sidebar, and Content Container.
    """
    # ---------------------------------------------------------
    # 1. HEADER
    # ---------------------------------------------------------
    with ui.header().classes('bg-slate-900 text-white shadow-lg items-center'):
        ui.button(on_click=lambda: left_drawer.toggle(), icon='menu').props('flat color=white')
        ui.label('ROULETTE TABLE').classes('text-xl font-bold tracking-widest ml-2')
        ui.space()
        with ui.row().classes('items-center gap-2'):
            ui.icon('casino', color='yellow').classes('text-lg')
            ui.label('NO REAL MONEY').classes('text-xs text-yellow-500 font-mono font-bold')

    # ---------------------------------------------------------
    # 2. SIDEBAR (Navigation)
    # ---------------------------------------------------------
    with ui.left_drawer(value=True).classes('bg-slate-800 text-white') as left_drawer:
        with ui.column().classes('w-full p-4 gap-4'):
            ui.label('TABLE').classes('text-slate-500 text-xs font-bold tracking-wider')
            with ui.column().classes('gap-2 w-full'):
                ui.button('PLAY', icon='donut_large', on_click=nav_funcs['table']).props('flat align=left').classes('w-full text-slate-200 hover:bg-slate-700')
                ui.button('RULES', icon='menu_book', on_click=nav_funcs['rules']).props('flat align=left').classes('w-full text-slate-200 hover:bg-slate-700')

            ui.separator().classes('bg-slate-700 my-2')

            with ui.card().classes('bg-slate-900 w-full p-3 border-l-4 border-green-500'):
                ui.label('"Zero is green"').classes('text-xs italic text-slate-300')
                ui.label('It loses every outside bet.').classes('text-[10px] text-slate-500')

    # ---------------------------------------------------------
    # 3. MAIN CONTENT CONTAINER
    # ---------------------------------------------------------
    content = ui.column().classes('w-full items-center min-h-screen bg-slate-950')
    return content
