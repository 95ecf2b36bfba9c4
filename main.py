from nicegui import ui
import logging
import traceback

from engine.round_engine import RouletteTable
from ui.layout import create_layout
from ui.roulette_table import show_roulette_table
from ui.rules_view import show_rules_view
from utils.persistence import load_table_params

# ==============================================================================
# 1. APP CONFIGURATION
# ==============================================================================
logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
ui.dark_mode().enable()

params = load_table_params()
# One table per process; nothing survives a restart
table = RouletteTable(params)

# --- SAFE LOADER DECORATOR ---
def safe_load(func):
    def wrapper():
        content.clear()
        try:
            with content:
                func()
        except Exception as e:
            ui.notify(f"Error loading module: {str(e)}", type='negative')
            print(traceback.format_exc())
            with content:
                ui.label(f"CRASH DETECTED IN MODULE").classes('text-red-500 text-2xl font-bold')
                ui.label(f"{str(e)}").classes('text-red-400')
                ui.label("Check server logs for details.").classes('text-slate-500')
    return wrapper

# --- PAGE LOADERS ---

@safe_load
def load_table():
    show_roulette_table(table)

@safe_load
def load_rules():
    show_rules_view(params)

# ==============================================================================
# 2. LAYOUT & SIDEBAR
# ==============================================================================
content = create_layout({'table': load_table, 'rules': load_rules})

# ==============================================================================
# 3. INITIAL STARTUP
# ==============================================================================
load_table()

if __name__ in {"__main__", "__mp_main__"}:
    ui.run(title='Roulette Table', port=8080, reload=True, favicon='🎰', show=True)
