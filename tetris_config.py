
CONFIG = {
    "COLS": 10,
    "ROWS": 20,
    "CELL_SIZE": 32,
    "DAS_MS": 170,
    "ARR_MS": 50,
    "SOFT_DROP_ARR_MS": 50,
    "LINE_CLEAR_STEP_MS": 40,
    "START_LEVEL": 1,
    "MIN_START_LEVEL": 1,
    "MAX_START_LEVEL": 30,
    "BAG_SEED": None,
}
