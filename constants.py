class CONST:
    CLOSED_TRANSACTIONS_MARKER = "Closed Transactions:"
    SECTION_TERMINATORS = ("Open Trades:", "Closed P/L:")
    TRADE_ROW_CELL_COUNT = 14

    MT4_DATE_TIME_FORMAT = "%Y.%m.%d %H:%M:%S"

    # MT4 server clock is UTC+3, TradingView chart clock is UTC-6.
    MT4_UTC_OFFSET_HOURS = 3
    TV_UTC_OFFSET_HOURS = -6
    # observed label placement drift on TradingView
    TV_DISPLAY_CORRECTION_HOURS = 2

    ICON_SIZES = ["tiny", "small", "normal", "large", "huge"]
    DEFAULT_ICON_SIZE = "normal"

    REPORT_FILENAME_PATTERN = r".*\.html?$"
    SCRIPT_FILE_SUFFIX = ".pine"
