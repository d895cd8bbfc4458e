from collections import namedtuple

Trade = namedtuple("Trade", ["ticket", "open_time_raw", "side", "size", "instrument", "open_price", "close_time_raw", "close_price", "profit"])
