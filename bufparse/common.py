DEFAULT_BUF_SIZE = 8192

class ParseStatus:
    IDLE = 0
    SCANNING = 1
    REFILLING = 2
    SUCCEEDED = 3
    FAILED_PARSE = 4
    FAILED_EOF = 5
    FAILED_IO = 6
    NAMES = ["idle", "scanning", "refilling", "succeeded", "failed (parse)", "failed (eof)", "failed (io)"]
