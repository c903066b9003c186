class Config:
    # Format tokens
    CLUSTER_HEADER = ">Cluster"
    ID_TERMINATOR = "..."
    REP_MARKER = " *"

    # Text decoding for byte streams
    ENCODING = "utf-8"
    DECODE_ERRORS = "strict"

    # Diff report
    REPORT_LIMIT = 10

    # Exit codes
    EXIT_OK = 0
    EXIT_DIFFERENT = 1
    EXIT_ERROR = 2
