import time


def ts_str(t: float) -> str:
    lt = time.localtime(t)
    ms = int((t % 1) * 1000)
    return time.strftime("%H:%M:%S", lt) + f".{ms:03d}"


def text_preview(s: str, max_len: int = 80) -> str:
    # Keep log lines on one line and readable
    s = s.replace("\r", "\\r").replace("\n", "\\n")
    if len(s) > max_len:
        s = s[:max_len] + "\u2026"
    return s
