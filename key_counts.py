class KeyCounts:
    """Handles numeric prefix (count) tracking for table movement keys."""

    MAX_COUNT = 9999

    def __init__(self):
        self.pending_count: int | None = None

    def reset(self):
        self.pending_count = None

    def push_key(self, ch) -> bool:
        """Accumulate ``ch`` when it is a count digit. A leading zero is not
        a digit key."""
        if not isinstance(ch, int) or not (ord("0") <= ch <= ord("9")):
            return False
        digit = ch - ord("0")
        if digit == 0 and self.pending_count is None:
            return False
        self.push_digit(digit)
        return True

    def push_digit(self, digit: int):
        if digit < 0 or digit > 9:
            return
        if self.pending_count is None:
            self.pending_count = digit
        else:
            self.pending_count = min(self.MAX_COUNT, self.pending_count * 10 + digit)

    def consume(self, default: int = 1) -> int:
        count = self.pending_count if self.pending_count is not None else default
        self.pending_count = None
        return max(1, count)
