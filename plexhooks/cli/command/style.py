class Style:
    """ANSI colouring for command output."""

    RESET = "\033[0m"

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def _wrap(self, code: str, text: str) -> str:
        if not self.enabled:
            return text
        return f"\033[{code}m{text}{self.RESET}"

    def ERROR(self, text: str) -> str:
        return self._wrap("31;1", text)

    def WARNING(self, text: str) -> str:
        return self._wrap("33", text)

    def SUCCESS(self, text: str) -> str:
        return self._wrap("32", text)

    def NOTICE(self, text: str) -> str:
        return self._wrap("36", text)
