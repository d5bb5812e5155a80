"""
Отчёты о ходе загрузки (размеры, центр, этапы).

Ядро не печатает ничего само – всё идёт через переданный
ProgressReporter.  По‑умолчанию – в логгер пакета.
"""

from meshdepth.utils.logger import logger


class ProgressReporter:
    """Базовый интерфейс: этапы и произвольные сообщения."""

    def stage(self, name: str) -> None:
        pass

    def report(self, message: str) -> None:
        pass


class NullProgress(ProgressReporter):
    """Молчаливый репортёр."""


class LoggingProgress(ProgressReporter):
    """Пишет всё в logger (INFO)."""

    def __init__(self, prefix: str = "[ObjLoader]"):
        self.prefix = prefix

    def stage(self, name: str) -> None:
        logger.info(f"{self.prefix} {name}")

    def report(self, message: str) -> None:
        logger.info(f"{self.prefix} {message}")


class RecordingProgress(ProgressReporter):
    """Собирает сообщения в список (удобно для тестов и UI)."""

    def __init__(self):
        self.stages: list[str] = []
        self.messages: list[str] = []

    def stage(self, name: str) -> None:
        self.stages.append(name)

    def report(self, message: str) -> None:
        self.messages.append(message)
