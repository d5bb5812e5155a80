"""
Исключения пакета.

* ObjParseError      – фатальная ошибка разбора OBJ (второй проход
  не совпал с первым, индекс < 1, строгий режим).
* MeshIntegrityError – нарушен контракт между этапами конвейера
  (индекс вне таблицы, NaN или координата вне [-1, 1]).  Это ошибка
  логики, а не входных данных, поэтому внутри пакета не ловится.
"""

from typing import Optional


class MeshDepthError(Exception):
    """Базовое исключение meshdepth."""


class ObjParseError(MeshDepthError, ValueError):
    def __init__(self, message: str, line_no: Optional[int] = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class MeshIntegrityError(MeshDepthError, RuntimeError):
    pass
