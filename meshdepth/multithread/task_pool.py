# meshdepth/multithread/task_pool.py
# ---------------------------------------------------------------
# Простой пул задач на основе concurrent.futures.
# Используется для O(V×T)-ядер: каждая задача обрабатывает свой
# диапазон вершин и пишет только в свои ячейки результата.
# ---------------------------------------------------------------

from concurrent.futures import ThreadPoolExecutor
import queue


class TaskPool:
    """Пул готового количества потоков; задачи принимаются как callables."""
    def __init__(self, max_workers=None):
        self.executor = ThreadPoolExecutor(max_workers=max_workers)
        self.tasks = queue.Queue()
        self._shutdown = False

    def submit(self, fn, *args, **kwargs):
        """Отправить задачу в пул, вернуть Future."""
        if self._shutdown:
            raise RuntimeError("TaskPool already shut down")
        future = self.executor.submit(fn, *args, **kwargs)
        self.tasks.put(future)
        return future

    def wait_all(self):
        """Блокировать до завершения всех поставленных задач."""
        while not self.tasks.empty():
            future = self.tasks.get()
            future.result()  # пробрасывает исключения, если они возникли

    def shutdown(self, wait=True):
        self._shutdown = True
        self.executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)


def vertex_ranges(count: int, parts: int):
    """Разбить [0, count) на `parts` непрерывных кусков (пустые пропускаем)."""
    parts = max(1, min(parts, count)) if count else 1
    step, rest = divmod(count, parts)
    start = 0
    for i in range(parts):
        stop = start + step + (1 if i < rest else 0)
        if stop > start:
            yield start, stop
        start = stop


def run_ranges(kernel, count: int, workers: int, *args):
    """
    Вызвать kernel(*args, start, stop) для всех диапазонов вершин.
    При workers == 1 – прямо в текущем потоке.
    """
    if workers <= 1 or count < 2:
        if count:
            kernel(*args, 0, count)
        return
    with TaskPool(max_workers=workers) as pool:
        for start, stop in vertex_ranges(count, workers):
            pool.submit(kernel, *args, start, stop)
        pool.wait_all()
