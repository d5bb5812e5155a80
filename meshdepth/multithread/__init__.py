from meshdepth.multithread.task_pool import TaskPool, run_ranges, vertex_ranges

__all__ = ["TaskPool", "run_ranges", "vertex_ranges"]
