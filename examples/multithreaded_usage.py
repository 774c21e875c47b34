"""examples/multithreaded_usage.py - Concurrent setup and logging.

Several worker threads race to call ``cloudslog.setup()`` and then log. Only
one setup wins; the others get AlreadyInitializedError, which is safe to
ignore. Every record is written with a single sink call, so lines from
different threads never interleave mid-line.

Run:
    python examples/multithreaded_usage.py
"""

import threading

import cloudslog
from cloudslog import AlreadyInitializedError, Severity


def worker(index: int, barrier: threading.Barrier) -> None:
    """Worker representing one component that tries to configure logging."""
    barrier.wait()
    try:
        cloudslog.setup(f"project-{index}", cloudslog.with_severity(Severity.INFO))
        cloudslog.info("thread %d won setup", index)
    except AlreadyInitializedError:
        cloudslog.debug("thread %d lost setup (not written: below INFO)", index)

    for step in range(3):
        cloudslog.info("thread %d step %d", index, step)


if __name__ == "__main__":
    n = 4
    barrier = threading.Barrier(n)
    threads = [
        threading.Thread(target=worker, args=(i, barrier), name=f"worker-{i}")
        for i in range(n)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    print()
    print(f"configured reporting id: {cloudslog.default_config.reporting_id}")
