"""
benchwatch demo script.

Run this directly to see all interfaces in action:
    python demo.py
"""

import asyncio
import time

import benchwatch
from benchwatch import (
    Timer,
    TimeBlock,
    TimeUnit,
    watch,
    watch_block,
    watch_call,
)


# --- 1. Function decorator ---------------------------------------------------

@watch("sum of range")
def heavy_sum(limit):
    """Sum a large range."""
    return sum(range(limit))


# --- 2. Async decorator ------------------------------------------------------

@watch("async fetch simulation")
async def fake_fetch(url):
    """Simulate an async HTTP request."""
    await asyncio.sleep(0.005)
    return f"response from {url}"


# --- 3. Manual runs on one timer ---------------------------------------------

def sort_runs():
    """Time ten sorts as separate runs and print the table."""
    timer = Timer("sort 100k floats", unit=TimeUnit.MILLISECONDS, autostart=False)
    for seed in range(10):
        data = [(i * 7919 + seed) % 100_003 / 3.0 for i in range(100_000)]
        with TimeBlock(timer):
            data.sort()
    print(timer)


# --- 4. Pause and resume -----------------------------------------------------

def paused_section():
    """Exclude a sleep from the measurement with stop()/start()."""
    with Timer("paused section", print_on_destruct=True) as timer:
        heavy_sum(200_000)
        timer.stop()
        time.sleep(0.01)
        timer.start()
        heavy_sum(200_000)


# --- run everything ----------------------------------------------------------

def main():
    """Execute all demos and print a final summary."""
    print("\n--- decorator ---")
    heavy_sum(1_000_000)
    heavy_sum(5_000_000)
    heavy_sum(10_000_000)

    print("\n--- async ---")
    asyncio.run(fake_fetch("https://api.example.com/data"))

    print("\n--- watch_block ---")
    for _ in range(3):
        with watch_block("sleep 2ms"):
            time.sleep(0.002)

    print("\n--- watch_call ---")
    watch_call(sorted, [3, 1, 4, 1, 5, 9], name="sort list")

    print("\n--- runs ---")
    sort_runs()

    print("\n--- pause ---")
    paused_section()

    print("\n--- one-off ---")
    Timer.time(heavy_sum, 3_000_000, name="one-off sum")

    print("\n--- summary ---")
    benchwatch.summary()


if __name__ == "__main__":
    main()
