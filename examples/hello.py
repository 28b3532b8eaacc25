"""Minimal caravan program: a small tree of cases threading a counter."""

import asyncio

from caravan import LogChannel, TestNode, run


async def start(state: int, *, log: LogChannel) -> int:
    log.info(f"starting from {state}")
    await asyncio.sleep(0.1)
    return state + 1


async def double(state: int, *, log: LogChannel) -> int:
    log.debug(f"doubling {state}")
    await asyncio.sleep(0.2)
    log.info("doubled")
    return state * 2


def check_even(state: int, *, log: LogChannel) -> int:
    log.info(f"checking {state}")
    if state % 2:
        raise ValueError(f"{state} is odd")
    return state


def unreachable(state: int, *, log: LogChannel) -> int:
    log.info("never printed")
    return state


tests = [
    TestNode("start", start)
    >> [
        TestNode("double", double) >> TestNode("double_is_even", check_even),
        TestNode("start_is_even", check_even) >> TestNode("after_even", unreachable),
    ],
    TestNode("independent", check_even),
]


if __name__ == "__main__":
    run(tests, init_state=0)
