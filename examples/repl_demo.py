import asyncio

import demo_verbs

from clasp import Loop, LoopOptions, resolve_verbs
from clasp.utils import setup_logging

if __name__ == "__main__":
    setup_logging("cli", log_filename=None)
    loop = Loop(
        resolve_verbs(demo_verbs),
        LoopOptions(prompt="demo> ", end_of_line_comment_character="#"),
    )
    asyncio.run(loop.run())
