import asyncio
from dataclasses import dataclass, field
from typing import Annotated

from clasp import Named, Positional, verb


@verb("greet", help_text="Say hello.")
@dataclass
class Greet:
    name: Annotated[str, Positional(help="Who to greet.")] = "world"
    loud: Annotated[bool, Named(short_name="l", help="Shout the greeting.")] = False

    def execute(self, loop, context):
        message = f"Hello, {self.name}!"
        loop.console.print(message.upper() if self.loud else message)


@verb("sum", help_text="Add numbers.")
@dataclass
class Sum:
    values: Annotated[list[float], Positional(help="Numbers to add.")] = field(
        default_factory=list
    )

    async def execute(self, loop, context):
        await asyncio.sleep(0)
        loop.console.print(sum(self.values))
