"""Async command execution."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Exit code and decoded output of a finished command."""

    code: int
    stdout: str = ""
    stderr: str = ""


async def run_command(program: str, *args: str) -> CommandOutput:
    """Run *program* with *args* and wait for it to exit.

    Raises ``FileNotFoundError`` when *program* cannot be found.
    """
    logger.debug("running %s %s", program, " ".join(args))
    proc = await asyncio.create_subprocess_exec(
        program,
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await proc.communicate()
    return CommandOutput(
        code=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
