"""
Terminal emulation interface definitions
"""

from abc import ABC, abstractmethod
from typing import Callable


class TerminalInterface(ABC):
    """Interface for a stateful terminal session"""

    @abstractmethod
    async def execute_command(self, command: str) -> str:
        """Execute a free-text command and return the screen"""
        pass

    @abstractmethod
    async def close_session(self) -> None:
        """Close the remote session"""
        pass


TerminalFactory = Callable[[], TerminalInterface]
