# -*- coding: utf-8 -*-
"""Transport contract: deliver one rendered message to one destination."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class SendOptions:
    """Delivery options passed through to the messaging endpoint."""

    parse_mode: str = "HTML"
    disable_link_preview: bool = True


class Transport(Protocol):
    """Anything that can deliver text to a destination channel.

    ``send`` returns on success and raises ``ThrottleError`` when the remote
    side asks to back off, ``TransportError`` for every other failure.
    """

    async def initialize(self) -> None:
        ...

    async def shutdown(self) -> None:
        ...

    async def send(self, destination: str, text: str, options: SendOptions) -> None:
        ...
