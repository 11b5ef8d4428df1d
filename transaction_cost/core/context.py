# transaction_cost/core/context.py

import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional

transaction_id_ctx = contextvars.ContextVar("transaction_id", default=None)
channel_ctx = contextvars.ContextVar("channel", default=None)


@contextmanager
def request_context(transaction_id: Optional[str], channel: Optional[str]) -> Iterator[None]:
    """Bind transaction_id and channel for log lines emitted inside the block."""
    tx_token = transaction_id_ctx.set(transaction_id)
    ch_token = channel_ctx.set(channel)
    try:
        yield
    finally:
        channel_ctx.reset(ch_token)
        transaction_id_ctx.reset(tx_token)
